"""
Authentication service implementation.

Registration, password and OAuth sign-in, role selection and password
change. Password hashing runs in worker threads behind a semaphore so a
burst of logins cannot exhaust memory with concurrent Argon2 runs.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email

from shared.models import AuthenticatedUser, UserRole
from modules.authorization import AuthorizationGate
from modules.passwords import (
    InvalidPasswordHashError,
    PasswordPolicyEngine,
    PasswordRequirements,
    WeakPasswordError,
)
from modules.tokens import TokenService
from modules.users import (
    AuthProvider,
    EmailAlreadyRegisteredError,
    GoogleProfile,
    IUserRepository,
    InvalidEmailError,
    User,
    UserNotFoundError,
)

from .exceptions import (
    GoogleSignInDisabledError,
    InvalidCredentialsError,
    InvalidRoleError,
    LoginFailureReason,
    RoleNotAssignableError,
)
from .google import GoogleTokenVerifier
from .interfaces import IAuthService
from .models import AuthResult, ChangePasswordRequest, RegisterRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_EMAIL_LENGTH = 254


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Collaborators are injected; the service holds no global state and is
    safe to share across requests.
    """

    def __init__(
        self,
        users: IUserRepository,
        passwords: PasswordPolicyEngine,
        tokens: TokenService,
        gate: Optional[AuthorizationGate] = None,
        max_concurrent_hashes: int = 4,
        google: Optional[GoogleTokenVerifier] = None,
    ):
        self._users = users
        self._passwords = passwords
        self._tokens = tokens
        self._gate = gate or AuthorizationGate()
        self._google = google
        self._hash_slots = asyncio.Semaphore(max_concurrent_hashes)

    # -------------------------------------------------------------------------
    # Local accounts
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create a local account and sign it in.

        Raises:
            InvalidEmailError: malformed email
            WeakPasswordError: password rejected by the policy
            EmailAlreadyRegisteredError: email taken
        """
        email = self._normalize_email(request.email)
        if await self._users.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        password_hash = await self._run_hasher(self._passwords.hash, request.password)
        user = await self._users.insert(
            User(
                email=email,
                password_hash=password_hash,
                first_name=request.first_name,
                last_name=request.last_name,
                provider=AuthProvider.LOCAL,
            )
        )
        logger.info(f"User registered: id={user.id}")
        return self._issue(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            InvalidCredentialsError: unknown email, wrong password, or deactivated
        """
        user = await self._check_credentials(email, password)
        user = await self._record_login(user, password)
        return self._issue(user)

    async def admin_login(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            InvalidCredentialsError: bad credentials, deactivated, or not an admin
        """
        user = await self._check_credentials(email, password)
        if not self._gate.is_authorized(user.to_identity(), {UserRole.ADMIN}):
            raise self._login_failed(LoginFailureReason.NOT_ADMIN, user.id)
        user = await self._record_login(user, password)
        return self._issue(user)

    async def change_password(self, identity: AuthenticatedUser, request: ChangePasswordRequest) -> None:
        """
        Raises:
            InvalidCredentialsError: current password is wrong
            WeakPasswordError: new password rejected by the policy
        """
        user = await self.get_user(identity.id)
        await self._verify_password(user, request.current_password)
        password_hash = await self._run_hasher(self._passwords.hash, request.new_password)
        await self._users.update(user.id, {"password_hash": password_hash})
        logger.info(f"Password changed: id={user.id}")

    # -------------------------------------------------------------------------
    # OAuth
    # -------------------------------------------------------------------------

    async def login_with_google_token(self, id_token: str) -> AuthResult:
        """
        Verify a Google ID token and sign in with its profile.

        Raises:
            GoogleSignInDisabledError: no Google client ID is configured
            InvalidGoogleTokenError: the token does not verify
            InvalidCredentialsError: see login_with_google
        """
        if self._google is None:
            raise GoogleSignInDisabledError()
        profile = await asyncio.to_thread(self._google.verify, id_token)
        return await self.login_with_google(profile)

    async def login_with_google(self, profile: GoogleProfile) -> AuthResult:
        """
        Sign in with a Google profile taken from a verified ID token.

        Links the Google account to an existing user with the same email,
        or creates a passwordless user. The profile's email must be
        verified by Google.

        Raises:
            InvalidEmailError: the profile email is malformed
            InvalidCredentialsError: unverified email, or the linked account
                is deactivated
        """
        if not profile.email_verified:
            raise self._login_failed(LoginFailureReason.UNVERIFIED_EMAIL)
        email = self._normalize_email(profile.email)
        user = await self._users.find_by_google_id(profile.google_id)

        if user is None:
            existing = await self._users.find_by_email(email)
            if existing is not None:
                user = await self._users.update(existing.id, {
                    "google_id": profile.google_id,
                    "profile_picture": existing.profile_picture or profile.picture,
                })
                logger.info(f"Linked Google account: id={user.id}")
            else:
                user = await self._users.insert(
                    User(
                        email=email,
                        google_id=profile.google_id,
                        first_name=profile.first_name,
                        last_name=profile.last_name,
                        profile_picture=profile.picture,
                        provider=AuthProvider.GOOGLE,
                    )
                )
                logger.info(f"User registered via Google: id={user.id}")

        if not user.is_active:
            raise self._login_failed(LoginFailureReason.DEACTIVATED, user.id)

        user = await self._users.update(user.id, {"last_login_at": datetime.now(timezone.utc)})
        return self._issue(user)

    # -------------------------------------------------------------------------
    # Roles and lookups
    # -------------------------------------------------------------------------

    async def select_role(self, identity: AuthenticatedUser, role: str) -> AuthResult:
        """
        Set the caller's role and issue a token carrying it.

        Raises:
            InvalidRoleError: unknown role value
            RoleNotAssignableError: role is admin
        """
        try:
            new_role = UserRole(role.strip().lower())
        except ValueError:
            raise InvalidRoleError(role)
        if not self._gate.can_self_assign(new_role):
            raise RoleNotAssignableError(new_role.value)

        user = await self.get_user(identity.id)
        user = await self._users.update(user.id, {"role": new_role})
        logger.info(f"Role selected: id={user.id} role={new_role.value}")
        return self._issue(user)

    async def get_user(self, user_id: str) -> User:
        """
        Raises:
            UserNotFoundError: no such user
        """
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def password_requirements(self) -> PasswordRequirements:
        return self._passwords.requirements()

    def redirect_for(self, user: User) -> str:
        """Client destination after sign-in."""
        identity = user.to_identity()
        if self._gate.is_authorized(identity, {UserRole.ADMIN}):
            return "/admin/dashboard"
        if identity.role is None:
            return "/onboarding/role"
        if not user.onboarding_completed:
            return "/onboarding"
        return "/dashboard"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _issue(self, user: User) -> AuthResult:
        return AuthResult(
            token=self._tokens.issue(user.to_identity()),
            user=user,
            redirect_to=self.redirect_for(user),
        )

    def _normalize_email(self, email: str) -> str:
        if not email or len(email) > MAX_EMAIL_LENGTH:
            raise InvalidEmailError()
        try:
            result = validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidEmailError(str(e))
        return result.normalized.lower()

    async def _check_credentials(self, email: str, password: str) -> User:
        user = await self._users.find_by_email(email) if email else None
        if user is None:
            # Same Argon2 cost as a known email
            await self._run_hasher(self._passwords.verify_dummy, password)
            raise self._login_failed(LoginFailureReason.UNKNOWN_EMAIL)
        await self._verify_password(user, password)
        if not user.is_active:
            raise self._login_failed(LoginFailureReason.DEACTIVATED, user.id)
        return user

    async def _verify_password(self, user: User, password: str) -> None:
        if not user.password_hash:
            await self._run_hasher(self._passwords.verify_dummy, password)
            raise self._login_failed(LoginFailureReason.NO_PASSWORD, user.id)
        try:
            matches = await self._run_hasher(self._passwords.verify, password, user.password_hash)
        except InvalidPasswordHashError:
            logger.error(f"Stored password hash is malformed: id={user.id}")
            raise self._login_failed(LoginFailureReason.INVALID_HASH, user.id)
        if not matches:
            raise self._login_failed(LoginFailureReason.WRONG_PASSWORD, user.id)

    async def _record_login(self, user: User, password: str) -> User:
        updates: dict = {"last_login_at": datetime.now(timezone.utc)}
        if self._passwords.needs_rehash(user.password_hash):
            try:
                updates["password_hash"] = await self._run_hasher(self._passwords.hash, password)
                logger.info(f"Password rehashed under current policy: id={user.id}")
            except WeakPasswordError:
                # Older passwords may predate a stricter policy; keep the old hash
                logger.debug(f"Skipping rehash, password below current policy: id={user.id}")
        return await self._users.update(user.id, updates)

    async def _run_hasher(self, fn: Callable[..., T], *args) -> T:
        async with self._hash_slots:
            return await asyncio.to_thread(fn, *args)

    def _login_failed(self, reason: LoginFailureReason, user_id: Optional[str] = None) -> InvalidCredentialsError:
        logger.info(f"Login failed: reason={reason.value} user={user_id or '-'}")
        return InvalidCredentialsError(reason)
