"""
Password policy engine.

Validates password strength, hashes with Argon2id, and verifies stored
hashes. Hashing is CPU and memory bound; async callers should run it in a
worker thread (see modules.auth.service).
"""

import logging
import secrets
import string
from typing import Optional

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)
from zxcvbn import zxcvbn

from .exceptions import (
    InvalidPasswordHashError,
    PasswordHashingError,
    WeakPasswordError,
)
from .models import PasswordPolicy, PasswordRejection, PasswordRequirements

logger = logging.getLogger(__name__)

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;':\",./<>?"
# Subset of SPECIAL_CHARACTERS without quotes and slashes
GENERATOR_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
DEFAULT_GENERATED_LENGTH = 16


class PasswordPolicyEngine:
    """
    Applies a PasswordPolicy.

    The engine is stateless apart from the policy and the configured hasher,
    so one instance is shared by all requests.
    """

    def __init__(self, policy: PasswordPolicy):
        self._policy = policy
        self._hasher = PasswordHasher(
            time_cost=policy.time_cost,
            memory_cost=policy.memory_cost,
            parallelism=policy.parallelism,
            type=Type.ID,
        )
        self._dummy_hash: Optional[str] = None

    @property
    def policy(self) -> PasswordPolicy:
        return self._policy

    def requirements(self) -> PasswordRequirements:
        """Policy rules suitable for client-side validation."""
        return PasswordRequirements.from_policy(self._policy, SPECIAL_CHARACTERS)

    def validate_strength(self, password: str) -> None:
        """
        Check a password against the policy.

        Raises:
            WeakPasswordError: with the first rule the password breaks
        """
        policy = self._policy

        if not password:
            raise WeakPasswordError(
                PasswordRejection.EMPTY,
                "Password is empty",
                {"min_length": policy.min_length},
            )
        if len(password) < policy.min_length:
            raise WeakPasswordError(
                PasswordRejection.TOO_SHORT,
                f"Password shorter than {policy.min_length} characters",
                {"min_length": policy.min_length},
            )
        if len(password) > policy.max_length:
            raise WeakPasswordError(
                PasswordRejection.TOO_LONG,
                f"Password longer than {policy.max_length} characters",
                {"max_length": policy.max_length},
            )

        if policy.require_uppercase and not any(c.isupper() for c in password):
            raise WeakPasswordError(PasswordRejection.MISSING_UPPERCASE, "No uppercase letter")
        if policy.require_lowercase and not any(c.islower() for c in password):
            raise WeakPasswordError(PasswordRejection.MISSING_LOWERCASE, "No lowercase letter")
        if policy.require_numbers and not any(c.isdigit() for c in password):
            raise WeakPasswordError(PasswordRejection.MISSING_NUMBER, "No digit")
        if policy.require_special and not any(c in SPECIAL_CHARACTERS for c in password):
            raise WeakPasswordError(PasswordRejection.MISSING_SPECIAL, "No special character")

        if policy.min_strength_score > 0:
            score = zxcvbn(password)["score"]
            if score < policy.min_strength_score:
                raise WeakPasswordError(
                    PasswordRejection.TOO_WEAK,
                    f"Strength score {score}/4 below {policy.min_strength_score}/4",
                    {"score": score, "min_strength_score": policy.min_strength_score},
                )

    def is_strong(self, password: str) -> bool:
        try:
            self.validate_strength(password)
        except WeakPasswordError:
            return False
        return True

    def hash(self, password: str) -> str:
        """
        Hash a password that satisfies the policy.

        Returns:
            An Argon2id PHC string with a fresh random salt

        Raises:
            WeakPasswordError: the password was rejected and not hashed
            PasswordHashingError: the Argon2 backend failed
        """
        self.validate_strength(password)
        try:
            return self._hasher.hash(password)
        except HashingError as e:
            logger.error(f"Argon2 hashing failed: {e}")
            raise PasswordHashingError() from e

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against a stored hash in constant time.

        Returns False on mismatch. The hash's embedded parameters are used,
        so hashes made under an older policy still verify.

        Raises:
            InvalidPasswordHashError: the stored hash is structurally invalid
        """
        try:
            return self._hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except InvalidHashError as e:
            raise InvalidPasswordHashError() from e
        except VerificationError as e:
            # Parsed but could not be checked (e.g. corrupted digest)
            raise InvalidPasswordHashError(str(e)) from e

    def verify_dummy(self, password: str) -> bool:
        """
        Verify against a throwaway hash made with the current parameters.

        Always False. It costs the same as a real verify, for callers that
        must not reveal whether an account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(32))
        return self.verify(password, self._dummy_hash)

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was made with different cost parameters."""
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError as e:
            raise InvalidPasswordHashError() from e

    def generate_random_password(self, length: Optional[int] = None) -> str:
        """
        Generate a password that satisfies every character-class rule.

        One character is drawn from each required class, the rest from the
        full alphabet, then the result is shuffled. The strength score is
        not guaranteed; callers that need it must call validate_strength().
        """
        policy = self._policy
        pools = []
        if policy.require_uppercase:
            pools.append(string.ascii_uppercase)
        if policy.require_lowercase:
            pools.append(string.ascii_lowercase)
        if policy.require_numbers:
            pools.append(string.digits)
        if policy.require_special:
            pools.append(GENERATOR_SPECIAL_CHARACTERS)

        length = length or max(policy.min_length, DEFAULT_GENERATED_LENGTH)
        length = min(max(length, policy.min_length, len(pools)), policy.max_length)

        alphabet = (
            string.ascii_uppercase
            + string.ascii_lowercase
            + string.digits
            + GENERATOR_SPECIAL_CHARACTERS
        )
        chars = [secrets.choice(pool) for pool in pools]
        chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
        secrets.SystemRandom().shuffle(chars)
        return "".join(chars)
