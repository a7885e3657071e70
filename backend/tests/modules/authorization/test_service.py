import pytest

from modules.authorization import (
    AuthorizationGate,
    InsufficientPermissionsError,
    NoRoleAssignedError,
    Permission,
    ROLE_PERMISSIONS,
    has_permission,
    has_role_or_higher,
)
from shared.models import AuthenticatedUser, UserRole


def identity(role):
    return AuthenticatedUser(id="user-123", email="user@mabar.com", role=role)


@pytest.fixture
def gate():
    return AuthorizationGate()


class TestRoleHierarchy:
    def test_ranks(self):
        assert has_role_or_higher(UserRole.ADMIN, UserRole.PLAYER)
        assert has_role_or_higher(UserRole.VENUE_OWNER, UserRole.VENUE_OWNER)
        assert not has_role_or_higher(UserRole.PLAYER, UserRole.VENUE_OWNER)

    def test_minimum_role(self, gate):
        """A single role is a minimum: admin passes a player gate."""
        gate.authorize(identity(UserRole.ADMIN), UserRole.PLAYER)
        with pytest.raises(InsufficientPermissionsError):
            gate.authorize(identity(UserRole.PLAYER), UserRole.VENUE_OWNER)

    def test_role_set_is_exact(self, gate):
        """A set of roles requires membership, not rank."""
        gate.authorize(identity(UserRole.VENUE_OWNER), {UserRole.VENUE_OWNER})
        with pytest.raises(InsufficientPermissionsError):
            gate.authorize(identity(UserRole.ADMIN), {UserRole.VENUE_OWNER})

    def test_no_role(self, gate):
        """No role is its own failure so the client can finish onboarding."""
        with pytest.raises(NoRoleAssignedError):
            gate.authorize(identity(None), UserRole.PLAYER)
        assert gate.is_authorized(identity(None), UserRole.PLAYER) is False

    def test_is_authorized(self, gate):
        assert gate.is_authorized(identity(UserRole.ADMIN), {UserRole.ADMIN})
        assert not gate.is_authorized(identity(UserRole.PLAYER), {UserRole.ADMIN})

    def test_self_assignable_roles(self, gate):
        assert gate.can_self_assign(UserRole.PLAYER)
        assert gate.can_self_assign(UserRole.VENUE_OWNER)
        assert not gate.can_self_assign(UserRole.ADMIN)


class TestPermissions:
    def test_permissions_are_cumulative(self):
        """Each role holds every permission of the roles below it."""
        assert ROLE_PERMISSIONS[UserRole.PLAYER] < ROLE_PERMISSIONS[UserRole.VENUE_OWNER]
        assert ROLE_PERMISSIONS[UserRole.VENUE_OWNER] < ROLE_PERMISSIONS[UserRole.ADMIN]
        assert ROLE_PERMISSIONS[UserRole.ADMIN] == set(Permission)

    def test_has_permission(self):
        assert has_permission(UserRole.PLAYER, Permission.BOOK_VENUES)
        assert has_permission(UserRole.VENUE_OWNER, "manage_venues")
        assert not has_permission(UserRole.PLAYER, "manage_venues")

    def test_unknown_permission_denied(self):
        assert not has_permission(UserRole.ADMIN, "launch_rockets")

    def test_no_role_denied(self):
        assert not has_permission(None, Permission.VIEW_PROFILE)

    def test_require_permission(self, gate):
        gate.require_permission(identity(UserRole.ADMIN), Permission.VIEW_AUDIT_LOGS)
        with pytest.raises(InsufficientPermissionsError) as exc_info:
            gate.require_permission(identity(UserRole.VENUE_OWNER), Permission.MANAGE_USERS)
        assert exc_info.value.details == {"required": "manage_users", "user_role": "venue_owner"}
        with pytest.raises(NoRoleAssignedError):
            gate.require_permission(identity(None), Permission.VIEW_PROFILE)
