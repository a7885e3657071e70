"""
Role hierarchy and permission table.

Each role's permissions include everything granted to the roles ranked
below it.
"""

from enum import Enum

from shared.models import UserRole


class Permission(str, Enum):
    # Player
    VIEW_PROFILE = "view_profile"
    BOOK_VENUES = "book_venues"
    VIEW_BOOKINGS = "view_bookings"
    UPDATE_PROFILE = "update_profile"

    # Venue owner
    MANAGE_VENUES = "manage_venues"
    VIEW_VENUE_BOOKINGS = "view_venue_bookings"
    MANAGE_VENUE_DETAILS = "manage_venue_details"

    # Admin
    MANAGE_USERS = "manage_users"
    VIEW_REPORTS = "view_reports"
    MANAGE_SYSTEM = "manage_system"
    VIEW_AUDIT_LOGS = "view_audit_logs"


ROLE_RANK: dict[UserRole, int] = {
    UserRole.PLAYER: 1,
    UserRole.VENUE_OWNER: 2,
    UserRole.ADMIN: 3,
}

_PLAYER = frozenset({
    Permission.VIEW_PROFILE,
    Permission.BOOK_VENUES,
    Permission.VIEW_BOOKINGS,
    Permission.UPDATE_PROFILE,
})

_VENUE_OWNER = _PLAYER | {
    Permission.MANAGE_VENUES,
    Permission.VIEW_VENUE_BOOKINGS,
    Permission.MANAGE_VENUE_DETAILS,
}

_ADMIN = _VENUE_OWNER | {
    Permission.MANAGE_USERS,
    Permission.VIEW_REPORTS,
    Permission.MANAGE_SYSTEM,
    Permission.VIEW_AUDIT_LOGS,
}

ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.PLAYER: _PLAYER,
    UserRole.VENUE_OWNER: _VENUE_OWNER,
    UserRole.ADMIN: _ADMIN,
}
