import pytest

from modules.users import User
from modules.users.models import normalize_email
from shared.models import UserRole


class TestUser:
    def test_defaults(self):
        """New users are active, roleless and not onboarded."""
        user = User(email="player@mabar.com")
        assert user.is_active is True
        assert user.role is None
        assert user.onboarding_completed is False
        assert user.id

    def test_email_normalized(self):
        assert User(email="  Player@MaBar.COM ").email == "player@mabar.com"
        assert normalize_email(" A@B.com") == "a@b.com"

    def test_admin_requires_password(self):
        """OAuth-only admin accounts are not supported."""
        with pytest.raises(Exception):  # Pydantic ValidationError
            User(email="admin@mabar.com", role=UserRole.ADMIN)
        User(email="admin@mabar.com", role=UserRole.ADMIN, password_hash="$argon2id$...")

    def test_display_name(self):
        assert User(email="a@mabar.com", first_name="Ana", last_name="Reyes").display_name == "Ana Reyes"
        assert User(email="a@mabar.com", first_name="Ana").display_name == "Ana"
        assert User(email="a@mabar.com").display_name == "User"

    def test_to_identity(self):
        user = User(email="a@mabar.com", role=UserRole.VENUE_OWNER)
        identity = user.to_identity()
        assert (identity.id, identity.email, identity.role) == (user.id, "a@mabar.com", UserRole.VENUE_OWNER)
