"""
User module.

The User document, the store interface the auth core depends on, and its
Supabase and in-memory implementations.

Public API:
- IUserRepository: find_by_id / find_by_email / find_by_google_id / insert / update
- SupabaseUserRepository, InMemoryUserRepository
- User, GoogleProfile, AuthProvider
- seed_admin_user
- User exceptions: UserNotFoundError, EmailAlreadyRegisteredError, InvalidEmailError
"""

from .interfaces import IUserRepository
from .models import AuthProvider, GoogleProfile, User, normalize_email
from .repository import InMemoryUserRepository, SupabaseUserRepository
from .seed import seed_admin_user
from .exceptions import (
    UserNotFoundError,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Implementations
    "InMemoryUserRepository",
    "SupabaseUserRepository",
    "seed_admin_user",
    # Models
    "AuthProvider",
    "GoogleProfile",
    "User",
    "normalize_email",
    # Exceptions
    "UserNotFoundError",
    "EmailAlreadyRegisteredError",
    "InvalidEmailError",
]
