"""
Password module.

Strength validation, Argon2id hashing and verification, and random password
generation under an environment-selected policy.

Public API:
- PasswordPolicyEngine: validate_strength / hash / verify / generate_random_password
- PasswordPolicy: strict (production) and relaxed (development) profiles
- Password exceptions: WeakPasswordError, InvalidPasswordHashError, PasswordHashingError
"""

from .models import PasswordPolicy, PasswordRejection, PasswordRequirements
from .service import PasswordPolicyEngine, SPECIAL_CHARACTERS
from .exceptions import (
    WeakPasswordError,
    InvalidPasswordHashError,
    PasswordHashingError,
)

__all__ = [
    # Service
    "PasswordPolicyEngine",
    "SPECIAL_CHARACTERS",
    # Models
    "PasswordPolicy",
    "PasswordRejection",
    "PasswordRequirements",
    # Exceptions
    "WeakPasswordError",
    "InvalidPasswordHashError",
    "PasswordHashingError",
]
