"""
Password policy data models.

A policy bundles the strength rules applied to new passwords and the
Argon2id cost parameters used to hash them.
"""

from enum import Enum

from pydantic import BaseModel, Field

from shared.config import Environment


class PasswordRejection(str, Enum):
    """Why a password failed the strength policy."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_NUMBER = "missing_number"
    MISSING_SPECIAL = "missing_special"
    TOO_WEAK = "too_weak"


class PasswordPolicy(BaseModel):
    """
    Strength requirements and hashing cost for passwords.

    Use production() or development() rather than building one by hand;
    for_environment() picks between them.
    """

    model_config = {"frozen": True}

    min_length: int = Field(default=12, ge=1)
    max_length: int = Field(default=128, ge=1)
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special: bool = True
    min_strength_score: int = Field(default=3, ge=0, le=4)
    # Declared for parity with the stored policy; reuse is not tracked yet.
    history_length: int = Field(default=12, ge=0)

    # Argon2id parameters
    memory_cost: int = Field(default=65536, description="Memory cost in KiB")
    time_cost: int = Field(default=3, description="Iterations")
    parallelism: int = Field(default=4, description="Lanes")

    @classmethod
    def production(cls) -> "PasswordPolicy":
        """Strict profile: 12-128 chars, all classes, score >= 3, 64 MiB/3/4."""
        return cls(
            min_length=12,
            max_length=128,
            min_strength_score=3,
            history_length=12,
            memory_cost=65536,
            time_cost=3,
            parallelism=4,
        )

    @classmethod
    def development(cls) -> "PasswordPolicy":
        """Relaxed profile: 8-128 chars, all classes, score >= 1, 4 MiB/2/2."""
        return cls(
            min_length=8,
            max_length=128,
            min_strength_score=1,
            history_length=0,
            memory_cost=4096,
            time_cost=2,
            parallelism=2,
        )

    @classmethod
    def for_environment(cls, environment: Environment) -> "PasswordPolicy":
        if environment == Environment.PRODUCTION:
            return cls.production()
        return cls.development()


class PasswordRequirements(BaseModel):
    """The client-visible subset of a policy (no hashing parameters)."""

    min_length: int
    max_length: int
    require_uppercase: bool
    require_lowercase: bool
    require_numbers: bool
    require_special: bool
    min_strength_score: int
    special_characters: str

    @classmethod
    def from_policy(cls, policy: PasswordPolicy, special_characters: str) -> "PasswordRequirements":
        return cls(
            min_length=policy.min_length,
            max_length=policy.max_length,
            require_uppercase=policy.require_uppercase,
            require_lowercase=policy.require_lowercase,
            require_numbers=policy.require_numbers,
            require_special=policy.require_special,
            min_strength_score=policy.min_strength_score,
            special_characters=special_characters,
        )
