"""
Rate limiting module.

Public API:
- FixedWindowRateLimiter: check / reset
- RateLimitPolicy: auth() and api() presets
"""

from .service import FixedWindowRateLimiter, RateLimitPolicy

__all__ = [
    "FixedWindowRateLimiter",
    "RateLimitPolicy",
]
