"""Security utilities."""

from .jwt import TokenService
from .password import burn_verification, hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "burn_verification",
    "TokenService",
]
