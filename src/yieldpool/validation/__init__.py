"""Validation and sanity checks for yield pools."""

from .sanity_checks import SanityChecker, ValidationWarning, validate_pool

__all__ = [
    "SanityChecker",
    "ValidationWarning",
    "validate_pool"
]
