"""
Utility modules for flight search service
"""

from .logger import setup_logging
from .validators import (
    validate_airport_code,
    validate_date,
    is_code_pattern,
    missing_required_fields,
)

__all__ = [
    "setup_logging",
    "validate_airport_code",
    "validate_date",
    "is_code_pattern",
    "missing_required_fields",
]
