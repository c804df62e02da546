"""
Validation utilities
"""

import re
from datetime import date
from typing import Any, Dict, List, Optional


CODE_PATTERN = re.compile(r'^[A-Za-z]{3}$')

REQUIRED_FLIGHT_FIELDS = ("origin", "destination", "departure_date")


def is_code_pattern(text: Optional[str]) -> bool:
    """
    Check whether raw user input is exactly a 3-letter location code.
    No trimming is applied: "JFK " does not match.
    """
    if not text:
        return False
    return bool(CODE_PATTERN.fullmatch(text))


def validate_airport_code(code: Optional[str]) -> bool:
    """
    Validate airport code format (IATA 3-letter codes)
    """
    if not code:
        return False

    # Remove whitespace and convert to uppercase
    code = code.strip().upper()
    return bool(re.match(r'^[A-Z]{3}$', code))


def validate_date(value: Optional[str]) -> bool:
    """
    Validate an ISO calendar date (YYYY-MM-DD)
    """
    if not value or not re.match(r'^\d{4}-\d{2}-\d{2}$', value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def missing_required_fields(payload: Dict[str, Any], required=REQUIRED_FLIGHT_FIELDS) -> List[str]:
    """
    Return the names of required fields that are absent or blank
    """
    missing = []
    for field in required:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing
