"""Input validation helpers shared by domain services."""

from typing import Optional

from spendwise.domain.errors import ValidationError

NAME_MAX_LENGTH = 100
TEXT_MAX_LENGTH = 500


def require_name(value: Optional[str], label: str, max_length: int = NAME_MAX_LENGTH) -> str:
    """Return the stripped value, rejecting blank or over-long input."""
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required")
    if len(value) > max_length:
        raise ValidationError(f"{label} must not exceed {max_length} characters")
    return value


def require_optional_text(
    value: Optional[str], label: str, max_length: int = TEXT_MAX_LENGTH
) -> Optional[str]:
    """Return stripped text or None when blank, rejecting over-long input."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{label} must not exceed {max_length} characters")
    return value
