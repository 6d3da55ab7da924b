# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID

from pydantic import TypeAdapter


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        portfolio_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        portfolio_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Form Field Utilities
# =============================================================================

def split_list_field(value: str | None) -> list[str]:
    """
    Split a comma-separated form field into a list of trimmed values.

    Blank entries are dropped, so "" and " , " both become [].

    Example:
        split_list_field("Designer, Developer") -> ["Designer", "Developer"]
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


# =============================================================================
# Timestamp Utilities
# =============================================================================

_DATETIME = TypeAdapter(datetime)


def parse_timestamp(value: str | datetime | None) -> datetime:
    """
    Parse a PostgREST timestamp into an aware datetime.

    Missing values sort as the oldest possible time.
    """
    if value is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = _DATETIME.validate_python(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
