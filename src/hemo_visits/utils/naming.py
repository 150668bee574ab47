"""Field-name convention helpers.

Backend records may carry the same logical field as PascalCase
(``PatientId``), snake_case (``patient_id``) or camelCase (``patientId``).
Logical fields are named here by their PascalCase wire name.
"""

import re
from typing import Any, Mapping, Optional

_CAPITAL = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(pascal: str) -> str:
    """``HbsagScreenDates`` -> ``hbsag_screen_dates``."""
    return _CAPITAL.sub("_", pascal).lower()


def to_camel(pascal: str) -> str:
    """``HbsagScreenDates`` -> ``hbsagScreenDates``."""
    return pascal[:1].lower() + pascal[1:]


def field_variants(pascal: str) -> tuple[str, str, str]:
    """Return the lookup order for a logical field: Pascal, snake, camel."""
    return (pascal, to_snake(pascal), to_camel(pascal))


def resolve_field(raw: Mapping[str, Any], pascal: str, default: Optional[Any] = None) -> Any:
    """Resolve a logical field from a record in any naming convention.

    Conventions are tried in priority order (Pascal, snake, camel) and the
    first truthy value wins, so an empty string or zero under one
    convention falls through to the next.

    Args:
        raw: Record as decoded from the backend
        pascal: PascalCase name of the logical field
        default: Returned when no convention holds a truthy value

    Returns:
        The resolved value, or ``default``

    Example:
        >>> resolve_field({"patient_id": 2}, "PatientId")
        2
    """
    for key in field_variants(pascal):
        value = raw.get(key)
        if value:
            return value
    return default


def convert_keys(record: Mapping[str, Any], convention: str) -> dict[str, Any]:
    """Rename the top-level PascalCase keys of a record.

    Args:
        record: Record with PascalCase keys
        convention: "pascal", "snake" or "camel"

    Returns:
        New dict with renamed keys

    Raises:
        ValueError: If the convention is unknown
    """
    if convention == "pascal":
        return dict(record)
    if convention == "snake":
        return {to_snake(key): value for key, value in record.items()}
    if convention == "camel":
        return {to_camel(key): value for key, value in record.items()}
    raise ValueError(
        f"Unknown naming convention: {convention}. Must be one of: pascal, snake, camel"
    )
