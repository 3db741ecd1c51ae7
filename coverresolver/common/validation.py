"""Input validation for game lists and resolved covers.

Everything here runs before a batch issues its first request, so a failure
raised from this module always aborts the whole batch.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from .exceptions import InputValidationError, MissingCredentialsError
from .models import GameItem


REQUIRED_FIELDS = ("title", "systemName")


# ============================================================================
# GAME LIST VALIDATION
# ============================================================================

def parse_game_list(text: str) -> list[GameItem]:
    """Parse pasted JSON text into a list of games.

    Args:
        text: JSON array of objects carrying ``title`` and ``systemName``

    Returns:
        One GameItem per array element, in input order

    Raises:
        InputValidationError: If the text is not valid JSON, is not an
            array, or an element lacks one of the required fields
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"Invalid JSON format: {e}") from e

    return validate_game_list(data)


def validate_game_list(data: Any) -> list[GameItem]:
    """Validate an already decoded game list.

    Raises:
        InputValidationError: If ``data`` is not a list of valid entries
    """
    if not isinstance(data, list):
        raise InputValidationError("Input must be an array of games")

    games = []
    for index, entry in enumerate(data):
        validate_game_entry(entry, index)
        games.append(GameItem.from_dict(entry))
    return games


def validate_game_entry(entry: Any, index: int = 0) -> Mapping[str, Any]:
    if not isinstance(entry, Mapping):
        raise InputValidationError("Each game must be a JSON object", index)
    for key in REQUIRED_FIELDS:
        value = entry.get(key)
        if not isinstance(value, str) or not value:
            raise InputValidationError(
                "Each game must have 'title' and 'systemName' properties", index
            )
    return entry


# ============================================================================
# CREDENTIAL VALIDATION
# ============================================================================

def validate_credentials(provider: str, credentials: Mapping[str, Optional[str]]) -> None:
    """Check that every named credential is present and non-empty.

    Only presence is checked; the values are never inspected.

    Raises:
        MissingCredentialsError: Listing the missing credential names
    """
    missing = [name for name, value in credentials.items() if not value]
    if missing:
        raise MissingCredentialsError(provider, missing)


# ============================================================================
# URL VALIDATION
# ============================================================================

def is_absolute_url(value: Optional[str]) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    if not value or not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
