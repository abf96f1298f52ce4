"""Helpers for reading Google API errors.

googleapiclient raises HttpError with the JSON error body in ``content``;
google-auth raises RefreshError with the token endpoint response as its
second argument. These helpers pull out the message and machine-readable
reasons so callers can branch on them.
"""

from __future__ import annotations

import json
from typing import Any

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

MISSING_RANGE_MARKER = "Unable to parse range"
ALREADY_EXISTS_MARKER = "already exists"


def _http_error_body(error: HttpError) -> dict[str, Any]:
    """Decode the JSON body of an HttpError, or {} if it has none."""
    try:
        data = json.loads(error.content.decode("utf-8"))
    except (ValueError, UnicodeDecodeError, AttributeError):
        return {}
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"]
    return {}


def _refresh_error_body(error: RefreshError) -> dict[str, Any]:
    if len(error.args) > 1 and isinstance(error.args[1], dict):
        return error.args[1]
    return {}


def error_message(error: BaseException) -> str:
    """Get the most specific message an upstream error carries.

    Args:
        error: Exception raised by googleapiclient or google-auth.

    Returns:
        Upstream message, falling back to ``str(error)``.
    """
    if isinstance(error, HttpError):
        return _http_error_body(error).get("message") or error.reason or str(error)
    if isinstance(error, RefreshError):
        body = _refresh_error_body(error)
        return body.get("error_description") or (str(error.args[0]) if error.args else str(error))
    return str(error)


def error_reasons(error: BaseException) -> set[str]:
    """Collect structured reason codes from an upstream error.

    Includes the HTTP error ``status`` field, every ``errors[].reason`` and
    ``details[].reason``, and the OAuth ``error`` code of a RefreshError.

    Args:
        error: Exception raised by googleapiclient or google-auth.

    Returns:
        Set of reason codes (empty if the error carries none).
    """
    reasons: set[str] = set()
    if isinstance(error, HttpError):
        body = _http_error_body(error)
        if body.get("status"):
            reasons.add(str(body["status"]))
        for key in ("errors", "details"):
            for item in body.get(key) or []:
                if isinstance(item, dict) and item.get("reason"):
                    reasons.add(str(item["reason"]))
    elif isinstance(error, RefreshError):
        code = _refresh_error_body(error).get("error")
        if code:
            reasons.add(str(code))
    return reasons


def error_details(error: BaseException) -> str:
    """Render the full upstream payload for logging."""
    if isinstance(error, HttpError):
        body = _http_error_body(error)
        if body:
            return json.dumps(body, indent=2)
    if isinstance(error, RefreshError):
        body = _refresh_error_body(error)
        if body:
            return json.dumps(body, indent=2)
    return str(error)


def is_missing_range_error(error: BaseException) -> bool:
    """Check if the API rejected a range because the sheet does not exist."""
    return isinstance(error, HttpError) and MISSING_RANGE_MARKER in error_message(error)


def is_already_exists_error(error: BaseException) -> bool:
    """Check if an addSheet request lost a race with another writer."""
    return ALREADY_EXISTS_MARKER in error_message(error) or ALREADY_EXISTS_MARKER in str(error)
