"""
Shared Pydantic schemas for Django Ninja API.

Every response carries ``success`` and usually ``message``; these are the
envelope pieces reused by the account, project and task routers.
"""

import re

from ninja import Schema

from common.config import ValidationConfig


class StatusResponse(Schema):
    """Simple status response.

    Used for logout and other status-only endpoints.
    """
    success: bool
    message: str


class DeleteResponse(Schema):
    """Bulk delete result by business identifiers."""
    success: bool
    message: str
    deleted_count: int
    not_found: list[str] = []


def check_pattern(value: str, pattern: str, message: str) -> str:
    """Validate ``value`` against ``pattern`` with Python's ``re`` engine.

    The name/email patterns use look-arounds, which pydantic's default regex
    engine does not support, so schemas validate through this helper.
    """
    if not re.fullmatch(pattern, value):
        raise ValueError(message)
    return value


def check_email(value: str) -> str:
    value = value.strip().lower()
    return check_pattern(value, ValidationConfig.EMAIL_REGEX, 'Invalid email format')
