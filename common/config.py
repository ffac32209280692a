"""
Configuration constants for the project management backend.

This module centralizes the magic numbers and patterns used across the
accounts, project and task applications so they are easy to find and tune.

Usage:
    >>> from common.config import IdentifierConfig
    >>> IdentifierConfig.PADDING
    5
"""


class IdentifierConfig:
    """Business identifier configuration.

    Every record carries a readable identifier such as ``Project-00042``
    next to its database primary key.
    """

    PADDING: int = 5
    """Number of digits in the numeric suffix (``Admin-00001``)."""

    SEPARATOR: str = '-'

    ADMIN_PREFIX: str = 'Admin'
    USER_PREFIX: str = 'User'
    PROJECT_PREFIX: str = 'Project'
    TEAM_PREFIX: str = 'Team'
    TASK_PREFIX: str = 'Task'
    ASSIGNMENT_LOG_PREFIX: str = 'AssignProject'

    MAX_LENGTH: int = 32
    """Column width for identifier fields."""


class ValidationConfig:
    """Input validation rules shared by models and request schemas."""

    NAME_REGEX: str = r"^[A-Za-z]+([ '-][A-Za-z]+)*$"
    """First/last names: letters, single space, apostrophe or hyphen separators."""

    CONTACT_REGEX: str = (
        r'^(?:\+?(\d{1,4})[-.\s]?)?(?:\(?\d{2,4}\)?[-.\s]?)?\d{3,4}[-.\s]?\d{3,4}$'
    )
    """Contact number, optional country and area code."""

    EMAIL_REGEX: str = r'^(?!.*\.\.)[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,63}$'
    """Email format, consecutive dots rejected."""

    MIN_PASSWORD_LENGTH: int = 8


class TaskConfig:
    """Task payload limits."""

    TITLE_MIN_LENGTH: int = 3
    TITLE_MAX_LENGTH: int = 100

    DESCRIPTION_MIN_LENGTH: int = 5
    DESCRIPTION_MAX_LENGTH: int = 1000


class PaginationConfig:
    """Page-based pagination bounds for list endpoints."""

    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_SIZE: int = 20
    MIN_PAGE_SIZE: int = 1
    MAX_PAGE_SIZE: int = 100


def get_all_config() -> dict:
    """Get all configuration as a dictionary for debugging/logging."""
    return {
        'identifiers': {
            'padding': IdentifierConfig.PADDING,
            'prefixes': [
                IdentifierConfig.ADMIN_PREFIX,
                IdentifierConfig.USER_PREFIX,
                IdentifierConfig.PROJECT_PREFIX,
                IdentifierConfig.TEAM_PREFIX,
                IdentifierConfig.TASK_PREFIX,
                IdentifierConfig.ASSIGNMENT_LOG_PREFIX,
            ],
        },
        'task': {
            'title_length': (TaskConfig.TITLE_MIN_LENGTH, TaskConfig.TITLE_MAX_LENGTH),
            'description_length': (
                TaskConfig.DESCRIPTION_MIN_LENGTH,
                TaskConfig.DESCRIPTION_MAX_LENGTH,
            ),
        },
        'pagination': {
            'default_page_size': PaginationConfig.DEFAULT_PAGE_SIZE,
            'max_page_size': PaginationConfig.MAX_PAGE_SIZE,
        },
    }
