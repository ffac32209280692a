"""
Custom exception hierarchy for the project management backend.

Domain errors carry the HTTP status they map to, so the service layer can
raise them and the API layer renders them with the ``{success, message}``
envelope without per-endpoint translation.

Exception Hierarchy:
    ServiceError (base, 500)
    ├── ValidationFailedError (400)
    ├── RoleDeniedError (401)
    ├── RecordNotFoundError (404)
    ├── DuplicateRecordError (409)
    └── AssignmentLogError (404 or 500)

Usage Examples:
    >>> raise RecordNotFoundError('Team', 'Team-00007')
    RecordNotFoundError: Team not found.

    >>> raise ValidationFailedError('All fields are required.')
    ValidationFailedError: All fields are required.
"""

import logging
from typing import Any, Optional

from django.http import Http404
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError, ValidationError
from ninja_jwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all service layer operations.

    Attributes:
        message: Human readable message returned to the client
        status_code: HTTP status the error is rendered with
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailedError(ServiceError):
    """Raised when a payload is missing fields or breaks schema constraints.

    Attributes:
        errors: Individual validation messages, joined into ``message``
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.errors = errors or [message]
        super().__init__(message)

    @classmethod
    def from_messages(cls, errors: list[str]) -> 'ValidationFailedError':
        return cls(', '.join(errors), errors=errors)


class RoleDeniedError(ServiceError):
    """Raised when the caller's role does not match the endpoint's role."""

    status_code = 401

    def __init__(self, required_role: str, message: Optional[str] = None):
        self.required_role = required_role
        super().__init__(message or f'Unauthorized access. You are not a {required_role}.')


class RecordNotFoundError(ServiceError):
    """Raised when a record looked up by business identifier does not exist.

    Attributes:
        model_name: Name of the missing record type ('Team', 'Project', ...)
        identifier: The identifier that was looked up
    """

    status_code = 404

    def __init__(self, model_name: str, identifier: Any = None, message: Optional[str] = None):
        self.model_name = model_name
        self.identifier = identifier
        super().__init__(message or f'{model_name} not found.')


class DuplicateRecordError(ServiceError):
    """Raised when a record with the same natural key already exists."""

    status_code = 409


class AssignmentLogError(ServiceError):
    """Raised when the assignment log could not record a new task.

    The task that triggered it has already been removed again when this
    is raised (see ``TaskAssignmentService``).
    """

    status_code = 500


# Error code mapping for API responses
ERROR_CODES = {
    ValidationFailedError: 'VALIDATION_FAILED',
    RoleDeniedError: 'ROLE_DENIED',
    RecordNotFoundError: 'RECORD_NOT_FOUND',
    DuplicateRecordError: 'DUPLICATE_RECORD',
    AssignmentLogError: 'ASSIGNMENT_LOG_FAILED',
}


def get_error_code(exception: ServiceError) -> str:
    """Get standardized error code for an exception.

    Example:
        >>> get_error_code(RecordNotFoundError('Task', 'Task-00001'))
        'RECORD_NOT_FOUND'
    """
    return ERROR_CODES.get(type(exception), 'SERVICE_ERROR')


def to_error_dict(exception: ServiceError) -> dict:
    """Convert exception to the error envelope used by every endpoint.

    Example:
        >>> to_error_dict(ValidationFailedError('All fields are required.'))
        {'success': False, 'message': 'All fields are required.', 'code': 'VALIDATION_FAILED'}
    """
    error_dict: dict[str, Any] = {
        'success': False,
        'message': exception.message,
        'code': get_error_code(exception),
    }

    if isinstance(exception, ValidationFailedError) and len(exception.errors) > 1:
        error_dict['errors'] = exception.errors
    elif isinstance(exception, RecordNotFoundError) and exception.identifier is not None:
        error_dict['identifier'] = exception.identifier

    return error_dict


def _format_validation_errors(errors: list[dict]) -> list[str]:
    messages = []
    for error in errors:
        location = [str(part) for part in error.get('loc', ()) if part not in ('body', 'payload')]
        field = location[-1] if location else ''
        message = error.get('msg', 'Invalid value')
        messages.append(f'{field}: {message}' if field else message)
    return messages


def install_exception_handlers(api: NinjaAPI) -> None:
    """Register envelope-preserving exception handlers on a Ninja API."""

    @api.exception_handler(ServiceError)
    def handle_service_error(request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f'{request.method} {request.path} failed: {exc.message}')
        return api.create_response(request, to_error_dict(exc), status=exc.status_code)

    @api.exception_handler(HttpError)
    def handle_http_error(request, exc: HttpError):
        return api.create_response(
            request,
            {'success': False, 'message': str(exc)},
            status=exc.status_code,
        )

    @api.exception_handler(AuthenticationError)
    def handle_authentication_error(request, exc: AuthenticationError):
        return api.create_response(
            request,
            {'success': False, 'message': 'Unauthorized. No token provided.'},
            status=401,
        )

    @api.exception_handler(InvalidToken)
    def handle_invalid_token(request, exc: InvalidToken):
        return api.create_response(
            request,
            {'success': False, 'message': 'Unauthorized. Invalid or expired token.'},
            status=401,
        )

    @api.exception_handler(ValidationError)
    def handle_validation_error(request, exc: ValidationError):
        messages = _format_validation_errors(exc.errors)
        return api.create_response(
            request,
            {'success': False, 'message': ', '.join(messages), 'errors': messages},
            status=400,
        )

    @api.exception_handler(Http404)
    def handle_not_found(request, exc: Http404):
        return api.create_response(
            request,
            {'success': False, 'message': str(exc) or 'Not found.'},
            status=404,
        )
