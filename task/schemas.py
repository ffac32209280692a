from datetime import date, datetime

from django.utils import timezone
from ninja import Field, Schema
from pydantic import field_validator
from pydantic_core import PydanticCustomError

from common.config import TaskConfig
from task.models import Task

VALID_STATUSES = {choice[0] for choice in Task.STATUS_CHOICES}


def _task_error(message: str) -> PydanticCustomError:
    return PydanticCustomError('task_field', message)


def _parse_deadline(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip().replace('Z', '+00:00')).date()
    except ValueError:
        raise _task_error('Deadline must be a valid date') from None


def _check_deadline(value: date) -> date:
    if value < timezone.localdate():
        raise _task_error('Deadline cannot be in the past')
    return value


class AssignTaskRequest(Schema):
    """Raw assignment payload.

    Every field defaults to an empty value so that missing fields are reported
    together as one "All fields are required." error instead of per-field
    request validation errors. An empty ``assigned_to`` assigns the whole team.
    """

    team_id: str = ''
    assigned_to: str = ''
    title: str = ''
    description: str = ''
    deadline: str = ''

    @field_validator('team_id', 'assigned_to', 'title', 'description', 'deadline', mode='before')
    @classmethod
    def none_as_empty(cls, value):
        return '' if value is None else value


class TaskCreateSchema(Schema):
    """Constraints a task must satisfy before it is written."""

    title: str
    description: str
    deadline: date

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        value = value.strip()
        if len(value) < TaskConfig.TITLE_MIN_LENGTH:
            raise _task_error(
                f'Title must be at least {TaskConfig.TITLE_MIN_LENGTH} characters long'
            )
        if len(value) > TaskConfig.TITLE_MAX_LENGTH:
            raise _task_error(
                f'Title must be at most {TaskConfig.TITLE_MAX_LENGTH} characters long'
            )
        return value

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        value = value.strip()
        if len(value) < TaskConfig.DESCRIPTION_MIN_LENGTH:
            raise _task_error(
                f'Description must be at least {TaskConfig.DESCRIPTION_MIN_LENGTH} characters long'
            )
        if len(value) > TaskConfig.DESCRIPTION_MAX_LENGTH:
            raise _task_error(
                f'Description must be at most {TaskConfig.DESCRIPTION_MAX_LENGTH} characters long'
            )
        return value

    @field_validator('deadline', mode='before')
    @classmethod
    def parse_deadline(cls, value):
        return _parse_deadline(value)

    @field_validator('deadline')
    @classmethod
    def validate_deadline(cls, value: date) -> date:
        return _check_deadline(value)


class TaskOut(Schema):
    task_id: str
    title: str
    description: str
    project_id: str
    team_id: str
    assigned_to: list[str]
    deadline: date
    status: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_assigned_to(obj) -> list[str]:
        return obj.assignee_ids()


class TaskResponse(Schema):
    success: bool
    message: str
    task: TaskOut


class TaskAssignResponse(Schema):
    success: bool
    message: str
    task: TaskOut | None = None


class TaskUpdateRequest(Schema):
    title: str | None = Field(
        None,
        min_length=TaskConfig.TITLE_MIN_LENGTH,
        max_length=TaskConfig.TITLE_MAX_LENGTH,
    )
    description: str | None = Field(
        None,
        min_length=TaskConfig.DESCRIPTION_MIN_LENGTH,
        max_length=TaskConfig.DESCRIPTION_MAX_LENGTH,
    )
    deadline: date | None = None
    status: str | None = None

    @field_validator('deadline', mode='before')
    @classmethod
    def parse_deadline(cls, value):
        return None if value is None else _parse_deadline(value)

    @field_validator('deadline')
    @classmethod
    def validate_deadline(cls, value: date | None) -> date | None:
        return None if value is None else _check_deadline(value)

    @field_validator('status')
    @classmethod
    def validate_status(cls, value: str | None) -> str | None:
        if value is not None and value not in VALID_STATUSES:
            raise ValueError(f'Status must be one of: {", ".join(sorted(VALID_STATUSES))}')
        return value


class TaskStatusRequest(Schema):
    status: str

    @field_validator('status')
    @classmethod
    def validate_status(cls, value: str) -> str:
        if value not in VALID_STATUSES:
            raise ValueError(f'Status must be one of: {", ".join(sorted(VALID_STATUSES))}')
        return value


class TaskDeleteRequest(Schema):
    task_ids: list[str]
