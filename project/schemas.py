from datetime import date, datetime

from ninja import Field, Schema
from pydantic import field_validator

from project.models import Project


class ProjectCreateRequest(Schema):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ''
    deadline: date | None = None


class ProjectUpdateRequest(Schema):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    deadline: date | None = None
    status: str | None = None

    @field_validator('status')
    @classmethod
    def validate_status(cls, value: str | None) -> str | None:
        valid = {choice[0] for choice in Project.STATUS_CHOICES}
        if value is not None and value not in valid:
            raise ValueError(f'Status must be one of: {", ".join(sorted(valid))}')
        return value


class ProjectOut(Schema):
    project_id: str
    title: str
    description: str
    deadline: date | None = None
    status: str
    manager_id: str
    created_at: datetime
    updated_at: datetime


class ProjectResponse(Schema):
    success: bool
    message: str
    project: ProjectOut


class ProjectDeleteRequest(Schema):
    project_ids: list[str]


class TeamCreateRequest(Schema):
    team_name: str = Field(..., min_length=1, max_length=200)
    members: list[str] = []
    team_leader: str | None = None


class TeamUpdateRequest(Schema):
    team_name: str | None = Field(None, min_length=1, max_length=200)
    members: list[str] | None = None
    team_leader: str | None = None


class TeamOut(Schema):
    team_id: str
    team_name: str
    members: list[str]
    team_leader_id: str | None = None
    manager_id: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_members(obj) -> list[str]:
        return obj.member_ids()


class TeamResponse(Schema):
    success: bool
    message: str
    team: TeamOut


class TeamDeleteRequest(Schema):
    team_ids: list[str]


class AssignProjectRequest(Schema):
    team_id: str = Field(..., min_length=1)
    deadline: date | None = None


class AssignmentLogOut(Schema):
    assign_project_id: str
    project_id: str
    team_id: str
    deadline: date | None = None
    tasks_ids: list[str]
    created_at: datetime
    updated_at: datetime


class AssignmentLogResponse(Schema):
    success: bool
    message: str
    assignment: AssignmentLogOut


class AssignmentLogListResponse(Schema):
    success: bool
    project_id: str
    assignments: list[AssignmentLogOut]
