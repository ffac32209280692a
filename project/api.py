import logging

from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import paginate
from ninja_jwt.authentication import JWTAuth

from common.exceptions import ServiceError
from common.pagination import PagePagination
from common.permissions import RolePermissions, require_project_manager
from common.schemas import DeleteResponse
from project.schemas import (
    AssignmentLogListResponse,
    AssignmentLogResponse,
    AssignProjectRequest,
    ProjectCreateRequest,
    ProjectDeleteRequest,
    ProjectOut,
    ProjectResponse,
    ProjectUpdateRequest,
    TeamCreateRequest,
    TeamDeleteRequest,
    TeamOut,
    TeamResponse,
    TeamUpdateRequest,
)
from project.service import ProjectService, TeamService

logger = logging.getLogger(__name__)

router = Router(auth=JWTAuth())
team_router = Router(auth=JWTAuth())


def _manager(request):
    return RolePermissions.get_request_user(request)


# ========== Projects ==========

@router.get('/', response=list[ProjectOut])
@paginate(PagePagination)
@require_project_manager
def list_projects(
    request,
    q: str = '',
    status: str | None = None,
    sort: str = ProjectService.DEFAULT_SORT,
):
    return ProjectService.get_projects_queryset(
        _manager(request),
        q=q or None,
        status=status,
        sort=sort,
    )


@router.post('/', response={201: ProjectResponse})
@require_project_manager
def create_project(request, payload: ProjectCreateRequest):
    try:
        project = ProjectService.create_project(
            _manager(request),
            title=payload.title,
            description=payload.description,
            deadline=payload.deadline,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error creating project: {str(e)}')
        raise HttpError(500, 'Failed to create project.') from e

    return 201, {
        'success': True,
        'message': 'Project created successfully!',
        'project': project,
    }


# Static route before dynamic routes
@router.delete('/', response=DeleteResponse)
@require_project_manager
def delete_projects(request, payload: ProjectDeleteRequest):
    try:
        result = ProjectService.delete_projects(_manager(request), payload.project_ids)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error deleting projects: {str(e)}')
        raise HttpError(500, 'Failed to delete projects.') from e

    deleted = result['deleted_count']
    return {
        'success': deleted > 0,
        'message': f'{deleted} projects deleted successfully!' if deleted else 'No projects found to delete.',
        **result,
    }


@router.get('/{project_id}', response=ProjectResponse)
@require_project_manager
def get_project(request, project_id: str):
    project = ProjectService.get_project(_manager(request), project_id)
    return {'success': True, 'message': 'Project retrieved successfully.', 'project': project}


@router.put('/{project_id}', response=ProjectResponse)
@require_project_manager
def update_project(request, project_id: str, payload: ProjectUpdateRequest):
    try:
        project = ProjectService.update_project(
            _manager(request),
            project_id,
            **payload.model_dump(exclude_none=True),
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error updating project {project_id}: {str(e)}')
        raise HttpError(500, 'Failed to update project.') from e

    return {'success': True, 'message': 'Project updated successfully!', 'project': project}


@router.post('/{project_id}/assign', response={201: AssignmentLogResponse})
@require_project_manager
def assign_project(request, project_id: str, payload: AssignProjectRequest):
    try:
        log = ProjectService.assign_project_to_team(
            _manager(request),
            project_id,
            payload.team_id,
            deadline=payload.deadline,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error assigning project {project_id} to team {payload.team_id}: {str(e)}')
        raise HttpError(500, 'Failed to assign project.') from e

    return 201, {
        'success': True,
        'message': 'Project assigned to team successfully!',
        'assignment': log,
    }


@router.get('/{project_id}/assignments', response=AssignmentLogListResponse)
@require_project_manager
def list_assignments(request, project_id: str):
    logs = ProjectService.get_assignment_logs(_manager(request), project_id)
    return {'success': True, 'project_id': project_id, 'assignments': list(logs)}


# ========== Teams ==========

@team_router.get('/', response=list[TeamOut])
@paginate(PagePagination)
@require_project_manager
def list_teams(request):
    return TeamService.get_teams_queryset(_manager(request))


@team_router.post('/', response={201: TeamResponse})
@require_project_manager
def create_team(request, payload: TeamCreateRequest):
    try:
        team = TeamService.create_team(
            _manager(request),
            team_name=payload.team_name,
            members=payload.members,
            team_leader=payload.team_leader,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error creating team: {str(e)}')
        raise HttpError(500, 'Failed to create team.') from e

    return 201, {'success': True, 'message': 'Team created successfully!', 'team': team}


@team_router.delete('/', response=DeleteResponse)
@require_project_manager
def delete_teams(request, payload: TeamDeleteRequest):
    try:
        result = TeamService.delete_teams(_manager(request), payload.team_ids)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error deleting teams: {str(e)}')
        raise HttpError(500, 'Failed to delete teams.') from e

    deleted = result['deleted_count']
    return {
        'success': deleted > 0,
        'message': f'{deleted} teams deleted successfully!' if deleted else 'No teams found to delete.',
        **result,
    }


@team_router.get('/{team_id}', response=TeamResponse)
@require_project_manager
def get_team(request, team_id: str):
    team = TeamService.get_team(_manager(request), team_id)
    return {'success': True, 'message': 'Team retrieved successfully.', 'team': team}


@team_router.put('/{team_id}', response=TeamResponse)
@require_project_manager
def update_team(request, team_id: str, payload: TeamUpdateRequest):
    try:
        team = TeamService.update_team(
            _manager(request),
            team_id,
            team_name=payload.team_name,
            members=payload.members,
            team_leader=payload.team_leader,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error updating team {team_id}: {str(e)}')
        raise HttpError(500, 'Failed to update team.') from e

    return {'success': True, 'message': 'Team updated successfully!', 'team': team}
