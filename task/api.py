"""
Task API endpoints.

Project managers assign, list, export, edit and delete the tasks of their
projects; team members read the tasks assigned to them and move their status.

Endpoints:
    - POST   /tasks/assign/{project_id}
    - GET    /tasks/project/{project_id}
    - GET    /tasks/project/{project_id}/export
    - PUT    /tasks/{task_id}
    - DELETE /tasks/
    - GET    /tasks/mine
    - PATCH  /tasks/{task_id}/status
"""

import logging

from django.http import HttpResponse
from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import paginate
from ninja_jwt.authentication import JWTAuth

from common.exceptions import ServiceError
from common.export_service import ExportConfig, TaskExportService
from common.pagination import PagePagination
from common.permissions import RolePermissions, require_project_manager, require_team_member
from common.schemas import DeleteResponse
from task.schemas import (
    AssignTaskRequest,
    TaskAssignResponse,
    TaskDeleteRequest,
    TaskOut,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from task.service import TaskAssignmentService, TaskService

logger = logging.getLogger(__name__)

router = Router(auth=JWTAuth())


@router.post('/assign/{project_id}', response=TaskAssignResponse, exclude_none=True)
@require_project_manager
def assign_task(request, project_id: str, payload: AssignTaskRequest):
    """
    Assign a new task to a whole team or to one user.

    An empty ``assigned_to`` assigns the task to every member of the team,
    otherwise to the named user. The project must already be assigned to the
    team (``POST /projects/{project_id}/assign``) because the new task is
    recorded in that assignment log.

    Responses:
        - 200 ``{success: true, message: "Task assigned successfully!", task}``
        - 200 ``{success: true, message: "Project not found in database"}``
          when the project does not exist for the caller
        - 400 missing fields or invalid title/description/deadline
        - 404 team, assigned user or assignment log not found
        - 500 the assignment log could not be updated, or any other failure

    Example:
        POST /api/v1/tasks/assign/Project-00001
        {"team_id": "Team-00001", "assigned_to": "", "title": "Draft API",
         "description": "Write the first draft", "deadline": "2026-12-01"}
    """
    manager = RolePermissions.get_request_user(request)
    result = TaskAssignmentService.assign_task(
        manager,
        project_id=project_id,
        team_id=payload.team_id,
        assigned_to=payload.assigned_to,
        title=payload.title,
        description=payload.description,
        deadline=payload.deadline,
    )

    return {'success': True, 'message': result.message, 'task': result.task}


@router.get('/project/{project_id}', response=list[TaskOut])
@paginate(PagePagination)
@require_project_manager
def list_project_tasks(request, project_id: str, status: str | None = None):
    return TaskService.get_project_tasks(
        RolePermissions.get_request_user(request),
        project_id,
        status=status,
    )


@router.get('/project/{project_id}/export', response={200: None})
@require_project_manager
def export_project_tasks(request, project_id: str, format: str = ExportConfig.DEFAULT_EXPORT_FORMAT):
    """Download the project's tasks as CSV (default) or XLSX."""
    if format not in ExportConfig.ALLOWED_EXPORT_FORMATS:
        format = ExportConfig.DEFAULT_EXPORT_FORMAT

    queryset = TaskService.get_project_tasks(RolePermissions.get_request_user(request), project_id)

    try:
        content = TaskExportService.export(queryset, format)
    except Exception as e:
        logger.error(f'Export failed for {project_id}: {str(e)}')
        raise HttpError(500, 'Failed to export tasks.') from e

    filename = TaskExportService.generate_export_filename(project_id, format)
    response = HttpResponse(content, content_type=TaskExportService.get_content_type(format))
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    response['Access-Control-Expose-Headers'] = 'Content-Disposition'

    logger.info(f'Export generated: {filename} ({len(content)} bytes)')
    return response


@router.get('/mine', response=list[TaskOut])
@paginate(PagePagination)
@require_team_member
def list_my_tasks(request, status: str | None = None):
    return TaskService.get_member_tasks(RolePermissions.get_request_user(request), status=status)


@router.delete('/', response=DeleteResponse)
@require_project_manager
def delete_tasks(request, payload: TaskDeleteRequest):
    try:
        result = TaskService.delete_tasks(RolePermissions.get_request_user(request), payload.task_ids)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error deleting tasks: {str(e)}')
        raise HttpError(500, 'Failed to delete tasks.') from e

    deleted = result['deleted_count']
    return {
        'success': deleted > 0,
        'message': f'{deleted} tasks deleted successfully!' if deleted else 'No tasks found to delete.',
        **result,
    }


@router.put('/{task_id}', response=TaskResponse)
@require_project_manager
def update_task(request, task_id: str, payload: TaskUpdateRequest):
    try:
        task = TaskService.update_task(
            RolePermissions.get_request_user(request),
            task_id,
            **payload.model_dump(exclude_none=True),
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error updating task {task_id}: {str(e)}')
        raise HttpError(500, 'Failed to update task.') from e

    return {'success': True, 'message': 'Task updated successfully!', 'task': task}


@router.patch('/{task_id}/status', response=TaskResponse)
@require_team_member
def update_my_task_status(request, task_id: str, payload: TaskStatusRequest):
    try:
        task = TaskService.update_member_task_status(
            RolePermissions.get_request_user(request),
            task_id,
            payload.status,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error updating status of task {task_id}: {str(e)}')
        raise HttpError(500, 'Failed to update task status.') from e

    return {'success': True, 'message': 'Task status updated successfully!', 'task': task}
