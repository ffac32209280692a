"""
Admin area endpoints.

Admins manage the other accounts:
- POST   /admin-data/admins
- GET    /admin-data/project-managers       (paginated)
- POST   /admin-data/project-managers
- PUT    /admin-data/project-managers       (bulk update by email)
- DELETE /admin-data/project-managers       (cascades to projects/teams/tasks)
- the same four operations on /admin-data/users for team members
"""

import logging

from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import paginate
from ninja_jwt.authentication import JWTAuth

from accounts.models import User
from accounts.schemas import (
    AccountBulkUpdateRequest,
    AccountCreateRequest,
    AccountDeleteResponse,
    AccountListUpdateResponse,
    AccountResponse,
    EmailListRequest,
    UserInfo,
)
from accounts.services import AccountService
from common.exceptions import ServiceError
from common.pagination import PagePagination
from common.permissions import require_admin

logger = logging.getLogger(__name__)

router = Router(auth=JWTAuth())

ROLE_LABELS = {
    User.TYPE_ADMIN: 'Admin',
    User.TYPE_PROJECT_MANAGER: 'ProjectManager',
    User.TYPE_USER: 'User',
}


def _create(user_type: str, payload: AccountCreateRequest):
    try:
        user = AccountService.create_account(user_type=user_type, **payload.model_dump())
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error creating {user_type}: {str(e)}')
        raise HttpError(500, f'Failed to create {ROLE_LABELS[user_type]}.') from e
    return 201, {
        'success': True,
        'message': f'{ROLE_LABELS[user_type]} created successfully!',
        'user': user.to_dict(),
    }


def _update(user_type: str, payload: AccountBulkUpdateRequest):
    updates = [item.model_dump() for item in payload.updates]
    try:
        users, not_found = AccountService.update_accounts(user_type, updates)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error updating {user_type} accounts: {str(e)}')
        raise HttpError(500, f'Failed to update {ROLE_LABELS[user_type]}s.') from e
    return {
        'success': bool(users),
        'message': (
            f'{len(users)} {ROLE_LABELS[user_type]}s updated successfully!'
            if users else f'No {ROLE_LABELS[user_type]}s found to update.'
        ),
        'users': [user.to_dict() for user in users],
        'not_found': not_found,
    }


def _delete(user_type: str, payload: EmailListRequest):
    try:
        result = AccountService.delete_accounts(user_type, payload.emails)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f'Error deleting {user_type} accounts: {str(e)}')
        raise HttpError(500, f'Failed to delete {ROLE_LABELS[user_type]}s.') from e
    return {
        'success': result['deleted_count'] > 0,
        'message': (
            f'{result["deleted_count"]} {ROLE_LABELS[user_type]}s deleted successfully!'
            if result['deleted_count'] else f'No {ROLE_LABELS[user_type]}s found to delete.'
        ),
        **result,
    }


@router.post('/admins', response={201: AccountResponse})
@require_admin
def create_admin(request, payload: AccountCreateRequest):
    return _create(User.TYPE_ADMIN, payload)


# ========== Project managers ==========

@router.get('/project-managers', response=list[UserInfo])
@paginate(PagePagination)
@require_admin
def list_project_managers(request):
    return AccountService.get_accounts_queryset(User.TYPE_PROJECT_MANAGER)


@router.post('/project-managers', response={201: AccountResponse})
@require_admin
def create_project_manager(request, payload: AccountCreateRequest):
    return _create(User.TYPE_PROJECT_MANAGER, payload)


@router.put('/project-managers', response=AccountListUpdateResponse)
@require_admin
def update_project_managers(request, payload: AccountBulkUpdateRequest):
    return _update(User.TYPE_PROJECT_MANAGER, payload)


@router.delete('/project-managers', response=AccountDeleteResponse)
@require_admin
def delete_project_managers(request, payload: EmailListRequest):
    return _delete(User.TYPE_PROJECT_MANAGER, payload)


# ========== Team members ==========

@router.get('/users', response=list[UserInfo])
@paginate(PagePagination)
@require_admin
def list_users(request):
    return AccountService.get_accounts_queryset(User.TYPE_USER)


@router.post('/users', response={201: AccountResponse})
@require_admin
def create_user(request, payload: AccountCreateRequest):
    return _create(User.TYPE_USER, payload)


@router.put('/users', response=AccountListUpdateResponse)
@require_admin
def update_users(request, payload: AccountBulkUpdateRequest):
    return _update(User.TYPE_USER, payload)


@router.delete('/users', response=AccountDeleteResponse)
@require_admin
def delete_users(request, payload: EmailListRequest):
    return _delete(User.TYPE_USER, payload)
