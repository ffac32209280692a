"""
Role permissions and decorators.

Implements the role checks of the three account types:
- Admin
- ProjectManager
- User

The role is read from the account resolved by JWT authentication
(``request.auth``) and compared by name against the role an endpoint requires.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from common.exceptions import RoleDeniedError

F = TypeVar('F', bound=Callable[..., object])
logger = logging.getLogger(__name__)


class RolePermissions:
    """Role checks for authenticated accounts."""

    ROLE_ADMIN = 'Admin'
    ROLE_PROJECT_MANAGER = 'ProjectManager'
    ROLE_USER = 'User'

    ROLES = (ROLE_ADMIN, ROLE_PROJECT_MANAGER, ROLE_USER)

    DENIED_MESSAGES = {
        ROLE_ADMIN: 'Unauthorized access. You are not an Admin.',
        ROLE_PROJECT_MANAGER: 'Unauthorized access. You are not a Project Manager.',
        ROLE_USER: 'Unauthorized access. You are not a team member.',
    }

    @staticmethod
    def get_request_user(request):
        """Return the account authenticated for ``request``, if any."""
        user = getattr(request, 'auth', None)
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        return user

    @classmethod
    def get_user_role(cls, user) -> str | None:
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        role = getattr(user, 'user_type', None)
        return role if role in cls.ROLES else None

    @classmethod
    def has_role(cls, user, role: str) -> bool:
        return cls.get_user_role(user) == role

    @classmethod
    def require_role(cls, role: str) -> Callable[[F], F]:
        """Decorator rejecting callers whose role is not ``role``."""

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(request, *args, **kwargs):
                user = cls.get_request_user(request)
                if not cls.has_role(user, role):
                    logger.warning(
                        f'Role check failed on {request.path}: '
                        f'required {role}, got {cls.get_user_role(user)}'
                    )
                    raise RoleDeniedError(role, cls.DENIED_MESSAGES[role])
                return func(request, *args, **kwargs)

            return wrapper  # type: ignore[return-value]

        return decorator


# Convenience decorators
require_admin = RolePermissions.require_role(RolePermissions.ROLE_ADMIN)
require_project_manager = RolePermissions.require_role(RolePermissions.ROLE_PROJECT_MANAGER)
require_team_member = RolePermissions.require_role(RolePermissions.ROLE_USER)
