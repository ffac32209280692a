"""
Test cases for role checks.

Roles are compared by name against the account resolved by JWT
authentication; a mismatch is rendered as 401.
"""

import json
from unittest.mock import Mock

from django.contrib.auth.models import AnonymousUser
from django.test import Client, RequestFactory, TestCase

from common.exceptions import RoleDeniedError
from common.permissions import RolePermissions, require_project_manager
from tests.fixtures.test_data import AccountFactory, auth_header


class RolePermissionsTests(TestCase):
    """Test RolePermissions helpers and decorator."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = AccountFactory.create_admin()
        cls.pm = AccountFactory.create_project_manager()
        cls.member = AccountFactory.create_member()

    def setUp(self):
        self.factory = RequestFactory()

    def test_get_user_role(self):
        """Test that the role is read from user_type."""
        self.assertEqual(RolePermissions.get_user_role(self.admin), 'Admin')
        self.assertEqual(RolePermissions.get_user_role(self.pm), 'ProjectManager')
        self.assertEqual(RolePermissions.get_user_role(self.member), 'User')
        self.assertIsNone(RolePermissions.get_user_role(AnonymousUser()))
        self.assertIsNone(RolePermissions.get_user_role(None))

    def test_decorator_allows_matching_role(self):
        """Test that the wrapped view runs for the required role."""
        view = Mock(return_value='ok')
        view.__name__ = 'view'
        request = self.factory.get('/api/v1/projects/')
        request.auth = self.pm

        self.assertEqual(require_project_manager(view)(request), 'ok')
        view.assert_called_once_with(request)

    def test_decorator_rejects_other_roles(self):
        """Test that other roles raise RoleDeniedError with a 401 status."""
        view = Mock(return_value='ok')
        view.__name__ = 'view'
        request = self.factory.get('/api/v1/projects/')
        request.auth = self.member

        with self.assertRaises(RoleDeniedError) as ctx:
            require_project_manager(view)(request)

        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(
            ctx.exception.message,
            'Unauthorized access. You are not a Project Manager.',
        )
        view.assert_not_called()


class RoleEnforcementApiTests(TestCase):
    """Test role enforcement through the API."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = AccountFactory.create_admin()
        cls.pm = AccountFactory.create_project_manager()
        cls.member = AccountFactory.create_member()

    def setUp(self):
        self.client = Client()

    def test_missing_token_is_unauthorized(self):
        """Test that requests without a bearer token get 401."""
        response = self.client.get('/api/v1/projects/')

        self.assertEqual(response.status_code, 401)
        data = json.loads(response.content)
        self.assertFalse(data['success'])
        self.assertEqual(data['message'], 'Unauthorized. No token provided.')

    def test_invalid_token_is_unauthorized(self):
        """Test that a malformed token gets 401."""
        response = self.client.get(
            '/api/v1/projects/',
            HTTP_AUTHORIZATION='Bearer not-a-token',
        )

        self.assertEqual(response.status_code, 401)
        self.assertFalse(json.loads(response.content)['success'])

    def test_project_endpoints_reject_admin(self):
        """Test that admins cannot use project manager endpoints."""
        response = self.client.get('/api/v1/projects/', **auth_header(self.admin))

        self.assertEqual(response.status_code, 401)
        data = json.loads(response.content)
        self.assertEqual(data['message'], 'Unauthorized access. You are not a Project Manager.')
        self.assertEqual(data['code'], 'ROLE_DENIED')

    def test_admin_endpoints_reject_project_manager(self):
        """Test that project managers cannot use admin endpoints."""
        response = self.client.get('/api/v1/admin-data/users', **auth_header(self.pm))

        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            json.loads(response.content)['message'],
            'Unauthorized access. You are not an Admin.',
        )

    def test_member_endpoints_reject_project_manager(self):
        """Test that the member task list is limited to team members."""
        response = self.client.get('/api/v1/tasks/mine', **auth_header(self.pm))

        self.assertEqual(response.status_code, 401)
