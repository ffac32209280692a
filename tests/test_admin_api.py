"""
Integration tests for the admin data API.

Test coverage:
- Creating admins, project managers and team members
- Paginated listings per role
- Bulk update by email
- Bulk delete by email, cascading to projects, teams, tasks and logs
"""

import json

from django.test import Client, TestCase

from accounts.models import User
from project.models import AssignedProjectLog, Project, Team
from task.models import Task
from tests.fixtures.test_data import AccountFactory, ProjectFactory, auth_header, future_date


class AdminApiTestCase(TestCase):
    """Integration tests for /api/v1/admin-data endpoints."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = AccountFactory.create_admin()

    def setUp(self):
        self.client = Client()
        self.headers = auth_header(self.admin)

    def _send(self, method, url, payload):
        return getattr(self.client, method)(
            url,
            data=json.dumps(payload),
            content_type='application/json',
            **self.headers,
        )

    def _account_payload(self, email, **overrides):
        payload = {
            'email': email,
            'password': 'secret-pass',
            'first_name': 'Mary',
            'last_name': "O'Neil",
            'contact': '+1 555 123 4567',
        }
        payload.update(overrides)
        return payload

    def test_create_project_manager(self):
        response = self._send('post', '/api/v1/admin-data/project-managers', self._account_payload('pm@example.com'))

        self.assertEqual(response.status_code, 201)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertEqual(data['message'], 'ProjectManager created successfully!')
        self.assertEqual(data['user']['user_type'], User.TYPE_PROJECT_MANAGER)
        self.assertTrue(data['user']['user_id'].startswith('User-'))

        user = User.objects.get(email='pm@example.com')
        self.assertTrue(user.check_password('secret-pass'))

    def test_create_admin_gets_admin_prefix(self):
        response = self._send('post', '/api/v1/admin-data/admins', self._account_payload('second@example.com'))

        self.assertEqual(response.status_code, 201)
        data = json.loads(response.content)
        self.assertEqual(data['user']['user_id'], 'Admin-00002')
        self.assertTrue(User.objects.get(email='second@example.com').is_staff)

    def test_create_user_with_duplicate_email(self):
        AccountFactory.create_member(email='taken@example.com')

        response = self._send('post', '/api/v1/admin-data/users', self._account_payload('TAKEN@example.com'))

        self.assertEqual(response.status_code, 409)
        data = json.loads(response.content)
        self.assertFalse(data['success'])
        self.assertEqual(data['code'], 'DUPLICATE_RECORD')

    def test_create_user_with_invalid_fields(self):
        payload = self._account_payload('bad..dots@example.com', first_name='J0hn', password='short')

        response = self._send('post', '/api/v1/admin-data/users', payload)

        self.assertEqual(response.status_code, 400)
        data = json.loads(response.content)
        self.assertFalse(data['success'])
        self.assertEqual(len(data['errors']), 3)
        self.assertFalse(User.objects.filter(user_type=User.TYPE_USER).exists())

    def test_list_users_is_paginated_and_role_scoped(self):
        AccountFactory.create_project_manager()
        AccountFactory.create_members(3)

        response = self.client.get('/api/v1/admin-data/users?page=1&page_size=2', **self.headers)

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertEqual(data['count'], 3)
        self.assertEqual(len(data['items']), 2)
        self.assertTrue(all(item['user_type'] == User.TYPE_USER for item in data['items']))

    def test_bulk_update_users(self):
        AccountFactory.create_member(email='a@example.com')

        response = self._send(
            'put',
            '/api/v1/admin-data/users',
            {
                'updates': [
                    {'email': 'a@example.com', 'first_name': 'Anne', 'contact': '555-1234'},
                    {'email': 'ghost@example.com', 'first_name': 'Ghost'},
                ]
            },
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertEqual(data['users'][0]['first_name'], 'Anne')
        self.assertEqual(data['not_found'], ['ghost@example.com'])
        self.assertEqual(User.objects.get(email='a@example.com').contact, '555-1234')

    def test_bulk_update_does_not_cross_roles(self):
        AccountFactory.create_project_manager(email='pm@example.com')

        response = self._send(
            'put',
            '/api/v1/admin-data/users',
            {'updates': [{'email': 'pm@example.com', 'first_name': 'Changed'}]},
        )

        data = json.loads(response.content)
        self.assertFalse(data['success'])
        self.assertEqual(data['not_found'], ['pm@example.com'])
        self.assertNotEqual(User.objects.get(email='pm@example.com').first_name, 'Changed')

    def test_delete_project_manager_cascades(self):
        pm = AccountFactory.create_project_manager(email='pm@example.com')
        member = AccountFactory.create_member()
        project = ProjectFactory.create_project(pm)
        team = ProjectFactory.create_team(pm, members=[member])
        ProjectFactory.create_assignment(project, team)
        task = Task.objects.create(
            title='Draft',
            description='Draft the plan',
            project=project,
            team=team,
            deadline=future_date(),
        )
        task.assigned_to.set([member])

        response = self._send(
            'delete',
            '/api/v1/admin-data/project-managers',
            {'emails': ['pm@example.com', 'nobody@example.com']},
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertTrue(data['success'])
        self.assertEqual(data['deleted_count'], 1)
        self.assertEqual(data['not_found'], ['nobody@example.com'])
        self.assertEqual(
            data['cascade'],
            {'projects': 1, 'teams': 1, 'tasks': 1, 'assignment_logs': 1},
        )

        self.assertFalse(User.objects.filter(email='pm@example.com').exists())
        self.assertFalse(Project.objects.exists())
        self.assertFalse(Team.objects.exists())
        self.assertFalse(Task.objects.exists())
        self.assertFalse(AssignedProjectLog.objects.exists())
        self.assertTrue(User.objects.filter(pk=member.pk).exists())

    def test_delete_with_empty_list(self):
        response = self._send('delete', '/api/v1/admin-data/users', {'emails': []})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(json.loads(response.content)['success'])
