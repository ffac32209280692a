from __future__ import annotations

import json

from django.test import Client, TestCase

from task.models import Task
from tests.fixtures.test_data import AccountFactory, ProjectFactory, auth_header, future_date, past_date


def create_task(project, team, assignees, title='Draft API', **overrides):
    defaults = {
        'description': 'Write the first API draft',
        'deadline': future_date(),
    }
    defaults.update(overrides)
    task = Task.objects.create(project=project, team=team, title=title, **defaults)
    task.assigned_to.set(assignees)
    return task


class ProjectManagerTaskApiTests(TestCase):
    """Integration tests: task endpoints for project managers"""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager(email='pm@example.com')
        cls.other_pm = AccountFactory.create_project_manager(email='other@example.com')
        cls.alice, cls.bob = AccountFactory.create_members(2)

    def setUp(self):
        self.client = Client()
        self.headers = auth_header(self.pm)
        self.project = ProjectFactory.create_project(self.pm)
        self.team = ProjectFactory.create_team(self.pm, members=[self.alice, self.bob])
        self.first = create_task(self.project, self.team, [self.alice])
        self.second = create_task(self.project, self.team, [self.bob], title='Review API')
        self.log = ProjectFactory.create_assignment(
            self.project,
            self.team,
            tasks_ids=[self.first.task_id, self.second.task_id],
        )

    def _send(self, method, url, payload):
        return getattr(self.client, method)(
            url,
            data=json.dumps(payload),
            content_type='application/json',
            **self.headers,
        )

    def test_list_project_tasks(self):
        response = self.client.get(f'/api/v1/tasks/project/{self.project.project_id}', **self.headers)

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertEqual(data['count'], 2)
        self.assertEqual(
            [item['task_id'] for item in data['items']],
            [self.first.task_id, self.second.task_id],
        )
        self.assertEqual(data['items'][0]['assigned_to'], [self.alice.user_id])

    def test_list_tasks_of_foreign_project(self):
        foreign = ProjectFactory.create_project(self.other_pm)

        response = self.client.get(f'/api/v1/tasks/project/{foreign.project_id}', **self.headers)

        self.assertEqual(response.status_code, 404)

    def test_update_task(self):
        response = self._send(
            'put',
            f'/api/v1/tasks/{self.first.task_id}',
            {'title': 'Final API', 'status': Task.STATUS_IN_PROGRESS},
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertEqual(data['task']['title'], 'Final API')
        self.first.refresh_from_db()
        self.assertEqual(self.first.status, Task.STATUS_IN_PROGRESS)

    def test_update_task_validates_lengths(self):
        response = self._send('put', f'/api/v1/tasks/{self.first.task_id}', {'title': 'ab'})

        self.assertEqual(response.status_code, 400)

    def test_update_task_rejects_past_deadline(self):
        """Test that an edited deadline follows the same rules as a new task."""
        original_deadline = Task.objects.get(pk=self.first.pk).deadline

        response = self._send('put', f'/api/v1/tasks/{self.first.task_id}', {'deadline': past_date()})

        self.assertEqual(response.status_code, 400)
        self.assertIn('Deadline cannot be in the past', json.loads(response.content)['message'])
        self.first.refresh_from_db()
        self.assertEqual(self.first.deadline, original_deadline)

    def test_update_task_rejects_invalid_deadline(self):
        response = self._send('put', f'/api/v1/tasks/{self.first.task_id}', {'deadline': 'soon'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('Deadline must be a valid date', json.loads(response.content)['message'])

    def test_update_foreign_task_is_not_found(self):
        self.headers = auth_header(self.other_pm)

        response = self._send('put', f'/api/v1/tasks/{self.first.task_id}', {'title': 'Hijacked'})

        self.assertEqual(response.status_code, 404)

    def test_delete_tasks_prunes_assignment_log(self):
        response = self._send(
            'delete',
            '/api/v1/tasks/',
            {'task_ids': [self.first.task_id, 'Task-09999']},
        )

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertEqual(data['deleted_count'], 1)
        self.assertEqual(data['not_found'], ['Task-09999'])
        self.assertFalse(Task.objects.filter(pk=self.first.pk).exists())

        self.log.refresh_from_db()
        self.assertEqual(self.log.tasks_ids, [self.second.task_id])


class TeamMemberTaskApiTests(TestCase):
    """Integration tests: task endpoints for team members"""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager(email='pm@example.com')
        cls.alice, cls.bob = AccountFactory.create_members(2)

    def setUp(self):
        self.client = Client()
        self.project = ProjectFactory.create_project(self.pm)
        self.team = ProjectFactory.create_team(self.pm, members=[self.alice, self.bob])
        self.shared = create_task(self.project, self.team, [self.alice, self.bob])
        self.own = create_task(self.project, self.team, [self.bob], title='Bob only')

    def test_mine_lists_only_assigned_tasks(self):
        response = self.client.get('/api/v1/tasks/mine', **auth_header(self.alice))

        self.assertEqual(response.status_code, 200)
        data = json.loads(response.content)
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['items'][0]['task_id'], self.shared.task_id)

    def test_mine_filters_by_status(self):
        self.own.status = Task.STATUS_COMPLETED
        self.own.save()

        response = self.client.get(
            f'/api/v1/tasks/mine?status={Task.STATUS_COMPLETED}',
            **auth_header(self.bob),
        )

        data = json.loads(response.content)
        self.assertEqual([item['task_id'] for item in data['items']], [self.own.task_id])

    def test_update_status_of_assigned_task(self):
        response = self.client.patch(
            f'/api/v1/tasks/{self.shared.task_id}/status',
            data=json.dumps({'status': Task.STATUS_COMPLETED}),
            content_type='application/json',
            **auth_header(self.alice),
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.content)['task']['status'], Task.STATUS_COMPLETED)
        self.shared.refresh_from_db()
        self.assertEqual(self.shared.status, Task.STATUS_COMPLETED)

    def test_update_status_of_unassigned_task(self):
        response = self.client.patch(
            f'/api/v1/tasks/{self.own.task_id}/status',
            data=json.dumps({'status': Task.STATUS_COMPLETED}),
            content_type='application/json',
            **auth_header(self.alice),
        )

        self.assertEqual(response.status_code, 404)
        self.own.refresh_from_db()
        self.assertEqual(self.own.status, Task.STATUS_PENDING)

    def test_update_status_rejects_unknown_value(self):
        response = self.client.patch(
            f'/api/v1/tasks/{self.shared.task_id}/status',
            data=json.dumps({'status': 'Done'}),
            content_type='application/json',
            **auth_header(self.alice),
        )

        self.assertEqual(response.status_code, 400)
