from __future__ import annotations

from django.test import TestCase

from common.exceptions import DuplicateRecordError, RecordNotFoundError, ValidationFailedError
from project.models import AssignedProjectLog, Project, Team
from project.service import ProjectService, TeamService
from task.models import Task
from tests.fixtures.test_data import AccountFactory, ProjectFactory, future_date


class ProjectServiceTestCase(TestCase):
    """Unit tests: ProjectService"""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager(email='pm@example.com')
        cls.other_pm = AccountFactory.create_project_manager(email='other@example.com')
        cls.member = AccountFactory.create_member()

    def test_create_project_defaults_to_pending(self):
        project = ProjectService.create_project(self.pm, title='  Launch  ')

        self.assertEqual(project.title, 'Launch')
        self.assertEqual(project.status, Project.STATUS_PENDING)
        self.assertEqual(project.manager_id, self.pm.user_id)

    def test_get_project_is_scoped_to_manager(self):
        project = ProjectFactory.create_project(self.other_pm)

        with self.assertRaises(RecordNotFoundError):
            ProjectService.get_project(self.pm, project.project_id)

    def test_unknown_sort_falls_back_to_default(self):
        queryset = ProjectService.get_projects_queryset(self.pm, sort='manager__password')

        self.assertEqual(queryset.query.order_by, (ProjectService.DEFAULT_SORT,))

    def test_update_project_ignores_missing_fields(self):
        project = ProjectFactory.create_project(self.pm, description='Keep me')

        ProjectService.update_project(self.pm, project.project_id, title='New title', description=None)

        project.refresh_from_db()
        self.assertEqual(project.title, 'New title')
        self.assertEqual(project.description, 'Keep me')

    def test_delete_projects_cascades_to_tasks_and_logs(self):
        project = ProjectFactory.create_project(self.pm)
        team = ProjectFactory.create_team(self.pm, members=[self.member])
        ProjectFactory.create_assignment(project, team)
        Task.objects.create(
            title='Draft',
            description='Draft the plan',
            project=project,
            team=team,
            deadline=future_date(),
        )

        result = ProjectService.delete_projects(self.pm, [project.project_id, project.project_id])

        self.assertEqual(result, {'deleted_count': 1, 'not_found': []})
        self.assertFalse(Task.objects.exists())
        self.assertFalse(AssignedProjectLog.objects.exists())
        self.assertTrue(Team.objects.filter(pk=team.pk).exists())

    def test_delete_projects_requires_ids(self):
        with self.assertRaises(ValidationFailedError):
            ProjectService.delete_projects(self.pm, ['  '])

    def test_assignment_deadline_defaults_to_project_deadline(self):
        project = ProjectFactory.create_project(self.pm)
        team = ProjectFactory.create_team(self.pm)

        log = ProjectService.assign_project_to_team(self.pm, project.project_id, team.team_id)

        self.assertEqual(log.deadline, project.deadline)
        self.assertEqual(log.tasks_ids, [])

    def test_assignment_is_unique_per_team(self):
        project = ProjectFactory.create_project(self.pm)
        team = ProjectFactory.create_team(self.pm)
        ProjectService.assign_project_to_team(self.pm, project.project_id, team.team_id)

        with self.assertRaises(DuplicateRecordError):
            ProjectService.assign_project_to_team(self.pm, project.project_id, team.team_id)


class TeamServiceTestCase(TestCase):
    """Unit tests: TeamService"""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager(email='pm@example.com')
        cls.alice, cls.bob = AccountFactory.create_members(2)

    def test_resolve_members_reports_every_unknown_id(self):
        with self.assertRaises(ValidationFailedError) as ctx:
            TeamService.resolve_members([self.alice.user_id, 'User-09998', 'User-09999'])

        self.assertEqual(ctx.exception.message, 'Unknown team members: User-09998, User-09999')

    def test_create_team_sets_members_and_leader(self):
        team = TeamService.create_team(
            self.pm,
            team_name='Backend',
            members=[self.alice.user_id, self.bob.user_id, self.alice.user_id],
            team_leader=self.bob.user_id,
        )

        self.assertEqual(team.members.count(), 2)
        self.assertEqual(team.team_leader_id, self.bob.user_id)

    def test_delete_team_removes_its_tasks(self):
        project = ProjectFactory.create_project(self.pm)
        team = ProjectFactory.create_team(self.pm, members=[self.alice])
        Task.objects.create(
            title='Draft',
            description='Draft the plan',
            project=project,
            team=team,
            deadline=future_date(),
        )

        TeamService.delete_teams(self.pm, [team.team_id])

        self.assertFalse(Task.objects.exists())
        self.assertTrue(Project.objects.filter(pk=project.pk).exists())
