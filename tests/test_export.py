"""
Tests for task export functionality.

Tests CSV and Excel export through the service and the download endpoint.
"""

from io import BytesIO

import pandas as pd
from django.test import TestCase
from django.test.client import Client

from common.export_service import ExportConfig, TaskExportService
from task.models import Task
from tests.fixtures.test_data import AccountFactory, ProjectFactory, auth_header


class TaskExportServiceTests(TestCase):
    """Test export service methods."""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager()
        cls.alice, cls.bob = AccountFactory.create_members(2)
        cls.project = ProjectFactory.create_project(cls.pm)
        cls.team = ProjectFactory.create_team(cls.pm, members=[cls.alice, cls.bob])

        cls.first = Task.objects.create(
            title='Draft API',
            description='Write the first API draft',
            project=cls.project,
            team=cls.team,
            deadline='2030-03-01',
        )
        cls.first.assigned_to.set([cls.alice, cls.bob])
        cls.second = Task.objects.create(
            title='Review API',
            description='Review the draft',
            project=cls.project,
            team=cls.team,
            deadline='2030-03-15',
            status=Task.STATUS_COMPLETED,
        )
        cls.second.assigned_to.set([cls.bob])

    def test_prepare_export_data(self):
        """Test row preparation for export."""
        export_data = TaskExportService.prepare_export_data(Task.objects.order_by('task_id'))

        self.assertEqual(len(export_data), 2)
        self.assertEqual(export_data[0]['task_id'], self.first.task_id)
        self.assertEqual(
            export_data[0]['assigned_to'],
            f'{self.alice.user_id};{self.bob.user_id}',
        )
        self.assertEqual(export_data[0]['deadline'], '2030-03-01')
        self.assertEqual(export_data[1]['status'], Task.STATUS_COMPLETED)

    def test_export_to_csv(self):
        """Test CSV export keeps the column order."""
        content = TaskExportService.export_to_csv(Task.objects.order_by('task_id'))

        self.assertTrue(content.startswith(b'\xef\xbb\xbf'))
        df = pd.read_csv(BytesIO(content), encoding=ExportConfig.CSV_ENCODING)
        self.assertEqual(list(df.columns), ExportConfig.COLUMNS)
        self.assertEqual(list(df['title']), ['Draft API', 'Review API'])

    def test_export_to_excel(self):
        """Test XLSX export is readable with the same columns."""
        content = TaskExportService.export_to_excel(Task.objects.order_by('task_id'))

        df = pd.read_excel(BytesIO(content), sheet_name=ExportConfig.SHEET_NAME)
        self.assertEqual(list(df.columns), ExportConfig.COLUMNS)
        self.assertEqual(len(df), 2)

    def test_empty_export_has_headers(self):
        """Test exporting no tasks yields only the header row."""
        content = TaskExportService.export_to_csv(Task.objects.none())

        df = pd.read_csv(BytesIO(content), encoding=ExportConfig.CSV_ENCODING)
        self.assertEqual(list(df.columns), ExportConfig.COLUMNS)
        self.assertTrue(df.empty)

    def test_filename_and_content_type(self):
        filename = TaskExportService.generate_export_filename('Project-00001', 'xlsx')

        self.assertTrue(filename.startswith('Project-00001_tasks_'))
        self.assertTrue(filename.endswith('.xlsx'))
        self.assertEqual(TaskExportService.get_content_type('csv'), 'text/csv; charset=utf-8')


class TaskExportApiTests(TestCase):
    """Test the export download endpoint."""

    @classmethod
    def setUpTestData(cls):
        cls.pm = AccountFactory.create_project_manager()
        cls.member = AccountFactory.create_member()
        cls.project = ProjectFactory.create_project(cls.pm)
        team = ProjectFactory.create_team(cls.pm, members=[cls.member])
        task = Task.objects.create(
            title='Draft API',
            description='Write the first API draft',
            project=cls.project,
            team=team,
            deadline='2030-03-01',
        )
        task.assigned_to.set([cls.member])

    def setUp(self):
        self.client = Client()
        self.url = f'/api/v1/tasks/project/{self.project.project_id}/export'

    def test_csv_download(self):
        response = self.client.get(self.url, **auth_header(self.pm))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        self.assertIn('attachment; filename="Project-00001_tasks_', response['Content-Disposition'])
        self.assertIn(b'Draft API', response.content)

    def test_xlsx_download(self):
        response = self.client.get(f'{self.url}?format=xlsx', **auth_header(self.pm))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )
        df = pd.read_excel(BytesIO(response.content))
        self.assertEqual(df.loc[0, 'assigned_to'], self.member.user_id)

    def test_unknown_format_falls_back_to_csv(self):
        response = self.client.get(f'{self.url}?format=pdf', **auth_header(self.pm))

        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')

    def test_export_requires_project_manager(self):
        response = self.client.get(self.url, **auth_header(self.member))

        self.assertEqual(response.status_code, 401)
