"""
Automated tests for Django Ninja pagination implementation.

Tests verify:
1. Pagination response structure (success, items, count)
2. Default pagination behavior (page=1, page_size=20)
3. Custom page and page_size handling
4. Out-of-range page sizes falling back to the default
"""

import json

from django.test import Client, TestCase

from common.pagination import PagePagination
from tests.fixtures.test_data import AccountFactory, ProjectFactory, auth_header


class PagePaginationNormalizeTests(TestCase):
    """Test page/page_size normalization."""

    def test_defaults_pass_through(self):
        self.assertEqual(PagePagination.normalize(1, 20), (1, 20))

    def test_page_below_one_is_first_page(self):
        self.assertEqual(PagePagination.normalize(0, 20), (1, 20))
        self.assertEqual(PagePagination.normalize(-3, 20), (1, 20))

    def test_out_of_range_page_size_falls_back(self):
        self.assertEqual(PagePagination.normalize(2, 0), (2, 20))
        self.assertEqual(PagePagination.normalize(2, 101), (2, 20))
        self.assertEqual(PagePagination.normalize(2, 100), (2, 100))


class PaginationStructureTestCase(TestCase):
    """Test pagination response structure and format."""

    @classmethod
    def setUpTestData(cls):
        """Create test data."""
        cls.pm = AccountFactory.create_project_manager()
        for i in range(25):
            ProjectFactory.create_project(cls.pm, title=f'Project {i:02d}')

    def setUp(self):
        """Set up client for testing."""
        self.client = Client()
        self.endpoint = '/api/v1/projects/?sort=title'
        self.headers = auth_header(self.pm)

    def _get(self, query=''):
        response = self.client.get(f'{self.endpoint}{query}', **self.headers)
        self.assertEqual(response.status_code, 200)
        return json.loads(response.content)

    def test_response_has_required_fields(self):
        """Test response contains success, items and count."""
        data = self._get()

        self.assertTrue(data['success'])
        self.assertIsInstance(data['items'], list)
        self.assertEqual(data['count'], 25)

    def test_default_page_size(self):
        self.assertEqual(len(self._get()['items']), 20)

    def test_second_page(self):
        data = self._get('&page=2&page_size=10')

        self.assertEqual([item['title'] for item in data['items']][0], 'Project 10')
        self.assertEqual(len(data['items']), 10)

    def test_page_past_the_end_is_empty(self):
        data = self._get('&page=9')

        self.assertEqual(data['items'], [])
        self.assertEqual(data['count'], 25)

    def test_invalid_page_size_uses_default(self):
        self.assertEqual(len(self._get('&page_size=500')['items']), 20)
