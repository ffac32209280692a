"""
Task module - Task assignment and tracking.

This module provides:
- The Task model
- The assignment workflow (team or single user) with the assignment log
- Task endpoints for project managers and team members
- Spreadsheet export of a project's tasks
"""
