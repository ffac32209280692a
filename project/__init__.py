"""
Project module - Projects, teams and project assignment.

This module provides:
- Project and Team records owned by project managers
- Assignment of projects to teams (AssignedProjectLog)
- Project and team endpoints for project managers
"""
