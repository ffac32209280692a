"""
Accounts module - Admins, project managers and team members.

This module provides:
- The custom user model with role-based business identifiers
- JWT login/refresh/logout/me endpoints
- Admin endpoints managing project managers and users
"""
