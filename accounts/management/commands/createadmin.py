"""
Management command to bootstrap an Admin account.

Admins create every other account through the API, so the first one has to
come from the command line.

Usage:
    python manage.py createadmin --email admin@example.com --password secret123 \
        --first-name Ada --last-name Lovelace
"""

import logging

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from accounts.models import User
from accounts.schemas import AccountCreateRequest
from accounts.services import AccountService
from common.exceptions import ServiceError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create an Admin account'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True, help='Login email of the admin')
        parser.add_argument('--password', required=True, help='Password (at least 8 characters)')
        parser.add_argument('--first-name', required=True)
        parser.add_argument('--last-name', required=True)
        parser.add_argument('--contact', default='')
        parser.add_argument(
            '--superuser',
            action='store_true',
            help='Also grant Django admin site superuser rights',
        )

    def handle(self, *args, **options):
        try:
            payload = AccountCreateRequest(
                email=options['email'],
                password=options['password'],
                first_name=options['first_name'],
                last_name=options['last_name'],
                contact=options['contact'],
            )
        except ValidationError as exc:
            messages = ', '.join(error['msg'] for error in exc.errors())
            raise CommandError(f'Invalid admin details: {messages}') from exc

        try:
            user = AccountService.create_account(User.TYPE_ADMIN, **payload.model_dump())
        except ServiceError as exc:
            raise CommandError(exc.message) from exc

        if options['superuser']:
            user.is_superuser = True
            user.save(update_fields=['is_superuser'])

        logger.info(f'Admin {user.user_id} created from command line')
        self.stdout.write(self.style.SUCCESS(f'Created admin {user.user_id} ({user.email})'))
