"""
Common Models - Shared model helpers across modules.
"""

import re

from django.db.models import QuerySet

from .config import IdentifierConfig

SUFFIX_PATTERN = re.compile(r'(\d+)$')


def next_business_id(queryset: QuerySet, field: str, prefix: str) -> str:
    """Return the next readable identifier for ``prefix``.

    Scans the existing identifiers sharing the prefix for the highest numeric
    suffix and increments it. Not safe under concurrent writers; the unique
    constraint on ``field`` rejects a racing duplicate.

    Example:
        >>> next_business_id(Project.objects.all(), 'project_id', 'Project')
        'Project-00001'
    """
    marker = f'{prefix}{IdentifierConfig.SEPARATOR}'
    existing = queryset.filter(**{f'{field}__startswith': marker}).values_list(field, flat=True)

    highest = 0
    for identifier in existing.iterator():
        match = SUFFIX_PATTERN.search(identifier or '')
        if match:
            highest = max(highest, int(match.group(1)))

    return f'{marker}{highest + 1:0{IdentifierConfig.PADDING}d}'


class BusinessIdMixin:
    """Assigns ``business_id_field`` on first save.

    Models set ``business_id_field`` and either ``business_id_prefix`` or
    override ``get_business_id_prefix`` when the prefix depends on the row.
    """

    business_id_field: str = ''
    business_id_prefix: str = ''

    def get_business_id_prefix(self) -> str:
        return self.business_id_prefix

    def save(self, *args, **kwargs):
        if not getattr(self, self.business_id_field):
            setattr(
                self,
                self.business_id_field,
                next_business_id(
                    type(self)._base_manager.all(),
                    self.business_id_field,
                    self.get_business_id_prefix(),
                ),
            )
        super().save(*args, **kwargs)
