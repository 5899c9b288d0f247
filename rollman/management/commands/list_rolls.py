"""
Management command to list rolls matching a filter.

Usage:
    python manage.py list_rolls
    python manage.py list_rolls --weight-min 100 --weight-max 250
    python manage.py list_rolls --delete-date-min 2026-01-01T00:00
"""

from django.core.management.base import BaseCommand, CommandError

from rollman import rolls
from rollman.conf import reporting_timezone
from rollman.exceptions import RollError
from rollman.filters import RollFilter

BOUND_OPTIONS = [
    'id_min', 'id_max',
    'length_min', 'length_max',
    'weight_min', 'weight_max',
    'add_date_min', 'add_date_max',
    'delete_date_min', 'delete_date_max',
]


class Command(BaseCommand):
    """List rolls command."""

    help = 'Lists rolls matching optional min/max bounds'

    def add_arguments(self, parser):
        for name in BOUND_OPTIONS:
            parser.add_argument('--' + name.replace('_', '-'), dest=name)

    def handle(self, *args, **options):
        params = {name: options.get(name) for name in BOUND_OPTIONS}

        try:
            roll_filter = RollFilter.from_params(params, tz=reporting_timezone())
            found = list(rolls.list_rolls(roll_filter))
        except RollError as e:
            details = '; '.join(f'{k}: {v}' for k, v in e.data.get('errors', {}).items())
            raise CommandError(f'{e.message}: {details}' if details else e.message) from e

        for roll in found:
            deleted = roll.deleted_at.isoformat() if roll.deleted_at else '-'
            self.stdout.write(
                f'{roll.pk}\t{roll.length}\t{roll.weight}\t{roll.added_at.isoformat()}\t{deleted}'
            )
        self.stdout.write(self.style.SUCCESS(f'{len(found)} roll(s)'))
