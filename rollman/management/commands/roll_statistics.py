"""
Management command to print roll statistics for a period.

Usage:
    python manage.py roll_statistics --start 2026-01-01T00:00 --end 2026-02-08T23:59
    python manage.py roll_statistics --start 2026-01-01T00:00 --end 2026-02-08T23:59 --json
    python manage.py roll_statistics --start 2026-01-01T00:00 --end 2026-01-07T00:00 --daily
"""

import json

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime

from rollman import rolls
from rollman.exceptions import RollError


def _parse_moment(value: str, option: str):
    try:
        moment = parse_datetime(value)
    except ValueError:
        moment = None
    if moment is None:
        raise CommandError(f'{option}: expected an ISO date-time, got {value!r}')
    return moment


class Command(BaseCommand):
    """Roll statistics command."""

    help = 'Prints statistics for rolls on stock during a period'

    def add_arguments(self, parser):
        parser.add_argument('--start', required=True, help='Period start (ISO date-time)')
        parser.add_argument('--end', required=True, help='Period end (ISO date-time)')
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the report as JSON'
        )
        parser.add_argument(
            '--daily',
            action='store_true',
            help='Also print count and weight for every day of the period'
        )

    def handle(self, *args, **options):
        start = _parse_moment(options['start'], '--start')
        end = _parse_moment(options['end'], '--end')

        try:
            if options['daily']:
                report, snapshots = rolls.statistics_with_daily(start, end)
            else:
                report, snapshots = rolls.statistics(start, end), []
        except RollError as e:
            raise CommandError(e.message) from e

        if options['json']:
            data = report.as_dict()
            if options['daily']:
                data['daily'] = [
                    {'day': s.day.isoformat(), 'count': s.count, 'weight': str(s.weight)}
                    for s in snapshots
                ]
            self.stdout.write(json.dumps(data, indent=2))
            return

        for key, value in report.as_dict().items():
            self.stdout.write(f'{key}: {"-" if value is None else value}')
        for s in snapshots:
            self.stdout.write(f'{s.day.isoformat()}  {s.count}  {s.weight}')
