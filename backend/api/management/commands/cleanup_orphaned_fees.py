from django.core.management.base import BaseCommand

from api.fee_engine import cleanup_orphaned_fees, orphaned_fees


class Command(BaseCommand):
    help = 'Delete fee records whose student no longer exists or is inactive'

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='Only report how many records would be removed')

    def handle(self, *args, **options):
        if options['dry_run']:
            count = orphaned_fees().count()
            self.stdout.write(f'{count} orphaned fee records would be removed')
            return
        deleted = cleanup_orphaned_fees()
        self.stdout.write(self.style.SUCCESS(f'Removed {len(deleted)} orphaned fee records'))
