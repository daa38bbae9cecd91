from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from api.fee_engine import generate_monthly_fees


class Command(BaseCommand):
    help = "Create (or refresh) this month's tuition fee record for every active student with a monthly fee"

    def add_arguments(self, parser):
        parser.add_argument('--recorded-by', required=True, help='Username recorded as the creator of the fee records')

    def handle(self, *args, **options):
        User = get_user_model()
        username = options['recorded_by']
        recorder = User.objects.filter(username=username).first()
        if recorder is None:
            raise CommandError(f'User "{username}" not found')

        self.stdout.write('Generating monthly tuition fees...')
        result = generate_monthly_fees(recorder)
        for failure in result['failed']:
            self.stdout.write(self.style.WARNING(f"  student {failure['student']}: {failure['error']}"))
        self.stdout.write(self.style.SUCCESS(
            f"Done! Processed {result['processed']} students, {len(result['failed'])} failed"
        ))
