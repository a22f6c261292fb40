from django.core.management.base import BaseCommand

from borrowings.tasks import purge_expired_prebookings


class Command(BaseCommand):
    help = "Delete prebookings whose reservation window has passed"

    def add_arguments(self, parser):
        parser.add_argument(
            "--async",
            action="store_true",
            help="Queue the purge on Celery instead of running it here",
        )

    def handle(self, *args, **options):
        if options["async"]:
            task = purge_expired_prebookings.delay()
            self.stdout.write(self.style.SUCCESS(f"Task queued. Task ID: {task.id}"))
            return

        result = purge_expired_prebookings()

        if result["deleted"] == 0:
            self.stdout.write(self.style.SUCCESS("No expired prebookings found."))
        else:
            self.stdout.write(
                self.style.SUCCESS(f'Purged {result["deleted"]} expired prebooking(s).')
            )
