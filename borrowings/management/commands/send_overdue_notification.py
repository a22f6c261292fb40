from django.core.management.base import BaseCommand

from notifications.tasks import send_overdue_notification


class Command(BaseCommand):
    help = "Send the overdue notice for a single loan"

    def add_arguments(self, parser):
        parser.add_argument("loan_id", type=int, help="ID of the loan to notify about")
        parser.add_argument(
            "--async",
            action="store_true",
            help="Run the task asynchronously using Celery",
        )

    def handle(self, *args, **options):
        loan_id = options["loan_id"]

        self.stdout.write(f"Sending overdue notice for loan ID: {loan_id}")

        if options["async"]:
            task = send_overdue_notification.delay(loan_id)
            self.stdout.write(self.style.SUCCESS(f"Task queued. Task ID: {task.id}"))
            return

        result = send_overdue_notification(loan_id)

        if result["status"] == "success":
            self.stdout.write(self.style.SUCCESS(f'Notice sent, current fine Nrs. {result["fine"]}'))
        elif result["status"] == "skipped":
            self.stdout.write(self.style.WARNING(f'Skipped: {result["reason"]}'))
        else:
            self.stdout.write(self.style.ERROR(f'Error: {result["message"]}'))
