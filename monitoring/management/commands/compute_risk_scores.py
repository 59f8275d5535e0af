from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from monitoring.scoring import compute_and_record_risk_score

User = get_user_model()


class Command(BaseCommand):
    help = 'Recompute and record the risk score for one or all patients'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-email',
            type=str,
            help='Email of the patient to score (optional)',
        )
        parser.add_argument(
            '--all-patients',
            action='store_true',
            help='Score every patient',
        )

    def handle(self, *args, **options):
        if options['all_patients']:
            users = list(User.objects.patients())
            self.stdout.write(f"Scoring {len(users)} patients...")
        elif options['user_email']:
            try:
                users = [User.objects.get(email=options['user_email'])]
            except User.DoesNotExist:
                self.stdout.write(self.style.ERROR(f"User with email {options['user_email']} not found"))
                return
            self.stdout.write(f"Scoring patient: {options['user_email']}")
        else:
            # Default to first patient
            users = list(User.objects.patients().order_by('id')[:1])
            if not users:
                self.stdout.write(self.style.ERROR("No patients found in database"))
                return
            self.stdout.write(f"Scoring first patient: {users[0].email}")

        for user in users:
            result = compute_and_record_risk_score(user)
            style = {
                'green': self.style.SUCCESS,
                'amber': self.style.WARNING,
                'red': self.style.ERROR,
            }[result.status]
            self.stdout.write(style(f"  {user.email}: {result.score:.1f} ({result.status})"))
            for factor, value in result.as_dict()['breakdown'].items():
                self.stdout.write(f"    {factor}: {value}")

        self.stdout.write(self.style.SUCCESS("\nRisk scores recorded."))
