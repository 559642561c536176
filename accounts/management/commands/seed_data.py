"""
Reset the database to a small demo data set.
Usage: python manage.py seed_data
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from accounts.models import BLOOD_GROUPS
from donations.models import DonationRequest

User = get_user_model()

DONOR_COUNT = 10
REQUEST_COUNT = 15

DISTRICTS = ['Dhaka', 'Chittagong', 'Khulna', 'Rajshahi', 'Sylhet']
UPAZILAS = ['Mirpur', 'Uttara', 'Gulshan', 'Chandgaon', 'Kotwali', 'Khulna Sadar']
HOSPITALS = [
    'Dhaka Medical College Hospital',
    'Chittagong Medical College Hospital',
    'Khulna Medical College Hospital',
    'Rajshahi Medical College Hospital',
    'Sylhet MAG Osmani Medical College Hospital',
]
STATUSES = [
    DonationRequest.STATUS_PENDING,
    DonationRequest.STATUS_INPROGRESS,
    DonationRequest.STATUS_DONE,
    DonationRequest.STATUS_CANCELED,
]


class Command(BaseCommand):
    help = 'Clear users and donation requests, then create demo accounts and requests'

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-input',
            action='store_true',
            help='Do not ask for confirmation before deleting existing data',
        )

    def account(self, email, password, **fields):
        """Create the account, or reset it when a funding kept it alive."""
        user = User.objects.filter(email=email).first()
        if user is None:
            return User.objects.create_user(email=email, password=password, **fields)
        for field, value in fields.items():
            setattr(user, field, value)
        user.status = User.STATUS_ACTIVE
        user.set_password(password)
        user.save()
        return user

    def handle(self, *args, **options):
        if not options['no_input']:
            answer = input('This deletes ALL users and donation requests. Continue? [y/N] ')
            if answer.strip().lower() != 'y':
                self.stdout.write(self.style.WARNING('Aborted.'))
                return

        with transaction.atomic():
            DonationRequest.objects.all().delete()
            # Fundings protect their users; keep accounts that still own one
            User.objects.filter(fundings__isnull=True).delete()
            self.stdout.write('Cleared existing data')

            self.account(
                email='admin@example.com',
                password='admin123',
                name='Admin User',
                avatar='https://i.ibb.co/4j3qY7Q/admin-avatar.png',
                blood_group='O+',
                district='Dhaka',
                upazila='Mirpur',
                role=User.ROLE_ADMIN,
                is_staff=True,
                is_superuser=True,
            )
            self.account(
                email='volunteer@example.com',
                password='volunteer123',
                name='Volunteer User',
                avatar='https://i.ibb.co/4j3qY7Q/volunteer-avatar.png',
                blood_group='B+',
                district='Chittagong',
                upazila='Chandgaon',
                role=User.ROLE_VOLUNTEER,
            )

            donors = [
                self.account(
                    email=f'donor{i}@example.com',
                    password=f'donor{i}123',
                    name=f'Donor User {i}',
                    avatar=f'https://i.ibb.co/4j3qY7Q/donor{i}.png',
                    blood_group=BLOOD_GROUPS[i % len(BLOOD_GROUPS)],
                    district=DISTRICTS[i % len(DISTRICTS)],
                    upazila=UPAZILAS[i % len(UPAZILAS)],
                    role=User.ROLE_DONOR,
                )
                for i in range(1, DONOR_COUNT + 1)
            ]

            today = timezone.localdate()
            for i in range(REQUEST_COUNT):
                status = STATUSES[i % len(STATUSES)]
                # Only requests that were picked up have a donor
                donor = None
                if status in (DonationRequest.STATUS_INPROGRESS, DonationRequest.STATUS_DONE):
                    donor = donors[(i + 1) % len(donors)]

                DonationRequest.objects.create(
                    requester=donors[i % len(donors)],
                    recipient_name=f'Recipient {i + 1}',
                    recipient_district=DISTRICTS[i % len(DISTRICTS)],
                    recipient_upazila=UPAZILAS[i % len(UPAZILAS)],
                    hospital_name=HOSPITALS[i % len(HOSPITALS)],
                    full_address=(
                        f'Address line {i + 1}, {UPAZILAS[i % len(UPAZILAS)]}, '
                        f'{DISTRICTS[i % len(DISTRICTS)]}'
                    ),
                    blood_group=BLOOD_GROUPS[i % len(BLOOD_GROUPS)],
                    donation_date=today + timedelta(days=i),
                    donation_time=f'{10 + (i % 8)}:00 AM',
                    request_message=f'Urgent need of blood for patient {i + 1}. Please help if you can.',
                    status=status,
                    donor=donor,
                )

        self.stdout.write(self.style.SUCCESS('Database seeded successfully!'))
        self.stdout.write(f'Created {2 + len(donors)} users')
        self.stdout.write(f'Created {REQUEST_COUNT} donation requests')
        self.stdout.write('\nTest credentials:')
        self.stdout.write('Admin: admin@example.com / admin123')
        self.stdout.write('Volunteer: volunteer@example.com / volunteer123')
        self.stdout.write('Donor 1: donor1@example.com / donor1123')
        self.stdout.write('Donor 2: donor2@example.com / donor2123')
