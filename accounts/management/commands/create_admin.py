import getpass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from accounts.models import BLOOD_GROUPS

User = get_user_model()


class Command(BaseCommand):
    help = 'Create an admin account, gated by SUPERUSER_SECRET_KEY'

    def prompt(self, label, choices=None):
        while True:
            value = input(f'{label}: ').strip()
            if value and (choices is None or value in choices):
                return value
            if choices:
                self.stdout.write(self.style.ERROR(f'Choose one of: {", ".join(choices)}'))

    def handle(self, *args, **options):
        expected_secret = getattr(settings, 'SUPERUSER_SECRET_KEY', None)
        if not expected_secret:
            self.stdout.write(self.style.ERROR('SUPERUSER_SECRET_KEY is not set. Cannot create admin.'))
            return

        # Ask for secret key
        secret = getpass.getpass('Enter SUPERUSER SECRET KEY: ')
        if secret != expected_secret:
            self.stdout.write(self.style.ERROR('Invalid secret key. Cannot create admin.'))
            return

        email = self.prompt('Email').lower()
        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.ERROR('User with this email already exists.'))
            return

        name = self.prompt('Name')
        blood_group = self.prompt('Blood group', choices=BLOOD_GROUPS)
        district = self.prompt('District')
        upazila = self.prompt('Upazila')
        password = getpass.getpass('Password: ')
        if len(password) < 6:
            self.stdout.write(self.style.ERROR('Password must be at least 6 characters.'))
            return

        user = User.objects.create_superuser(
            email=email,
            password=password,
            name=name,
            blood_group=blood_group,
            district=district,
            upazila=upazila,
        )

        self.stdout.write(self.style.SUCCESS(f'Admin {user.email} created successfully!'))
