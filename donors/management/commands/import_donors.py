# donors/management/commands/import_donors.py
"""
Import donor accounts from a spreadsheet.
Usage: python manage.py import_donors path/to/donors.xlsx
       python manage.py import_donors path/to/donors.csv --password Secret123
"""
from pathlib import Path

import pandas as pd
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import BLOOD_GROUPS

User = get_user_model()

DEFAULT_PASSWORD = 'ChangeMe123!'
REQUIRED_COLUMNS = ['name', 'email', 'blood_group', 'district', 'upazila']


class Command(BaseCommand):
    help = 'Import donors from an Excel or CSV file'

    def add_arguments(self, parser):
        parser.add_argument('file', type=str, help='Path to the .xlsx/.xls/.csv file')
        parser.add_argument(
            '--password',
            default=DEFAULT_PASSWORD,
            help='Initial password for newly created accounts',
        )

    def read_frame(self, path):
        if path.suffix.lower() == '.csv':
            return pd.read_csv(path)
        return pd.read_excel(path)

    def handle(self, *args, **options):
        path = Path(options['file'])
        if not path.exists():
            raise CommandError(f'File not found: {path}')

        self.stdout.write(self.style.WARNING(f'Starting import from {path}...'))

        df = self.read_frame(path)
        df.columns = [str(c).strip().lower().replace(' ', '_') for c in df.columns]
        # Accept the web client's camelCase header as well
        df = df.rename(columns={'bloodgroup': 'blood_group'})

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CommandError(f'Missing column(s): {", ".join(missing)}')

        self.stdout.write(f'Found {len(df)} rows')
        df = df.dropna(subset=['email'])

        created_count = 0
        updated_count = 0
        skipped_count = 0

        with transaction.atomic():
            for index, row in df.iterrows():
                line = index + 2  # header row + 1-based
                email = str(row['email']).strip().lower()
                blood_group = str(row['blood_group']).strip().upper()

                if blood_group not in BLOOD_GROUPS:
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: invalid blood group {blood_group}'))
                    skipped_count += 1
                    continue

                if any(pd.isna(row[c]) for c in ('name', 'district', 'upazila')):
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: name, district and upazila are required'))
                    skipped_count += 1
                    continue

                fields = {
                    'name': str(row['name']).strip(),
                    'blood_group': blood_group,
                    'district': str(row['district']).strip(),
                    'upazila': str(row['upazila']).strip(),
                }
                if 'avatar' in df.columns and pd.notna(row['avatar']):
                    fields['avatar'] = str(row['avatar']).strip()

                user = User.objects.filter(email=email).first()
                if user:
                    for field, value in fields.items():
                        setattr(user, field, value)
                    user.save()
                    updated_count += 1
                    self.stdout.write(f'Updated: {user.name} ({user.blood_group})')
                else:
                    user = User.objects.create_user(
                        email=email,
                        password=options['password'],
                        role=User.ROLE_DONOR,
                        **fields
                    )
                    created_count += 1
                    self.stdout.write(f'Created: {user.name} ({user.blood_group}) - {user.email}')

        self.stdout.write(
            self.style.SUCCESS(
                f'\nImport complete!\n'
                f'Created: {created_count}\n'
                f'Updated: {updated_count}\n'
                f'Skipped: {skipped_count}'
            )
        )
        if created_count and options['password'] == DEFAULT_PASSWORD:
            self.stdout.write(
                self.style.WARNING(
                    f'Default password is "{DEFAULT_PASSWORD}" for new accounts. '
                    f'Donors should change it on first login.'
                )
            )
