"""Shared fixtures for the API tests.

Users are created through the model manager; API clients authenticate
with ``force_authenticate`` so tests do not depend on token plumbing
(login and token issuance have their own tests).
"""
from datetime import date, timedelta
from itertools import count

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from donations.models import DonationRequest

_seq = count(1)


@pytest.fixture
def make_user(db):
    """Factory for users; every call gets a fresh email."""

    def _make_user(role=User.ROLE_DONOR, status=User.STATUS_ACTIVE, password='secret123', **fields):
        n = next(_seq)
        defaults = {
            'email': f'user{n}@example.com',
            'name': f'User {n}',
            'blood_group': 'O+',
            'district': 'Dhaka',
            'upazila': 'Mirpur',
        }
        defaults.update(fields)
        email = defaults.pop('email')
        return User.objects.create_user(email=email, password=password, role=role, status=status, **defaults)

    return _make_user


@pytest.fixture
def donor(make_user):
    return make_user(name='Donor One')


@pytest.fixture
def other_donor(make_user):
    return make_user(name='Donor Two', blood_group='A+')


@pytest.fixture
def volunteer(make_user):
    return make_user(role=User.ROLE_VOLUNTEER, name='Volunteer')


@pytest.fixture
def admin_user(make_user):
    return make_user(role=User.ROLE_ADMIN, name='Admin')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """Build an APIClient authenticated as ``user``."""

    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client_for


@pytest.fixture
def request_payload():
    return {
        'recipientName': 'Rahim Uddin',
        'recipientDistrict': 'Dhaka',
        'recipientUpazila': 'Dhanmondi',
        'hospitalName': 'Dhaka Medical College Hospital',
        'fullAddress': 'Ward 5, Bakshibazar, Dhaka',
        'bloodGroup': 'O+',
        'donationDate': (date.today() + timedelta(days=3)).isoformat(),
        'donationTime': '10:30 AM',
        'requestMessage': 'Patient needs two bags after surgery.',
    }


@pytest.fixture
def make_request(db):
    """Factory for donation requests written straight to the database."""

    def _make_request(requester, status=DonationRequest.STATUS_PENDING, donor=None, **fields):
        values = {
            'recipient_name': 'Karim',
            'recipient_district': 'Dhaka',
            'recipient_upazila': 'Uttara',
            'hospital_name': 'Square Hospital',
            'full_address': 'Panthapath, Dhaka',
            'blood_group': 'B+',
            'donation_date': date.today() + timedelta(days=1),
            'donation_time': '9:00 AM',
            'request_message': 'Needed before the operation tomorrow.',
        }
        values.update(fields)
        return DonationRequest.objects.create(requester=requester, status=status, donor=donor, **values)

    return _make_request
