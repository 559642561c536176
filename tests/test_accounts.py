import pytest
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from fundings.models import Funding

pytestmark = pytest.mark.django_db


@pytest.fixture
def registration():
    return {
        'name': 'Nusrat Jahan',
        'email': 'Nusrat@Example.com',
        'password': 'secret123',
        'confirmPassword': 'secret123',
        'bloodGroup': 'AB+',
        'district': 'Sylhet',
        'upazila': 'Jalalabad',
    }


class TestAuth:

    def test_register_creates_active_donor_and_returns_token(self, api_client, registration):
        response = api_client.post('/api/auth/register', registration, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['user']['email'] == 'nusrat@example.com'
        assert body['user']['role'] == 'donor'
        assert body['user']['status'] == 'active'
        assert 'password' not in body['user']

        token = AccessToken(body['token'])
        assert token['role'] == 'donor'
        # simplejwt writes the user id claim as a string from 5.4 on
        assert str(token['userId']) == str(body['user']['id'])

    def test_register_rejects_duplicate_email(self, api_client, registration, make_user):
        make_user(email='nusrat@example.com')

        response = api_client.post('/api/auth/register', registration, format='json')

        assert response.status_code == 400
        assert response.json()['message'] == 'User already exists with this email'

    def test_register_rejects_mismatched_passwords(self, api_client, registration):
        registration['confirmPassword'] = 'different'

        response = api_client.post('/api/auth/register', registration, format='json')

        assert response.status_code == 400
        assert 'confirmPassword' in response.json()['errors']

    def test_login_then_me(self, api_client, make_user):
        make_user(email='rafi@example.com', password='secret123')

        login = api_client.post(
            '/api/auth/login', {'email': 'RAFI@example.com', 'password': 'secret123'}, format='json'
        )
        assert login.status_code == 200
        assert login.json()['message'] == 'Login successful'

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.json()['token']}")
        me = api_client.get('/api/auth/me')
        assert me.status_code == 200
        assert me.json()['user']['email'] == 'rafi@example.com'

    def test_login_with_wrong_password(self, api_client, make_user):
        make_user(email='rafi@example.com', password='secret123')

        response = api_client.post(
            '/api/auth/login', {'email': 'rafi@example.com', 'password': 'nope123'}, format='json'
        )

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Invalid email or password'}

    def test_blocked_user_cannot_log_in(self, api_client, make_user):
        make_user(email='blocked@example.com', password='secret123', status=User.STATUS_BLOCKED)

        response = api_client.post(
            '/api/auth/login', {'email': 'blocked@example.com', 'password': 'secret123'}, format='json'
        )

        assert response.status_code == 403
        assert response.json()['message'] == 'Your account has been blocked. Please contact admin.'

    def test_me_requires_token(self, api_client):
        assert api_client.get('/api/auth/me').status_code == 401


class TestProfile:

    def test_update_profile(self, client_for, donor):
        response = client_for(donor).put(
            '/api/users/profile', {'bloodGroup': 'B-', 'district': 'Khulna'}, format='json'
        )

        assert response.status_code == 200
        assert response.json()['message'] == 'Profile updated successfully'
        donor.refresh_from_db()
        assert donor.blood_group == 'B-'
        assert donor.district == 'Khulna'

    def test_profile_ignores_role_and_email(self, client_for, donor):
        client_for(donor).put(
            '/api/users/profile', {'role': 'admin', 'email': 'new@example.com', 'name': 'Renamed'}, format='json'
        )

        donor.refresh_from_db()
        assert donor.role == User.ROLE_DONOR
        assert donor.email != 'new@example.com'
        assert donor.name == 'Renamed'


class TestAdministration:

    def test_admin_blocks_and_unblocks(self, client_for, admin_user, donor):
        client = client_for(admin_user)

        blocked = client.put(f'/api/users/{donor.pk}/status', {'status': 'blocked'}, format='json')
        assert blocked.json()['message'] == 'User blocked successfully'
        donor.refresh_from_db()
        assert donor.is_blocked

        unblocked = client.put(f'/api/users/{donor.pk}/status', {'status': 'active'}, format='json')
        assert unblocked.json()['message'] == 'User unblocked successfully'

    def test_invalid_status_value(self, client_for, admin_user, donor):
        response = client_for(admin_user).put(f'/api/users/{donor.pk}/status', {'status': 'frozen'}, format='json')

        assert response.status_code == 400
        assert 'Invalid status value' in response.json()['message']

    def test_admin_changes_role(self, client_for, admin_user, donor):
        response = client_for(admin_user).put(f'/api/users/{donor.pk}/role', {'role': 'volunteer'}, format='json')

        assert response.status_code == 200
        assert response.json()['message'] == 'User role updated to volunteer successfully'
        donor.refresh_from_db()
        assert donor.role == User.ROLE_VOLUNTEER

    def test_unknown_user_is_404(self, client_for, admin_user):
        response = client_for(admin_user).put('/api/users/9999/role', {'role': 'volunteer'}, format='json')
        assert response.status_code == 404
        assert response.json()['message'] == 'User not found'

    def test_non_admin_is_forbidden(self, client_for, volunteer, donor):
        response = client_for(volunteer).put(f'/api/users/{donor.pk}/status', {'status': 'blocked'}, format='json')
        assert response.status_code == 403

    def test_all_users_filters(self, client_for, admin_user, donor, volunteer, make_user):
        make_user(status=User.STATUS_BLOCKED)
        client = client_for(admin_user)

        assert client.get('/api/users/all').json()['users']['totalDocs'] == 4
        volunteers = client.get('/api/users/all', {'role': 'volunteer'}).json()['users']
        assert [u['id'] for u in volunteers['docs']] == [volunteer.pk]
        assert client.get('/api/users/all', {'status': 'blocked'}).json()['users']['totalDocs'] == 1


class TestDashboard:

    def test_donor_dashboard(self, client_for, donor, other_donor, make_request):
        for _ in range(4):
            make_request(donor)
        make_request(other_donor)
        Funding.objects.create(user=donor, amount=40, transaction_id='pi_x', status=Funding.STATUS_COMPLETED)

        body = client_for(donor).get('/api/users/dashboard/stats').json()

        assert body['stats'] == {'totalUsers': 2, 'totalDonationRequests': 5, 'totalFunding': 40}
        assert len(body['recentDonations']) == 3
        assert {d['requester']['id'] for d in body['recentDonations']} == {donor.pk}

    def test_staff_dashboard_has_no_recent_requests(self, client_for, admin_user, donor, make_request):
        make_request(donor)

        body = client_for(admin_user).get('/api/users/dashboard/stats').json()

        assert body['recentDonations'] == []
        assert body['stats']['totalUsers'] == 1
