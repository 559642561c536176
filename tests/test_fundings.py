from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from donorhub.exceptions import InvalidOperation
from fundings import ledger
from fundings.gateway import GatewayError
from fundings.models import Funding

pytestmark = pytest.mark.django_db

DHAKA = ZoneInfo('Asia/Dhaka')


class FakeGateway:
    """Stands in for StripeGateway; intents live in a dict."""

    def __init__(self, status='succeeded', fail=False):
        self.status = status
        self.fail = fail
        self.opened = []
        self.intents = {}

    def paid(self, intent_id, amount_minor_units, user):
        """Register an intent the gateway knows was paid by ``user``."""
        self.intents[intent_id] = (amount_minor_units, {'userId': str(user.pk)})

    def create_intent(self, amount_minor_units, metadata=None):
        if self.fail:
            raise GatewayError('card network down')
        intent_id = f'pi_test_{len(self.opened) + 1}'
        self.opened.append((intent_id, amount_minor_units, metadata))
        return {'id': intent_id, 'client_secret': f'{intent_id}_secret'}

    def retrieve_intent(self, intent_id):
        if self.fail:
            raise GatewayError('card network down')
        amount, metadata = self.intents.get(intent_id, (None, {}))
        return {'id': intent_id, 'status': self.status, 'amount': amount, 'metadata': metadata}


@pytest.fixture
def gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr('fundings.ledger.get_gateway', lambda: fake)
    return fake


def make_funding(user, amount, created_at, transaction_id, status=Funding.STATUS_COMPLETED):
    return Funding.objects.create(
        user=user,
        amount=Decimal(amount),
        transaction_id=transaction_id,
        status=status,
        created_at=created_at,
    )


class TestPaymentIntent:

    def test_opens_intent_in_minor_units(self, client_for, donor, gateway):
        response = client_for(donor).post('/api/fundings/create-payment-intent', {'amount': 50}, format='json')

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'clientSecret': 'pi_test_1_secret',
            'paymentIntentId': 'pi_test_1',
        }
        assert gateway.opened[0][1] == 5000
        assert gateway.opened[0][2]['userId'] == donor.pk
        assert not Funding.objects.exists()

    @pytest.mark.parametrize('amount', [0, '0.5', -3, 'abc', None])
    def test_rejects_amount_below_one(self, client_for, donor, gateway, amount):
        response = client_for(donor).post('/api/fundings/create-payment-intent', {'amount': amount}, format='json')

        assert response.status_code == 400
        assert response.json()['message'] == 'Amount must be at least 1'
        assert gateway.opened == []

    def test_gateway_failure_is_500(self, client_for, donor, gateway):
        gateway.fail = True

        response = client_for(donor).post('/api/fundings/create-payment-intent', {'amount': 10}, format='json')

        assert response.status_code == 500
        assert response.json()['message'] == 'Error creating payment intent'

    def test_requires_authentication(self, api_client, gateway):
        response = api_client.post('/api/fundings/create-payment-intent', {'amount': 10}, format='json')
        assert response.status_code == 401


class TestConfirm:

    def test_records_completed_funding(self, client_for, donor, gateway):
        gateway.paid('pi_1', 2500, donor)

        response = client_for(donor).post(
            '/api/fundings/confirm-payment', {'paymentIntentId': 'pi_1', 'amount': 25}, format='json'
        )

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Payment completed and recorded successfully'
        assert body['funding']['transactionId'] == 'pi_1'
        assert body['funding']['status'] == 'completed'
        assert body['funding']['amount'] == 25
        assert body['funding']['user']['id'] == donor.pk

    def test_confirming_twice_records_once(self, client_for, donor, gateway):
        gateway.paid('pi_dup', 2500, donor)
        client = client_for(donor)
        payload = {'paymentIntentId': 'pi_dup', 'amount': 25}

        first = client.post('/api/fundings/confirm-payment', payload, format='json')
        second = client.post('/api/fundings/confirm-payment', payload, format='json')

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()['message'] == 'This payment has already been processed'
        assert Funding.objects.filter(transaction_id='pi_dup').count() == 1

    def test_unfinished_intent_is_rejected(self, donor, gateway):
        gateway.paid('pi_2', 1000, donor)
        gateway.status = 'requires_payment_method'

        with pytest.raises(InvalidOperation) as excinfo:
            ledger.confirm('pi_2', 10, donor)

        assert str(excinfo.value.detail) == 'Payment has not been completed yet'
        assert not Funding.objects.exists()

    def test_missing_arguments(self, client_for, donor, gateway):
        response = client_for(donor).post('/api/fundings/confirm-payment', {'amount': 10}, format='json')

        assert response.status_code == 400
        assert response.json()['message'] == 'Payment intent ID and amount are required'

    def test_explicit_gateway_argument_wins(self, donor):
        fake = FakeGateway()
        fake.paid('pi_direct', 1250, donor)

        funding = ledger.confirm('pi_direct', '12.50', donor, gateway=fake)
        assert funding.amount == Decimal('12.50')

    def test_amount_must_match_what_the_gateway_charged(self, client_for, donor, gateway):
        gateway.paid('pi_small', 100, donor)

        response = client_for(donor).post(
            '/api/fundings/confirm-payment', {'paymentIntentId': 'pi_small', 'amount': 1000}, format='json'
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Payment amount does not match the completed payment'
        assert not Funding.objects.exists()

    def test_unknown_intent_amount_is_rejected(self, donor, gateway):
        with pytest.raises(InvalidOperation):
            ledger.confirm('pi_never_opened', 10, donor)

        assert not Funding.objects.exists()

    def test_cannot_claim_someone_elses_payment(self, client_for, donor, other_donor, gateway):
        gateway.paid('pi_theirs', 1000, donor)

        response = client_for(other_donor).post(
            '/api/fundings/confirm-payment', {'paymentIntentId': 'pi_theirs', 'amount': 10}, format='json'
        )

        assert response.status_code == 403
        assert response.json()['message'] == 'This payment belongs to another user'
        assert not Funding.objects.exists()

    def test_intent_opened_here_can_be_confirmed(self, client_for, donor, gateway):
        client = client_for(donor)
        intent_id = client.post(
            '/api/fundings/create-payment-intent', {'amount': '19.99'}, format='json'
        ).json()['paymentIntentId']
        _, amount, metadata = gateway.opened[0]
        gateway.intents[intent_id] = (amount, {key: str(value) for key, value in metadata.items()})

        response = client.post(
            '/api/fundings/confirm-payment', {'paymentIntentId': intent_id, 'amount': '19.99'}, format='json'
        )

        assert response.status_code == 200
        assert Funding.objects.get(transaction_id=intent_id).amount == Decimal('19.99')


class TestListingAndStats:

    def test_lists_only_completed_and_totals(self, client_for, donor, other_donor, admin_user):
        now = datetime(2026, 10, 14, 12, tzinfo=DHAKA)
        make_funding(donor, '10', now, 'pi_a')
        make_funding(other_donor, '15', now, 'pi_b')
        make_funding(donor, '99', now, 'pi_c', status=Funding.STATUS_FAILED)

        everyone = client_for(admin_user).get('/api/fundings').json()
        assert everyone['fundings']['totalDocs'] == 2
        assert everyone['totalFunding'] == 25

        one_user = client_for(admin_user).get('/api/fundings', {'userId': donor.pk}).json()
        assert one_user['fundings']['totalDocs'] == 1
        assert one_user['totalFunding'] == 25

        mine = client_for(donor).get('/api/fundings/my-fundings').json()
        assert mine['fundings']['totalDocs'] == 1
        assert mine['userTotal'] == 10

    def test_period_starts_use_local_sunday(self, settings):
        settings.TIME_ZONE = 'Asia/Dhaka'
        wednesday = datetime(2026, 10, 14, 12, tzinfo=DHAKA)

        day, week, month = ledger.period_starts(wednesday)

        assert day == datetime(2026, 10, 14, tzinfo=DHAKA)
        assert week == datetime(2026, 10, 11, tzinfo=DHAKA)
        assert month == datetime(2026, 10, 1, tzinfo=DHAKA)

    def test_stats_by_period(self, settings, donor):
        settings.TIME_ZONE = 'Asia/Dhaka'
        make_funding(donor, '10', datetime(2026, 10, 14, 9, tzinfo=DHAKA), 'pi_today')
        make_funding(donor, '20', datetime(2026, 10, 12, 18, tzinfo=DHAKA), 'pi_monday')
        make_funding(donor, '30', datetime(2026, 9, 20, 8, tzinfo=DHAKA), 'pi_september')
        make_funding(donor, '40', datetime(2026, 10, 14, 8, tzinfo=DHAKA), 'pi_pending', status=Funding.STATUS_PENDING)

        stats = ledger.stats(now=datetime(2026, 10, 14, 12, tzinfo=DHAKA))

        assert stats == {
            'daily': Decimal('10'),
            'weekly': Decimal('30'),
            'monthly': Decimal('30'),
            'total': Decimal('60'),
        }

    def test_stats_on_empty_ledger_are_zero(self):
        assert ledger.stats() == {
            'daily': Decimal('0'),
            'weekly': Decimal('0'),
            'monthly': Decimal('0'),
            'total': Decimal('0'),
        }

    def test_stats_endpoint_is_for_staff_roles(self, client_for, donor, volunteer, admin_user):
        assert client_for(donor).get('/api/fundings/stats').status_code == 403
        for user in (volunteer, admin_user):
            response = client_for(user).get('/api/fundings/stats')
            assert response.status_code == 200
            assert set(response.json()['stats']) == {'daily', 'weekly', 'monthly', 'total'}
