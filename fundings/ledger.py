"""
Funding ledger: opens gateway payment intents, records confirmed payments
and reports totals. Only ``completed`` entries count anywhere.
"""
import logging
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation as DecimalError

from django.db import IntegrityError, transaction
from django.db.models import Q, Sum
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from donorhub.exceptions import Conflict, InvalidOperation, UpstreamFailure
from donorhub.pagination import paginate

from .gateway import GatewayError, get_gateway
from .models import Funding

logger = logging.getLogger(__name__)

MIN_AMOUNT = Decimal('1')


def _parse_amount(amount):
    try:
        value = Decimal(str(amount))
    except (DecimalError, TypeError, ValueError):
        raise ValidationError("Amount must be at least 1")
    if not value.is_finite() or value < MIN_AMOUNT:
        raise ValidationError("Amount must be at least 1")
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def _minor_units(value):
    return int((value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def create_intent(user, amount, gateway=None):
    """
    Ask the gateway for a payment intent. Nothing is stored until confirm().
    """
    if amount in (None, ''):
        raise ValidationError("Amount must be at least 1")
    value = _parse_amount(amount)
    gateway = gateway or get_gateway()

    try:
        intent = gateway.create_intent(
            _minor_units(value),
            metadata={'userId': user.pk, 'userName': user.name},
        )
    except GatewayError as e:
        logger.error(f"Payment intent creation failed for {user.email}: {e}")
        raise UpstreamFailure("Error creating payment intent")

    return {
        'clientSecret': intent['client_secret'],
        'paymentIntentId': intent['id'],
    }


def confirm(intent_id, amount, user, gateway=None):
    """
    Record a succeeded payment intent as a completed funding.

    The unique transaction_id decides races: of two concurrent confirms for
    the same intent exactly one insert succeeds, the other gets Conflict.
    """
    if not intent_id or amount in (None, ''):
        raise ValidationError("Payment intent ID and amount are required")
    value = _parse_amount(amount)
    gateway = gateway or get_gateway()

    try:
        intent = gateway.retrieve_intent(intent_id)
    except GatewayError as e:
        logger.error(f"Payment intent lookup failed for {intent_id}: {e}")
        raise UpstreamFailure("Error confirming payment")

    if intent.get('status') != 'succeeded':
        raise InvalidOperation("Payment has not been completed yet")

    # The gateway's record is authoritative for what was paid and by whom
    if intent.get('amount') != _minor_units(value):
        logger.warning(
            f"Amount mismatch confirming {intent['id']}: client sent {value}, "
            f"gateway charged {intent.get('amount')} minor units"
        )
        raise InvalidOperation("Payment amount does not match the completed payment")

    owner = (intent.get('metadata') or {}).get('userId')
    if str(owner) != str(user.pk):
        logger.warning(f"{user.email} tried to confirm payment intent {intent['id']} owned by user {owner}")
        raise PermissionDenied("This payment belongs to another user")

    try:
        with transaction.atomic():
            funding = Funding.objects.create(
                user=user,
                amount=value,
                transaction_id=intent['id'],
                status=Funding.STATUS_COMPLETED,
                payment_method='stripe',
            )
    except IntegrityError:
        logger.warning(f"Duplicate confirmation for payment intent {intent['id']}")
        raise Conflict("This payment has already been processed")

    logger.info(f"Recorded funding {funding.pk}: {value} from {user.email} ({intent['id']})")
    return Funding.objects.select_related('user').get(pk=funding.pk)


def _completed():
    return Funding.objects.filter(status=Funding.STATUS_COMPLETED)


def _total(queryset):
    return queryset.aggregate(total=Sum('amount'))['total'] or Decimal('0')


def list_all(user_id=None, page=1, limit=10):
    """Completed fundings (optionally one user's) plus the overall total."""
    queryset = _completed().select_related('user').order_by('-created_at')
    if user_id:
        queryset = queryset.filter(user_id=user_id)
    return paginate(queryset, page, limit), _total(_completed())


def list_for_user(user, page=1, limit=10):
    queryset = _completed().filter(user=user).select_related('user').order_by('-created_at')
    return paginate(queryset, page, limit), _total(queryset)


def period_starts(now=None):
    """
    Local midnight today, the most recent Sunday and the first of the month.
    """
    local_now = timezone.localtime(now or timezone.now())
    start_of_day = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    # weekday(): Monday=0 .. Sunday=6
    start_of_week = start_of_day - timedelta(days=(start_of_day.weekday() + 1) % 7)
    start_of_month = start_of_day.replace(day=1)
    return start_of_day, start_of_week, start_of_month


def stats(now=None):
    start_of_day, start_of_week, start_of_month = period_starts(now)
    totals = _completed().aggregate(
        daily=Sum('amount', filter=Q(created_at__gte=start_of_day)),
        weekly=Sum('amount', filter=Q(created_at__gte=start_of_week)),
        monthly=Sum('amount', filter=Q(created_at__gte=start_of_month)),
        total=Sum('amount'),
    )
    return {key: value or Decimal('0') for key, value in totals.items()}
