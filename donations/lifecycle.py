"""
Donation request lifecycle: create, read, update, delete and donate.

Views call these functions with the authenticated caller; every rule about
who may touch which request lives here (via ``policies``) so it holds no
matter which endpoint triggers it.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts.models import User
from donorhub.exceptions import Conflict, InvalidOperation
from donorhub.pagination import paginate

from . import policies
from .models import DonationRequest
from .serializers import DonationRequestUpdateSerializer, DonationRequestWriteSerializer
from .transitions import ensure_transition

logger = logging.getLogger(__name__)

# Never writable through update(); donor is only set by donate()
PROTECTED_FIELDS = {'requester', 'requester_id', 'donor', 'donor_id', 'created_at', 'updated_at', 'id'}


def _with_people(queryset):
    return queryset.select_related('requester', 'donor')


def create(requester, fields):
    """
    Create a pending request owned by ``requester``.
    ``fields`` is the raw client payload (camelCase keys).
    """
    if requester.status != User.STATUS_ACTIVE:
        raise PermissionDenied("Your account is blocked. You cannot create donation requests.")

    serializer = DonationRequestWriteSerializer(data=fields)
    serializer.is_valid(raise_exception=True)

    donation_request = DonationRequest.objects.create(
        requester=requester,
        status=DonationRequest.STATUS_PENDING,
        **serializer.validated_data
    )
    logger.info(f"Donation request {donation_request.pk} created by {requester.email}")
    return get_by_id(donation_request.pk)


def list_requests(caller, status=None, requester_id=None, donor_id=None, page=1, limit=10):
    """
    Paginated requests, newest first. Donor-role callers only ever see
    their own requests, whatever ``requester_id`` they pass.
    """
    queryset = _with_people(DonationRequest.objects.all()).order_by('-created_at')

    if status:
        queryset = queryset.filter(status=status)
    if requester_id:
        queryset = queryset.filter(requester_id=requester_id)
    if donor_id:
        queryset = queryset.filter(donor_id=donor_id)

    if caller.role == User.ROLE_DONOR:
        queryset = queryset.filter(requester=caller)

    return paginate(queryset, page, limit)


def list_public(blood_group=None, district=None, page=1, limit=10):
    """Pending requests anyone can browse."""
    queryset = _with_people(
        DonationRequest.objects.filter(status=DonationRequest.STATUS_PENDING)
    ).order_by('-created_at')

    if blood_group:
        queryset = queryset.filter(blood_group=blood_group)
    if district:
        queryset = queryset.filter(recipient_district=district)

    return paginate(queryset, page, limit)


def get_by_id(request_id):
    try:
        return _with_people(DonationRequest.objects).get(pk=request_id)
    except (DonationRequest.DoesNotExist, ValueError):
        raise NotFound("Donation request not found")


def update(request_id, data, caller):
    """
    Apply ``data`` (raw payload) to a request the caller is allowed to edit.
    Volunteers may only change the status; other supplied fields are dropped.
    """
    with transaction.atomic():
        donation_request = _lock(request_id)
        rule = policies.check(policies.UPDATE, caller, donation_request)

        payload = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        payload = policies.restrict_fields(rule, payload)

        serializer = DonationRequestUpdateSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        changes = {k: v for k, v in serializer.validated_data.items() if k not in PROTECTED_FIELDS}

        new_status = changes.get('status')
        if new_status is not None:
            ensure_transition(donation_request.status, new_status)

        for field, value in changes.items():
            setattr(donation_request, field, value)
        donation_request.save()

    logger.info(
        f"Donation request {donation_request.pk} updated by {caller.email} "
        f"({caller.role}): {sorted(changes)}"
    )
    return get_by_id(donation_request.pk)


def delete(request_id, caller):
    donation_request = get_by_id(request_id)
    policies.check(policies.DELETE, caller, donation_request)
    donation_request.delete()
    logger.info(f"Donation request {request_id} deleted by {caller.email}")


def donate(request_id, donor):
    """
    Commit ``donor`` to a pending request: pending -> inprogress.
    """
    if donor.status != User.STATUS_ACTIVE:
        raise PermissionDenied("Your account is blocked. You cannot donate.")

    with transaction.atomic():
        donation_request = _lock(request_id)

        if donation_request.status != DonationRequest.STATUS_PENDING:
            raise Conflict("This donation request is no longer available")

        if donation_request.is_owned_by(donor):
            raise InvalidOperation("You cannot donate to your own request")

        ensure_transition(
            donation_request.status, DonationRequest.STATUS_INPROGRESS, via_donate=True
        )
        donation_request.donor = donor
        donation_request.status = DonationRequest.STATUS_INPROGRESS
        donation_request.save(update_fields=['donor', 'status', 'updated_at'])

    logger.info(f"{donor.email} is donating to request {donation_request.pk}")
    return get_by_id(donation_request.pk)


def _lock(request_id):
    try:
        return DonationRequest.objects.select_for_update().get(pk=request_id)
    except (DonationRequest.DoesNotExist, ValueError):
        raise NotFound("Donation request not found")
