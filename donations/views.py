# donations/views.py
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from donorhub.pagination import parse_page_params

from . import lifecycle
from .serializers import DonationRequestDetailSerializer, DonationRequestSerializer


def _optional_id(params, name):
    value = params.get(name)
    if not value:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({name: 'Must be a numeric id'})


def _serialize_many(items):
    return DonationRequestSerializer(items, many=True).data


class DonationRequestViewSet(viewsets.ViewSet):
    """
    API endpoint for donation requests.

    Browsing pending requests and viewing a single request are public;
    everything else needs an authenticated caller.
    """
    lookup_value_regex = r'\d+'
    public_actions = ('retrieve', 'public')

    def get_permissions(self):
        if self.action in self.public_actions:
            return [AllowAny()]
        return [IsAuthenticated()]

    def list(self, request):
        params = request.query_params
        page, limit = parse_page_params(params)
        requests_page = lifecycle.list_requests(
            request.user,
            status=params.get('status') or None,
            requester_id=_optional_id(params, 'requesterId'),
            donor_id=_optional_id(params, 'donorId'),
            page=page,
            limit=limit,
        )
        return Response({
            'success': True,
            'donationRequests': requests_page.as_payload(_serialize_many),
        })

    @action(detail=False, methods=['get'])
    def public(self, request):
        params = request.query_params
        page, limit = parse_page_params(params)
        requests_page = lifecycle.list_public(
            blood_group=params.get('bloodGroup') or None,
            district=params.get('district') or None,
            page=page,
            limit=limit,
        )
        return Response({
            'success': True,
            'donationRequests': requests_page.as_payload(_serialize_many),
        })

    def create(self, request):
        donation_request = lifecycle.create(request.user, request.data)
        return Response({
            'success': True,
            'message': 'Donation request created successfully',
            'donationRequest': DonationRequestSerializer(donation_request).data,
        }, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        donation_request = lifecycle.get_by_id(pk)
        return Response({
            'success': True,
            'donationRequest': DonationRequestDetailSerializer(donation_request).data,
        })

    def update(self, request, pk=None):
        donation_request = lifecycle.update(pk, request.data, request.user)
        return Response({
            'success': True,
            'message': 'Donation request updated successfully',
            'donationRequest': DonationRequestSerializer(donation_request).data,
        })

    def partial_update(self, request, pk=None):
        return self.update(request, pk)

    def destroy(self, request, pk=None):
        lifecycle.delete(pk, request.user)
        return Response({
            'success': True,
            'message': 'Donation request deleted successfully',
        })

    @action(detail=True, methods=['post'])
    def donate(self, request, pk=None):
        """Commit the caller as donor for a pending request."""
        donation_request = lifecycle.donate(pk, request.user)
        return Response({
            'success': True,
            'message': 'Thank you for your donation!',
            'donationRequest': DonationRequestSerializer(donation_request).data,
        })
