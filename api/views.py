# api/views.py
from django.contrib.auth import get_user_model
from django.db.models import Sum
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from donations.models import DonationRequest
from donations.serializers import DonationRequestSerializer
from fundings.models import Funding

User = get_user_model()

RECENT_REQUESTS = 3


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    """Get dashboard statistics"""
    total_funding = Funding.objects.filter(
        status=Funding.STATUS_COMPLETED
    ).aggregate(total=Sum('amount'))['total'] or 0

    # Donors see their own latest requests on the dashboard
    recent_donations = []
    if request.user.role == User.ROLE_DONOR:
        recent = DonationRequest.objects.filter(
            requester=request.user
        ).select_related('requester', 'donor').order_by('-created_at')[:RECENT_REQUESTS]
        recent_donations = DonationRequestSerializer(recent, many=True).data

    return Response({
        'success': True,
        'stats': {
            'totalUsers': User.objects.filter(role=User.ROLE_DONOR).count(),
            'totalDonationRequests': DonationRequest.objects.count(),
            'totalFunding': total_funding,
        },
        'recentDonations': recent_donations,
    })
