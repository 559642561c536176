from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.decorators import authorize
from accounts.models import User
from donorhub.pagination import parse_page_params

from . import ledger
from .serializers import FundingSerializer


def _serialize_many(items):
    return FundingSerializer(items, many=True).data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_payment_intent(request):
    intent = ledger.create_intent(request.user, request.data.get('amount'))
    return Response({
        'success': True,
        **intent,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def confirm_payment(request):
    funding = ledger.confirm(
        request.data.get('paymentIntentId'),
        request.data.get('amount'),
        request.user,
    )
    return Response({
        'success': True,
        'message': 'Payment completed and recorded successfully',
        'funding': FundingSerializer(funding).data,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def all_fundings(request):
    page, limit = parse_page_params(request.query_params)
    user_id = request.query_params.get('userId')
    if user_id:
        try:
            user_id = int(user_id)
        except ValueError:
            raise ValidationError({'userId': 'Must be a numeric id'})

    fundings, total = ledger.list_all(user_id=user_id or None, page=page, limit=limit)
    return Response({
        'success': True,
        'fundings': fundings.as_payload(_serialize_many),
        'totalFunding': total,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_fundings(request):
    page, limit = parse_page_params(request.query_params)
    fundings, total = ledger.list_for_user(request.user, page=page, limit=limit)
    return Response({
        'success': True,
        'fundings': fundings.as_payload(_serialize_many),
        'userTotal': total,
    })


@api_view(['GET'])
@permission_classes([authorize(User.ROLE_ADMIN, User.ROLE_VOLUNTEER)])
def funding_stats(request):
    return Response({
        'success': True,
        'stats': ledger.stats(),
    })
