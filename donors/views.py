# donors/views.py
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.serializers import UserSerializer
from donorhub.pagination import parse_page_params

from .search import SEARCH_ALTERNATIVE, search


# ============================================
# DONOR SEARCH (public)
# ============================================
@api_view(['GET'])
@permission_classes([AllowAny])
def search_donors(request):
    """
    GET /api/users/search?bloodGroup=O%2B&district=Dhaka&upazila=Mirpur
    """
    params = request.query_params
    page, limit = parse_page_params(params)

    result = search(
        blood_group=params.get('bloodGroup'),
        district=params.get('district'),
        upazila=params.get('upazila'),
        page=page,
        limit=limit,
    )

    body = {
        'success': True,
        'donors': result.donors.as_payload(lambda items: UserSerializer(items, many=True).data),
        'message': result.message,
        'searchType': result.search_type,
    }
    if result.search_type == SEARCH_ALTERNATIVE:
        body['originalSearch'] = {
            'bloodGroup': result.criteria.blood_group,
            'district': result.criteria.district,
            'upazila': result.criteria.upazila,
        }
    return Response(body)
