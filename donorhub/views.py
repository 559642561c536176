# donorhub/views.py - site-level views

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .bangladesh import get_districts, get_upazilas

logger = logging.getLogger(__name__)


# ========================================
# OPERATIONAL
# ========================================

def home(request):
    """API banner"""
    return JsonResponse({
        'success': True,
        'message': 'Blood Donation API is running',
        'timestamp': timezone.now().isoformat(),
    })


def health(request):
    """Report whether the database answers a trivial query"""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({
            'success': False,
            'status': 'unhealthy',
            'database': 'disconnected',
            'timestamp': timezone.now().isoformat(),
        }, status=503)

    return JsonResponse({
        'success': True,
        'status': 'healthy',
        'database': 'connected',
        'timestamp': timezone.now().isoformat(),
    })


def not_found(request, exception=None):
    return JsonResponse({
        'success': False,
        'message': f'Route not found: {request.path}',
    }, status=404)


# ========================================
# REFERENCE DATA
# ========================================

@api_view(['GET'])
@permission_classes([AllowAny])
def districts(request):
    return Response({
        'success': True,
        'districts': get_districts(),
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def upazilas(request, district):
    return Response({
        'success': True,
        'district': district,
        'upazilas': get_upazilas(district),
    })
