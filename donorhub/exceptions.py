"""
Error taxonomy and the DRF exception handler that wraps every failure
in the ``{"success": false, "message": ...}`` envelope.

DRF already ships ValidationError (400), NotAuthenticated /
AuthenticationFailed (401), PermissionDenied (403) and NotFound (404);
the classes below cover the remaining cases.
"""
import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(exceptions.APIException):
    """Duplicate or no-longer-available resource (surfaced as 400)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request conflicts with the current state of the resource.'
    default_code = 'conflict'


class InvalidOperation(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'This operation is not allowed.'
    default_code = 'invalid_operation'


class UpstreamFailure(exceptions.APIException):
    """Payment gateway or storage failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An upstream service failed.'
    default_code = 'upstream_failure'


def flatten_detail(detail):
    """
    Turn DRF's nested error detail into one readable sentence.

    {'recipientName': ['This field is required.']}
        -> 'recipientName: This field is required.'
    """
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            text = flatten_detail(value)
            if field == 'non_field_errors':
                parts.append(text)
            else:
                parts.append(f'{field}: {text}')
        return '; '.join(parts)
    if isinstance(detail, (list, tuple)):
        return ' '.join(flatten_detail(item) for item in detail)
    return str(detail)


def envelope_exception_handler(exc, context):
    # Let DRF translate Http404 / Django PermissionDenied first
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}")
        body = {
            'success': False,
            'message': 'Internal server error',
        }
        if settings.DEBUG:
            body['error'] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = getattr(exc, 'detail', response.data)
    body = {
        'success': False,
        'message': flatten_detail(detail),
    }
    if isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
        body['errors'] = response.data
    if settings.DEBUG and response.status_code >= 500:
        body['error'] = repr(exc)

    if response.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {body['message']}")

    response.data = body
    return response
