from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission
from rest_framework_simplejwt.tokens import RefreshToken


def authorize(*roles):
    """
    Build a DRF permission class that admits authenticated callers whose
    role is one of ``roles``:

        permission_classes = [authorize('admin', 'volunteer')]
    """
    class HasRole(BasePermission):
        message = 'Access denied'

        def has_permission(self, request, view):
            user = request.user
            if not user or not user.is_authenticated:
                raise NotAuthenticated("Authentication required")
            return user.role in roles

    HasRole.__name__ = f"HasRole_{'_'.join(roles)}"
    return HasRole


def get_tokens_for_user(user):
    """
    Generate JWT tokens and embed the role in the payload
    """
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }
