import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from donorhub.pagination import paginate, parse_page_params

from .decorators import authorize, get_tokens_for_user
from .serializers import (
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserRoleSerializer,
    UserSerializer,
    UserStatusSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


# -----------------------------
# REGISTER API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Registers a donor account and returns JWT tokens
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if User.objects.filter(email=data['email']).exists():
        raise ValidationError("User already exists with this email")

    try:
        user = User.objects.create_user(
            email=data['email'],
            password=data['password'],
            name=data['name'],
            avatar=data.get('avatar', ''),
            blood_group=data['bloodGroup'],
            district=data['district'],
            upazila=data['upazila'],
            role=User.ROLE_DONOR,
            status=User.STATUS_ACTIVE,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise ValidationError("User already exists with this email")

    tokens = get_tokens_for_user(user)
    logger.info(f"Registered user {user.email}")

    return Response(
        {
            "success": True,
            "message": "User registered successfully",
            "token": tokens['access'],
            "refresh": tokens['refresh'],
            "user": UserSerializer(user).data,
        },
        status=status.HTTP_201_CREATED
    )


# -----------------------------
# LOGIN API
# -----------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email'].strip().lower()
    password = serializer.validated_data['password']

    user = User.objects.filter(email=email).first()
    if not user:
        raise AuthenticationFailed("Invalid email or password")

    if user.is_blocked:
        raise PermissionDenied("Your account has been blocked. Please contact admin.")

    user_auth = authenticate(request, email=email, password=password)
    if user_auth is None:
        raise AuthenticationFailed("Invalid email or password")

    tokens = get_tokens_for_user(user_auth)
    logger.info(f"User {user_auth.email} logged in")

    return Response({
        "success": True,
        "message": "Login successful",
        "token": tokens['access'],
        "refresh": tokens['refresh'],
        "user": UserSerializer(user_auth).data,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user(request):
    return Response({
        "success": True,
        "user": UserSerializer(request.user).data,
    })


# -----------------------------
# PROFILE
# -----------------------------
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    if request.method == 'GET':
        return Response({
            "success": True,
            "user": UserSerializer(request.user).data,
        })

    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()

    return Response({
        "success": True,
        "message": "Profile updated successfully",
        "user": UserSerializer(user).data,
    })


# -----------------------------
# ADMIN: USER MANAGEMENT
# -----------------------------
@api_view(['GET'])
@permission_classes([authorize(User.ROLE_ADMIN)])
def all_users(request):
    page, limit = parse_page_params(request.query_params)

    queryset = User.objects.all().order_by('-created_at')
    status_filter = request.query_params.get('status')
    if status_filter:
        queryset = queryset.filter(status=status_filter)
    role_filter = request.query_params.get('role')
    if role_filter:
        queryset = queryset.filter(role=role_filter)

    users = paginate(queryset, page, limit)
    return Response({
        "success": True,
        "users": users.as_payload(lambda items: UserSerializer(items, many=True).data),
    })


def _get_user_or_404(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise NotFound("User not found")


@api_view(['PUT', 'PATCH'])
@permission_classes([authorize(User.ROLE_ADMIN)])
def update_user_status(request, user_id):
    serializer = UserStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    new_status = serializer.validated_data['status']

    user = _get_user_or_404(user_id)
    user.status = new_status
    user.save(update_fields=['status', 'updated_at'])
    logger.info(f"{request.user.email} set status of {user.email} to {new_status}")

    verb = 'unblocked' if new_status == User.STATUS_ACTIVE else 'blocked'
    return Response({
        "success": True,
        "message": f"User {verb} successfully",
        "user": UserSerializer(user).data,
    })


@api_view(['PUT', 'PATCH'])
@permission_classes([authorize(User.ROLE_ADMIN)])
def update_user_role(request, user_id):
    serializer = UserRoleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    new_role = serializer.validated_data['role']

    user = _get_user_or_404(user_id)
    user.role = new_role
    user.save(update_fields=['role', 'updated_at'])
    logger.info(f"{request.user.email} set role of {user.email} to {new_role}")

    return Response({
        "success": True,
        "message": f"User role updated to {new_role} successfully",
        "user": UserSerializer(user).data,
    })
