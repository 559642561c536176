# accounts/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import BLOOD_GROUPS

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Public view of a user. The password hash is never part of the payload.
    """
    bloodGroup = serializers.CharField(source='blood_group', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'avatar',
            'bloodGroup',
            'district',
            'upazila',
            'role',
            'status',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id', 'name', 'email', 'avatar', 'district', 'upazila', 'role', 'status']


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user used when expanding requester / donor / funder."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'avatar']
        read_only_fields = fields


class UserLocationSummarySerializer(UserSummarySerializer):

    class Meta(UserSummarySerializer.Meta):
        fields = UserSummarySerializer.Meta.fields + ['district', 'upazila']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=50, trim_whitespace=True)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    confirmPassword = serializers.CharField(required=False, write_only=True)
    bloodGroup = serializers.ChoiceField(choices=BLOOD_GROUPS)
    district = serializers.CharField()
    upazila = serializers.CharField()
    avatar = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, attrs):
        confirm = attrs.pop('confirmPassword', None)
        if confirm is not None and confirm != attrs['password']:
            raise serializers.ValidationError({'confirmPassword': 'Passwords do not match'})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=50, required=False)
    bloodGroup = serializers.ChoiceField(choices=BLOOD_GROUPS, source='blood_group', required=False)
    district = serializers.CharField(required=False)
    upazila = serializers.CharField(required=False)
    avatar = serializers.CharField(required=False, allow_blank=True)

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        instance.save()
        return instance


class UserStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[c for c, _ in User.STATUS_CHOICES],
        error_messages={'invalid_choice': 'Invalid status value'},
    )


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=[c for c, _ in User.ROLE_CHOICES],
        error_messages={'invalid_choice': 'Invalid role value'},
    )
