# donations/serializers.py
from rest_framework import serializers

from accounts.models import BLOOD_GROUPS
from accounts.serializers import UserLocationSummarySerializer, UserSummarySerializer

from .models import DonationRequest


class DonationRequestSerializer(serializers.ModelSerializer):
    """
    Outbound representation with requester / donor expanded
    """
    requester = UserSummarySerializer(read_only=True)
    donor = UserSummarySerializer(read_only=True)

    recipientName = serializers.CharField(source='recipient_name', read_only=True)
    recipientDistrict = serializers.CharField(source='recipient_district', read_only=True)
    recipientUpazila = serializers.CharField(source='recipient_upazila', read_only=True)
    hospitalName = serializers.CharField(source='hospital_name', read_only=True)
    fullAddress = serializers.CharField(source='full_address', read_only=True)
    bloodGroup = serializers.CharField(source='blood_group', read_only=True)
    donationDate = serializers.DateField(source='donation_date', read_only=True)
    donationTime = serializers.CharField(source='donation_time', read_only=True)
    requestMessage = serializers.CharField(source='request_message', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = DonationRequest
        fields = [
            'id',
            'requester',
            'recipientName',
            'recipientDistrict',
            'recipientUpazila',
            'hospitalName',
            'fullAddress',
            'bloodGroup',
            'donationDate',
            'donationTime',
            'requestMessage',
            'status',
            'donor',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id', 'status']


class DonationRequestDetailSerializer(DonationRequestSerializer):
    """Single-request view; the requester also shows where they are."""
    requester = UserLocationSummarySerializer(read_only=True)


class DonationRequestWriteSerializer(serializers.Serializer):
    """
    Validates inbound fields; ``validated_data`` is keyed by model field name.
    """
    recipientName = serializers.CharField(source='recipient_name', min_length=2, max_length=100)
    recipientDistrict = serializers.CharField(source='recipient_district', max_length=100)
    recipientUpazila = serializers.CharField(source='recipient_upazila', max_length=100)
    hospitalName = serializers.CharField(source='hospital_name', min_length=2, max_length=200)
    fullAddress = serializers.CharField(source='full_address', min_length=5, max_length=500)
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUPS)
    donationDate = serializers.DateField(
        source='donation_date',
        input_formats=['iso-8601', '%Y-%m-%dT%H:%M:%S.%fZ', '%Y-%m-%dT%H:%M:%SZ'],
    )
    donationTime = serializers.CharField(source='donation_time', max_length=20)
    requestMessage = serializers.CharField(source='request_message', min_length=10, max_length=1000)


class DonationRequestUpdateSerializer(DonationRequestWriteSerializer):
    """
    Every field optional; ``status`` may be changed here but is checked
    against the transition table by the lifecycle manager.
    """
    status = serializers.ChoiceField(
        choices=[c for c, _ in DonationRequest.STATUS_CHOICES],
        required=False,
    )

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('partial', True)
        super().__init__(*args, **kwargs)
