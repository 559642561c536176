from rest_framework import serializers

from accounts.serializers import UserSummarySerializer

from .models import Funding


class FundingSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True)
    transactionId = serializers.CharField(source='transaction_id', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Funding
        fields = ['id', 'user', 'amount', 'transactionId', 'status', 'paymentMethod', 'createdAt']
        read_only_fields = ['id', 'status']
