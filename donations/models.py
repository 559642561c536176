# donations/models.py
from django.conf import settings
from django.db import models

from accounts.models import BLOOD_GROUP_CHOICES


class DonationRequest(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_INPROGRESS = 'inprogress'
    STATUS_DONE = 'done'
    STATUS_CANCELED = 'canceled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_INPROGRESS, 'In Progress'),
        (STATUS_DONE, 'Done'),
        (STATUS_CANCELED, 'Canceled'),
    ]

    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='donation_requests'
    )

    # Recipient
    recipient_name = models.CharField(max_length=100)
    recipient_district = models.CharField(max_length=100)
    recipient_upazila = models.CharField(max_length=100)
    hospital_name = models.CharField(max_length=200)
    full_address = models.CharField(max_length=500)

    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    donation_date = models.DateField()
    donation_time = models.CharField(max_length=20)
    request_message = models.TextField(max_length=1000)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    donor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donations_made'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.recipient_name} - {self.blood_group} ({self.status})"

    def is_owned_by(self, user):
        return user is not None and self.requester_id == user.pk

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Donation Request'
        verbose_name_plural = 'Donation Requests'
        indexes = [
            models.Index(fields=['status', '-created_at'], name='request_status_created_idx'),
            models.Index(fields=['requester', '-created_at'], name='request_requester_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(donor=models.F('requester')),
                name='request_donor_not_requester',
            ),
        ]
