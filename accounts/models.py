from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone

BLOOD_GROUP_CHOICES = [
    ('A+', 'A+'), ('A-', 'A-'),
    ('B+', 'B+'), ('B-', 'B-'),
    ('AB+', 'AB+'), ('AB-', 'AB-'),
    ('O+', 'O+'), ('O-', 'O-'),
]
BLOOD_GROUPS = [value for value, _ in BLOOD_GROUP_CHOICES]


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).strip().lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    ROLE_DONOR = 'donor'
    ROLE_VOLUNTEER = 'volunteer'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = (
        (ROLE_DONOR, 'Donor'),
        (ROLE_VOLUNTEER, 'Volunteer'),
        (ROLE_ADMIN, 'Admin'),
    )

    STATUS_ACTIVE = 'active'
    STATUS_BLOCKED = 'blocked'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_BLOCKED, 'Blocked'),
    )

    name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    avatar = models.CharField(max_length=500, blank=True, default='')

    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    district = models.CharField(max_length=100)
    upazila = models.CharField(max_length=100)

    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_DONOR)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    # Django admin site access only; application roles live in `role`
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name', 'blood_group', 'district', 'upazila']

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'role'], name='user_status_role_idx'),
            models.Index(fields=['blood_group', 'district'], name='user_blood_district_idx'),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_blocked(self):
        return self.status == self.STATUS_BLOCKED

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
