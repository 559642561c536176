# accounts/backends.py
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

User = get_user_model()


class EmailBackend(ModelBackend):
    """
    Authenticates by email (case-insensitive) and password.
    Blocked accounts are rejected by the login view, not here, so the
    caller can tell "blocked" apart from "bad credentials".
    """
    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        email = email or username
        if email is None or password is None:
            return None

        try:
            user = User.objects.get(email=email.strip().lower())
        except User.DoesNotExist:
            # Run the default password hasher once to reduce timing attack
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
