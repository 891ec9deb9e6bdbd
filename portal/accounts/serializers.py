"""
Account serializers.

Validate what the driver types before it goes to the backend, and what the
backend's auth endpoints send back before it reaches the credential store.
"""

from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Credentials for ``POST /auth/login/``."""

    username = serializers.CharField(max_length=150)
    password = serializers.CharField(trim_whitespace=False)


class TokenPairSerializer(serializers.Serializer):
    """Answer of ``POST /auth/login/``."""

    access = serializers.CharField()
    refresh = serializers.CharField()


class AccessTokenSerializer(serializers.Serializer):
    """Answer of ``POST /auth/refresh/``."""

    access = serializers.CharField()


class RegistrationSerializer(serializers.Serializer):
    """
    Driver registration form.

    Mirrors the backend's ``POST /auth/register/`` body. The password
    confirmation is checked locally so a typo never costs a round trip.
    """

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    password2 = serializers.CharField(trim_whitespace=False)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")

    def validate(self, data):
        """Validate that both passwords match."""
        if data["password"] != data["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match."})
        return data
