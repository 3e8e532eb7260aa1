"""
Accounts app serializers.

Request validation for login and the public profile shape returned by
the login and ``me`` endpoints.  Password hashes never appear in any
output serializer.
"""

from __future__ import annotations

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    """Username + password credentials, with an optional "remember me" flag."""

    username = serializers.CharField(
        error_messages={"blank": "Username is required"},
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={"input_type": "password"},
        error_messages={"blank": "Password is required"},
    )
    rememberMe = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Extend the session cookie from 24 hours to 30 days.",
    )


class UserSerializer(serializers.Serializer):
    """
    Public profile of a staff member.

    Example::

        {
            "id": 1,
            "username": "admin",
            "fullName": "Admin User",
            "position": "System Administrator",
            "office": "VAWC Office",
            "role": "administrator"
        }
    """

    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    fullName = serializers.CharField(source="full_name", read_only=True)
    position = serializers.CharField(read_only=True, allow_null=True)
    office = serializers.CharField(read_only=True, allow_null=True)
    role = serializers.CharField(read_only=True)


class LoginResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    token = serializers.CharField()


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()
