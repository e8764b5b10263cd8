"""Serializers for identity flows (register, login, profile, admin management)."""

from typing import cast

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from access_control.roles import Role

from .managers import UserManager

User = get_user_model()


class SocialLinksSerializer(serializers.Serializer):
    twitter = serializers.CharField(required=False, allow_blank=True)
    instagram = serializers.CharField(required=False, allow_blank=True)
    facebook = serializers.CharField(required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)


class PreferencesSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=["light", "dark"], required=False)
    notifications = serializers.BooleanField(required=False)
    language = serializers.CharField(required=False, max_length=10)


class RegisterSerializer(serializers.Serializer):
    """Validate and create a subscriber identity.

    The role is never taken from the payload; promotion is an admin action.
    """

    username = serializers.CharField(min_length=3, max_length=30)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)

    @staticmethod
    def validate_username(value):
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username already in use")
        return value

    @staticmethod
    def validate_email(value):
        value = value.lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def create(self, validated_data):
        manager = cast(UserManager, User.objects)
        return manager.create_user(role=Role.SUBSCRIBER, **validated_data)


class LoginSerializer(serializers.Serializer):
    """Authenticate an identity via email/password using bcrypt verification."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        """Authenticate credentials and attach the user to validated_data."""
        email = attrs.get("email", "").lower()
        password = attrs.get("password")
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise AuthenticationFailed("Invalid credentials")

        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        if not UserManager.verify_password(user, password):
            raise AuthenticationFailed("Invalid credentials")

        attrs["user"] = user
        return attrs


class AuthorSummarySerializer(serializers.ModelSerializer):
    """Public profile fields joined into blog payloads."""

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "avatar"]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only identity payload for responses."""

    stats = serializers.SerializerMethodField()

    class Meta:
        """Identity, profile, counters, and activity timestamps."""
        model = User
        fields = [
            "id",
            "username",
            "email",
            "role",
            "first_name",
            "last_name",
            "bio",
            "avatar",
            "social_links",
            "preferences",
            "stats",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    @staticmethod
    def get_stats(obj) -> dict:
        return {
            "posts_count": obj.posts_count,
            "views_count": obj.views_count,
            "likes_count": obj.likes_count,
        }


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Patchable fields for /auth/me updates."""

    social_links = SocialLinksSerializer(required=False)
    preferences = PreferencesSerializer(required=False)
    password = serializers.CharField(write_only=True, required=False, min_length=6)

    class Meta:
        """Profile fields are optional; nested blocks merge into stored values."""
        model = User
        fields = ["first_name", "last_name", "bio", "avatar", "social_links", "preferences", "password"]
        extra_kwargs = {
            "first_name": {"required": False, "allow_blank": True},
            "last_name": {"required": False, "allow_blank": True},
            "bio": {"required": False, "allow_blank": True},
            "avatar": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):
        """Reject attempts to change email or role through the profile endpoint."""
        initial = getattr(self, "initial_data", {})
        if "email" in initial:
            raise serializers.ValidationError("Email cannot be updated via this endpoint")
        if "role" in initial:
            raise serializers.ValidationError("Role cannot be updated via this endpoint")
        return super().validate(attrs)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        if password:
            instance.set_password(password)
        for key in ("social_links", "preferences"):
            if key in validated_data:
                merged = dict(getattr(instance, key) or {})
                merged.update(validated_data.pop(key))
                setattr(instance, key, merged)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class UserAdminUpdateSerializer(serializers.ModelSerializer):
    """Admin-only changes: role promotion/demotion and (de)activation."""

    class Meta:
        model = User
        fields = ["role", "is_active"]
        extra_kwargs = {"role": {"required": False}, "is_active": {"required": False}}


__all__ = [
    "RegisterSerializer",
    "LoginSerializer",
    "AuthorSummarySerializer",
    "UserDetailSerializer",
    "ProfileUpdateSerializer",
    "UserAdminUpdateSerializer",
]
