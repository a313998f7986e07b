"""Input serializers for guests and therapists."""
from django.conf import settings
from rest_framework import serializers

from .fields import CleanCharField


class AttributeValueSerializer(serializers.Serializer):
    attributeId = serializers.IntegerField(min_value=1)
    value = CleanCharField(max_length=255, required=False, allow_blank=True, allow_null=True)


class PersonSerializer(serializers.Serializer):
    firstName = CleanCharField(max_length=100, required=False, allow_blank=True)
    lastName = CleanCharField(max_length=100, required=False, allow_blank=True)
    attributes = AttributeValueSerializer(many=True, required=False)

    def validate(self, attrs):
        if not self.partial and not (attrs.get('firstName') or attrs.get('lastName')):
            raise serializers.ValidationError('firstName or lastName is required')
        return attrs


class GuestSerializer(PersonSerializer):
    pass


class TherapistSerializer(PersonSerializer):
    priority = serializers.IntegerField(min_value=1, max_value=10, required=False)
    serviceIds = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)


class AvatarSerializer(serializers.Serializer):
    avatar = serializers.FileField()

    def validate_avatar(self, f):
        if not (getattr(f, 'content_type', '') or '').startswith('image/'):
            raise serializers.ValidationError('Avatar must be an image')
        if f.size > settings.AVATAR_MAX_BYTES:
            raise serializers.ValidationError(f'Avatar exceeds {settings.AVATAR_MAX_BYTES} bytes')
        return f
