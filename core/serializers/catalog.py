"""Input serializers for rooms and bookable services."""
from rest_framework import serializers

from .fields import CleanCharField


class RoomSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    description = CleanCharField(required=False, allow_blank=True, allow_null=True)
    priority = serializers.IntegerField(min_value=1, max_value=10, required=False)
    active = serializers.BooleanField(required=False)


class RoomServiceLinkSerializer(serializers.Serializer):
    serviceId = serializers.IntegerField(min_value=1)


class ServiceSerializer(serializers.Serializer):
    categoryId = serializers.IntegerField(min_value=1)
    currencyId = serializers.IntegerField(min_value=1)
    name = CleanCharField(max_length=255)
    description = CleanCharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    duration = serializers.IntegerField(min_value=0, required=False)
    preDuration = serializers.IntegerField(min_value=0, required=False)
    postDuration = serializers.IntegerField(min_value=0, required=False)
    space = serializers.IntegerField(min_value=1, required=False)
    therapistType = serializers.CharField(max_length=10, required=False)
    roomType = serializers.CharField(max_length=10, required=False)
    active = serializers.BooleanField(required=False)
    variableTime = serializers.BooleanField(required=False)
    variablePrice = serializers.BooleanField(required=False)
    minimalTime = serializers.IntegerField(min_value=0, required=False)
    maximalTime = serializers.IntegerField(min_value=0, required=False)
    timeUnit = serializers.IntegerField(min_value=1, required=False)
    quickBooking = serializers.BooleanField(required=False)

    def validate(self, attrs):
        lo, hi = attrs.get('minimalTime'), attrs.get('maximalTime')
        if lo is not None and hi and hi < lo:
            raise serializers.ValidationError('maximalTime must not be below minimalTime')
        return attrs
