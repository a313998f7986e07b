from rest_framework import serializers

from .fields import CleanCharField


class BookingSerializer(serializers.Serializer):
    date = serializers.DateField()
    time = serializers.TimeField()
    serviceId = serializers.IntegerField(min_value=1)
    roomId = serializers.IntegerField(min_value=1)
    guestId = serializers.IntegerField(min_value=1)
    therapistId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    comment = CleanCharField(required=False, allow_blank=True, allow_null=True)
    duration = serializers.IntegerField(min_value=1, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    preDuration = serializers.IntegerField(min_value=0, required=False)
    postDuration = serializers.IntegerField(min_value=0, required=False)
    confirmed = serializers.BooleanField(required=False)
    cancelled = serializers.BooleanField(required=False)


class ReservationQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    viewMode = serializers.ChoiceField(choices=('day', 'week', 'month'), required=False)
    roomId = serializers.IntegerField(min_value=1, required=False)
    therapistId = serializers.IntegerField(min_value=1, required=False)
    serviceId = serializers.IntegerField(min_value=1, required=False)
