"""Input serializers for the administration endpoints."""
from rest_framework import serializers

from core.models import User
from .fields import CleanCharField


class UserSerializer(serializers.Serializer):
    loginId = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, max_length=128, write_only=True, trim_whitespace=False)
    firstName = CleanCharField(max_length=150, required=False, allow_blank=True)
    lastName = CleanCharField(max_length=150, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=[c for c, _ in User.STATUS_CHOICES], required=False)
    roleIds = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)

    def validate_loginId(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError('Login ID is required')
        return v


class CategorySerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    parentId = serializers.IntegerField(min_value=0, required=False)
    status = serializers.BooleanField(required=False)
    colorId = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class CurrencySerializer(serializers.Serializer):
    code = serializers.RegexField(r'^[A-Za-z]{3}$', max_length=3)
    name = CleanCharField(max_length=100)
    symbol = serializers.CharField(max_length=10)
    isBase = serializers.BooleanField(required=False)

    def validate_code(self, v):
        return v.upper()


class RoleSerializer(serializers.Serializer):
    name = CleanCharField(max_length=100)
    rightIds = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)


class AccessRightSerializer(serializers.Serializer):
    name = CleanCharField(max_length=100)
    appName = CleanCharField(max_length=100)


class CountrySerializer(serializers.Serializer):
    name = CleanCharField(max_length=100)
    code = serializers.RegexField(r'^[A-Za-z]{2,3}$', max_length=3)
    topPulldown = serializers.BooleanField(required=False)
    isDefault = serializers.BooleanField(required=False)

    def validate_code(self, v):
        return v.upper()


class CitySerializer(serializers.Serializer):
    name = CleanCharField(max_length=100)
    country = serializers.IntegerField(min_value=1)
    isDefault = serializers.BooleanField(required=False)


class LanguageSerializer(serializers.Serializer):
    id = serializers.RegexField(r'^[A-Za-z]{2}([-_][A-Za-z]{2})?$', max_length=5)
    name = CleanCharField(max_length=100)
    available = serializers.BooleanField(required=False)
    availableGuests = serializers.BooleanField(required=False)
    availableReservations = serializers.BooleanField(required=False)
    isDefault = serializers.BooleanField(required=False)


class TaxSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20)
    description = CleanCharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    tax1 = serializers.DecimalField(max_digits=7, decimal_places=3, required=False, allow_null=True)
    tax1Text = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    tax2 = serializers.DecimalField(max_digits=7, decimal_places=3, required=False, allow_null=True)
    tax2Text = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    tax2On1 = serializers.BooleanField(required=False)
    real = serializers.BooleanField(required=False)


CONFIG_NAME_PATTERN = r"^[\w.\-]+$"


class ConfigItemSerializer(serializers.Serializer):
    name = serializers.RegexField(CONFIG_NAME_PATTERN, max_length=100)
    value = serializers.CharField(allow_blank=True, trim_whitespace=False)
    app = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class ConfigValueSerializer(serializers.Serializer):
    value = serializers.CharField(allow_blank=True, trim_whitespace=False)
    app = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class ConfigBulkSerializer(serializers.Serializer):
    """``{name: value}`` mapping; values are stored as text.

    Names follow the same rule as single items so each one stays
    addressable at ``config/<name>``.
    """

    def to_internal_value(self, data):
        if not isinstance(data, dict) or not data:
            raise serializers.ValidationError({'non_field_errors': ['Expected a non-empty object of name/value pairs']})
        out = {}
        errors = {}
        name_field = serializers.RegexField(CONFIG_NAME_PATTERN, max_length=100)
        for name, value in data.items():
            try:
                name_field.run_validation(name)
            except serializers.ValidationError as e:
                errors[name] = e.detail
                continue
            if isinstance(value, (dict, list)):
                errors[name] = ['Value must be a scalar']
                continue
            if isinstance(value, bool):
                value = 'Y' if value else 'N'
            out[name] = '' if value is None else str(value)
        if errors:
            raise serializers.ValidationError(errors)
        return out


SECONDS_PER_DAY = 24 * 60 * 60


class OpeningDaySerializer(serializers.Serializer):
    weekday = serializers.IntegerField(min_value=0, max_value=6)
    startTime = serializers.IntegerField(min_value=0, max_value=SECONDS_PER_DAY)
    endTime = serializers.IntegerField(min_value=0, max_value=SECONDS_PER_DAY)
    enabled = serializers.BooleanField(default=True)

    def validate(self, attrs):
        if attrs['enabled'] and attrs['endTime'] <= attrs['startTime']:
            raise serializers.ValidationError('endTime must be later than startTime')
        return attrs


class OpeningHoursSerializer(serializers.Serializer):
    days = OpeningDaySerializer(many=True)

    def validate_days(self, days):
        weekdays = [d['weekday'] for d in days]
        if len(weekdays) != len(set(weekdays)):
            raise serializers.ValidationError('Each weekday may appear only once')
        return days


class DateRangeSerializer(serializers.Serializer):
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('startDate'), attrs.get('endDate')
        if start and end and end < start:
            raise serializers.ValidationError('endDate must not precede startDate')
        return attrs
