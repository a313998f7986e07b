from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    loginId = serializers.CharField(max_length=150)
    password = serializers.CharField(trim_whitespace=False)

    def validate_loginId(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Login ID is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
