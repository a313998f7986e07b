import html

import bleach
from rest_framework import serializers


class CleanCharField(serializers.CharField):
    """CharField that strips markup from free-text input.

    The stored value is plain text; bleach's entity escaping is undone so
    ``&`` and friends survive a round trip and stay searchable.
    """

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return html.unescape(bleach.clean(value, tags=set(), strip=True))
