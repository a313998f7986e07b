"""
Database models for the spa reservation backend.

The schema covers accounts and their roles, the administrative master
data (categories, currencies, countries, cities, languages, taxes,
configuration, opening hours) and the operational records of the spa:
rooms, services, guests, therapists and bookings.  Field names follow
Django conventions; the camelCase names used by the admin front-end are
produced by the service layer.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class AccessRight(models.Model):
    """A named permission scoped to an application module."""
    name = models.CharField(max_length=100)
    app_name = models.CharField(max_length=100)

    class Meta:
        unique_together = [('name', 'app_name')]

    def __str__(self) -> str:
        return f"{self.app_name}:{self.name}"


class Role(models.Model):
    name = models.CharField(max_length=100, unique=True)
    rights = models.ManyToManyField(AccessRight, related_name='roles', blank=True)

    def __str__(self) -> str:
        return self.name


class User(AbstractUser):
    """Back-office account.

    ``username`` is exposed to clients as ``loginId``.  A ``LOCKED``
    account keeps its data but can neither log in nor use a token that
    was issued before it was locked.
    """
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_LOCKED = 'LOCKED'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_LOCKED, 'Locked'),
    ]
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    last_login_from = models.CharField(max_length=64, blank=True)
    roles = models.ManyToManyField(Role, related_name='accounts', blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def has_role(self, *names: str) -> bool:
        return self.roles.filter(name__in=names).exists()

    def __str__(self) -> str:
        return f"{self.username} ({self.status})"


class Configuration(models.Model):
    """Free-form key/value setting, optionally grouped by ``app``."""
    name = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True, default='')
    app = models.CharField(max_length=50, blank=True, null=True)

    def __str__(self) -> str:
        return self.name


class Color(models.Model):
    name = models.CharField(max_length=50)
    hex_code = models.CharField(max_length=6)
    text_color = models.CharField(max_length=6, default='ffffff')

    def __str__(self) -> str:
        return f"{self.name} (#{self.hex_code})"


class Category(models.Model):
    name = models.CharField(max_length=255)
    parent_id = models.PositiveIntegerField(default=0)
    status = models.BooleanField(default=False)
    color = models.ForeignKey(Color, null=True, blank=True, on_delete=models.SET_NULL, related_name='categories')

    def __str__(self) -> str:
        return self.name


class Currency(models.Model):
    code = models.CharField(max_length=3, unique=True)
    name = models.CharField(max_length=100)
    symbol = models.CharField(max_length=10)
    is_base = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.code


class Country(models.Model):
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=3, unique=True)
    top_pulldown = models.BooleanField(default=False)
    # Only one country may carry the flag at a time
    is_default = models.BooleanField(default=False, db_index=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class City(models.Model):
    name = models.CharField(max_length=100)
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name='cities')
    # Exclusive per country
    is_default = models.BooleanField(default=False)

    class Meta:
        indexes = [
            models.Index(fields=['country', 'is_default'], name='city_country_default_idx'),
        ]

    def __str__(self) -> str:
        return self.name


class Language(models.Model):
    id = models.CharField(max_length=5, primary_key=True, help_text="ISO code, e.g. 'en'")
    name = models.CharField(max_length=100)
    available = models.BooleanField(default=False)
    available_guests = models.BooleanField(default=False)
    available_reservations = models.BooleanField(default=False)
    is_default = models.BooleanField(default=False, db_index=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Tax(models.Model):
    code = models.CharField(max_length=20, unique=True)
    description = models.CharField(max_length=255, blank=True, null=True)
    tax1 = models.DecimalField(max_digits=7, decimal_places=3, null=True, blank=True)
    tax1_text = models.CharField(max_length=50, blank=True, null=True)
    tax2 = models.DecimalField(max_digits=7, decimal_places=3, null=True, blank=True)
    tax2_text = models.CharField(max_length=50, blank=True, null=True)
    tax2_on1 = models.BooleanField(default=False)
    real = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.code


class WorkTimeDay(models.Model):
    """Regular opening hours of one weekday (0 = Sunday), in seconds since midnight."""
    weekday = models.PositiveSmallIntegerField(unique=True)
    start_time = models.PositiveIntegerField()
    end_time = models.PositiveIntegerField()

    def __str__(self) -> str:
        return f"day {self.weekday}: {self.start_time}-{self.end_time}"


class WorkTimeDate(models.Model):
    """Opening hours override for a specific calendar date."""
    work_date = models.DateField(unique=True)
    start_time = models.PositiveIntegerField()
    end_time = models.PositiveIntegerField()
    closed = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.work_date:%F}: {self.start_time}-{self.end_time}"


class Attribute(models.Model):
    """Custom field definition attachable to guests and therapists."""
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, default='text')

    def __str__(self) -> str:
        return self.name


class Service(models.Model):
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name='services')
    currency = models.ForeignKey(Currency, on_delete=models.PROTECT, related_name='services')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    duration = models.PositiveIntegerField(default=0, help_text="Minutes")
    pre_duration = models.PositiveIntegerField(default=0)
    post_duration = models.PositiveIntegerField(default=0)
    space = models.PositiveIntegerField(default=1)
    therapist_type = models.CharField(max_length=10, default='1')
    room_type = models.CharField(max_length=10, default='1')
    active = models.BooleanField(default=True, db_index=True)
    variable_time = models.BooleanField(default=False)
    variable_price = models.BooleanField(default=False)
    minimal_time = models.PositiveIntegerField(default=5)
    maximal_time = models.PositiveIntegerField(default=0)
    time_unit = models.PositiveIntegerField(default=5)
    quick_booking = models.BooleanField(default=False, help_text="Offered as a one-click booking")
    deleted = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Room(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    priority = models.PositiveSmallIntegerField(default=5)
    active = models.BooleanField(default=True, db_index=True)
    deleted = models.BooleanField(default=False, db_index=True)
    services = models.ManyToManyField(Service, related_name='rooms', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Guest(models.Model):
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    first_letter = models.CharField(max_length=1, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class GuestAttribute(models.Model):
    guest = models.ForeignKey(Guest, on_delete=models.CASCADE, related_name='attributes')
    attribute = models.ForeignKey(Attribute, on_delete=models.CASCADE, related_name='guest_values')
    value = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        unique_together = [('guest', 'attribute')]


class Therapist(models.Model):
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    first_letter = models.CharField(max_length=1, blank=True, db_index=True)
    priority = models.PositiveSmallIntegerField(default=5)
    services = models.ManyToManyField(Service, related_name='therapists', blank=True)
    avatar = models.FileField(upload_to='therapists/', blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class TherapistAttribute(models.Model):
    therapist = models.ForeignKey(Therapist, on_delete=models.CASCADE, related_name='attributes')
    attribute = models.ForeignKey(Attribute, on_delete=models.CASCADE, related_name='therapist_values')
    value = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        unique_together = [('therapist', 'attribute')]


class Booking(models.Model):
    """A reserved treatment slot.

    Rooms and services are soft-deleted so their bookings always keep a
    valid reference.  Guests and therapists are hard-deleted; past
    bookings then keep their history with the reference cleared.
    """
    date = models.DateField(db_index=True)
    time = models.TimeField()
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='bookings')
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='bookings')
    guest = models.ForeignKey(Guest, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    therapist = models.ForeignKey(Therapist, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    comment = models.TextField(blank=True, null=True)
    duration = models.PositiveIntegerField(default=0)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    pre_duration = models.PositiveIntegerField(default=0)
    post_duration = models.PositiveIntegerField(default=0)
    confirmed = models.BooleanField(default=False)
    cancelled = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['room', 'date'], name='booking_room_date_idx'),
            models.Index(fields=['therapist', 'date'], name='booking_therapist_date_idx'),
            models.Index(fields=['guest', 'date'], name='booking_guest_date_idx'),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.id} {self.date:%F} {self.time:%H:%M}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
