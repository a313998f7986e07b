"""
Django admin registrations for the core models.

Superusers can inspect and correct data at ``/admin/`` during
development; the production front-end talks to the REST API only.
"""

from django.contrib import admin

from .models import (
    AccessRight,
    AuditEvent,
    Booking,
    Category,
    City,
    Color,
    Configuration,
    Country,
    Currency,
    Guest,
    Language,
    Role,
    Room,
    Service,
    Tax,
    Therapist,
    User,
    WorkTimeDate,
    WorkTimeDay,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'first_name', 'last_name', 'status', 'last_login', 'last_login_from')
    list_filter = ('status', 'roles')
    search_fields = ('username', 'first_name', 'last_name')
    filter_horizontal = ('roles',)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ('name',)
    filter_horizontal = ('rights',)


@admin.register(AccessRight)
class AccessRightAdmin(admin.ModelAdmin):
    list_display = ('name', 'app_name')
    list_filter = ('app_name',)


@admin.register(Configuration)
class ConfigurationAdmin(admin.ModelAdmin):
    list_display = ('name', 'value', 'app')
    list_filter = ('app',)
    search_fields = ('name',)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'parent_id', 'status', 'color')
    list_filter = ('status',)


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'is_default', 'top_pulldown')


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ('name', 'country', 'is_default')
    list_filter = ('country',)


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'currency', 'duration', 'quick_booking', 'active', 'deleted')
    list_filter = ('active', 'quick_booking', 'deleted', 'category')
    search_fields = ('name',)


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('name', 'priority', 'active', 'deleted')
    list_filter = ('active', 'deleted')
    filter_horizontal = ('services',)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'date', 'time', 'service', 'room', 'guest', 'therapist', 'confirmed', 'cancelled')
    list_filter = ('confirmed', 'cancelled', 'room')
    date_hierarchy = 'date'


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'action', 'object_type', 'object_id')
    list_filter = ('action', 'object_type')
    readonly_fields = ('created_at',)


admin.site.register([Color, Currency, Language, Tax, WorkTimeDay, WorkTimeDate, Guest, Therapist])
