"""
URL mappings for the spa reservation API.

Trailing slashes are deliberately omitted; the front-end calls paths
such as ``/api/rooms/3`` exactly.
"""
from django.urls import path, include

from .auth_views import login_view, me_view, jwt_refresh_view, jwt_logout_view
from .views import bookings, config, people, reference, reservations, rooms, spa_services, users
from .views.dashboard import admin_dashboard
from .views.health import health


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('api/health', health, name='health'),

    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/me', me_view, name='me_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout_view'),

    # Administration
    path('api/admin/dashboard', admin_dashboard, name='admin_dashboard'),
    path('api/admin/config', config.config_collection, name='config'),
    path('api/admin/config/<str:name>', config.config_item, name='config_item'),
    path('api/admin/opening-hours', config.opening_hours, name='opening_hours'),
    path('api/admin/opening-hours/dates', config.opening_hours_dates, name='opening_hours_dates'),
    path('api/admin/colors', reference.colors, name='colors'),

    path('api/admin/users', users.users, name='users'),
    path('api/admin/users/<int:pk>', users.user_detail, name='user_detail'),
    path('api/admin/roles', users.roles, name='roles'),
    path('api/admin/roles/<int:pk>', users.role_detail, name='role_detail'),
    path('api/admin/rights', users.rights, name='rights'),
    path('api/admin/rights/<int:pk>', users.right_detail, name='right_detail'),

    path('api/admin/categories', reference.categories, name='categories'),
    path('api/admin/categories/<int:pk>', reference.category_detail, name='category_detail'),
    path('api/admin/currencies', reference.currencies, name='currencies'),
    path('api/admin/currencies/<int:pk>', reference.currency_detail, name='currency_detail'),
    path('api/admin/countries', reference.countries, name='countries'),
    path('api/admin/countries/<int:pk>', reference.country_detail, name='country_detail'),
    path('api/admin/cities', reference.cities, name='cities'),
    path('api/admin/cities/<int:pk>', reference.city_detail, name='city_detail'),
    path('api/admin/languages', reference.languages, name='languages'),
    path('api/admin/languages/<str:pk>', reference.language_detail, name='language_detail'),
    path('api/admin/taxes', reference.taxes, name='taxes'),
    path('api/admin/taxes/<int:pk>', reference.tax_detail, name='tax_detail'),

    # Operations
    path('api/rooms', rooms.rooms, name='rooms'),
    path('api/rooms/<int:pk>', rooms.room_detail, name='room_detail'),
    path('api/rooms/<int:pk>/services', rooms.room_services, name='room_services'),
    path('api/rooms/<int:pk>/services/<int:service_id>', rooms.room_service_detail, name='room_service_detail'),
    path('api/services', spa_services.services, name='services'),
    path('api/services/<int:pk>', spa_services.service_detail, name='service_detail'),
    path('api/guests', people.guests, name='guests'),
    path('api/guests/<int:pk>', people.guest_detail, name='guest_detail'),
    path('api/therapists', people.therapists, name='therapists'),
    path('api/therapists/<int:pk>', people.therapist_detail, name='therapist_detail'),
    path('api/therapists/<int:pk>/avatar', people.therapist_avatar, name='therapist_avatar'),
    path('api/bookings', bookings.bookings, name='bookings'),
    path('api/bookings/<int:pk>', bookings.booking_detail, name='booking_detail'),

    path('api/reservations', reservations.overview, name='reservations'),
    path('api/reservations/overview', reservations.overview, name='reservations_overview'),
    path('api/reservations/quick-booking', reservations.quick_booking, name='reservations_quick_booking'),
    path('api/reservations/rooms', reservations.rooms, name='reservations_rooms'),
    path('api/reservations/therapists', reservations.therapists, name='reservations_therapists'),
    path('api/reservations/calendar', reservations.calendar, name='reservations_calendar'),
]
