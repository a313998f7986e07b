# core/management/commands/seed_data.py
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import (
    AccessRight,
    Category,
    Color,
    Currency,
    Guest,
    Language,
    Role,
    Room,
    Service,
    Therapist,
    User,
)

ACCESS_RIGHTS = [
    ("Add Reservations", "reservations"),
    ("Edit Reservations", "reservations"),
    ("Delete Reservations", "reservations"),
    ("View Statistic", "reservations"),
    ("Add Guest", "guests"),
    ("Edit Guest", "guests"),
    ("Delete Guest", "guests"),
    ("Add Service", "services"),
    ("Edit Service", "services"),
    ("Delete Service", "services"),
    ("Add Room", "rooms"),
    ("Edit Room", "rooms"),
    ("Delete Room", "rooms"),
    ("Add Therapist", "therapists"),
    ("Edit Therapist", "therapists"),
    ("Delete Therapist", "therapists"),
]


class Command(BaseCommand):
    help = "Create the initial admin account and default reference data (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="admin123", help="Password for a newly created admin account")

    @transaction.atomic
    def handle(self, *args, **opts):
        admin_role, _ = Role.objects.get_or_create(name="admin")
        Role.objects.get_or_create(name="user")
        rights = [AccessRight.objects.get_or_create(name=n, app_name=a)[0] for n, a in ACCESS_RIGHTS]
        admin_role.rights.add(*rights)
        self.stdout.write(self.style.SUCCESS(f"ok: roles and {len(rights)} access rights"))

        admin, created = User.objects.get_or_create(
            username="admin",
            defaults={"first_name": "Admin", "last_name": "User", "status": User.STATUS_ACTIVE},
        )
        if created:
            admin.set_password(opts["password"])
            admin.save(update_fields=["password"])
        admin.roles.add(admin_role)
        self.stdout.write(self.style.SUCCESS(f"ok: admin account ({'created' if created else 'exists'})"))

        usd, _ = Currency.objects.get_or_create(code="USD", defaults={"name": "US Dollar", "symbol": "$", "is_base": True})
        blue, _ = Color.objects.get_or_create(name="Blue", defaults={"hex_code": "007bff", "text_color": "ffffff"})
        category, _ = Category.objects.get_or_create(
            name="General Services", defaults={"parent_id": 0, "status": True, "color": blue},
        )
        room, _ = Room.objects.get_or_create(
            name="Room 1", deleted=False, defaults={"description": "Default room", "priority": 5, "active": True},
        )
        service, _ = Service.objects.get_or_create(
            name="General Service",
            deleted=False,
            defaults={
                "category": category,
                "currency": usd,
                "description": "Default service",
                "price": Decimal("50.00"),
                "duration": 60,
                "quick_booking": True,
            },
        )
        room.services.add(service)

        Guest.objects.get_or_create(first_name="John", last_name="Doe", defaults={"first_letter": "D"})
        therapist, _ = Therapist.objects.get_or_create(
            first_name="Jane", last_name="Smith", defaults={"first_letter": "S", "priority": 5},
        )
        therapist.services.add(service)

        language, created = Language.objects.get_or_create(
            id="en",
            defaults={
                "name": "English",
                "available": True,
                "available_guests": True,
                "available_reservations": True,
                "is_default": True,
            },
        )
        if created:
            Language.objects.exclude(pk=language.pk).update(is_default=False)

        self.stdout.write(self.style.SUCCESS("Default reference data ensured."))
