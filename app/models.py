from decimal import Decimal
from enum import StrEnum

from tortoise import fields
from tortoise.models import Model

from app.roles import UserRole


class BookingStatus(StrEnum):
    INQUIRY = "INQUIRY"  # default for new requests, does not block the venue
    TENTATIVE = "TENTATIVE"  # soft hold
    CONFIRMED = "CONFIRMED"  # accepted, revenue still pending
    COMPLETED = "COMPLETED"  # event took place, revenue realised
    CANCELLED = "CANCELLED"
    CONFLICT = "CONFLICT"  # overlaps another booking, see conflict_id


class TaxStrategy(StrEnum):
    STANDARD = "STANDARD"  # VAT on the base price only
    COMPOUND = "COMPOUND"  # VAT on base price + service charge


class CustomerType(StrEnum):
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"


class AbstractModel(Model):
    id = fields.UUIDField(primary_key=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:  # type: ignore
        abstract = True


class Hotel(AbstractModel):
    name = fields.CharField(max_length=256)
    subdomain = fields.CharField(max_length=64, unique=True)
    address = fields.TextField(null=True)
    description = fields.TextField(null=True)
    owner_id = fields.UUIDField(null=True)

    tax_strategy = fields.CharEnumField(TaxStrategy, default=TaxStrategy.STANDARD)
    vat_rate = fields.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("15.00")
    )  # %
    service_charge_rate = fields.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("10.00")
    )  # %
    currency = fields.CharField(max_length=3, default="ETB")
    allow_capacity_override = fields.BooleanField(default=False)

    # Marketplace visibility
    is_verified = fields.BooleanField(default=False)
    is_deactivated = fields.BooleanField(default=False)
    deactivated_at = fields.DatetimeField(null=True)

    updated_at = fields.DatetimeField(auto_now=True)

    venues: fields.ReverseRelation["Venue"]
    bookings: fields.ReverseRelation["Booking"]
    users: fields.ReverseRelation["User"]
    customers: fields.ReverseRelation["Customer"]

    class Meta:  # type: ignore
        table = "hotels"


class User(AbstractModel):
    name = fields.CharField(max_length=256)
    email = fields.CharField(max_length=320, unique=True)
    password_hash = fields.CharField(max_length=255, null=True)  # staff may be invited
    role = fields.CharEnumField(UserRole, default=UserRole.CUSTOMER)
    is_onboarded = fields.BooleanField(default=False)

    hotel: fields.ForeignKeyNullableRelation[Hotel] = fields.ForeignKeyField(
        "models.Hotel", related_name="users", null=True, on_delete=fields.SET_NULL
    )

    notifications: fields.ReverseRelation["Notification"]

    class Meta:  # type: ignore
        table = "users"
        ordering = ["-created_at"]


class Customer(AbstractModel):
    """A hotel's client of record. Not a login account."""

    hotel: fields.ForeignKeyRelation[Hotel] = fields.ForeignKeyField(
        "models.Hotel", related_name="customers", on_delete=fields.CASCADE
    )
    company_name = fields.CharField(max_length=256)
    contact_name = fields.CharField(max_length=256, null=True)
    email = fields.CharField(max_length=320, null=True)
    phone = fields.CharField(max_length=32, null=True)
    tin_number = fields.CharField(max_length=32, null=True)
    type = fields.CharEnumField(CustomerType, default=CustomerType.INDIVIDUAL)
    updated_at = fields.DatetimeField(auto_now=True)

    bookings: fields.ReverseRelation["Booking"]

    class Meta:  # type: ignore
        table = "customers"
        ordering = ["-created_at"]


class Venue(AbstractModel):
    hotel: fields.ForeignKeyRelation[Hotel] = fields.ForeignKeyField(
        "models.Hotel", related_name="venues", on_delete=fields.CASCADE
    )
    name = fields.CharField(max_length=256)
    slug = fields.CharField(max_length=300, unique=True)
    description = fields.TextField(null=True)
    base_price = fields.DecimalField(max_digits=12, decimal_places=2, null=True)

    capacity_banquet = fields.IntField(null=True)
    capacity_theater = fields.IntField(null=True)
    capacity_reception = fields.IntField(null=True)
    capacity_ushape = fields.IntField(null=True)

    is_active = fields.BooleanField(default=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:  # type: ignore
        table = "venues"
        ordering = ["-created_at"]

    @property
    def max_capacity(self) -> int:
        return max(
            self.capacity_banquet or 0,
            self.capacity_theater or 0,
            self.capacity_reception or 0,
            self.capacity_ushape or 0,
        )


class Booking(AbstractModel):
    hotel: fields.ForeignKeyRelation[Hotel] = fields.ForeignKeyField(
        "models.Hotel", related_name="bookings", on_delete=fields.CASCADE
    )
    venue: fields.ForeignKeyRelation[Venue] = fields.ForeignKeyField(
        "models.Venue", related_name="bookings", on_delete=fields.CASCADE
    )
    customer: fields.ForeignKeyRelation["Customer"] = fields.ForeignKeyField(
        "models.Customer", related_name="bookings", on_delete=fields.CASCADE
    )
    created_by: fields.ForeignKeyNullableRelation[User] = fields.ForeignKeyField(
        "models.User",
        related_name="created_bookings",
        null=True,
        on_delete=fields.SET_NULL,
    )

    booking_number = fields.CharField(max_length=32)
    event_name = fields.CharField(max_length=256)
    event_type = fields.CharField(max_length=64, null=True)
    start_time = fields.DatetimeField()
    end_time = fields.DatetimeField()
    guest_count = fields.IntField()

    # Pricing snapshot at booking time
    base_price = fields.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    service_charge = fields.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    vat = fields.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = fields.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    currency = fields.CharField(max_length=3, default="ETB")

    status = fields.CharEnumField(BookingStatus, default=BookingStatus.INQUIRY)
    conflict_id = fields.UUIDField(null=True)
    notes = fields.TextField(null=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:  # type: ignore
        table = "bookings"
        ordering = ["-start_time"]


class Notification(AbstractModel):
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="notifications", on_delete=fields.CASCADE
    )
    title = fields.CharField(max_length=256)
    message = fields.TextField(null=True)
    is_read = fields.BooleanField(default=False)

    class Meta:  # type: ignore
        table = "notifications"
        ordering = ["-created_at"]
