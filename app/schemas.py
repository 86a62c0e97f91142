from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.models import BookingStatus, CustomerType, TaxStrategy
from app.roles import HOTEL_STAFF_ROLES, SELF_SIGN_UP_ROLES, UserRole


class IdInput(BaseModel):
    id: UUID


class CountResponse(BaseModel):
    count: int


# ---------------------------------------------------------------------------
# Auth / users
# ---------------------------------------------------------------------------


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=256)
    role: UserRole | None = None

    @field_validator("role")
    @classmethod
    def self_sign_up_role(cls, v: UserRole | None) -> UserRole | None:
        if v is not None and v not in SELF_SIGN_UP_ROLES:
            raise ValueError("role must be CUSTOMER or HOTEL_ADMIN")
        return v


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    hotel_id: UUID | None
    is_onboarded: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminUserResponse(UserResponse):
    hotel_name: str | None = None


class SessionUser(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    hotel_id: UUID | None
    is_onboarded: bool

    model_config = ConfigDict(from_attributes=True)


class SignInResponse(BaseModel):
    success: bool = True
    user: SessionUser
    subdomain: str | None = None


class SignUpResponse(BaseModel):
    success: bool = True
    user: UserResponse


class StaffCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    email: EmailStr
    role: UserRole

    @field_validator("role")
    @classmethod
    def staff_role(cls, v: UserRole) -> UserRole:
        if v not in HOTEL_STAFF_ROLES:
            raise ValueError("role must be a hotel staff role")
        return v


# ---------------------------------------------------------------------------
# Hotels
# ---------------------------------------------------------------------------


class HotelSetup(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    subdomain: str = Field(min_length=2, max_length=64, pattern=r"^[a-z0-9-]+$")
    address: str | None = None
    description: str | None = None
    tax_strategy: TaxStrategy = TaxStrategy.STANDARD
    vat_rate: Decimal | None = Field(default=None, ge=0, le=100)
    service_charge_rate: Decimal | None = Field(default=None, ge=0, le=100)
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class HotelSettingsUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    address: str | None = None
    description: str | None = None
    tax_strategy: TaxStrategy | None = None
    service_charge_rate: Decimal | None = Field(default=None, ge=0, le=100)
    vat_rate: Decimal | None = Field(default=None, ge=0, le=100)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    allow_capacity_override: bool | None = None


class HotelResponse(BaseModel):
    id: UUID
    name: str
    subdomain: str
    address: str | None
    description: str | None
    owner_id: UUID | None
    tax_strategy: TaxStrategy
    vat_rate: Decimal
    service_charge_rate: Decimal
    currency: str
    allow_capacity_override: bool
    is_verified: bool
    is_deactivated: bool
    deactivated_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Venues
# ---------------------------------------------------------------------------


class VenueCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None
    base_price: Decimal | None = Field(default=None, ge=0)
    capacity_banquet: int | None = Field(default=None, ge=0)
    capacity_theater: int | None = Field(default=None, ge=0)
    capacity_reception: int | None = Field(default=None, ge=0)
    capacity_ushape: int | None = Field(default=None, ge=0)


class VenueUpdate(BaseModel):
    id: UUID
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    base_price: Decimal | None = Field(default=None, ge=0)
    capacity_banquet: int | None = Field(default=None, ge=0)
    capacity_theater: int | None = Field(default=None, ge=0)
    capacity_reception: int | None = Field(default=None, ge=0)
    capacity_ushape: int | None = Field(default=None, ge=0)


class VenueResponse(BaseModel):
    id: UUID
    hotel_id: UUID
    name: str
    slug: str
    description: str | None
    base_price: Decimal | None
    capacity_banquet: int | None
    capacity_theater: int | None
    capacity_reception: int | None
    capacity_ushape: int | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublicVenueResponse(VenueResponse):
    hotel_name: str


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


class CustomerCreate(BaseModel):
    company_name: str = Field(min_length=1, max_length=256)
    contact_name: str | None = Field(default=None, max_length=256)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    tin_number: str | None = Field(default=None, max_length=32)
    type: CustomerType = CustomerType.INDIVIDUAL


class CustomerUpdate(BaseModel):
    id: UUID
    company_name: str | None = Field(default=None, min_length=1, max_length=256)
    contact_name: str | None = Field(default=None, max_length=256)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    tin_number: str | None = Field(default=None, max_length=32)
    type: CustomerType | None = None


class CustomerResponse(BaseModel):
    id: UUID
    hotel_id: UUID
    company_name: str
    contact_name: str | None
    email: str | None
    phone: str | None
    tin_number: str | None
    type: CustomerType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


def _require_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (include UTC offset)")
    return v.astimezone(timezone.utc)


class BookingCreate(BaseModel):
    venue_id: UUID
    customer_id: UUID
    event_name: str = Field(min_length=1, max_length=256)
    event_type: str | None = Field(default=None, max_length=64)
    start_time: datetime
    end_time: datetime
    guest_count: int = Field(ge=1)
    base_price: Decimal | None = Field(
        default=None, ge=0, description="Overrides the venue's default price"
    )
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time", mode="after")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        return _require_utc(v)

    @model_validator(mode="after")
    def validate_time_range(self) -> BookingCreate:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingUpdate(BaseModel):
    id: UUID
    event_name: str | None = Field(default=None, min_length=1, max_length=256)
    event_type: str | None = Field(default=None, max_length=64)
    start_time: datetime | None = None
    end_time: datetime | None = None
    guest_count: int | None = Field(default=None, ge=1)
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time", mode="after")
    @classmethod
    def require_timezone(cls, v: datetime | None) -> datetime | None:
        return _require_utc(v) if v is not None else None

    @model_validator(mode="after")
    def validate_time_range(self) -> BookingUpdate:
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingStatusUpdate(BaseModel):
    id: UUID
    status: BookingStatus


class BookingResponse(BaseModel):
    id: UUID
    hotel_id: UUID
    venue_id: UUID
    customer_id: UUID
    created_by_id: UUID | None
    booking_number: str
    event_name: str
    event_type: str | None
    start_time: datetime
    end_time: datetime
    guest_count: int
    base_price: Decimal
    service_charge: Decimal
    vat: Decimal
    total_amount: Decimal
    currency: str
    status: BookingStatus
    conflict_id: UUID | None
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Billing
# ---------------------------------------------------------------------------


class BillingSummary(BaseModel):
    """Serialized in camelCase for the dashboard client."""

    all_time_revenue: float = 0.0
    all_time_vat: float = 0.0
    all_time_service_charge: float = 0.0
    completed_revenue: float = 0.0
    pending_revenue: float = 0.0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    message: str | None
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
