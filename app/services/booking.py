from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from loguru import logger

from app.errors import BadRequest, NotFound, PreconditionFailed
from app.models import Booking, BookingStatus, Customer, TaxStrategy, Venue
from app.schemas import BookingCreate, BookingResponse, BookingUpdate
from app.services.notification import notification_service

_CENT = Decimal("0.01")

# Statuses that never hold a venue slot
_NON_BLOCKING = [BookingStatus.CANCELLED, BookingStatus.INQUIRY]
_TERMINAL = {BookingStatus.COMPLETED, BookingStatus.CANCELLED}

# Statuses that hold a slot outright; CONFLICT losers never block a status change
_HOLDING = [
    BookingStatus.TENTATIVE,
    BookingStatus.CONFIRMED,
    BookingStatus.COMPLETED,
]

# Nullable columns an update may clear by sending null
_CLEARABLE = {"event_type", "notes"}


@dataclass(frozen=True)
class Pricing:
    base_price: Decimal
    service_charge: Decimal
    vat: Decimal
    total_amount: Decimal


def _q(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def compute_pricing(
    base_price: Decimal,
    service_charge_rate: Decimal,
    vat_rate: Decimal,
    strategy: TaxStrategy,
) -> Pricing:
    """
    Snapshot pricing for a booking. Rates are percentages.

    STANDARD charges VAT on the base price, COMPOUND on base + service charge.
    """
    base_price = Decimal(base_price)
    service_charge = base_price * Decimal(service_charge_rate) / 100

    taxable = base_price
    if strategy == TaxStrategy.COMPOUND:
        taxable += service_charge

    vat = taxable * Decimal(vat_rate) / 100
    return Pricing(
        base_price=_q(base_price),
        service_charge=_q(service_charge),
        vat=_q(vat),
        total_amount=_q(base_price + service_charge + vat),
    )


def next_booking_number() -> str:
    return f"BK-{int(time.time() * 1000) % 1_000_000:06d}"


class BookingService:
    async def find_conflict(
        self,
        venue_id: UUID,
        start: datetime,
        end: datetime,
        exclude_id: UUID | None = None,
        holding_only: bool = False,
    ) -> Booking | None:
        """First blocking booking of the venue overlapping [start, end), if any."""
        qs = Booking.filter(
            venue_id=venue_id,
            start_time__lt=end,
            end_time__gt=start,
        ).exclude(status__in=_NON_BLOCKING)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if holding_only:
            qs = qs.filter(status__in=_HOLDING)
        return await qs.order_by("start_time").first()

    async def list_bookings(self, hotel_id: UUID) -> list[BookingResponse]:
        bookings = await Booking.filter(hotel_id=hotel_id).order_by("-start_time")
        return [BookingResponse.model_validate(b) for b in bookings]

    async def get_booking(
        self, booking_id: UUID, hotel_id: UUID
    ) -> BookingResponse | None:
        inst = await Booking.get_or_none(id=booking_id, hotel_id=hotel_id)
        if not inst:
            return None
        return BookingResponse.model_validate(inst)

    async def create_booking(
        self,
        payload: BookingCreate,
        hotel_id: UUID,
        created_by_id: UUID | None,
    ) -> BookingResponse:
        """
        Persist a booking for a venue of the caller's hotel:
          - guest count must fit the venue unless the hotel allows overrides
          - an overlapping blocking booking marks the new one as CONFLICT
          - prices are snapshotted from the hotel's current tax settings
        """
        venue = (
            await Venue.filter(id=payload.venue_id, hotel_id=hotel_id)
            .select_related("hotel")
            .first()
        )
        if venue is None:
            raise NotFound("Venue not found")
        hotel = venue.hotel

        if not await Customer.exists(id=payload.customer_id, hotel_id=hotel_id):
            raise NotFound("Customer not found")

        max_capacity = venue.max_capacity
        if (
            max_capacity > 0
            and payload.guest_count > max_capacity
            and not hotel.allow_capacity_override
        ):
            raise PreconditionFailed(
                f"Guest count {payload.guest_count} exceeds "
                f"venue capacity {max_capacity}"
            )

        status = BookingStatus.INQUIRY
        conflict_id = None
        conflict = await self.find_conflict(
            payload.venue_id, payload.start_time, payload.end_time
        )
        if conflict is not None:
            status = BookingStatus.CONFLICT
            conflict_id = conflict.id
            logger.info(
                "Booking for venue {} overlaps booking {}",
                payload.venue_id,
                conflict.id,
            )

        base_price = (
            payload.base_price
            if payload.base_price is not None
            else venue.base_price or Decimal("0")
        )
        pricing = compute_pricing(
            base_price,
            hotel.service_charge_rate,
            hotel.vat_rate,
            hotel.tax_strategy,
        )

        inst = await Booking.create(
            booking_number=next_booking_number(),
            hotel_id=hotel_id,
            venue_id=payload.venue_id,
            customer_id=payload.customer_id,
            created_by_id=created_by_id,
            event_name=payload.event_name,
            event_type=payload.event_type,
            start_time=payload.start_time,
            end_time=payload.end_time,
            guest_count=payload.guest_count,
            base_price=pricing.base_price,
            service_charge=pricing.service_charge,
            vat=pricing.vat,
            total_amount=pricing.total_amount,
            currency=hotel.currency,
            status=status,
            conflict_id=conflict_id,
            notes=payload.notes,
        )
        return BookingResponse.model_validate(inst)

    async def update_booking(
        self, payload: BookingUpdate, hotel_id: UUID
    ) -> BookingResponse:
        inst = await Booking.get_or_none(id=payload.id, hotel_id=hotel_id)
        if inst is None:
            raise NotFound("Booking not found")

        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True, exclude={"id"}).items()
            if v is not None or k in _CLEARABLE
        }
        start = changes.get("start_time", inst.start_time)
        end = changes.get("end_time", inst.end_time)
        if end <= start:
            raise BadRequest("end_time must be after start_time")

        retimed = "start_time" in changes or "end_time" in changes
        if retimed and inst.status not in _TERMINAL:
            conflict = await self.find_conflict(
                inst.venue_id, start, end, exclude_id=inst.id
            )
            if conflict is not None:
                changes["status"] = BookingStatus.CONFLICT
                changes["conflict_id"] = conflict.id
            elif inst.status == BookingStatus.CONFLICT:
                changes["status"] = BookingStatus.INQUIRY
                changes["conflict_id"] = None

        inst.update_from_dict(changes)
        await inst.save()
        return BookingResponse.model_validate(inst)

    async def update_status(
        self, booking_id: UUID, hotel_id: UUID, new_status: BookingStatus
    ) -> BookingResponse:
        inst = await Booking.get_or_none(id=booking_id, hotel_id=hotel_id)
        if inst is None:
            raise NotFound("Booking not found")

        old_status = inst.status
        if new_status in _HOLDING:
            # Another booking may have taken the slot since this one was made
            conflict = await self.find_conflict(
                inst.venue_id,  # type: ignore[attr-defined]
                inst.start_time,
                inst.end_time,
                exclude_id=inst.id,
                holding_only=True,
            )
            if conflict is not None:
                logger.info(
                    "Booking {} cannot become {}: slot held by {}",
                    inst.id,
                    new_status,
                    conflict.id,
                )
                new_status = BookingStatus.CONFLICT
                inst.conflict_id = conflict.id
            else:
                inst.conflict_id = None
        elif new_status != BookingStatus.CONFLICT:
            inst.conflict_id = None
        inst.status = new_status  # type: ignore
        await inst.save(update_fields=["status", "conflict_id", "updated_at"])

        if inst.created_by_id is not None:  # type: ignore[attr-defined]
            await notification_service.notify(
                inst.created_by_id,  # type: ignore[attr-defined]
                title=(
                    f"Booking {inst.booking_number} is now {new_status.value.lower()}"
                ),
                message=(
                    f"'{inst.event_name}' moved from {old_status} to {new_status}."
                ),
            )
        return BookingResponse.model_validate(inst)

    async def cancel(self, booking_id: UUID, hotel_id: UUID) -> BookingResponse:
        return await self.update_status(booking_id, hotel_id, BookingStatus.CANCELLED)


booking_service = BookingService()
