from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from app.models import Booking, BookingStatus
from app.schemas import BillingSummary


def summarize_bookings(rows: Iterable[Mapping[str, Any]]) -> BillingSummary:
    """
    Fold booking rows into revenue aggregates.

    Every row counts towards the all-time totals; COMPLETED bookings are
    realised revenue and CONFIRMED ones are still pending.
    """
    summary = BillingSummary()
    for row in rows:
        amount = float(row["total_amount"] or 0)
        summary.all_time_revenue += amount
        summary.all_time_vat += float(row["vat"] or 0)
        summary.all_time_service_charge += float(row["service_charge"] or 0)

        if row["status"] == BookingStatus.COMPLETED:
            summary.completed_revenue += amount
        elif row["status"] == BookingStatus.CONFIRMED:
            summary.pending_revenue += amount
    return summary


class BillingService:
    async def get_revenue_summary(self, hotel_id: UUID) -> BillingSummary:
        rows = await Booking.filter(hotel_id=hotel_id).values(
            "total_amount", "vat", "service_charge", "status"
        )
        return summarize_bookings(rows)


billing_service = BillingService()
