"""
Billing summary: the pure aggregation and the billing.getSummary procedure.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, patch

from app.models import BookingStatus
from app.schemas import BillingSummary
from app.services.billing import billing_service, summarize_bookings

from .factories import (
    HOTEL_ID,
    create_booking,
    create_hotel,
    create_customer,
    create_venue,
    make_owner,
)

SERVICE_PATH = "app.routers.billing.billing_service"


def _row(total, vat, service_charge, status) -> dict:
    return dict(
        total_amount=Decimal(total),
        vat=Decimal(vat),
        service_charge=Decimal(service_charge),
        status=status,
    )


class TestSummarizeBookings:
    def test_completed_and_confirmed_split(self):
        summary = summarize_bookings(
            [
                _row("100", "10", "5", BookingStatus.COMPLETED),
                _row("50", "5", "2", BookingStatus.CONFIRMED),
            ]
        )
        assert summary.all_time_revenue == 150
        assert summary.all_time_vat == 15
        assert summary.all_time_service_charge == 7
        assert summary.completed_revenue == 100
        assert summary.pending_revenue == 50

    def test_no_bookings_is_all_zero(self):
        summary = summarize_bookings([])
        assert summary == BillingSummary()
        assert summary.all_time_revenue == 0.0

    def test_other_statuses_only_count_all_time(self):
        summary = summarize_bookings(
            [
                _row("80", "8", "4", BookingStatus.CANCELLED),
                _row("20", "2", "1", BookingStatus.INQUIRY),
            ]
        )
        assert summary.all_time_revenue == 100
        assert summary.completed_revenue == 0
        assert summary.pending_revenue == 0

    def test_null_amounts_are_treated_as_zero(self):
        summary = summarize_bookings(
            [dict(total_amount=None, vat=None, service_charge=None, status="INQUIRY")]
        )
        assert summary.all_time_revenue == 0.0


class TestRevenueSummaryService:
    async def test_aggregates_only_own_hotel(self, db):
        hotel = await create_hotel()
        other_hotel = await create_hotel()
        customer = await create_customer(hotel)
        venue = await create_venue(hotel)
        other_venue = await create_venue(other_hotel)

        await create_booking(
            venue, customer, total_amount=Decimal("100"), status=BookingStatus.COMPLETED
        )
        await create_booking(
            other_venue,
            customer,
            total_amount=Decimal("999"),
            status=BookingStatus.COMPLETED,
        )

        summary = await billing_service.get_revenue_summary(hotel.id)
        assert summary.all_time_revenue == 100
        assert summary.completed_revenue == 100


class TestGetSummaryProcedure:
    def test_returns_camel_case_fields(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.get_revenue_summary = AsyncMock(
                return_value=BillingSummary(all_time_revenue=150, pending_revenue=50)
            )
            resp = owner_client.get("/rpc/billing.getSummary")
        assert resp.status_code == 200
        assert resp.json() == {
            "allTimeRevenue": 150.0,
            "allTimeVat": 0.0,
            "allTimeServiceCharge": 0.0,
            "completedRevenue": 0.0,
            "pendingRevenue": 50.0,
        }
        mock_service.get_revenue_summary.assert_awaited_once_with(HOTEL_ID)

    def test_session_without_hotel_is_401_before_any_query(self, client_factory):
        client = client_factory(make_owner(hotel_id=None))
        with patch(SERVICE_PATH) as mock_service:
            mock_service.get_revenue_summary = AsyncMock()
            resp = client.get("/rpc/billing.getSummary")
        assert resp.status_code == 401
        assert resp.json()["code"] == "UNAUTHORIZED"
        mock_service.get_revenue_summary.assert_not_awaited()

    def test_customer_without_hotel_is_401(self, customer_client):
        resp = customer_client.get("/rpc/billing.getSummary")
        assert resp.status_code == 401

    def test_anonymous_is_401(self, anon_client):
        resp = anon_client.get("/rpc/billing.getSummary")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "You must be signed in"

