"""
Hotel onboarding and settings: service on a real database, procedures with
the service patched.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.errors import Conflict, Forbidden, PreconditionFailed
from app.models import Hotel, User
from app.roles import UserRole
from app.schemas import HotelResponse, HotelSettingsUpdate, HotelSetup
from app.services.hotel import hotel_service

from .factories import (
    HOTEL_ID,
    OWNER_ID,
    create_hotel,
    create_user,
    hotel_response,
    make_customer,
    make_owner,
)

SERVICE_PATH = "app.routers.hotel.hotel_service"


class TestHotelService:
    async def test_setup_promotes_user(self, db):
        user = await create_user()
        hotel = await hotel_service.setup_hotel(
            user.id, HotelSetup(name="Grand", subdomain="grand")
        )

        await user.refresh_from_db()
        assert user.role == UserRole.HOTEL_ADMIN
        assert user.is_onboarded
        assert user.hotel_id == hotel.id
        assert hotel.owner_id == user.id
        assert hotel.vat_rate == Decimal("15.00")

    async def test_taken_subdomain_is_conflict(self, db):
        await create_hotel(subdomain="grand")
        user = await create_user()
        with pytest.raises(Conflict):
            await hotel_service.setup_hotel(
                user.id, HotelSetup(name="Grand", subdomain="grand")
            )
        assert await Hotel.all().count() == 1

    async def test_already_onboarded_is_precondition_failed(self, db):
        user = await create_user(is_onboarded=True)
        with pytest.raises(PreconditionFailed):
            await hotel_service.setup_hotel(
                user.id, HotelSetup(name="Grand", subdomain="grand")
            )

    async def test_update_settings_is_partial(self, db):
        hotel = await create_hotel(currency="ETB")
        result = await hotel_service.update_settings(
            hotel.id, HotelSettingsUpdate(vat_rate=Decimal("7.5"))
        )
        assert result.vat_rate == Decimal("7.50")
        assert result.currency == "ETB"

    async def test_update_settings_null_clears_address_only(self, db):
        hotel = await create_hotel(address="Bole Road", currency="ETB")
        result = await hotel_service.update_settings(
            hotel.id, HotelSettingsUpdate(address=None, currency=None)
        )
        assert result.address is None
        assert result.currency == "ETB"

    async def test_only_owner_can_deactivate(self, db):
        owner = await create_user()
        hotel = await create_hotel(owner_id=owner.id)
        staff = await create_user(role=UserRole.SALES, hotel=hotel)

        with pytest.raises(Forbidden):
            await hotel_service.deactivate(hotel.id, staff.id)

        result = await hotel_service.deactivate(hotel.id, owner.id)
        assert result.is_deactivated
        assert result.deactivated_at is not None
        # Soft delete only
        assert await Hotel.exists(id=hotel.id)
        assert await User.exists(id=staff.id)


class TestSetupProcedure:
    def test_refreshes_session(self, client_factory):
        caller = make_customer()
        client = client_factory(caller)
        with (
            patch(SERVICE_PATH) as mock_service,
            patch("app.routers.hotel.refresh_session", new=AsyncMock()) as mock_refresh,
        ):
            mock_service.setup_hotel = AsyncMock(
                return_value=HotelResponse(**hotel_response(owner_id=str(caller.id)))
            )
            resp = client.post(
                "/rpc/hotel.setup", json={"name": "Grand", "subdomain": "grand"}
            )
        assert resp.status_code == 201
        token, session = mock_refresh.call_args.args
        assert token == caller.token
        assert session["hotel_id"] == str(HOTEL_ID)
        assert session["role"] == UserRole.HOTEL_ADMIN

    def test_session_store_outage_does_not_fail_setup(self, client_factory):
        redis = MagicMock()
        redis.set = AsyncMock(side_effect=ConnectionError("down"))
        client = client_factory(make_customer())
        with (
            patch(SERVICE_PATH) as mock_service,
            patch("app.sessions.get_redis", return_value=redis),
        ):
            mock_service.setup_hotel = AsyncMock(
                return_value=HotelResponse(**hotel_response())
            )
            resp = client.post(
                "/rpc/hotel.setup", json={"name": "Grand", "subdomain": "grand"}
            )
        assert resp.status_code == 201
        assert resp.json()["subdomain"] == "grand-test"
        redis.set.assert_awaited_once()

    def test_invalid_subdomain(self, customer_client):
        resp = customer_client.post(
            "/rpc/hotel.setup", json={"name": "Grand", "subdomain": "Not Valid!"}
        )
        assert resp.status_code == 400

    def test_conflict(self, customer_client):
        with (
            patch(SERVICE_PATH) as mock_service,
            patch("app.routers.hotel.refresh_session", new=AsyncMock()),
        ):
            mock_service.setup_hotel = AsyncMock(side_effect=Conflict("taken"))
            resp = customer_client.post(
                "/rpc/hotel.setup", json={"name": "Grand", "subdomain": "grand"}
            )
        assert resp.status_code == 409
        assert resp.json()["code"] == "CONFLICT"


class TestSettingsProcedures:
    def test_get_settings(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.get_settings = AsyncMock(return_value=hotel_response())
            resp = owner_client.get("/rpc/hotel.getSettings")
        assert resp.status_code == 200
        assert resp.json()["subdomain"] == "grand-test"

    def test_get_settings_without_hotel(self, customer_client):
        resp = customer_client.get("/rpc/hotel.getSettings")
        assert resp.status_code == 412

    def test_update_settings(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.update_settings = AsyncMock(
                return_value=hotel_response(tax_strategy="COMPOUND")
            )
            resp = owner_client.post(
                "/rpc/hotel.updateSettings", json={"tax_strategy": "COMPOUND"}
            )
        assert resp.status_code == 200
        hotel_id, payload = mock_service.update_settings.call_args.args
        assert hotel_id == HOTEL_ID
        assert payload.tax_strategy == "COMPOUND"

    def test_deactivate_forwards_caller(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.deactivate = AsyncMock(
                return_value=hotel_response(is_deactivated=True)
            )
            resp = owner_client.post("/rpc/hotel.deactivate")
        assert resp.status_code == 200
        mock_service.deactivate.assert_awaited_once_with(HOTEL_ID, OWNER_ID)

    def test_deactivate_by_non_owner_is_403(self, client_factory):
        client = client_factory(make_owner(user_id=uuid4()))
        with patch(SERVICE_PATH) as mock_service:
            mock_service.deactivate = AsyncMock(side_effect=Forbidden("owner only"))
            resp = client.post("/rpc/hotel.deactivate")
        assert resp.status_code == 403
