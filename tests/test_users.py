"""
user.* and admin.* procedures plus the user service.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from app.errors import BadRequest
from app.roles import UserRole
from app.schemas import StaffCreate
from app.services.user import user_service

from .factories import (
    HOTEL_ID,
    create_hotel,
    create_user,
    user_response,
)

SERVICE_PATH = "app.routers.user.user_service"
ADMIN_SERVICE_PATH = "app.routers.admin.user_service"


class TestUserService:
    async def test_add_staff_binds_to_hotel(self, db):
        hotel = await create_hotel()
        staff = await user_service.add_staff(
            StaffCreate(name="Sam", email="Sam@Example.com", role=UserRole.SALES),
            hotel.id,
        )
        assert staff.hotel_id == hotel.id
        assert staff.is_onboarded
        assert staff.email == "sam@example.com"

    async def test_add_staff_duplicate_email(self, db):
        hotel = await create_hotel()
        await create_user(email="sam@example.com")
        with pytest.raises(BadRequest):
            await user_service.add_staff(
                StaffCreate(name="Sam", email="sam@example.com", role=UserRole.SALES),
                hotel.id,
            )

    async def test_list_hotel_users(self, db):
        hotel = await create_hotel()
        member = await create_user(hotel=hotel)
        await create_user()
        users = await user_service.list_hotel_users(hotel.id)
        assert [u.id for u in users] == [member.id]

    async def test_list_all_users_includes_hotel_name(self, db):
        hotel = await create_hotel(name="Grand")
        await create_user(hotel=hotel)
        await create_user()
        users = await user_service.list_all_users()
        assert sorted(u.hotel_name or "" for u in users) == ["", "Grand"]


class TestUserProcedures:
    def test_get_all(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.list_hotel_users = AsyncMock(return_value=[user_response()])
            resp = owner_client.get("/rpc/user.getAll")
        assert resp.status_code == 200
        mock_service.list_hotel_users.assert_awaited_once_with(HOTEL_ID)

    def test_get_all_without_hotel_is_empty(self, customer_client):
        resp = customer_client.get("/rpc/user.getAll")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_add_staff(self, owner_client):
        with patch(SERVICE_PATH) as mock_service:
            mock_service.add_staff = AsyncMock(
                return_value=user_response(role="SALES", hotel_id=str(HOTEL_ID))
            )
            resp = owner_client.post(
                "/rpc/user.addStaff",
                json={"name": "Sam", "email": "sam@example.com", "role": "SALES"},
            )
        assert resp.status_code == 201
        assert resp.json()["hotel_id"] == str(HOTEL_ID)

    def test_add_staff_rejects_customer_role(self, owner_client):
        resp = owner_client.post(
            "/rpc/user.addStaff",
            json={"name": "Sam", "email": "sam@example.com", "role": "CUSTOMER"},
        )
        assert resp.status_code == 400


class TestAdminProcedures:
    def test_admin_lists_everyone(self, admin_client):
        with patch(ADMIN_SERVICE_PATH) as mock_service:
            mock_service.list_all_users = AsyncMock(
                return_value=[user_response(hotel_name=None)]
            )
            resp = admin_client.get("/rpc/admin.getAllUsers")
        assert resp.status_code == 200
        assert resp.json()[0]["hotel_name"] is None

    def test_owner_is_forbidden(self, owner_client):
        with patch(ADMIN_SERVICE_PATH) as mock_service:
            mock_service.list_all_users = AsyncMock()
            resp = owner_client.get("/rpc/admin.getAllUsers")
        assert resp.status_code == 403
        mock_service.list_all_users.assert_not_awaited()

    def test_anonymous_is_401(self, anon_client):
        assert anon_client.get("/rpc/admin.getAllUsers").status_code == 401
