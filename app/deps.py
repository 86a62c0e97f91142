from dataclasses import asdict, dataclass
from uuid import UUID

from fastapi import Cookie, Depends, Header
from loguru import logger

from app import settings
from app.errors import Forbidden, Unauthorized
from app.roles import HOTEL_STAFF_ROLES, UserRole
from app.sessions import get_session


@dataclass
class CurrentUser:
    id: UUID
    name: str
    email: str
    role: UserRole
    hotel_id: UUID | None = None
    is_onboarded: bool = False
    token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_hotel_staff(self) -> bool:
        return self.role in HOTEL_STAFF_ROLES

    def to_session(self) -> dict:
        data = asdict(self)
        data.pop("token")
        data["id"] = str(self.id)
        data["hotel_id"] = str(self.hotel_id) if self.hotel_id else None
        return data

    @classmethod
    def from_session(cls, data: dict, token: str | None = None) -> "CurrentUser":
        hotel_id = data.get("hotel_id")
        return cls(
            id=UUID(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=UserRole(data.get("role", UserRole.CUSTOMER)),
            hotel_id=UUID(hotel_id) if hotel_id else None,
            is_onboarded=bool(data.get("is_onboarded", False)),
            token=token,
        )


def get_session_token(
    session_cookie: str | None = Cookie(default=None, alias=settings.SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> str | None:
    """Token from the session cookie, else from ``Authorization: Bearer``."""
    if session_cookie:
        return session_cookie
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


async def get_optional_user(
    token: str | None = Depends(get_session_token),
) -> CurrentUser | None:
    """Public tier: resolves the caller if a valid session exists, otherwise None."""
    if not token:
        return None
    data = await get_session(token)
    if data is None:
        return None
    try:
        return CurrentUser.from_session(data, token=token)
    except (KeyError, ValueError):
        logger.warning("Discarding malformed session payload")
        return None


async def get_current_user(
    user: CurrentUser | None = Depends(get_optional_user),
) -> CurrentUser:
    """Authenticated tier."""
    if user is None:
        raise Unauthorized("You must be signed in")
    return user


def require_roles(*allowed: UserRole):
    """
    Factory that returns a dependency restricting a procedure to some roles.

    Usage:
        @router.get("/admin.getAllUsers")
        async def route(user = Depends(require_roles(UserRole.SUPER_ADMIN))):
            ...
    """

    async def _dep(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise Forbidden(
                f"Requires one of the roles: {', '.join(r.value for r in allowed)}"
            )
        return current_user

    return _dep


# ---------------------------------------------------------------------------
# Pre-built tier dependencies
# ---------------------------------------------------------------------------

require_admin = require_roles(UserRole.SUPER_ADMIN)
require_hotel_staff = require_roles(*HOTEL_STAFF_ROLES)


async def require_hotel(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    Authenticated caller bound to a hotel tenant.
    Short-circuits before any tenant query when the session carries no hotel.
    """
    if current_user.hotel_id is None:
        raise Unauthorized("You must belong to a hotel to do this")
    return current_user
