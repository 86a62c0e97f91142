"""
Page routes. Pages answer with a small JSON description of what the client
should render; gated pages bounce to the matching sign-in portal.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from app.deps import CurrentUser, get_optional_user
from app.errors import BadRequest
from app.redirects import sign_in_path, sign_up_path
from app.roles import HOTEL_STAFF_ROLES, ROLE_DESCRIPTIONS, PortalRole, UserRole

router = APIRouter(tags=["pages"])


def _parse_portal(role: str | None) -> PortalRole:
    if role is None:
        return PortalRole.CUSTOMER
    try:
        return PortalRole(role)
    except ValueError:
        raise BadRequest(f"Unknown role: {role}") from None


# ---------------------------------------------------------------------------
# Redirect dispatchers
# ---------------------------------------------------------------------------


@router.get("/auth/sign-in")
async def sign_in_redirect(
    role: str | None = None, redirect: str | None = None
) -> RedirectResponse:
    return RedirectResponse(
        sign_in_path(_parse_portal(role), redirect),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/auth/sign-up")
async def sign_up_redirect(
    role: str | None = None, redirect: str | None = None
) -> RedirectResponse:
    return RedirectResponse(
        sign_up_path(_parse_portal(role), redirect),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


# ---------------------------------------------------------------------------
# Portal pages
# ---------------------------------------------------------------------------


@router.get("/auth/{portal}/sign-in")
async def sign_in_page(portal: PortalRole, redirect: str | None = None) -> dict:
    return {"page": "sign-in", "portal": portal, "redirect": redirect}


@router.get("/auth/{portal}/sign-up")
async def sign_up_page(portal: PortalRole, redirect: str | None = None) -> dict:
    if portal == PortalRole.ADMIN:
        # Admin accounts are provisioned by the platform
        raise BadRequest("Admin accounts cannot be self-registered")
    return {"page": "sign-up", "portal": portal, "redirect": redirect}


# ---------------------------------------------------------------------------
# Gated pages
# ---------------------------------------------------------------------------


def _page(name: str, user: CurrentUser) -> dict:
    return {
        "page": name,
        "user": {"id": str(user.id), "name": user.name, "role": user.role},
        "description": ROLE_DESCRIPTIONS.get(user.role),
    }


@router.get("/admin", response_model=None)
async def admin_page(
    request: Request,
    current_user: CurrentUser | None = Depends(get_optional_user),
) -> dict | RedirectResponse:
    if current_user is None or current_user.role != UserRole.SUPER_ADMIN:
        return RedirectResponse(
            sign_in_path(PortalRole.ADMIN, redirect=request.url.path),
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
    return _page("admin", current_user)


@router.get("/dashboard/tenant", response_model=None)
async def tenant_dashboard(
    request: Request,
    current_user: CurrentUser | None = Depends(get_optional_user),
) -> dict | RedirectResponse:
    if current_user is None or current_user.role not in HOTEL_STAFF_ROLES:
        return RedirectResponse(
            sign_in_path(PortalRole.OWNER, redirect=request.url.path),
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
    page = _page("tenant-dashboard", current_user)
    page["hotel_id"] = str(current_user.hotel_id) if current_user.hotel_id else None
    return page
