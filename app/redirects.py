from urllib.parse import quote

from app.roles import PortalRole


def _with_redirect(path: str, redirect: str | None) -> str:
    if redirect:
        return f"{path}?redirect={quote(redirect, safe='')}"
    return path


def sign_in_path(
    role: PortalRole = PortalRole.CUSTOMER, redirect: str | None = None
) -> str:
    match role:
        case PortalRole.OWNER:
            path = "/auth/owner/sign-in"
        case PortalRole.ADMIN:
            path = "/auth/admin/sign-in"
        case PortalRole.CUSTOMER:
            path = "/auth/customer/sign-in"
    return _with_redirect(path, redirect)


def sign_up_path(
    role: PortalRole = PortalRole.CUSTOMER, redirect: str | None = None
) -> str:
    match role:
        case PortalRole.OWNER:
            path = "/auth/owner/sign-up"
        case PortalRole.ADMIN:
            # Platform admins are provisioned, never self-registered
            path = "/auth/admin/sign-in"
        case PortalRole.CUSTOMER:
            path = "/auth/customer/sign-up"
    return _with_redirect(path, redirect)
