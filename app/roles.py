from enum import StrEnum


class UserRole(StrEnum):
    # Platform
    SUPER_ADMIN = "SUPER_ADMIN"  # runs the whole marketplace

    # Hotel staff
    HOTEL_ADMIN = "HOTEL_ADMIN"  # owner / manager of a single hotel tenant
    SALES = "SALES"
    OPERATIONS = "OPERATIONS"
    FINANCE = "FINANCE"

    # Marketplace
    CUSTOMER = "CUSTOMER"


class PortalRole(StrEnum):
    """Which sign-in portal a visitor is routed to."""

    OWNER = "owner"
    ADMIN = "admin"
    CUSTOMER = "customer"


HOTEL_STAFF_ROLES: frozenset[UserRole] = frozenset(
    {
        UserRole.HOTEL_ADMIN,
        UserRole.SALES,
        UserRole.OPERATIONS,
        UserRole.FINANCE,
    }
)

SELF_SIGN_UP_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.CUSTOMER, UserRole.HOTEL_ADMIN}
)

ROLE_DESCRIPTIONS: dict[str, str] = {
    UserRole.SUPER_ADMIN: "Manage every hotel and user on the platform.",
    UserRole.HOTEL_ADMIN: "Manage your hotel's settings, venues, staff and bookings.",
    UserRole.SALES: "Create and follow up bookings for your hotel.",
    UserRole.OPERATIONS: "Run events and venue logistics for your hotel.",
    UserRole.FINANCE: "Review your hotel's billing and payments.",
    UserRole.CUSTOMER: "Book venues on the marketplace.",
}


def portal_for(role: UserRole) -> PortalRole:
    """The sign-in portal that serves a given account role."""
    match role:
        case UserRole.SUPER_ADMIN:
            return PortalRole.ADMIN
        case _ if role in HOTEL_STAFF_ROLES:
            return PortalRole.OWNER
        case UserRole.CUSTOMER:
            return PortalRole.CUSTOMER
