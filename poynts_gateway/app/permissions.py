"""Permission mapping for the proxy routes.

Each resource domain maps to a "view" permission (GET) and a "manage"
permission (every other verb). Cross-tenant routes are gated by the
admin-access permission instead.
"""

from enum import Enum

from poynts_gateway.app.db.context import CallerIdentity

ADMIN_ACCESS_PERMISSION = "org:cpadmin:access"


class Domain(str, Enum):
    """Resource domains used as permission keys."""

    MEMBERS = "members"
    CATALOGS = "catalogs"
    CAMPAIGNS = "campaigns"
    PROGRAMS = "programs"
    ORDERS = "orders"
    REWARDS = "rewards"
    ORGANIZATIONS = "organizations"
    INTERNAL = "internal"


class Operation(str, Enum):
    """Permission operation derived from the HTTP method."""

    VIEW = "view"
    MANAGE = "manage"


DOMAIN_PERMISSIONS: dict[Domain, dict[Operation, str]] = {
    Domain.MEMBERS: {Operation.VIEW: "org:members:view", Operation.MANAGE: "org:members:manage"},
    Domain.CATALOGS: {Operation.VIEW: "org:catalogs:view", Operation.MANAGE: "org:catalogs:manage"},
    Domain.CAMPAIGNS: {
        Operation.VIEW: "org:campaigns:view",
        Operation.MANAGE: "org:campaigns:manage",
    },
    Domain.PROGRAMS: {Operation.VIEW: "org:programs:view", Operation.MANAGE: "org:programs:manage"},
    Domain.ORDERS: {Operation.VIEW: "org:orders:view", Operation.MANAGE: "org:orders:manage"},
    Domain.REWARDS: {Operation.VIEW: "org:rewards:view", Operation.MANAGE: "org:rewards:manage"},
    Domain.ORGANIZATIONS: {
        Operation.VIEW: ADMIN_ACCESS_PERMISSION,
        Operation.MANAGE: ADMIN_ACCESS_PERMISSION,
    },
    Domain.INTERNAL: {
        Operation.VIEW: ADMIN_ACCESS_PERMISSION,
        Operation.MANAGE: ADMIN_ACCESS_PERMISSION,
    },
}


def required_operation(method: str) -> Operation:
    """Return VIEW for GET requests and MANAGE for every other method."""
    return Operation.VIEW if method.upper() == "GET" else Operation.MANAGE


def permission_for(domain: Domain, operation: Operation) -> str:
    """Look up the permission string for a domain/operation pair."""
    return DOMAIN_PERMISSIONS[domain][operation]


def check_domain_permission(caller: CallerIdentity, domain: Domain, operation: Operation) -> bool:
    """Check whether the caller holds the permission for a domain and operation.

    Args:
        caller: Identity of the current request
        domain: Resource domain (members, catalogs, ...)
        operation: VIEW for reads, MANAGE for mutations

    Returns:
        True if the caller has the mapped permission
    """
    return caller.has(permission_for(domain, operation))


def has_admin_access(caller: CallerIdentity) -> bool:
    """Whether the caller may use cross-organization admin routes."""
    return caller.has(ADMIN_ACCESS_PERMISSION)
