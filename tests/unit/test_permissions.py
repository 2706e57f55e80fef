"""Unit tests for the domain permission table."""

import pytest

from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.permissions import (
    ADMIN_ACCESS_PERMISSION,
    DOMAIN_PERMISSIONS,
    Domain,
    Operation,
    check_domain_permission,
    has_admin_access,
    required_operation,
)


def test_every_domain_has_view_and_manage() -> None:
    for domain in Domain:
        assert set(DOMAIN_PERMISSIONS[domain]) == {Operation.VIEW, Operation.MANAGE}


def test_tenant_domain_permission_strings() -> None:
    assert DOMAIN_PERMISSIONS[Domain.CAMPAIGNS][Operation.VIEW] == "org:campaigns:view"
    assert DOMAIN_PERMISSIONS[Domain.MEMBERS][Operation.MANAGE] == "org:members:manage"


def test_cross_tenant_domains_require_admin_access() -> None:
    for domain in (Domain.ORGANIZATIONS, Domain.INTERNAL):
        for operation in Operation:
            assert DOMAIN_PERMISSIONS[domain][operation] == ADMIN_ACCESS_PERMISSION


@pytest.mark.parametrize(
    ("method", "operation"),
    [
        ("GET", Operation.VIEW),
        ("get", Operation.VIEW),
        ("POST", Operation.MANAGE),
        ("PATCH", Operation.MANAGE),
        ("PUT", Operation.MANAGE),
        ("DELETE", Operation.MANAGE),
    ],
)
def test_required_operation(method: str, operation: Operation) -> None:
    assert required_operation(method) == operation


def test_check_domain_permission() -> None:
    caller = CallerIdentity(user_id="u1", org_id="o1", permissions=frozenset({"org:catalogs:view"}))

    assert check_domain_permission(caller, Domain.CATALOGS, Operation.VIEW) is True
    assert check_domain_permission(caller, Domain.CATALOGS, Operation.MANAGE) is False
    assert check_domain_permission(caller, Domain.ORDERS, Operation.VIEW) is False


def test_manage_does_not_imply_view() -> None:
    caller = CallerIdentity(user_id="u1", permissions=frozenset({"org:orders:manage"}))

    assert check_domain_permission(caller, Domain.ORDERS, Operation.VIEW) is False


def test_has_admin_access() -> None:
    admin = CallerIdentity(user_id="u1", permissions=frozenset({ADMIN_ACCESS_PERMISSION}))
    member = CallerIdentity(user_id="u2", permissions=frozenset({"org:members:view"}))

    assert has_admin_access(admin) is True
    assert has_admin_access(member) is False
