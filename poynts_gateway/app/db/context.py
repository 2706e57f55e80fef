"""Caller identity for the duration of one request."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller as reported by the identity provider.

    Attributes:
        user_id: Identity-provider user id
        org_id: Identity-provider organization id (not the internal one)
        permissions: Permission strings granted to the caller in that organization
    """

    user_id: str
    org_id: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)

    def has(self, permission: str) -> bool:
        """Whether the caller holds ``permission``."""
        return permission in self.permissions
