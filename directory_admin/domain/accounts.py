from __future__ import annotations

from enum import Enum

from directory_admin.db.models.admin_user import AdminUser
from directory_admin.db.models.super_admin import SuperAdmin

Account = SuperAdmin | AdminUser

ACTIVE = "active"


class AccountKind(str, Enum):
    """The two privilege tiers that can sign in to the dashboard."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"

    @property
    def model(self) -> type[SuperAdmin] | type[AdminUser]:
        return SuperAdmin if self is AccountKind.SUPER_ADMIN else AdminUser

    @property
    def label(self) -> str:
        return "Super Admin" if self is AccountKind.SUPER_ADMIN else "Admin"

    @classmethod
    def from_claim(cls, value: object) -> AccountKind | None:
        try:
            return cls(value)
        except ValueError:
            return None


# Lookup order when the kind is resolved from an email alone.
RESOLUTION_ORDER = (AccountKind.SUPER_ADMIN, AccountKind.ADMIN)


def token_claims(account: Account, kind: AccountKind) -> dict[str, object]:
    claims: dict[str, object] = {
        "sub": str(account.id),
        "email": account.email,
        "user_type": kind.value,
    }
    if kind is AccountKind.ADMIN and account.role:
        claims["role"] = account.role
    return claims


def public_summary(account: Account, kind: AccountKind) -> dict[str, object]:
    """Fields safe to hand back to the client. Never the hash or counters."""
    summary: dict[str, object] = {
        "id": account.id,
        "email": account.email,
        "full_name": account.full_name,
        "userType": kind.value,
    }
    if kind is AccountKind.ADMIN:
        summary["role"] = account.role
    return summary
