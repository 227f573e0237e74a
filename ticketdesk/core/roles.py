# ticketdesk/core/roles.py
from types import MappingProxyType
from typing import FrozenSet, Optional

ROLE_RIGHTS = MappingProxyType({
    "employee": ("getTickets", "editTickets"),
    "admin": ("getTickets", "editTickets", "manageTickets"),
})

ROLES = tuple(ROLE_RIGHTS.keys())

ALL_RIGHTS: FrozenSet[str] = frozenset(r for rights in ROLE_RIGHTS.values() for r in rights)

_RIGHTS_BY_ROLE = {role: frozenset(rights) for role, rights in ROLE_RIGHTS.items()}


def permissions_for(role: Optional[str]) -> FrozenSet[str]:
    """Rights granted to ``role``; empty for an unknown role."""
    return _RIGHTS_BY_ROLE.get(role, frozenset())
