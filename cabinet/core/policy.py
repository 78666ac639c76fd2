"""
Role-based access policy.

Every role rule of the application lives in ``_RULES``. Routing, view
dependencies and each mutation entry point ask ``can`` instead of comparing
roles inline.
"""
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from .security import UserRole


class Action(str, Enum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SETTLE = "settle"
    CANCEL = "cancel"
    RESET_PASSWORD = "reset_password"


class Resource(str, Enum):
    DASHBOARD = "dashboard"
    CALENDAR = "calendar"
    PATIENTS = "patients"
    FINANCE = "finance"
    USERS = "users"
    APPOINTMENTS = "appointments"
    GAINS = "gains"
    EXPENSES = "expenses"
    NET_PROFIT = "net_profit"
    ALL_PATIENTS = "all_patients"


ADMIN = frozenset({UserRole.ADMIN})
STAFF = frozenset({UserRole.ADMIN, UserRole.SECRETARY})
EVERYONE = frozenset(UserRole)

_RULES: Dict[Tuple[Action, Resource], FrozenSet[UserRole]] = {
    # Views
    (Action.VIEW, Resource.DASHBOARD): ADMIN,
    (Action.VIEW, Resource.CALENDAR): EVERYONE,
    (Action.VIEW, Resource.PATIENTS): EVERYONE,
    (Action.VIEW, Resource.FINANCE): STAFF,
    (Action.VIEW, Resource.USERS): ADMIN,

    # Scheduling: therapists only read the planning
    (Action.VIEW, Resource.APPOINTMENTS): EVERYONE,
    (Action.CREATE, Resource.APPOINTMENTS): STAFF,
    (Action.UPDATE, Resource.APPOINTMENTS): STAFF,
    (Action.SETTLE, Resource.APPOINTMENTS): STAFF,
    (Action.CANCEL, Resource.APPOINTMENTS): STAFF,

    # Patient registry; therapists only see their own patients
    (Action.CREATE, Resource.PATIENTS): EVERYONE,
    (Action.VIEW, Resource.ALL_PATIENTS): STAFF,

    # Ledger
    (Action.VIEW, Resource.GAINS): ADMIN,
    (Action.CREATE, Resource.GAINS): ADMIN,
    (Action.VIEW, Resource.EXPENSES): STAFF,
    (Action.CREATE, Resource.EXPENSES): STAFF,
    (Action.VIEW, Resource.NET_PROFIT): STAFF,

    # User administration
    (Action.CREATE, Resource.USERS): ADMIN,
    (Action.DELETE, Resource.USERS): ADMIN,
    (Action.RESET_PASSWORD, Resource.USERS): ADMIN,
}


def can(role: Optional[UserRole], action: Action, resource: Resource) -> bool:
    """Return True when ``role`` may perform ``action`` on ``resource``."""
    if role is None:
        return False
    return UserRole(role) in _RULES.get((action, resource), frozenset())
