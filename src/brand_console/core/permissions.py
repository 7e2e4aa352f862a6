"""
Role-based visibility gate for brand console affordances.

The gate decides which create/update/delete controls a presentation layer should
render. It is a convenience for the user interface, not a security boundary: the
API re-checks authorization on every mutating request.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Union

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """User roles ordered by increasing privilege."""
    GUEST = "guest"
    STANDARD = "standard"
    EDITOR = "editor"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def level(self) -> int:
        return ROLE_HIERARCHY[self]

    @classmethod
    def parse(cls, value: Union[str, "UserRole"]) -> "UserRole":
        """Parse a role name case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown user role: {value!r}")


class PermissionAction(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class Resource(str, Enum):
    BRAND_ASSETS = "brand_assets"
    USER_PERSONAS = "user_personas"
    HIDDEN_SECTIONS = "hidden_sections"
    USERS = "users"
    CLIENTS = "clients"
    SETTINGS = "settings"


ROLE_HIERARCHY = {
    UserRole.GUEST: 1,
    UserRole.STANDARD: 2,
    UserRole.EDITOR: 3,
    UserRole.ADMIN: 4,
    UserRole.SUPER_ADMIN: 5,
}

_READ = frozenset({PermissionAction.READ})
_READ_UPDATE = frozenset({PermissionAction.READ, PermissionAction.UPDATE})
_ALL = frozenset(PermissionAction)

_READ_ONLY_TABLE = {
    Resource.BRAND_ASSETS: _READ,
    Resource.USER_PERSONAS: _READ,
    Resource.HIDDEN_SECTIONS: _READ,
}

_EDITOR_TABLE = {
    Resource.BRAND_ASSETS: _ALL,
    Resource.USER_PERSONAS: _ALL,
    Resource.HIDDEN_SECTIONS: _READ,
}

_ADMIN_TABLE = {
    **_EDITOR_TABLE,
    Resource.HIDDEN_SECTIONS: _ALL,
    Resource.USERS: _ALL,
    Resource.SETTINGS: _READ_UPDATE,
}

ROLE_PERMISSIONS: Dict[UserRole, Dict[Resource, FrozenSet[PermissionAction]]] = {
    UserRole.GUEST: _READ_ONLY_TABLE,
    UserRole.STANDARD: _READ_ONLY_TABLE,
    UserRole.EDITOR: _EDITOR_TABLE,
    UserRole.ADMIN: _ADMIN_TABLE,
    UserRole.SUPER_ADMIN: {**_ADMIN_TABLE, Resource.CLIENTS: _ALL},
}


def _coerce_role(role: Any) -> Optional[UserRole]:
    try:
        return UserRole.parse(role)
    except ValueError:
        return None


def can(action: Union[str, PermissionAction], resource: Union[str, Resource],
        role: Union[str, UserRole]) -> bool:
    """
    Check whether a role may perform an action on a resource.

    Unknown roles, actions and resources are denied rather than raising.
    """
    user_role = _coerce_role(role)
    if user_role is None:
        logger.debug(f"Denying {action} on {resource}: unknown role {role!r}")
        return False

    try:
        action = PermissionAction(action)
        resource = Resource(resource)
    except ValueError:
        return False

    return action in ROLE_PERMISSIONS[user_role].get(resource, frozenset())


def has_minimum_role(role: Union[str, UserRole], required: Union[str, UserRole]) -> bool:
    """Check whether a role meets or exceeds the required privilege level."""
    user_role = _coerce_role(role)
    required_role = _coerce_role(required)
    if user_role is None or required_role is None:
        return False
    return user_role.level >= required_role.level


@dataclass(frozen=True)
class CurrentUser:
    """The signed-in user, passed explicitly into decision functions."""

    id: int
    role: UserRole
    email: str = ""
    name: str = ""

    def can(self, action: Union[str, PermissionAction], resource: Union[str, Resource]) -> bool:
        return can(action, resource, self.role)


@dataclass(frozen=True)
class Affordances:
    """Which mutating controls to render for a resource."""

    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    @property
    def read_only(self) -> bool:
        return not (self.can_create or self.can_update or self.can_delete)


def affordances_for(user: Optional[CurrentUser], resource: Union[str, Resource]) -> Affordances:
    """Resolve the create/update/delete affordances for a user, or none when signed out."""
    if user is None:
        return Affordances()
    return Affordances(
        can_create=user.can(PermissionAction.CREATE, resource),
        can_update=user.can(PermissionAction.UPDATE, resource),
        can_delete=user.can(PermissionAction.DELETE, resource),
    )
