"""Role directory.

Maps the closed set of role names to the authority strings embedded in
tokens.
"""

from enum import Enum
from typing import Union

from cliente_auth.exceptions import ConfigurationError


class RoleName(str, Enum):
    """Roles a Cliente can hold."""

    USER = "USER"
    ADMIN = "ADMIN"


_AUTHORITIES: dict[RoleName, str] = {
    RoleName.USER: "USER",
    RoleName.ADMIN: "ADMIN",
}


def resolve_authority(role: Union[RoleName, str]) -> str:
    """Return the authority string granted by ``role``.

    Raises
    ------
    ConfigurationError
        If ``role`` is not one of the known role names
    """
    try:
        role_name = role if isinstance(role, RoleName) else RoleName(role)
        return _AUTHORITIES[role_name]
    except (ValueError, KeyError) as e:
        msg = f"Unknown role: {role!r}"
        raise ConfigurationError(msg) from e


def resolve_authorities(role: Union[RoleName, str]) -> list[str]:
    return [resolve_authority(role)]
