from dataclasses import dataclass

from cliente_auth.roles import RoleName, resolve_authority


@dataclass(frozen=True)
class Role:
    """Stored role reference data (seeded, never created by use cases)."""

    id: int
    name: RoleName

    @property
    def authority(self) -> str:
        return resolve_authority(self.name)
