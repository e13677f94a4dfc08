from cliente.domain.cliente.value_objects.email import Email
from cliente.domain.cliente.value_objects.role import Role, RoleName

__all__ = ["Email", "Role", "RoleName"]
