from cliente.infrastructure.persistence.sqlalchemy.models.cliente_model import (
    ClienteModel,
)
from cliente.infrastructure.persistence.sqlalchemy.models.medidor_model import (
    MedidorModel,
)
from cliente.infrastructure.persistence.sqlalchemy.models.role_model import RoleModel

__all__ = ["ClienteModel", "MedidorModel", "RoleModel"]
