"""SQLAlchemy model for Role reference data."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cliente.infrastructure.persistence.sqlalchemy.base import Base


class RoleModel(Base):
    """Seeded role rows; one per RoleName."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_name: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, role_name={self.role_name})>"
