"""SQLAlchemy model for the Cliente aggregate."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cliente.infrastructure.persistence.sqlalchemy.base import Base, TimestampMixin
from cliente.infrastructure.persistence.sqlalchemy.models.role_model import RoleModel


class ClienteModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Cliente aggregates.

    The unique constraints on rut and email are the authority for
    uniqueness; application pre-checks only shortcut the common case.
    """

    __tablename__ = "cliente"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rut: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    firstname: Mapped[str] = mapped_column(String(30), nullable=False)
    lastname: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    phone_number: Mapped[str] = mapped_column(String(12), nullable=False)
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
    )

    role: Mapped[RoleModel] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<ClienteModel(id={self.id}, rut={self.rut})>"
