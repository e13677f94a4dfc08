"""Cliente aggregate: the authenticated principal."""

from datetime import datetime
from typing import Union

from cliente.domain.cliente.exceptions import InvalidClienteDataError
from cliente.domain.cliente.value_objects import Email, Role
from cliente.domain.shared.time import utc_now
from cliente_auth.roles import resolve_authorities


def _check_length(field: str, value: str, min_length: int, max_length: int) -> str:
    if value is None:
        msg = f"{field} is required"
        raise InvalidClienteDataError(field, msg)
    value = value.strip()
    if not min_length <= len(value) <= max_length:
        msg = f"{field} must be between {min_length} and {max_length} characters"
        raise InvalidClienteDataError(field, msg)
    return value


class Cliente:
    """
    Cliente aggregate root.

    Holds the login identifier (rut), the password hash, contact data and
    the role reference. The id stays None until the repository stores the
    Cliente for the first time.
    """

    RUT_LENGTH = (7, 20)
    NAME_LENGTH = (4, 30)
    PHONE_LENGTH = (8, 12)

    def __init__(
        self,
        rut: str,
        password_hash: str,
        firstname: str,
        lastname: str,
        email: Union[str, Email],
        phone_number: str,
        role: Role,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        if role is None:
            raise InvalidClienteDataError("role", "role is required")
        if not password_hash:
            raise InvalidClienteDataError("password", "password hash is required")

        self._id = id
        self._rut = _check_length("rut", rut, *self.RUT_LENGTH)
        self._password_hash = password_hash
        self._firstname = _check_length("firstname", firstname, *self.NAME_LENGTH)
        self._lastname = _check_length("lastname", lastname, *self.NAME_LENGTH)
        self._email = email if isinstance(email, Email) else Email(email)
        self._phone_number = _check_length(
            "phone_number",
            phone_number,
            *self.PHONE_LENGTH,
        )
        self._role = role
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def rut(self) -> str:
        return self._rut

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def firstname(self) -> str:
        return self._firstname

    @property
    def lastname(self) -> str:
        return self._lastname

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @property
    def role(self) -> Role:
        return self._role

    @property
    def authorities(self) -> list[str]:
        return resolve_authorities(self._role.name)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            raise InvalidClienteDataError("password", "password hash is required")
        self._password_hash = password_hash
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        rut: str,
        password_hash: str,
        firstname: str,
        lastname: str,
        email: Union[str, Email],
        phone_number: str,
        role: Role,
    ) -> "Cliente":
        return cls(
            rut=rut,
            password_hash=password_hash,
            firstname=firstname,
            lastname=lastname,
            email=email,
            phone_number=phone_number,
            role=role,
        )

    @classmethod
    def reconstitute(
        cls,
        id: int,
        rut: str,
        password_hash: str,
        firstname: str,
        lastname: str,
        email: Union[str, Email],
        phone_number: str,
        role: Role,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Cliente":
        return cls(
            id=id,
            rut=rut,
            password_hash=password_hash,
            firstname=firstname,
            lastname=lastname,
            email=email,
            phone_number=phone_number,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cliente):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"Cliente(id={self._id}, rut={self._rut})"
