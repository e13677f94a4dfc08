"""Authentication service for Cliente registration and login."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from cliente.application.requests import (
    LoginRequest,
    RegisterRequest,
    SearchClienteRequest,
    UpdatePasswordRequest,
)
from cliente.application.results import (
    AuthErrorCode,
    AuthFailure,
    AuthResult,
    EmailCheckResult,
    TokenCheckResult,
)
from cliente.domain.cliente import (
    Cliente,
    InvalidClienteDataError,
    InvalidEmailError,
    RoleName,
    StorageConflictError,
)
from cliente.domain.shared.time import utc_now
from cliente_auth import (
    ConfigurationError,
    JWTService,
    PasswordHashingService,
    WeakPasswordError,
)

if TYPE_CHECKING:
    from cliente.domain.cliente import ClienteRepository, RoleRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid rut or password"


class AuthenticationService:
    """
    Application service for Cliente authentication.

    Orchestrates cliente_auth infrastructure (password hashing, JWT tokens,
    role directory) with the Cliente repositories to provide:
    - Login with rut and password
    - Registration with the default role
    - Password update
    - Email existence check
    - Token authentication for the request layer

    Every use case returns a result object. User-triggered failures never
    raise; a missing default role raises ConfigurationError.
    """

    def __init__(
        self,
        cliente_repository: ClienteRepository,
        role_repository: RoleRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        default_role: RoleName = RoleName.USER,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._cliente_repo = cliente_repository
        self._role_repo = role_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._default_role = default_role
        self._clock = clock

    def _issue_token(self, cliente: Cliente) -> str:
        return self._jwt_service.issue(
            subject=cliente.rut,
            authorities=cliente.authorities,
            now=self._clock(),
        )

    async def login(self, request: LoginRequest) -> AuthResult:
        cliente = await self._cliente_repo.find_by_rut(request.rut)

        # Unknown rut and wrong password look the same to the caller, in
        # response and in bcrypt work
        if cliente is None:
            self._password_service.verify(
                request.password,
                self._password_service.dummy_hash,
            )
        if cliente is None or not self._password_service.verify(
            request.password,
            cliente.password_hash,
        ):
            logger.info("Login failed for rut: %s", request.rut)
            return AuthResult.failure(
                AuthErrorCode.INVALID_CREDENTIALS,
                INVALID_CREDENTIALS_MESSAGE,
            )

        if self._password_service.needs_rehash(cliente.password_hash):
            try:
                cliente = await self._rehash(cliente, request.password)
            except (WeakPasswordError, StorageConflictError) as e:
                logger.warning("Could not rehash password for %s: %s", cliente.rut, e)

        token = self._issue_token(cliente)

        logger.info("Cliente logged in: %s", cliente.rut)
        return AuthResult.success(token=token)

    async def register(self, request: RegisterRequest) -> AuthResult:
        if await self._cliente_repo.exists_by_rut(request.rut):
            return AuthResult.failure(
                AuthErrorCode.DUPLICATE_LOGIN_ID,
                f"Rut '{request.rut}' is already registered",
            )

        try:
            email_taken = await self._cliente_repo.exists_by_email(request.email)
        except InvalidEmailError as e:
            return AuthResult.failure(AuthErrorCode.VALIDATION_ERROR, str(e))
        if email_taken:
            return AuthResult.failure(
                AuthErrorCode.DUPLICATE_EMAIL,
                f"Email '{request.email}' is already associated with an account",
            )

        role = await self._role_repo.find_by_name(self._default_role)
        if role is None:
            msg = f"Default role not found: {self._default_role.value}"
            raise ConfigurationError(msg)

        try:
            password_hash = self._password_service.hash(request.password)
            cliente = Cliente.create(
                rut=request.rut,
                password_hash=password_hash,
                firstname=request.firstname,
                lastname=request.lastname,
                email=request.email,
                phone_number=request.phone_number,
                role=role,
            )
        except WeakPasswordError as e:
            return AuthResult.failure(AuthErrorCode.VALIDATION_ERROR, e.message)
        except (InvalidClienteDataError, InvalidEmailError) as e:
            return AuthResult.failure(AuthErrorCode.VALIDATION_ERROR, str(e))

        try:
            cliente = await self._cliente_repo.save(cliente)
        except StorageConflictError:
            logger.warning("Registration lost a uniqueness race for rut: %s", request.rut)
            return AuthResult.failure(
                AuthErrorCode.STORAGE_CONFLICT,
                "Rut or email was registered concurrently",
            )

        token = self._issue_token(cliente)

        logger.info("Cliente registered: %s (role: %s)", cliente.rut, role.name.value)
        return AuthResult.success(token=token)

    async def update_password(self, request: UpdatePasswordRequest) -> AuthResult:
        cliente = await self._cliente_repo.find_by_id(request.cliente_id)
        if cliente is None:
            return AuthResult.failure(
                AuthErrorCode.PRINCIPAL_NOT_FOUND,
                "Cliente not found",
            )

        try:
            new_hash = self._password_service.hash(request.new_password)
        except WeakPasswordError as e:
            return AuthResult.failure(AuthErrorCode.VALIDATION_ERROR, e.message)

        cliente.change_password_hash(new_hash)
        try:
            await self._cliente_repo.save(cliente)
        except StorageConflictError:
            return AuthResult.failure(
                AuthErrorCode.STORAGE_CONFLICT,
                "Cliente was modified concurrently",
            )

        logger.info("Password changed for cliente: %s", cliente.id)
        return AuthResult.success(message="Password has been updated")

    async def check_email_exists(self, request: SearchClienteRequest) -> EmailCheckResult:
        try:
            exists = await self._cliente_repo.exists_by_email(request.email)
        except InvalidEmailError as e:
            return EmailCheckResult(
                exists=False,
                message=str(e),
                error=AuthFailure(AuthErrorCode.VALIDATION_ERROR, str(e)),
            )

        message = "Email is registered" if exists else "Email is not registered"
        return EmailCheckResult(exists=exists, message=message)

    def authenticate(self, token: str) -> TokenCheckResult:
        payload = self._jwt_service.validate(token, now=self._clock())
        if payload is None:
            return TokenCheckResult(
                error=AuthFailure(AuthErrorCode.INVALID_TOKEN, "Invalid or expired token"),
            )
        return TokenCheckResult(payload=payload)

    def authorize(self, token: str, authority: str) -> TokenCheckResult:
        result = self.authenticate(token)
        if not result.ok:
            return result

        if not result.payload.has_authority(authority):
            logger.info(
                "Cliente %s lacks authority %s",
                result.payload.subject,
                authority,
            )
            return TokenCheckResult(
                error=AuthFailure(AuthErrorCode.FORBIDDEN, "Not allowed"),
            )
        return result

    async def _rehash(self, cliente: Cliente, password: str) -> Cliente:
        cliente.change_password_hash(self._password_service.hash(password))
        saved = await self._cliente_repo.save(cliente)
        logger.debug("Rehashed password for cliente: %s", cliente.id)
        return saved
