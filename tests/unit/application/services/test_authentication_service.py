"""Unit tests for AuthenticationService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from cliente.application import (
    AuthErrorCode,
    LoginRequest,
    SearchClienteRequest,
    UpdatePasswordRequest,
)
from cliente.application.services import AuthenticationService
from cliente.domain.cliente import InvalidEmailError, RoleName, StorageConflictError
from cliente_auth import (
    ConfigurationError,
    JWTService,
    PasswordHashingService,
    TokenPayload,
    WeakPasswordError,
)
from tests.shared.fixtures.factories import ClienteFactory

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _payload(authorities=("USER",)) -> TokenPayload:
    return TokenPayload(
        subject=ClienteFactory.RUT,
        authorities=authorities,
        issued_at=NOW,
        expires_at=NOW + timedelta(minutes=15),
        token_id="abc",
    )


class _ServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.cliente_repo = AsyncMock()
        self.role_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "new_hash"
        self.password_service.needs_rehash.return_value = False
        self.jwt_service = Mock(spec=JWTService)
        self.jwt_service.issue.return_value = "signed.jwt.token"

        self.service = AuthenticationService(
            cliente_repository=self.cliente_repo,
            role_repository=self.role_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
            clock=lambda: NOW,
        )


class TestLogin(_ServiceTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_success_issues_token(self):
        cliente = ClienteFactory.cliente(cliente_id=1)
        self.cliente_repo.find_by_rut.return_value = cliente
        self.password_service.verify.return_value = True

        result = await self.service.login(
            LoginRequest(rut=ClienteFactory.RUT, password=ClienteFactory.PASSWORD),
        )

        assert result.ok
        assert result.token == "signed.jwt.token"
        self.jwt_service.issue.assert_called_once_with(
            subject=ClienteFactory.RUT,
            authorities=["USER"],
            now=NOW,
        )

    @pytest.mark.asyncio
    async def test_login_unknown_rut(self):
        self.cliente_repo.find_by_rut.return_value = None

        result = await self.service.login(LoginRequest(rut="00000000-0", password="x"))

        assert not result.ok
        assert result.token is None
        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_unknown_rut_still_runs_bcrypt(self):
        """An unknown rut pays for one verify, like a wrong password does."""
        self.cliente_repo.find_by_rut.return_value = None
        self.password_service.dummy_hash = "dummy_hash"
        # Even a matching dummy must not let an unknown rut in
        self.password_service.verify.return_value = True

        result = await self.service.login(LoginRequest(rut="00000000-0", password="x"))

        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
        self.password_service.verify.assert_called_once_with("x", "dummy_hash")
        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        self.cliente_repo.find_by_rut.return_value = ClienteFactory.cliente(cliente_id=1)
        self.password_service.verify.return_value = False

        result = await self.service.login(
            LoginRequest(rut=ClienteFactory.RUT, password="wrong"),
        )

        assert result.error.code == AuthErrorCode.INVALID_CREDENTIALS
        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_rut_and_wrong_password_look_identical(self):
        """No account enumeration through the failure result."""
        self.cliente_repo.find_by_rut.return_value = None
        unknown = await self.service.login(LoginRequest(rut="00000000-0", password="x"))

        self.cliente_repo.find_by_rut.return_value = ClienteFactory.cliente(cliente_id=1)
        self.password_service.verify.return_value = False
        wrong = await self.service.login(
            LoginRequest(rut=ClienteFactory.RUT, password="x"),
        )

        assert unknown == wrong

    @pytest.mark.asyncio
    async def test_login_rehashes_outdated_hash(self):
        cliente = ClienteFactory.cliente(cliente_id=1)
        self.cliente_repo.find_by_rut.return_value = cliente
        self.cliente_repo.save.side_effect = lambda c: c
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = True

        result = await self.service.login(
            LoginRequest(rut=ClienteFactory.RUT, password=ClienteFactory.PASSWORD),
        )

        assert result.ok
        self.password_service.hash.assert_called_once_with(ClienteFactory.PASSWORD)
        self.cliente_repo.save.assert_called_once()
        assert cliente.password_hash == "new_hash"

    @pytest.mark.asyncio
    async def test_login_succeeds_when_rehash_conflicts(self):
        self.cliente_repo.find_by_rut.return_value = ClienteFactory.cliente(cliente_id=1)
        self.cliente_repo.save.side_effect = StorageConflictError("cliente")
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = True

        result = await self.service.login(
            LoginRequest(rut=ClienteFactory.RUT, password=ClienteFactory.PASSWORD),
        )

        assert result.ok


class TestRegister(_ServiceTestBase):
    """Tests for register."""

    def setup_method(self):
        super().setup_method()
        self.cliente_repo.exists_by_rut.return_value = False
        self.cliente_repo.exists_by_email.return_value = False
        self.role_repo.find_by_name.return_value = ClienteFactory.user_role()
        self.cliente_repo.save.side_effect = self._assign_id

    @staticmethod
    async def _assign_id(cliente):
        return ClienteFactory.cliente(
            cliente_id=1,
            rut=cliente.rut,
            email=cliente.email,
            password_hash=cliente.password_hash,
        )

    @pytest.mark.asyncio
    async def test_register_success(self):
        result = await self.service.register(ClienteFactory.register_request())

        assert result.ok
        assert result.token == "signed.jwt.token"
        self.role_repo.find_by_name.assert_called_once_with(RoleName.USER)
        self.password_service.hash.assert_called_once_with(ClienteFactory.PASSWORD)

        saved = self.cliente_repo.save.call_args[0][0]
        assert saved.password_hash == "new_hash"
        assert saved.role.name == RoleName.USER

        self.jwt_service.issue.assert_called_once_with(
            subject=ClienteFactory.RUT,
            authorities=["USER"],
            now=NOW,
        )

    @pytest.mark.asyncio
    async def test_register_uses_configured_default_role(self):
        self.service = AuthenticationService(
            cliente_repository=self.cliente_repo,
            role_repository=self.role_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
            default_role=RoleName.ADMIN,
            clock=lambda: NOW,
        )
        self.role_repo.find_by_name.return_value = ClienteFactory.admin_role()

        result = await self.service.register(ClienteFactory.register_request())

        assert result.ok
        self.role_repo.find_by_name.assert_called_once_with(RoleName.ADMIN)

    @pytest.mark.asyncio
    async def test_register_duplicate_rut(self):
        self.cliente_repo.exists_by_rut.return_value = True

        result = await self.service.register(ClienteFactory.register_request())

        assert result.error.code == AuthErrorCode.DUPLICATE_LOGIN_ID
        assert result.token is None
        self.cliente_repo.save.assert_not_called()
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self):
        self.cliente_repo.exists_by_email.return_value = True

        result = await self.service.register(ClienteFactory.register_request())

        assert result.error.code == AuthErrorCode.DUPLICATE_EMAIL
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_rut_checked_before_email(self):
        self.cliente_repo.exists_by_rut.return_value = True
        self.cliente_repo.exists_by_email.return_value = True

        result = await self.service.register(ClienteFactory.register_request())

        assert result.error.code == AuthErrorCode.DUPLICATE_LOGIN_ID

    @pytest.mark.asyncio
    async def test_register_invalid_email(self):
        self.cliente_repo.exists_by_email.side_effect = InvalidEmailError("bad email")

        result = await self.service.register(
            ClienteFactory.register_request(email="bad"),
        )

        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_weak_password(self):
        self.password_service.hash.side_effect = WeakPasswordError("too short")

        result = await self.service.register(
            ClienteFactory.register_request(password="abc"),
        )

        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        assert result.error.message == "too short"
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_invalid_profile_data(self):
        request = ClienteFactory.register_request(rut="123")
        self.cliente_repo.exists_by_rut.return_value = False

        result = await self.service.register(request)

        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_storage_conflict(self):
        """A concurrent insert surfaces as STORAGE_CONFLICT, not a crash."""
        self.cliente_repo.save.side_effect = StorageConflictError("cliente")

        result = await self.service.register(ClienteFactory.register_request())

        assert result.error.code == AuthErrorCode.STORAGE_CONFLICT
        assert result.token is None
        self.jwt_service.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_missing_default_role_raises(self):
        self.role_repo.find_by_name.return_value = None

        with pytest.raises(ConfigurationError, match="Default role not found"):
            await self.service.register(ClienteFactory.register_request())

        self.cliente_repo.save.assert_not_called()


class TestUpdatePassword(_ServiceTestBase):
    """Tests for update_password."""

    @pytest.mark.asyncio
    async def test_update_password_success(self):
        cliente = ClienteFactory.cliente(cliente_id=1)
        self.cliente_repo.find_by_id.return_value = cliente

        result = await self.service.update_password(
            UpdatePasswordRequest(cliente_id=1, new_password="newsecret"),
        )

        assert result.ok
        assert result.message == "Password has been updated"
        assert result.token is None
        self.password_service.hash.assert_called_once_with("newsecret")
        saved = self.cliente_repo.save.call_args[0][0]
        assert saved.password_hash == "new_hash"
        assert saved.rut == ClienteFactory.RUT

    @pytest.mark.asyncio
    async def test_update_password_unknown_cliente(self):
        self.cliente_repo.find_by_id.return_value = None

        result = await self.service.update_password(
            UpdatePasswordRequest(cliente_id=99, new_password="newsecret"),
        )

        assert result.error.code == AuthErrorCode.PRINCIPAL_NOT_FOUND
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_password_weak(self):
        self.cliente_repo.find_by_id.return_value = ClienteFactory.cliente(cliente_id=1)
        self.password_service.hash.side_effect = WeakPasswordError("too short")

        result = await self.service.update_password(
            UpdatePasswordRequest(cliente_id=1, new_password="abc"),
        )

        assert result.error.code == AuthErrorCode.VALIDATION_ERROR
        self.cliente_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_password_storage_conflict(self):
        self.cliente_repo.find_by_id.return_value = ClienteFactory.cliente(cliente_id=1)
        self.cliente_repo.save.side_effect = StorageConflictError("cliente")

        result = await self.service.update_password(
            UpdatePasswordRequest(cliente_id=1, new_password="newsecret"),
        )

        assert result.error.code == AuthErrorCode.STORAGE_CONFLICT


class TestCheckEmailExists(_ServiceTestBase):
    """Tests for check_email_exists."""

    @pytest.mark.asyncio
    async def test_registered_email(self):
        self.cliente_repo.exists_by_email.return_value = True

        result = await self.service.check_email_exists(
            SearchClienteRequest(email=ClienteFactory.EMAIL),
        )

        assert result.exists is True
        assert result.message == "Email is registered"
        assert result.ok

    @pytest.mark.asyncio
    async def test_unregistered_email(self):
        self.cliente_repo.exists_by_email.return_value = False

        result = await self.service.check_email_exists(
            SearchClienteRequest(email="nobody@example.com"),
        )

        assert result.exists is False
        assert result.message == "Email is not registered"

    @pytest.mark.asyncio
    async def test_invalid_email(self):
        self.cliente_repo.exists_by_email.side_effect = InvalidEmailError("bad email")

        result = await self.service.check_email_exists(SearchClienteRequest(email="bad"))

        assert result.exists is False
        assert result.error.code == AuthErrorCode.VALIDATION_ERROR


class TestTokenChecks(_ServiceTestBase):
    """Tests for authenticate and authorize."""

    def test_authenticate_valid_token(self):
        self.jwt_service.validate.return_value = _payload()

        result = self.service.authenticate("token")

        assert result.ok
        assert result.payload.subject == ClienteFactory.RUT
        self.jwt_service.validate.assert_called_once_with("token", now=NOW)

    def test_authenticate_invalid_token(self):
        self.jwt_service.validate.return_value = None

        result = self.service.authenticate("token")

        assert result.payload is None
        assert result.error.code == AuthErrorCode.INVALID_TOKEN
        assert result.error.message == "Invalid or expired token"

    def test_authorize_with_authority(self):
        self.jwt_service.validate.return_value = _payload(("USER",))

        result = self.service.authorize("token", "USER")

        assert result.ok

    def test_authorize_without_authority(self):
        self.jwt_service.validate.return_value = _payload(("USER",))

        result = self.service.authorize("token", "ADMIN")

        assert result.error.code == AuthErrorCode.FORBIDDEN

    def test_authorize_invalid_token(self):
        self.jwt_service.validate.return_value = None

        result = self.service.authorize("token", "USER")

        assert result.error.code == AuthErrorCode.INVALID_TOKEN
