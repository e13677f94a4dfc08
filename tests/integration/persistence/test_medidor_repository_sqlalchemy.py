"""Integration tests for MedidorRepositorySQLAlchemy."""

import pytest
import pytest_asyncio

from cliente.domain.cliente import RoleName, StorageConflictError
from cliente.domain.medidor import Medidor
from cliente.infrastructure.persistence.sqlalchemy import (
    ClienteRepositorySQLAlchemy,
    MedidorRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import ClienteFactory


@pytest.fixture
def medidor_repo(db_session):
    return MedidorRepositorySQLAlchemy(db_session)


@pytest_asyncio.fixture
async def cliente(db_session):
    role = await RoleRepositorySQLAlchemy(db_session).find_by_name(RoleName.USER)
    saved = await ClienteRepositorySQLAlchemy(db_session).save(
        ClienteFactory.cliente(role=role),
    )
    await db_session.commit()
    return saved


@pytest.mark.integration
class TestMedidorRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_find(self, medidor_repo, cliente):
        saved = await medidor_repo.save(
            Medidor.create("MED-0001", cliente_id=cliente.id, description="Kitchen"),
        )

        found = await medidor_repo.find_by_serial_number("MED-0001")

        assert saved.id is not None
        assert found.id == saved.id
        assert found.cliente_id == cliente.id
        assert found.description == "Kitchen"
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_exists_by_serial_number(self, medidor_repo, cliente):
        assert not await medidor_repo.exists_by_serial_number("MED-0001")

        await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))

        assert await medidor_repo.exists_by_serial_number("MED-0001")
        assert await medidor_repo.exists_by_serial_number(" MED-0001 ")

    @pytest.mark.asyncio
    async def test_list_by_cliente(self, medidor_repo, cliente):
        await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))
        await medidor_repo.save(Medidor.create("MED-0002", cliente_id=cliente.id))

        medidores = await medidor_repo.list_by_cliente(cliente.id)

        assert [m.serial_number for m in medidores] == ["MED-0001", "MED-0002"]
        assert await medidor_repo.list_by_cliente(cliente.id + 1) == []

    @pytest.mark.asyncio
    async def test_duplicate_serial_raises_storage_conflict(
        self,
        medidor_repo,
        db_session,
        cliente,
    ):
        await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))
        await db_session.commit()

        with pytest.raises(StorageConflictError):
            await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))

        assert len(await medidor_repo.list_by_cliente(cliente.id)) == 1

    @pytest.mark.asyncio
    async def test_conflict_keeps_uncommitted_work_in_same_session(
        self,
        medidor_repo,
        db_session,
        cliente,
    ):
        await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))

        with pytest.raises(StorageConflictError):
            await medidor_repo.save(Medidor.create("MED-0001", cliente_id=cliente.id))

        await medidor_repo.save(Medidor.create("MED-0002", cliente_id=cliente.id))
        await db_session.commit()

        medidores = await medidor_repo.list_by_cliente(cliente.id)
        assert [m.serial_number for m in medidores] == ["MED-0001", "MED-0002"]
