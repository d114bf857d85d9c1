"""
Noteful Backend: Folder Service Unit Tests
==========================================

What:  Tests for FolderService data access (list, get, insert, update, delete).
How:   Uses a mock DB session (no real DB).

What we test:
    ✅ Missing folder returns None rather than raising
    ✅ Insert returns the row produced by INSERT ... RETURNING
    ✅ Update/delete report affected row counts
    ✅ Empty updates never reach the database
    ✅ SQLAlchemy failures surface as StorageError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import StorageError
from app.services.folder_service import FolderService


def make_folder(folder_id=1, name="Important"):
    folder = MagicMock()
    folder.id = folder_id
    folder.name = name
    return folder


class TestFolderServiceRead:
    """Tests for list_folders and get_folder."""

    def setup_method(self):
        self.service = FolderService()

    @pytest.mark.asyncio
    async def test_list_folders_returns_all_rows(self, mock_db_session):
        rows = [make_folder(1, "Important"), make_folder(2, "Super")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_folders(mock_db_session)

        assert [f.name for f in result] == ["Important", "Super"]
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_folders_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_folders(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_get_folder_found(self, mock_db_session):
        folder = make_folder(2, "Super")
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = folder
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_folder(mock_db_session, 2)

        assert result is folder

    @pytest.mark.asyncio
    async def test_get_folder_missing_returns_none(self, mock_db_session):
        """Absence is reported as None; the router decides it means 404."""
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        assert await self.service.get_folder(mock_db_session, 999999) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("folder_id", [0, -1, 2_147_483_648, 10**23])
    async def test_get_folder_out_of_key_range_skips_database(self, mock_db_session, folder_id):
        assert await self.service.get_folder(mock_db_session, folder_id) is None
        mock_db_session.execute.assert_not_awaited()


class TestFolderServiceWrite:
    """Tests for insert_folder, update_folder and delete_folder."""

    def setup_method(self):
        self.service = FolderService()

    @pytest.mark.asyncio
    async def test_insert_folder_returns_new_row(self, mock_db_session):
        created = make_folder(5, "New folder")
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = created
        mock_db_session.execute.return_value = mock_result

        result = await self.service.insert_folder(mock_db_session, "New folder")

        assert result.id == 5
        assert result.name == "New folder"
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_folder_returns_rowcount(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        assert await self.service.update_folder(mock_db_session, 2, {"name": "Renamed"}) == 1

    @pytest.mark.asyncio
    async def test_update_folder_without_fields_skips_database(self, mock_db_session):
        assert await self.service.update_folder(mock_db_session, 2, {}) == 0
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_folder_missing_row_reports_zero(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 0
        mock_db_session.execute.return_value = mock_result

        assert await self.service.delete_folder(mock_db_session, 42) == 0


class TestFolderServiceErrors:
    """Database failures are wrapped, never leaked."""

    def setup_method(self):
        self.service = FolderService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda svc, db: svc.list_folders(db),
            lambda svc, db: svc.get_folder(db, 1),
            lambda svc, db: svc.insert_folder(db, "x"),
            lambda svc, db: svc.update_folder(db, 1, {"name": "x"}),
            lambda svc, db: svc.delete_folder(db, 1),
        ],
    )
    async def test_sqlalchemy_error_becomes_storage_error(self, mock_db_session, call):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection lost"))
        )

        with pytest.raises(StorageError) as exc_info:
            await call(self.service, mock_db_session)

        assert "connection lost" not in exc_info.value.message
