from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Generator, Sequence

import pytest
from fastapi.testclient import TestClient as FastAPITestClient
from openpyxl import Workbook
from sqlalchemy.orm import Session

from kbase import db, repository
from kbase.dependencies import create_db_session
from kbase.main import app
from kbase.models import KnowledgeItemDraft, Tenant


class FakeKnowledgeStore:
    def __init__(self, existing: Sequence[str] = ()) -> None:
        self.existing = list(existing)
        self.lookups: list[tuple[str, list[str]]] = []
        self.batches: list[tuple[str, list[KnowledgeItemDraft]]] = []
        self.lookup_error: Exception | None = None
        self.batch_error: Exception | None = None

    def find_existing_questions(self, tenant_id: str, questions: Sequence[str]) -> set[str]:
        self.lookups.append((tenant_id, list(questions)))
        if self.lookup_error is not None:
            raise self.lookup_error
        wanted = set(questions)
        return {q.strip().lower() for q in self.existing if q.strip().lower() in wanted}

    def bulk_add_items(self, tenant_id: str, items: Sequence[KnowledgeItemDraft]) -> None:
        self.batches.append((tenant_id, list(items)))
        if self.batch_error is not None:
            raise self.batch_error
        self.existing.extend(item.question for item in items)


@pytest.fixture
def fake_store() -> FakeKnowledgeStore:
    return FakeKnowledgeStore()


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("KBASE_DB_PATH", str(db_file))
    monkeypatch.delenv("KBASE_IMPORT_MAX_BYTES", raising=False)
    monkeypatch.delenv("KBASE_BOOTSTRAP_TENANT_SLUG", raising=False)
    return db_file


@pytest.fixture
def session(db_path) -> Generator[Session, None, None]:
    db.run_migrations(str(db_path))
    db_session = create_db_session(str(db_path))
    try:
        yield db_session
    finally:
        db_session.close()


@pytest.fixture
def tenant(session) -> Tenant:
    return repository.create_tenant(session, name="Acme Support", slug="acme")


@pytest.fixture
def client(db_path) -> Generator[FastAPITestClient, None, None]:
    with FastAPITestClient(app) as test_client:
        yield test_client


@pytest.fixture
def _csv_bytes() -> Callable[..., bytes]:
    def _factory(*lines: str) -> bytes:
        return ("\n".join(lines) + "\n").encode("utf-8")

    return _factory


@pytest.fixture
def _xlsx_bytes() -> Callable[[list[list[object]]], bytes]:
    def _factory(rows: list[list[object]]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(row)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return _factory


@pytest.fixture
def _truncated_xlsx_bytes(_xlsx_bytes) -> Callable[[list[list[object]]], bytes]:
    """Valid workbook whose first sheet XML is cut in half."""

    def _factory(rows: list[list[object]]) -> bytes:
        source = zipfile.ZipFile(io.BytesIO(_xlsx_bytes(rows)))
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
            for info in source.infolist():
                data = source.read(info.filename)
                if info.filename == "xl/worksheets/sheet1.xml":
                    data = data[: len(data) // 2]
                target.writestr(info, data)
        return buffer.getvalue()

    return _factory
