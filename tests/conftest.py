"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database with the full schema.
"""
from typing import Generator

import pytest
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pathway.crud import seed_habits_if_empty
from pathway.db import build_engine
from pathway.models import Base
from pathway.program.catalog import Catalog, StepDescriptor
from pathway.program.forms import FormContent
from pathway.program.form_registry import reflection_form
from pathway.session import ProgramSession
from pathway.store import RecordStore, StoreError


class BrokenWritesStore(RecordStore):
    """Reads work, every write fails the way an unreachable store does."""

    def insert(self, model, values):
        raise StoreError("insert failed")

    def update(self, model, filters, values):
        raise StoreError("update failed")

    def upsert(self, model, values, conflict_keys, update_keys=None):
        raise StoreError("upsert failed")

    def delete(self, model, filters):
        raise StoreError("delete failed")


class BrokenReadsStore(RecordStore):
    def select(self, model, filters, order_by=None, descending=True, limit=None):
        raise StoreError("select failed")


def make_catalog(*step_ids: int, **options) -> Catalog:
    return Catalog(
        [
            StepDescriptor(
                id=step_id,
                title=f"Step {step_id}",
                description="",
                content=FormContent(reflection_form(step_id)),
            )
            for step_id in step_ids
        ],
        **options,
    )


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def store(db) -> RecordStore:
    return RecordStore(db)


@pytest.fixture
def session(store) -> ProgramSession:
    return ProgramSession(user_id="user-1", store=store)


@pytest.fixture
def other_session(store) -> ProgramSession:
    return ProgramSession(user_id="user-2", store=store)


@pytest.fixture
def broken_writes_session(db) -> ProgramSession:
    return ProgramSession(user_id="user-1", store=BrokenWritesStore(db))


@pytest.fixture
def broken_reads_session(db) -> ProgramSession:
    return ProgramSession(user_id="user-1", store=BrokenReadsStore(db))


@pytest.fixture
def seeded_db(db) -> Session:
    seed_habits_if_empty(db)
    return db


@pytest.fixture
def small_catalog() -> Catalog:
    return make_catalog(1, 2, 3, 5, 8)


@pytest.fixture
def catalog_factory():
    return make_catalog
