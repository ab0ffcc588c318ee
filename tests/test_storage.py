import pytest

from invoice_engine.app.crud.crud_storage import storage_crud
from invoice_engine.app.db.base import Base
from invoice_engine.app.db.session import SessionLocal, engine
from invoice_engine.app.services.exceptions import StaleWriteError


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_put_creates_and_bumps_version():
    db = SessionLocal()
    try:
        entry = storage_crud.put(db, key="k", value="one")
        assert entry.version == 1
        entry = storage_crud.put(db, key="k", value="two")
        assert entry.version == 2
        assert storage_crud.get_value(db, key="k") == "two"
    finally:
        db.close()


def test_put_with_expected_version_zero_requires_absent_key():
    db = SessionLocal()
    try:
        storage_crud.put(db, key="k", value="one", expected_version=0)
        with pytest.raises(StaleWriteError) as excinfo:
            storage_crud.put(db, key="k", value="two", expected_version=0)
        assert excinfo.value.current_version == 1
        assert storage_crud.get_value(db, key="k") == "one"
    finally:
        db.close()


def test_concurrent_writer_is_detected():
    first = SessionLocal()
    second = SessionLocal()
    try:
        storage_crud.put(first, key="k", value="base")
        storage_crud.put(second, key="k", value="theirs", expected_version=1)
        with pytest.raises(StaleWriteError):
            storage_crud.put(first, key="k", value="mine", expected_version=1)
    finally:
        first.close()
        second.close()


def test_delete_reports_whether_anything_was_removed():
    db = SessionLocal()
    try:
        assert storage_crud.delete(db, key="missing") is False
        storage_crud.put(db, key="k", value="v")
        assert storage_crud.delete(db, key="k") is True
        assert storage_crud.get(db, key="k") is None
    finally:
        db.close()
