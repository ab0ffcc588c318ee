from invoice_engine.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from invoice_engine.app.models.storage_entry import StorageEntry  # noqa: F401
