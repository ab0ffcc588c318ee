class EngineError(Exception):
    """Base exception for template engine failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class StaleWriteError(EngineError):
    """Raised when a storage write was based on an outdated version."""

    def __init__(self, key: str, expected_version: int | None, current_version: int | None):
        super().__init__(
            f"Stale write to '{key}': expected version {expected_version}, found {current_version}"
        )
        self.key = key
        self.expected_version = expected_version
        self.current_version = current_version


class ExportTargetNotFoundError(EngineError):
    """Raised when the element to rasterize for export cannot be found."""


class DraftNotFoundError(EngineError):
    def __init__(self, bill_number: str):
        super().__init__(f"Draft '{bill_number}' not found")
        self.bill_number = bill_number


class LineItemNotFoundError(EngineError):
    def __init__(self, bill_number: str, item_id: str):
        super().__init__(f"Line item '{item_id}' not found on draft '{bill_number}'")
        self.bill_number = bill_number
        self.item_id = item_id
