import os
from decimal import Decimal


class Settings:
    def __init__(self):
        self.app_name = "Invoice Template Engine"
        self.api_version = "1.0.0"
        self.environment = os.getenv("INVOICE_ENGINE_ENV", "development")
        self.database_url = os.getenv("INVOICE_ENGINE_DATABASE_URL", "sqlite:///./invoice_engine.db")

        # Storage keys for the persisted blobs
        self.settings_storage_key = "pdfTemplateSettings"
        self.drafts_storage_key = "draftInvoices"

        self.bill_number_prefix = os.getenv("INVOICE_ENGINE_BILL_PREFIX", "CLG")
        self.currency_code = os.getenv("INVOICE_ENGINE_CURRENCY", "USD")

        # Financial policy: one named value per rate
        self.discount_rate = Decimal("0.20")
        self.tax_rate = Decimal("0.10")
        self.split_tax_rate = Decimal("0.09")
        self.split_tax_labels = ("Central Tax", "State Tax")

        # Export collaborator contract
        self.large_invoice_item_threshold = 10
        self.export_fallback_name = "Invoice"

        self.draft_write_retries = 3


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
