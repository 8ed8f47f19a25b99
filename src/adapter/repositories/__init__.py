from .billing_data_repository import KeyValueBillingDataRepository

__all__ = [
    "KeyValueBillingDataRepository",
]
