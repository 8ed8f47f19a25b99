"""Billing Snapshot

The three collections persisted together by the billing data repository.
"""

from typing import List
from pydantic import Field
from src.domain.base import EntityModel
from src.domain.patient import Patient
from src.domain.service import Service
from src.domain.invoice import Invoice


class BillingSnapshot(EntityModel):
    """Point-in-time copy of all patients, services and invoices"""

    patients: List[Patient] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    invoices: List[Invoice] = Field(default_factory=list)
