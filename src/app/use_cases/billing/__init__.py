"""Billing domain use cases"""
from .dtos import (
    CreatePatientCommandDTO,
    UpdatePatientCommandDTO,
    CreateServiceCommandDTO,
    UpdateServiceCommandDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    DashboardStatsDTO,
    InvoicePdfResponseDTO,
    InvoiceExportResponseDTO,
    PeriodReportDTO,
)
from .billing_store import BillingStore
from .resolve_invoice import ResolveInvoice
from .generate_invoice_pdf import GenerateInvoicePdf
from .export_invoice_pdf import ExportInvoicePdf
from .get_period_report import GetPeriodReport, ReportPeriod

__all__ = [
    "BillingStore",
    "ResolveInvoice",
    "GenerateInvoicePdf",
    "ExportInvoicePdf",
    "GetPeriodReport",
    "ReportPeriod",
    "CreatePatientCommandDTO",
    "UpdatePatientCommandDTO",
    "CreateServiceCommandDTO",
    "UpdateServiceCommandDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "DashboardStatsDTO",
    "InvoicePdfResponseDTO",
    "InvoiceExportResponseDTO",
    "PeriodReportDTO",
]
