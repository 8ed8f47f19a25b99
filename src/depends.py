import logging
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Result, Return
from src.adapter.repositories.billing_data_repository import KeyValueBillingDataRepository
from src.adapter.services.invoice_file_service import LocalInvoiceFileService
from src.adapter.services.key_value_store import SqlAlchemyKeyValueStore
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.use_cases.billing import (
    BillingStore,
    ExportInvoicePdf,
    GenerateInvoicePdf,
    GetPeriodReport,
    ResolveInvoice,
)
from src.domain.invoice_document import ClinicInfo
from src.domain.storage_entry import StorageEntry  # noqa: F401 registers the table

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = ApplicationConfig.LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_engine(db_uri: str = ApplicationConfig.DB_URI) -> AsyncEngine:
    return create_async_engine(db_uri, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create the storage tables if they do not exist"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def default_clinic_info() -> ClinicInfo:
    return ClinicInfo(
        name=ApplicationConfig.CLINIC_NAME,
        address=ApplicationConfig.CLINIC_ADDRESS,
        phone=ApplicationConfig.CLINIC_PHONE,
        email=ApplicationConfig.CLINIC_EMAIL,
        consultant=ApplicationConfig.CLINIC_CONSULTANT,
        department=ApplicationConfig.CLINIC_DEPARTMENT,
        logo=ApplicationConfig.CLINIC_LOGO_PATH,
    )


async def create_billing_store(engine: AsyncEngine) -> Result[BillingStore]:
    """
    Build the process-wide store and load it once

    The caller owns the returned store for the process lifetime and passes
    it to every consumer. A failed load is returned as an error instead of
    an empty store, so stored data is never overwritten; the caller may
    retry or report the failure.
    """
    await init_db(engine)

    kv_store = SqlAlchemyKeyValueStore(create_session_factory(engine))
    store = BillingStore(KeyValueBillingDataRepository(kv_store))

    result = await store.load()
    if result.is_err():
        logger.error(f"Billing store not started: {result.error.reason}")
        return result

    return Return.ok(store)


def get_resolve_invoice(store: BillingStore) -> ResolveInvoice:
    return ResolveInvoice(store)


def get_generate_invoice_pdf(store: BillingStore) -> GenerateInvoicePdf:
    return GenerateInvoicePdf(
        resolve_invoice=ResolveInvoice(store),
        pdf_service=ReportLabPdfService(
            currency_symbol=ApplicationConfig.CURRENCY_SYMBOL,
            font_path=ApplicationConfig.PDF_FONT_PATH,
        ),
        file_service=LocalInvoiceFileService(ApplicationConfig.INVOICE_OUTPUT_DIR),
        clinic_info=default_clinic_info(),
    )


def get_export_invoice_pdf() -> ExportInvoicePdf:
    return ExportInvoicePdf(LocalInvoiceFileService(ApplicationConfig.INVOICE_OUTPUT_DIR))


def get_period_report(store: BillingStore) -> GetPeriodReport:
    return GetPeriodReport(store)
