"""GetPeriodReport Use Case

Revenue and outstanding figures for today, this week or this month.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional
from libs.result import Result, Return
from src.domain.invoice import InvoiceStatus
from .billing_store import BillingStore
from .dtos import PeriodReportDTO


class ReportPeriod(str, Enum):
    """Report period types"""
    TODAY = "today"
    WEEK = "week"      # Weeks start on Sunday
    MONTH = "month"


def period_start(period: ReportPeriod, now: datetime) -> datetime:
    """
    Inclusive start of the period containing now

    Boundaries are local midnights in now's own timezone; the store clock
    supplies local time.
    """
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == ReportPeriod.TODAY:
        return start_of_day
    if period == ReportPeriod.WEEK:
        # weekday(): Monday=0 ... Sunday=6
        return start_of_day - timedelta(days=(start_of_day.weekday() + 1) % 7)
    return start_of_day.replace(day=1)


class GetPeriodReport:
    """
    Use Case: Period report

    Read-only. Totals are computed over every invoice issued in the period;
    the status filter only narrows the returned invoice list.
    """

    def __init__(self, store: BillingStore):
        self.store = store

    async def execute(
        self,
        period: ReportPeriod = ReportPeriod.MONTH,
        status: Optional[InvoiceStatus] = None,
        now: Optional[datetime] = None,
    ) -> Result[PeriodReportDTO]:
        """
        Execute period report

        Args:
            period: today, week or month
            status: Optional filter for the listed invoices
            now: Reference local time (defaults to the store clock)

        Returns:
            Result[PeriodReportDTO]
        """
        period = ReportPeriod(period)
        start = period_start(period, now or self.store.clock())

        in_period = [i for i in self.store.invoices if i.issued_on >= start]
        paid = [i for i in in_period if i.status == InvoiceStatus.PAID]
        unpaid = [i for i in in_period if i.status == InvoiceStatus.UNPAID]

        listed = in_period if status is None else [i for i in in_period if i.status == status]
        listed = sorted(listed, key=lambda i: i.issued_on, reverse=True)

        return Return.ok(
            PeriodReportDTO(
                period=period.value,
                start_date=start,
                status_filter=status,
                invoice_count=len(in_period),
                paid_count=len(paid),
                unpaid_count=len(unpaid),
                revenue=sum((i.total for i in paid), Decimal("0")),
                outstanding=sum((i.total for i in unpaid), Decimal("0")),
                invoices=listed,
            )
        )
