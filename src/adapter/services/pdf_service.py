"""ReportLab PDF Generation Service Implementation

Implements PDF generation using ReportLab library.
"""

from datetime import datetime, tzinfo
from decimal import Decimal
from io import BytesIO
from xml.sax.saxutils import escape
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import (
    Image,
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice_document import InvoiceDocument

CUSTOM_FONT_NAME = "InvoiceFont"
PAID_COLOR = colors.HexColor("#009600")
PENDING_COLOR = colors.HexColor("#FF6400")


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates printable clinic invoices using ReportLab. The built-in
    Helvetica has no glyph for some currency symbols (e.g. ₹); pass a TTF
    font_path to render them. Dates are printed in tz (the device's local
    timezone when None).
    """

    def __init__(
        self,
        currency_symbol: str = "₹",
        font_path: Optional[str] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.currency_symbol = currency_symbol
        self.tz = tz
        self.font_name = "Helvetica"
        self.bold_font_name = "Helvetica-Bold"

        if font_path:
            pdfmetrics.registerFont(TTFont(CUSTOM_FONT_NAME, font_path))
            self.font_name = CUSTOM_FONT_NAME
            self.bold_font_name = CUSTOM_FONT_NAME

    def format_amount(self, amount: Decimal) -> str:
        return f"{self.currency_symbol}{amount:,.2f}"

    def format_date(self, value: datetime) -> str:
        if value.tzinfo is not None:
            value = value.astimezone(self.tz)
        return value.strftime("%d/%m/%Y")

    def generate_invoice(self, document: InvoiceDocument) -> bytes:
        """
        Generate an invoice PDF

        Args:
            document: Resolved invoice, patient, services and clinic info

        Returns:
            PDF document as bytes
        """
        invoice = document.invoice
        patient = document.patient
        clinic = document.clinic_info
        totals = document.totals

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.display_number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontName=self.bold_font_name,
            fontSize=20,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        invoice_style = ParagraphStyle(
            "InvoiceStyle",
            parent=styles["Heading2"],
            fontName=self.bold_font_name,
            fontSize=18,
            spaceAfter=12,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontName=self.font_name,
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontName=self.font_name,
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName=self.bold_font_name,
        )

        # Header - Clinic Info
        if clinic.logo:
            elements.append(Image(clinic.logo, width=30 * mm, height=30 * mm, hAlign="LEFT"))
        elements.append(Paragraph(escape(clinic.name), title_style))
        if clinic.department:
            elements.append(Paragraph(escape(clinic.department), header_style))
        elements.append(Paragraph(escape(clinic.address), header_style))
        elements.append(Paragraph(f"Phone: {escape(str(clinic.phone))}", header_style))
        if clinic.email:
            elements.append(Paragraph(f"Email: {escape(str(clinic.email))}", header_style))
        if clinic.consultant:
            elements.append(Paragraph(f"Consultant: {escape(str(clinic.consultant))}", header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph("INVOICE", invoice_style))

        # Invoice Details Table
        invoice_info = [
            ["Invoice #:", invoice.display_number],
            ["Date:", self.format_date(invoice.issued_on)],
            ["Status:", invoice.status.value.upper()],
        ]

        invoice_table = Table(invoice_info, colWidths=[30 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), self.bold_font_name),
                    ("FONTNAME", (1, 0), (1, -1), self.font_name),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Patient Info
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(patient.name), normal_style))
        if document.patient_found:
            elements.append(Paragraph(f"Phone: {escape(str(patient.phone))}", normal_style))
            elements.append(Paragraph(f"Age: {patient.age}", normal_style))
            if patient.sex:
                elements.append(Paragraph(f"Sex: {escape(str(patient.sex))}", normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Line Items Table
        line_data = [["Service", "Qty", "Rate", "Amount"]]
        for item in invoice.items:
            service = document.service_for(item)
            line_data.append(
                [
                    service.name,
                    str(item.quantity),
                    self.format_amount(item.unit_price),
                    self.format_amount(item.line_total),
                ]
            )

        line_table = Table(
            line_data, colWidths=[80 * mm, 20 * mm, 35 * mm, 35 * mm]
        )
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), self.bold_font_name),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTNAME", (0, 1), (-1, -1), self.font_name),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )

        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [["", "", "Subtotal:", self.format_amount(totals.subtotal)]]
        if invoice.discount > 0:
            total_data.append(
                [
                    "",
                    "",
                    f"Discount ({invoice.discount}%):",
                    f"-{self.format_amount(totals.discount_amount)}",
                ]
            )
        if invoice.tax_rate > 0:
            total_data.append(
                [
                    "",
                    "",
                    f"Tax ({invoice.tax_rate}%):",
                    self.format_amount(totals.tax_amount),
                ]
            )
        total_data.append(["", "", "Total:", self.format_amount(invoice.total)])

        total_table = Table(total_data, colWidths=[55 * mm, 20 * mm, 60 * mm, 35 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -2), self.font_name),
                    ("FONTNAME", (2, -1), (-1, -1), self.bold_font_name),
                    ("FONTSIZE", (0, 0), (-1, -2), 10),
                    ("FONTSIZE", (0, -1), (-1, -1), 12),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(total_table)
        elements.append(Spacer(1, 10 * mm))

        # Payment status
        if invoice.is_paid and invoice.paid_on:
            status_text = f"PAID on {self.format_date(invoice.paid_on)}"
            status_color = PAID_COLOR
        else:
            status_text = "PAYMENT PENDING"
            status_color = PENDING_COLOR

        elements.append(
            Paragraph(
                status_text,
                ParagraphStyle(
                    "StatusStyle",
                    parent=bold_style,
                    fontSize=12,
                    textColor=status_color,
                ),
            )
        )

        if invoice.notes:
            elements.append(Spacer(1, 5 * mm))
            elements.append(Paragraph(f"Notes: {escape(str(invoice.notes))}", normal_style))

        elements.append(Spacer(1, 15 * mm))

        # Footer
        elements.append(Paragraph("Thank you for your business!", normal_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph("Signature: ________________________", normal_style))

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
