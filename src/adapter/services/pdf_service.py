"""ReportLab PDF Generation Service Implementation

Implements invoice rendering using ReportLab library.
"""

from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain import money
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.line_item import LineItem
from src.domain.user import User

DARK = colors.HexColor("#2C3E50")
GRAY = colors.HexColor("#7F8C8D")
GRID = colors.HexColor("#BDC3C7")
STATUS_COLORS = {
    "draft": colors.HexColor("#95A5A6"),
    "sent": colors.HexColor("#3498DB"),
    "paid": colors.HexColor("#27AE60"),
    "overdue": colors.HexColor("#E74C3C"),
    "cancelled": colors.HexColor("#7F8C8D"),
}
COLUMN_WIDTHS = [70 * mm, 20 * mm, 28 * mm, 17 * mm, 35 * mm]


def _quantity(value) -> str:
    """Quantity without trailing zeros, e.g. 5.000000 -> 5"""
    text = f"{money.to_decimal(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _rate(value) -> str:
    return f"{_quantity(value)}%"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates A4 invoices: issuer header, invoice details, bill-to block,
    line items with tax, totals, payment terms and notes.
    """

    def __init__(self, default_company_name: str = "Your Company"):
        self.default_company_name = default_company_name

    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[LineItem],
        client: Optional[Client],
        issuer: User,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with totals populated
            line_items: Line items in display order
            client: Billed client (None if the invoice has no client)
            issuer: Invoice owner, printed as the issuing company

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=28,
            textColor=DARK,
        )
        company_style = ParagraphStyle(
            "CompanyStyle",
            parent=styles["Normal"],
            fontSize=12,
            fontName="Helvetica-Bold",
            alignment=2,
        )
        muted_style = ParagraphStyle(
            "MutedStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=GRAY,
        )
        muted_right_style = ParagraphStyle("MutedRightStyle", parent=muted_style, alignment=2)
        normal_style = ParagraphStyle("NormalStyle", parent=styles["Normal"], fontSize=10)
        cell_style = ParagraphStyle("CellStyle", parent=styles["Normal"], fontSize=9)
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=11,
            fontName="Helvetica-Bold",
        )

        currency = invoice.currency
        status = getattr(invoice.status, "value", invoice.status)
        elements = []

        # Header - INVOICE label and issuer
        company_name = issuer.company_name or issuer.full_name or self.default_company_name
        header = Table(
            [[
                Paragraph("INVOICE", title_style),
                [
                    Paragraph(escape(company_name), company_style),
                    Paragraph(escape(issuer.email), muted_right_style),
                ],
            ]],
            colWidths=[85 * mm, 85 * mm],
        )
        header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements.append(header)
        elements.append(Spacer(1, 8 * mm))

        # Invoice details and status badge
        details = [
            ["Invoice Number:", invoice.invoice_number],
            ["Invoice Date:", invoice.invoice_date.strftime("%B %d, %Y")],
        ]
        if invoice.due_date:
            details.append(["Due Date:", invoice.due_date.strftime("%B %d, %Y")])
        details.append(["Status:", status.upper()])

        details_table = Table(details, colWidths=[40 * mm, 100 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), GRAY),
                    ("TEXTCOLOR", (1, -1), (1, -1), STATUS_COLORS.get(status, DARK)),
                    ("FONTNAME", (1, -1), (1, -1), "Helvetica-Bold"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 8 * mm))

        # Bill To
        elements.append(Paragraph("BILL TO:", bold_style))
        if client:
            elements.append(Paragraph(escape(client.client_name), normal_style))
            for value in (client.client_email, client.client_address, client.client_phone, client.tax_id):
                if value:
                    elements.append(Paragraph(escape(value), muted_style))
        else:
            elements.append(Paragraph("No client assigned", muted_style))
        elements.append(Spacer(1, 8 * mm))

        # Line Items Table
        line_data = [["Description", "Qty", "Price", "Tax", "Total"]]
        for line in line_items:
            line_data.append(
                [
                    Paragraph(escape(line.description), cell_style),
                    _quantity(line.quantity),
                    money.format_money(line.unit_price, currency),
                    _rate(line.tax_rate),
                    money.format_money(line.line_total, currency),
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), DARK),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID),
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
        totals_data = [
            ["Subtotal:", money.format_money(invoice.subtotal, currency)],
            ["Tax:", money.format_money(invoice.total_tax, currency)],
            ["TOTAL:", money.format_money(invoice.total, currency)],
        ]
        totals_table = Table(totals_data, colWidths=[135 * mm, 35 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, 1), 10),
                    ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 2), (-1, 2), 12),
                    ("LINEABOVE", (1, 2), (1, 2), 1.5, DARK),
                    ("TOPPADDING", (0, 2), (-1, 2), 8),
                ]
            )
        )
        elements.append(totals_table)
        elements.append(Spacer(1, 10 * mm))

        # Payment terms and notes
        if invoice.payment_terms:
            elements.append(Paragraph("Payment Terms:", bold_style))
            elements.append(Paragraph(escape(invoice.payment_terms), normal_style))
            elements.append(Spacer(1, 5 * mm))
        if invoice.notes:
            elements.append(Paragraph("Notes:", bold_style))
            elements.append(Paragraph(escape(invoice.notes).replace("\n", "<br/>"), normal_style))
            elements.append(Spacer(1, 5 * mm))

        elements.append(Spacer(1, 10 * mm))
        elements.append(
            Paragraph(
                "<i>Thank you for your business!</i>",
                ParagraphStyle(
                    "FooterNote",
                    parent=styles["Normal"],
                    fontSize=9,
                    alignment=1,
                    textColor=colors.HexColor("#95A5A6"),
                ),
            )
        )

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
