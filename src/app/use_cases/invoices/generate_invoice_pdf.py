"""GenerateInvoicePdf Use Case

Renders an invoice with its line items, client and issuer as a PDF.
"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.user_repository import UserRepository
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfDTO
from .mappers import invoice_not_found


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Ownership checked
    2. Document shows the complete aggregate (header, client, items, totals)

    Flow:
    1. Load invoice for owner
    2. Load line items, client and issuing user
    3. Render PDF
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        client_repo: ClientRepository,
        user_repo: UserRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.client_repo = client_repo
        self.user_repo = user_repo
        self.pdf_service = pdf_service

    async def execute(self, owner_id: int, invoice_id: int) -> Result[InvoicePdfDTO]:
        try:
            # Step 1: Load invoice for owner
            invoice = await self.invoice_repo.get_for_owner(owner_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 2: Load line items, client and issuer
            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
            client = None
            if invoice.client_id is not None:
                client = await self.client_repo.get_for_owner(owner_id, invoice.client_id)
            issuer = await self.user_repo.get_by_id(owner_id)
            if not issuer:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {owner_id} not found",
                        reason="Issuing user no longer exists",
                    )
                )

            # Step 3: Render PDF
            content = self.pdf_service.generate_invoice(invoice, line_items, client, issuer)

            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=f"invoice-{invoice.invoice_number}.pdf",
                    content=content,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
