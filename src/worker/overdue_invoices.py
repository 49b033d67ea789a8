"""Overdue Invoice Background Worker

Marks sent invoices whose due date has passed as overdue.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLineItemRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import UpdateInvoiceStatus, OverdueScanResultDTO
from src.domain.invoice import InvoiceStatus

logger = logging.getLogger(__name__)


class OverdueInvoiceWorker:
    """
    Background worker for overdue invoice detection

    Features:
    - Scans invoices in status "sent" with a due date before today
    - Moves each one to "overdue" through the status transition rules
    - Each invoice is updated in its own transaction
    - Idempotent: invoices already overdue are not scanned again

    Usage:
        worker = OverdueInvoiceWorker()
        result = await worker.run_once()

        # Run continuously (hourly by default)
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        session_factory: Optional[sessionmaker] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            session_factory: Existing session factory; when given no engine is created
        """
        self.engine = None
        if session_factory is not None:
            self.async_session_factory = session_factory
        else:
            self.engine = create_async_engine(
                db_uri or ApplicationConfig.DB_URI, echo=False, future=True
            )
            self.async_session_factory = sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
            )

        logger.info("OverdueInvoiceWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> OverdueScanResultDTO:
        """
        Run one overdue scan

        Args:
            today: Reference date (defaults to the current date)

        Returns:
            OverdueScanResultDTO with summary
        """
        start_time = time.time()
        today = today or date.today()

        async with self.async_session_factory() as session:
            candidates = await SqlAlchemyInvoiceRepository(session).get_overdue_candidates(today)
            targets = [(invoice.id, invoice.user_id, invoice.invoice_number) for invoice in candidates]

        logger.info(f"Found {len(targets)} sent invoices past due on {today.isoformat()}")

        marked_overdue = 0
        failed = 0

        for invoice_id, owner_id, invoice_number in targets:
            try:
                async with self.async_session_factory() as invoice_session:
                    use_case = UpdateInvoiceStatus(
                        uow=SqlAlchemyUnitOfWork(invoice_session),
                        invoice_repo=SqlAlchemyInvoiceRepository(invoice_session),
                        line_item_repo=SqlAlchemyLineItemRepository(invoice_session),
                        payment_repo=SqlAlchemyPaymentRepository(invoice_session),
                        client_repo=SqlAlchemyClientRepository(invoice_session),
                    )
                    result = await use_case.execute(owner_id, invoice_id, InvoiceStatus.OVERDUE.value)

                if result.is_err():
                    logger.warning(
                        f"Failed to mark invoice {invoice_number} overdue: {result.error.message}"
                    )
                    failed += 1
                    continue

                marked_overdue += 1

            except Exception as e:
                logger.error(f"Unexpected error processing invoice {invoice_number}: {e}")
                failed += 1

        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Overdue scan complete: {marked_overdue}/{len(targets)} marked overdue, "
            f"{failed} failed, {execution_time_ms}ms"
        )

        return OverdueScanResultDTO(
            scanned_date=today,
            candidates=len(targets),
            marked_overdue=marked_overdue,
            failed=failed,
            execution_time_ms=execution_time_ms,
        )

    async def run_forever(self, check_interval_seconds: Optional[int] = None):
        """
        Run the scan continuously

        Args:
            check_interval_seconds: Seconds between scans
                (defaults to ApplicationConfig.OVERDUE_CHECK_INTERVAL_SECONDS)
        """
        interval = check_interval_seconds or ApplicationConfig.OVERDUE_CHECK_INTERVAL_SECONDS
        logger.info(f"Starting continuous overdue scan with {interval}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Overdue scan failed: {e}")

            await asyncio.sleep(interval)

    async def shutdown(self):
        """Cleanup resources"""
        if self.engine is not None:
            await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Scan once
        python -m src.worker.overdue_invoices

        # Scan as of a given date
        python -m src.worker.overdue_invoices --date 2025-03-31

        # Run continuously
        python -m src.worker.overdue_invoices --continuous
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument("--date", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--interval", type=int, help="Seconds between scans in continuous mode")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    if args.continuous and not ApplicationConfig.OVERDUE_CHECK_ENABLED:
        logger.info("Overdue scan disabled (OVERDUE_CHECK_ENABLED=false)")
        return

    worker = OverdueInvoiceWorker()

    try:
        if args.continuous:
            await worker.run_forever(args.interval)
        else:
            result = await worker.run_once(today=args.date)
            print("Overdue scan complete:")
            print(f"  Date: {result.scanned_date.isoformat()}")
            print(f"  Candidates: {result.candidates}")
            print(f"  Marked overdue: {result.marked_overdue}")
            print(f"  Failed: {result.failed}")
            print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
