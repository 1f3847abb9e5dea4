#!/usr/bin/env python
"""
Permanently delete archived contracts older than the retention window,
together with their bookings and package reservations.

Usage:
    python -m src.api.scripts.purge_archived_contracts [--days N] [--partner UUID] [--dry-run]
"""

import argparse
import logging
import sys
from typing import Optional, List
from sqlmodel import Session
from src.api.common.utils.database import engine
from src.api.contracts.config import ArchiveConfig
from src.api.contracts.services.contract_archive_service import ContractArchiveService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Permanently delete old archived contracts")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Delete contracts archived more than this many days ago (default: ARCHIVE_RETENTION_DAYS)"
    )
    parser.add_argument(
        "--partner",
        default=None,
        help="Only purge contracts of this partner UUID"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the contracts that would be deleted without deleting them"
    )
    return parser.parse_args(argv)


def run(session: Session, args: argparse.Namespace, config: Optional[ArchiveConfig] = None) -> int:
    """Run the purge and return the process exit code"""
    service = ContractArchiveService(session, config)

    if args.dry_run:
        result = service.get_purge_candidates(args.days, args.partner)
        if not result.success:
            logger.error(f"Dry run failed: {result.error}")
            return 1
        contract_ids = result.data.contract_ids
        logger.info(f"[dry-run] {len(contract_ids)} archived contracts would be deleted")
        for contract_id in contract_ids:
            logger.info(f"[dry-run]   contract {contract_id}")
        return 0

    result = service.permanently_delete_old_archived(args.days, args.partner)
    if not result.success:
        logger.error(f"Purge failed: {result.error}")
        return 1
    logger.info(f"Purge completed. Deleted {result.data.deleted_count} archived contracts")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    with Session(engine) as session:
        return run(session, args)


if __name__ == "__main__":
    sys.exit(main())
