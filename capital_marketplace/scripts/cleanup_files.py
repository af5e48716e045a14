# capital_marketplace/scripts/cleanup_files.py
"""
Remove document records whose file is gone from the upload directory

Usage:
    python -m capital_marketplace.scripts.cleanup_files [--company-id UUID]

Affected companies are rescored.
"""
import argparse
import sys
from typing import Dict, Optional
from uuid import UUID

from dotenv import load_dotenv

from capital_marketplace.config import get_settings
from capital_marketplace.core.database import Database
from capital_marketplace.core.logger import get_logger
from capital_marketplace.services.document_service import DocumentService
from capital_marketplace.services.file_storage import LocalFileStorage
from capital_marketplace.services.investability_service import InvestabilityService, ScoreChangeCoordinator
from capital_marketplace.services.store import CompanyStore

load_dotenv()

logger = get_logger(__name__)


def cleanup(database: Database, storage: LocalFileStorage, company_id: Optional[UUID] = None) -> Dict[str, int]:
    with database.session() as db:
        coordinator = ScoreChangeCoordinator(InvestabilityService(CompanyStore(db)))
        service = DocumentService(db, coordinator, storage)
        return service.cleanup_orphaned_files(company_id)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Remove records of missing data room files")
    parser.add_argument("--company-id", type=UUID, default=None, help="Only check this company")
    args = parser.parse_args(argv)

    settings = get_settings()
    database = Database(settings.database_url)
    try:
        result = cleanup(database, LocalFileStorage(settings.upload_dir), args.company_id)
    finally:
        database.dispose()

    logger.info(f"✅ Checked {result['checked']} documents, removed {result['deleted']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
