"""
Database initialization script: creates tables and seeds the configured sites.
"""
import logging
from logistics.core.config import settings
from logistics.db.session import Database
from logistics.services.site_service import initialize_sites

logger = logging.getLogger(__name__)


def main() -> None:
    database = Database.from_settings(settings)
    database.create_tables()
    db = database.session()
    try:
        sites = initialize_sites(settings.SITE_NAMES, settings.DEFAULT_MAXIMUM_POB, db)
        logger.info(f"Database initialized with {len(sites)} sites")
    finally:
        db.close()
        database.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    main()
