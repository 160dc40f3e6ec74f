"""
main.py
-------
Entry point for the photo album data layer.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Log an overview of the gallery (photo count, newest uploads, volume).
    - Close the pool on exit.
"""

from db.connection import init_pool, close_pool
from db.exceptions import DataAccessError
from db.init_db import create_tables
from services.photo_query_service import PhotoQueryService
from utils.logger import get_logger

logger = get_logger(__name__)

PREVIEW_ROWS = 5


def log_gallery_overview(service: PhotoQueryService) -> None:
    """Log the newest photos and the total stored volume."""
    stats = service.statistics_overview()
    if not stats:
        logger.info("Gallery is empty.")
        return

    # Newest first, so the oldest row carries the grand total.
    total_bytes = stats[-1].running_total
    logger.info(f"Gallery holds {len(stats)} photo(s), {total_bytes} bytes in total.")
    for row in service.paginate(1, PREVIEW_ROWS):
        logger.info(f"  {row}")

    largest = [s.photo.original_file_name for s in stats if s.size_rank == 1]
    logger.info(f"Largest upload(s): {', '.join(largest)}")


def main() -> None:
    """Initialize the database and report on its contents."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    try:
        create_tables()

        # ── 2. Gallery overview ───────────────────────────
        log_gallery_overview(PhotoQueryService())
    except DataAccessError as e:
        logger.error(f"Gallery overview failed: {e}")
        raise
    finally:
        # ── 3. Cleanup ────────────────────────────────────
        close_pool()


if __name__ == "__main__":
    main()
