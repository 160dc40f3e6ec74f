"""
services/photo_query_service.py
-------------------------------
Read-side operations over the photo gallery.
Validates caller input and delegates the SQL to PhotoRepository.
"""

import re
from datetime import datetime
from typing import Optional, Union

from dateutil import parser as date_parser

from db.exceptions import InvalidParameterError
from models.photo import Photo, PhotoStatistics
from repositories.photo_repo import PhotoRepository
from services.statistics_service import compute_statistics
from utils.logger import get_logger

logger = get_logger(__name__)

_YEAR_RE = re.compile(r"[0-9]{4}")
_MONTH_RE = re.compile(r"0[1-9]|1[0-2]")

# Largest value PostgreSQL accepts for OFFSET and LIMIT.
_BIGINT_MAX = 2**63 - 1

Timestamp = Union[datetime, str]


class PhotoQueryService:
    """
    Stateless query operations used by the gallery views.

    Every method is a single read; instances hold no mutable state and can
    be shared between threads.
    """

    def __init__(self, repo: Optional[PhotoRepository] = None):
        self.repo = repo or PhotoRepository()

    # ── Listing ───────────────────────────────────────────

    def list_all_descending(self) -> list[Photo]:
        """Return every photo, newest upload first. Callers bound the size."""
        return self.repo.get_all_ordered_desc()

    def get_photo(self, photo_id: str) -> Optional[Photo]:
        """Return one photo by ID, or None if it does not exist."""
        return self.repo.get_by_id(photo_id)

    # ── Cursor navigation ─────────────────────────────────

    def find_before(self, timestamp: Timestamp) -> list[Photo]:
        """
        Photos uploaded before a cursor, for "previous" navigation.

        Args:
            timestamp: datetime or ISO-8601 string.

        Returns:
            Up to 10 photos, newest first.
        """
        return self.repo.get_uploaded_before(_parse_timestamp(timestamp))

    def find_after(self, timestamp: Timestamp) -> list[Photo]:
        """
        Photos uploaded after a cursor, for "next" navigation.

        All matching photos are returned, oldest first, and a missing
        file path is reported as "default_path".

        Args:
            timestamp: datetime or ISO-8601 string.
        """
        return self.repo.get_uploaded_after(_parse_timestamp(timestamp))

    def find_neighbours(self, photo_id: str) -> Optional[tuple[list[Photo], list[Photo]]]:
        """
        Photos on either side of a given photo in upload order.

        Returns:
            (before, after) as produced by find_before() and find_after(),
            or None if the photo does not exist.
        """
        photo = self.repo.get_by_id(photo_id)
        if photo is None:
            logger.info(f"Navigation requested for unknown photo {photo_id}")
            return None
        return self.find_before(photo.uploaded_at), self.find_after(photo.uploaded_at)

    # ── Search ────────────────────────────────────────────

    def find_by_month(self, year: str, month: str) -> list[Photo]:
        """
        Photos uploaded in one calendar month, newest first.

        Args:
            year: Four-digit year, e.g. "2024".
            month: Two-digit month, "01" to "12".

        Raises:
            InvalidParameterError: If year or month is not in that form.
        """
        if not isinstance(year, str) or not _YEAR_RE.fullmatch(year):
            raise InvalidParameterError(f"year must be a 4-digit string, got {year!r}")
        if not isinstance(month, str) or not _MONTH_RE.fullmatch(month):
            raise InvalidParameterError(f"month must be a 2-digit string 01-12, got {month!r}")
        return self.repo.get_by_upload_month(year, month)

    # ── Pagination ────────────────────────────────────────

    def paginate(self, start_row: int, end_row: int) -> list[Photo]:
        """
        Rows start_row..end_row (1-based, inclusive) of the newest-first listing.

        Out-of-range bounds never raise: start_row below 1 is treated as 1,
        an empty range yields [], and end_row past the last photo simply
        truncates the result.

        Raises:
            InvalidParameterError: If either bound is not an integer.
        """
        _require_int("start_row", start_row)
        _require_int("end_row", end_row)

        start_row = max(start_row, 1)
        if start_row > end_row or start_row - 1 > _BIGINT_MAX:
            return []
        limit = min(end_row - start_row + 1, _BIGINT_MAX)
        return self.repo.get_page(offset=start_row - 1, limit=limit)

    def page(self, page_number: int, page_size: int) -> list[Photo]:
        """
        One page of the newest-first listing.

        Args:
            page_number: 1-based page index.
            page_size: Photos per page.

        Raises:
            InvalidParameterError: If either argument is not a positive integer.
        """
        _require_int("page_number", page_number)
        _require_int("page_size", page_size)
        if page_number < 1 or page_size < 1:
            raise InvalidParameterError(
                f"page_number and page_size must be positive, got {page_number} and {page_size}"
            )
        start_row = (page_number - 1) * page_size + 1
        return self.paginate(start_row, start_row + page_size - 1)

    # ── Statistics ────────────────────────────────────────

    def statistics_overview(self) -> list[PhotoStatistics]:
        """
        Every photo with its size rank and running upload total.

        Returns:
            PhotoStatistics rows ordered by upload time, newest first.
        """
        return compute_statistics(self.repo.get_all_ordered_desc())


# ── HELPERS ───────────────────────────────────────────────

def _parse_timestamp(value: Timestamp) -> datetime:
    """
    Accept a datetime, or parse an ISO-8601 string.

    UPLOADED_AT stores naive local time, so a cursor carrying a UTC offset
    is converted to local time and its tzinfo dropped before it is compared.
    """
    if isinstance(value, str):
        try:
            value = date_parser.isoparse(value)
        except ValueError as e:
            raise InvalidParameterError(f"invalid timestamp {value!r}: {e}") from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value
    raise InvalidParameterError(f"timestamp must be a datetime or ISO-8601 string, got {value!r}")


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a row number
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
