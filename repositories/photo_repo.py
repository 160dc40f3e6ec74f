"""
repositories/photo_repo.py
--------------------------
Data access layer for photo metadata.
All SQL queries related to the `PHOTOS` table live here.
"""

from datetime import datetime
from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from db.exceptions import translate_error
from models.photo import Photo
from utils.logger import get_logger

logger = get_logger(__name__)

# Previous-photo navigation always returns at most this many rows.
BEFORE_PAGE_SIZE = 10

# Substituted for a missing FILE_PATH, on the "after" navigation path only.
DEFAULT_FILE_PATH = "default_path"

PHOTO_COLUMNS = (
    "ID, ORIGINAL_FILE_NAME, PHOTO_DATA, STORED_FILE_NAME, FILE_PATH, FILE_SIZE, "
    "MIME_TYPE, UPLOADED_AT, WIDTH, HEIGHT"
)


class PhotoRepository:
    """Repository for queries and CRUD operations on the PHOTOS table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, photo: Photo) -> Photo:
        """
        Insert a new photo row.

        Args:
            photo: The Photo domain object to persist.

        Returns:
            The same Photo.
        """
        sql = f"""
            INSERT INTO PHOTOS ({PHOTO_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s);
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, self._photo_to_params(photo))
            conn.commit()
            logger.info(f"Added photo {photo.id} ({photo.original_file_name})")
            return photo
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add photo {photo.id}: {e}")
            raise translate_error(e) from e
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, photo_id: str) -> Optional[Photo]:
        """
        Fetch a single photo by ID.

        Returns:
            A Photo object or None if not found.
        """
        sql = f"SELECT {PHOTO_COLUMNS} FROM PHOTOS WHERE ID = %s;"
        rows = self._fetch_all(sql, (photo_id,))
        return self._row_to_photo(rows[0]) if rows else None

    def count(self) -> int:
        """Return the total number of photo rows."""
        rows = self._fetch_all("SELECT COUNT(*) FROM PHOTOS;", ())
        return int(rows[0][0])

    def get_all_ordered_desc(self) -> list[Photo]:
        """
        Fetch every photo, newest upload first.

        Returns:
            List of Photo objects ordered by UPLOADED_AT descending.
        """
        sql = f"SELECT {PHOTO_COLUMNS} FROM PHOTOS ORDER BY UPLOADED_AT DESC;"
        return [self._row_to_photo(r) for r in self._fetch_all(sql, ())]

    def get_uploaded_before(self, uploaded_at: datetime) -> list[Photo]:
        """
        Fetch the photos uploaded just before a timestamp.

        Args:
            uploaded_at: Exclusive upper bound on UPLOADED_AT.

        Returns:
            At most BEFORE_PAGE_SIZE photos, newest first.
        """
        sql = f"""
            SELECT {PHOTO_COLUMNS}
            FROM PHOTOS
            WHERE UPLOADED_AT < %s
            ORDER BY UPLOADED_AT DESC
            LIMIT %s;
        """
        rows = self._fetch_all(sql, (uploaded_at, BEFORE_PAGE_SIZE))
        return [self._row_to_photo(r) for r in rows]

    def get_uploaded_after(self, uploaded_at: datetime) -> list[Photo]:
        """
        Fetch every photo uploaded after a timestamp.

        Unlike get_uploaded_before() no limit is applied, and photos
        without a FILE_PATH come back with DEFAULT_FILE_PATH.

        Args:
            uploaded_at: Exclusive lower bound on UPLOADED_AT.

        Returns:
            List of Photo objects, oldest first.
        """
        sql = f"""
            SELECT {PHOTO_COLUMNS}
            FROM PHOTOS
            WHERE UPLOADED_AT > %s
            ORDER BY UPLOADED_AT ASC;
        """
        rows = self._fetch_all(sql, (uploaded_at,))
        return [self._row_to_photo(r, default_file_path=DEFAULT_FILE_PATH) for r in rows]

    def get_by_upload_month(self, year: str, month: str) -> list[Photo]:
        """
        Fetch the photos uploaded in a calendar month.

        Args:
            year: Four-digit year, e.g. "2024".
            month: Zero-padded month, e.g. "03".

        Returns:
            List of Photo objects ordered by UPLOADED_AT descending.
        """
        sql = f"""
            SELECT {PHOTO_COLUMNS}
            FROM PHOTOS
            WHERE TO_CHAR(UPLOADED_AT, 'YYYY') = %s
              AND TO_CHAR(UPLOADED_AT, 'MM') = %s
            ORDER BY UPLOADED_AT DESC;
        """
        rows = self._fetch_all(sql, (year, month))
        return [self._row_to_photo(r) for r in rows]

    def get_page(self, offset: int, limit: int) -> list[Photo]:
        """
        Fetch a slice of the newest-first listing.

        Args:
            offset: Number of leading rows to skip.
            limit: Maximum number of rows to return.
        """
        sql = f"""
            SELECT {PHOTO_COLUMNS}
            FROM PHOTOS
            ORDER BY UPLOADED_AT DESC
            OFFSET %s LIMIT %s;
        """
        rows = self._fetch_all(sql, (offset, limit))
        return [self._row_to_photo(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, photo: Photo) -> bool:
        """
        Update an existing photo row. The ID is never changed.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE PHOTOS
            SET ORIGINAL_FILE_NAME = %s, PHOTO_DATA = %s, STORED_FILE_NAME = %s,
                FILE_PATH = %s, FILE_SIZE = %s, MIME_TYPE = %s, UPLOADED_AT = %s,
                WIDTH = %s, HEIGHT = %s
            WHERE ID = %s;
        """
        params = self._photo_to_params(photo)
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params[1:] + params[:1])
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update photo {photo.id}: {e}")
            raise translate_error(e) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, photo_id: str) -> bool:
        """
        Delete a photo by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM PHOTOS WHERE ID = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (photo_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted photo {photo_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete photo {photo_id}: {e}")
            raise translate_error(e) from e
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _fetch_all(sql: str, params: tuple) -> list[tuple]:
        """Run a read-only statement on a pooled connection and return every row."""
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                rows = cur.fetchall()
            logger.debug(f"Query returned {len(rows)} row(s)")
            return rows
        except psycopg2.Error as e:
            logger.error(f"Photo query failed: {e}")
            raise translate_error(e) from e
        finally:
            release_connection(conn)

    @staticmethod
    def _photo_to_params(photo: Photo) -> tuple:
        """Flatten a Photo into parameters matching PHOTO_COLUMNS."""
        data = psycopg2.Binary(photo.photo_data) if photo.photo_data is not None else None
        return (
            photo.id,
            photo.original_file_name,
            data,
            photo.stored_file_name,
            photo.file_path,
            photo.file_size,
            photo.mime_type,
            photo.uploaded_at,
            photo.width,
            photo.height,
        )

    @staticmethod
    def _row_to_photo(row: tuple, default_file_path: Optional[str] = None) -> Photo:
        """Convert a database row tuple (in PHOTO_COLUMNS order) to a Photo."""
        file_path = row[4] if row[4] is not None else default_file_path
        return Photo(
            id=row[0],
            original_file_name=row[1],
            photo_data=bytes(row[2]) if row[2] is not None else None,
            stored_file_name=row[3],
            file_path=file_path,
            file_size=int(row[5]),
            mime_type=row[6],
            uploaded_at=row[7],
            width=row[8] or 0,
            height=row[9] or 0,
        )
