import pytest
from datetime import datetime
from unittest.mock import MagicMock, patch

from models.photo import Photo


def make_photo(photo_id: str, uploaded_at: datetime, file_size: int = 1000, **kwargs) -> Photo:
    """Build a Photo with sensible defaults for the fields a test does not care about."""
    defaults = dict(
        original_file_name=f"{photo_id}.jpg",
        stored_file_name=f"stored-{photo_id}.jpg",
        file_path=f"/uploads/stored-{photo_id}.jpg",
        mime_type="image/jpeg",
        width=800,
        height=600,
    )
    defaults.update(kwargs)
    return Photo(id=photo_id, uploaded_at=uploaded_at, file_size=file_size, **defaults)


def photo_row(photo: Photo) -> tuple:
    """The tuple psycopg2 would return for a photo, in column order."""
    return (
        photo.id,
        photo.original_file_name,
        memoryview(photo.photo_data) if photo.photo_data is not None else None,
        photo.stored_file_name,
        photo.file_path,
        photo.file_size,
        photo.mime_type,
        photo.uploaded_at,
        photo.width,
        photo.height,
    )


@pytest.fixture
def mock_cursor():
    cursor = MagicMock()
    cursor.fetchall.return_value = []
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    conn = MagicMock()
    conn.cursor.return_value.__enter__ = lambda s: mock_cursor
    conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    return conn


@pytest.fixture
def patched_pool(mock_conn):
    """Route the repository's pool calls to mock_conn."""
    with patch("repositories.photo_repo.get_connection", return_value=mock_conn) as get_conn, \
            patch("repositories.photo_repo.release_connection") as release_conn:
        yield get_conn, release_conn
