"""
db/init_db.py
-------------
Creates the PHOTOS table if it does not already exist.
This is a bootstrap for fresh databases, not a migration tool.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import get_connection, release_connection
from db.exceptions import translate_error
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Photos table: one row per uploaded image
CREATE TABLE IF NOT EXISTS PHOTOS (
    ID                  VARCHAR(36) PRIMARY KEY,
    ORIGINAL_FILE_NAME  VARCHAR(255) NOT NULL,
    PHOTO_DATA          BYTEA,
    STORED_FILE_NAME    VARCHAR(255) NOT NULL,
    FILE_PATH           VARCHAR(500),
    FILE_SIZE           BIGINT NOT NULL CHECK (FILE_SIZE >= 0),
    MIME_TYPE           VARCHAR(50) NOT NULL,
    UPLOADED_AT         TIMESTAMP NOT NULL DEFAULT NOW(),
    WIDTH               INT CHECK (WIDTH >= 0),
    HEIGHT              INT CHECK (HEIGHT >= 0)
);

-- Every listing and navigation query orders by upload time
CREATE INDEX IF NOT EXISTS IDX_PHOTOS_UPLOADED_AT ON PHOTOS(UPLOADED_AT);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create the photos table.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise translate_error(e) from e
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
