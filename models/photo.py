"""
models/photo.py
---------------
Domain models for uploaded photos and the statistics overview rows.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Photo:
    """
    Represents one uploaded image stored in the PHOTOS table.

    Attributes:
        original_file_name: Name the client uploaded the file under.
        stored_file_name: Name the file is stored under on the server.
        file_size: Size in bytes.
        mime_type: Content type (e.g. image/jpeg).
        file_path: Server-side storage location, may be missing.
        photo_data: Optional inline binary payload.
        uploaded_at: Upload timestamp, the ordering key for every listing.
        width: Pixel width.
        height: Pixel height.
        id: Primary key (a UUID string generated for new photos).
    """
    original_file_name: str
    stored_file_name: str
    file_size: int
    mime_type: str
    file_path: Optional[str] = None
    photo_data: Optional[bytes] = None
    uploaded_at: datetime = field(default_factory=datetime.now)
    width: int = 0
    height: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def has_inline_data(self) -> bool:
        """Returns True if the image bytes are stored in the row itself."""
        return self.photo_data is not None

    def aspect_ratio(self) -> Optional[float]:
        """Width divided by height, or None when the height is unknown."""
        if not self.height:
            return None
        return self.width / self.height

    def __str__(self) -> str:
        return (
            f"{self.original_file_name} | {self.width}x{self.height} | "
            f"{self.file_size} bytes | {self.uploaded_at:%Y-%m-%d %H:%M:%S}"
        )


@dataclass
class PhotoStatistics:
    """
    A photo together with its position in the size ranking and the
    cumulative upload volume up to and including it.

    Attributes:
        photo: The underlying photo row.
        size_rank: Rank of file_size among all photos, largest first.
            Equal sizes share a rank and leave a gap after them.
        running_total: Sum of file_size of every photo uploaded up to
            this one, in upload order.
    """
    photo: Photo
    size_rank: int
    running_total: int
