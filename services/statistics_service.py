"""
services/statistics_service.py
------------------------------
Size ranking and cumulative upload volume for the statistics overview.
"""

import pandas as pd

from models.photo import Photo, PhotoStatistics
from utils.logger import get_logger

logger = get_logger(__name__)


def compute_statistics(photos: list[Photo]) -> list[PhotoStatistics]:
    """
    Attach a size rank and a running total to every photo.

    The running total accumulates file_size in upload order (oldest first),
    while the returned list is ordered newest first. Both orderings are
    computed explicitly, so the input order does not matter.

    Args:
        photos: Every photo to include in the overview.

    Returns:
        One PhotoStatistics per photo, ordered by uploaded_at descending.
    """
    if not photos:
        return []

    df = pd.DataFrame(
        {
            "uploaded_at": [p.uploaded_at for p in photos],
            "file_size": [p.file_size for p in photos],
        }
    )

    # Pass 1: accumulate in ascending upload order.
    ascending = df.sort_values("uploaded_at", kind="mergesort")
    df["running_total"] = ascending["file_size"].cumsum()

    # Largest file ranks 1; equal sizes share a rank and leave a gap.
    df["size_rank"] = df["file_size"].rank(method="min", ascending=False).astype(int)

    # Pass 2: present newest first.
    presented = df.sort_values("uploaded_at", ascending=False, kind="mergesort")

    result = [
        PhotoStatistics(
            photo=photos[row.Index],
            size_rank=int(row.size_rank),
            running_total=int(row.running_total),
        )
        for row in presented.itertuples()
    ]
    logger.debug(f"Computed statistics for {len(result)} photo(s)")
    return result
