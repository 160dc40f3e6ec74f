"""Tests for PhotoQueryService validation and delegation."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

from conftest import make_photo
from db.exceptions import InvalidParameterError
from repositories.photo_repo import PhotoRepository
from services.photo_query_service import PhotoQueryService


@pytest.fixture
def mock_repository():
    return Mock(spec=PhotoRepository)


@pytest.fixture
def service(mock_repository):
    return PhotoQueryService(mock_repository)


class FakePagedRepository:
    """Serves get_page() from an in-memory newest-first listing."""

    def __init__(self, photos):
        self.photos = sorted(photos, key=lambda p: p.uploaded_at, reverse=True)

    def get_page(self, offset, limit):
        return self.photos[offset:offset + limit]


@pytest.fixture
def gallery():
    return [make_photo(f"p{i}", datetime(2024, 1, i + 1)) for i in range(7)]


class TestCursorNavigation:
    def test_before_passes_datetime_through(self, service, mock_repository):
        ts = datetime(2024, 3, 1, 10, 30)
        service.find_before(ts)
        mock_repository.get_uploaded_before.assert_called_once_with(ts)

    def test_after_parses_iso_string(self, service, mock_repository):
        service.find_after("2024-03-01T10:30:00")
        mock_repository.get_uploaded_after.assert_called_once_with(datetime(2024, 3, 1, 10, 30))

    def test_iso_string_with_offset_becomes_naive_local_time(self, service, mock_repository):
        service.find_before("2024-03-01T10:30:00+00:00")

        expected = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        (cursor,), _ = mock_repository.get_uploaded_before.call_args
        assert cursor.tzinfo is None
        assert cursor == expected

    def test_aware_datetime_becomes_naive_local_time(self, service, mock_repository):
        aware = datetime(2024, 3, 1, 23, 45, tzinfo=timezone(timedelta(hours=-5)))
        service.find_after(aware)

        (cursor,), _ = mock_repository.get_uploaded_after.call_args
        assert cursor.tzinfo is None
        assert cursor == aware.astimezone().replace(tzinfo=None)

    @pytest.mark.parametrize("bad", ["yesterday", "2024-13-45", "", 1700000000, None])
    def test_malformed_timestamp_rejected(self, service, mock_repository, bad):
        with pytest.raises(InvalidParameterError):
            service.find_before(bad)
        with pytest.raises(InvalidParameterError):
            service.find_after(bad)
        mock_repository.get_uploaded_before.assert_not_called()
        mock_repository.get_uploaded_after.assert_not_called()

    def test_neighbours_use_photo_timestamp(self, service, mock_repository):
        photo = make_photo("a", datetime(2024, 3, 1))
        mock_repository.get_by_id.return_value = photo
        mock_repository.get_uploaded_before.return_value = ["older"]
        mock_repository.get_uploaded_after.return_value = ["newer"]

        before, after = service.find_neighbours("a")

        assert (before, after) == (["older"], ["newer"])
        mock_repository.get_uploaded_before.assert_called_once_with(photo.uploaded_at)
        mock_repository.get_uploaded_after.assert_called_once_with(photo.uploaded_at)

    def test_neighbours_of_unknown_photo(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None
        assert service.find_neighbours("missing") is None
        mock_repository.get_uploaded_before.assert_not_called()


class TestFindByMonth:
    def test_delegates_exact_strings(self, service, mock_repository):
        service.find_by_month("2024", "03")
        mock_repository.get_by_upload_month.assert_called_once_with("2024", "03")

    @pytest.mark.parametrize("year, month", [
        ("24", "03"),
        ("2024", "3"),
        ("2024", "13"),
        ("2024", "00"),
        (2024, "03"),
        ("2024", 3),
        ("abcd", "03"),
        ("2024\n", "03"),
        ("2024", "03\n"),
        ("\u0662\u0660\u0662\u0664", "03"),
        ("2024", "\u0660\u0663"),
        (" 2024", "03"),
    ])
    def test_malformed_year_or_month(self, service, mock_repository, year, month):
        with pytest.raises(InvalidParameterError):
            service.find_by_month(year, month)
        mock_repository.get_by_upload_month.assert_not_called()

    def test_invalid_parameter_is_a_value_error(self, service):
        with pytest.raises(ValueError):
            service.find_by_month("2024", "3")


class TestPaginate:
    def test_converts_rows_to_offset_and_limit(self, service, mock_repository):
        service.paginate(11, 20)
        mock_repository.get_page.assert_called_once_with(offset=10, limit=10)

    def test_returns_requested_positions(self, gallery):
        service = PhotoQueryService(FakePagedRepository(gallery))
        result = service.paginate(2, 4)
        assert [p.id for p in result] == ["p5", "p4", "p3"]

    def test_end_past_total_truncates(self, gallery):
        service = PhotoQueryService(FakePagedRepository(gallery))
        result = service.paginate(5, 100)
        # min(e, total) - s + 1
        assert len(result) == 7 - 5 + 1
        assert [p.id for p in result] == ["p2", "p1", "p0"]

    def test_start_past_total_is_empty(self, gallery):
        service = PhotoQueryService(FakePagedRepository(gallery))
        assert service.paginate(8, 12) == []

    def test_huge_end_row_is_capped_at_bigint(self, service, mock_repository):
        service.paginate(1, 2**63)
        mock_repository.get_page.assert_called_once_with(offset=0, limit=2**63 - 1)

    def test_start_beyond_bigint_is_empty(self, service, mock_repository):
        assert service.paginate(2**63 + 5, 2**64) == []
        mock_repository.get_page.assert_not_called()

    def test_start_below_one_is_clamped(self, service, mock_repository):
        service.paginate(-3, 5)
        mock_repository.get_page.assert_called_once_with(offset=0, limit=5)

    @pytest.mark.parametrize("start, end", [(5, 4), (0, 0), (1, 0), (-5, -1)])
    def test_empty_range_skips_query(self, service, mock_repository, start, end):
        assert service.paginate(start, end) == []
        mock_repository.get_page.assert_not_called()

    @pytest.mark.parametrize("start, end", [("1", 10), (1, 10.0), (True, 10)])
    def test_non_integer_bounds_rejected(self, service, start, end):
        with pytest.raises(InvalidParameterError):
            service.paginate(start, end)


class TestPage:
    def test_third_page(self, service, mock_repository):
        service.page(3, 25)
        mock_repository.get_page.assert_called_once_with(offset=50, limit=25)

    @pytest.mark.parametrize("number, size", [(0, 10), (1, 0), (-1, 10)])
    def test_non_positive_arguments_rejected(self, service, number, size):
        with pytest.raises(InvalidParameterError):
            service.page(number, size)


class TestListingAndStatistics:
    def test_list_all(self, service, mock_repository):
        mock_repository.get_all_ordered_desc.return_value = ["x"]
        assert service.list_all_descending() == ["x"]

    def test_get_photo(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None
        assert service.get_photo("missing") is None
        mock_repository.get_by_id.assert_called_once_with("missing")

    def test_statistics_overview_uses_full_listing(self, service, mock_repository, gallery):
        mock_repository.get_all_ordered_desc.return_value = gallery

        stats = service.statistics_overview()

        assert len(stats) == len(gallery)
        assert stats[0].photo.id == "p6"
        assert stats[-1].running_total == gallery[0].file_size
