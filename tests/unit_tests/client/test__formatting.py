from datetime import datetime, timezone

import pytest

from file_manager.client.formatting import format_file_size
from file_manager.schemas import ObjectSummary


@pytest.mark.parametrize(
    "size_bytes, expected",
    [
        (0, "0 Bytes"),
        (1, "1 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (2048, "2 KB"),
        (5 * 1024 * 1024, "5 MB"),
        (1234567890, "1.15 GB"),
        (3 * 1024**5, "3072 TB"),
    ],
)
def test_format_file_size(size_bytes, expected):
    assert format_file_size(size_bytes) == expected


def test_format_file_size__negative():
    with pytest.raises(ValueError):
        format_file_size(-1)


def test_object_summary_folder_marker():
    modified = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert ObjectSummary(key="photos/", last_modified=modified, size=0).is_folder()
    assert not ObjectSummary(key="photo.jpg", last_modified=modified, size=10).is_folder()
    assert ObjectSummary(key="photos|", last_modified=modified, size=0).is_folder("|")
