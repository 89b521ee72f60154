import pytest

from clubsite.domain.errors import ValidationError
from clubsite.services.storage import (
    BUCKET_FILE_SIZE_LIMIT,
    IMAGE_CONTENT_TYPES,
    StorageAdminService,
)
from tests.conftest import FakeObjectStorage


def test_check_buckets_reports_missing(storage: FakeObjectStorage) -> None:
    storage.buckets = ["images", "unrelated"]
    service = StorageAdminService(storage, ["images", "documents"])

    assert service.check_buckets() == {"images": True, "documents": False}


def test_create_bucket_is_public_with_image_limits(
    storage: FakeObjectStorage,
) -> None:
    service = StorageAdminService(storage, ["winners"])

    service.create_bucket(" winners ")

    assert storage.created_buckets == [
        {
            "name": "winners",
            "public": True,
            "file_size_limit": BUCKET_FILE_SIZE_LIMIT,
            "allowed_mime_types": sorted(IMAGE_CONTENT_TYPES),
        }
    ]
    assert service.check_buckets() == {"winners": True}


def test_create_bucket_requires_name(storage: FakeObjectStorage) -> None:
    with pytest.raises(ValidationError):
        StorageAdminService(storage).create_bucket("  ")
