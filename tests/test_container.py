"""Tests for container wiring."""

import asyncio

from clubsite.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.gallery_service.bucket == settings.images_bucket
    assert container.document_service.bucket == settings.documents_bucket
    assert container.joker_draw_service.bucket == settings.winners_bucket
    assert container.account_service.bucket == settings.profiles_bucket
    assert container.storage_admin_service.required_buckets == (
        settings.required_buckets
    )
    asyncio.run(container.close_resources())
