"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import Client, create_client

from clubsite.adapters.image_fetcher import HttpxImageFetcher
from clubsite.adapters.supabase_gallery_repository import (
    SupabaseAlbumRepository,
    SupabaseGalleryImageRepository,
)
from clubsite.adapters.supabase_identity import SupabaseIdentityProvider
from clubsite.adapters.supabase_joker_draw_repository import (
    SupabaseJokerDrawRepository,
)
from clubsite.adapters.supabase_message_repository import SupabaseMessageRepository
from clubsite.adapters.supabase_profile_repository import SupabaseProfileRepository
from clubsite.adapters.supabase_record_repository import SupabaseRecordRepository
from clubsite.adapters.supabase_result_repository import SupabaseResultRepository
from clubsite.adapters.supabase_social_repository import (
    SupabaseCommentRepository,
    SupabaseLikeRepository,
)
from clubsite.adapters.supabase_storage import SupabaseObjectStorage
from clubsite.adapters.tables import COMPETITIONS, DOCUMENTS, EVENTS
from clubsite.config import Settings
from clubsite.services.accounts import AccountService
from clubsite.services.content import (
    CompetitionService,
    DocumentService,
    EventService,
)
from clubsite.services.gallery import GalleryService
from clubsite.services.joker_draw import JokerDrawService
from clubsite.services.messages import MessageService
from clubsite.services.results import ResultService
from clubsite.services.social import SocialService
from clubsite.services.storage import StorageAdminService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    account_service: AccountService
    gallery_service: GalleryService
    social_service: SocialService
    message_service: MessageService
    event_service: EventService
    competition_service: CompetitionService
    document_service: DocumentService
    result_service: ResultService
    joker_draw_service: JokerDrawService
    storage_admin_service: StorageAdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )

    def session_client() -> Client:
        return create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_anon_key
            or resolved_settings.supabase_service_key,
        )

    storage = SupabaseObjectStorage(supabase_client)
    identity = SupabaseIdentityProvider(supabase_client, session_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    max_upload_bytes = resolved_settings.max_upload_bytes
    image_fetcher = HttpxImageFetcher.create(max_upload_bytes)

    account_service = AccountService(
        identity=identity,
        profile_repository=profile_repository,
        storage=storage,
        bucket=resolved_settings.profiles_bucket,
        max_upload_bytes=max_upload_bytes,
    )
    gallery_service = GalleryService(
        album_repository=SupabaseAlbumRepository(supabase_client),
        image_repository=SupabaseGalleryImageRepository(supabase_client),
        storage=storage,
        image_fetcher=image_fetcher,
        bucket=resolved_settings.images_bucket,
        max_upload_bytes=max_upload_bytes,
    )
    social_service = SocialService(
        like_repository=SupabaseLikeRepository(supabase_client),
        comment_repository=SupabaseCommentRepository(supabase_client),
        profile_repository=profile_repository,
        roles=identity,
    )
    event_service = EventService(
        SupabaseRecordRepository(supabase_client, EVENTS),
        storage,
        bucket=resolved_settings.images_bucket,
        max_upload_bytes=max_upload_bytes,
    )
    competition_service = CompetitionService(
        SupabaseRecordRepository(supabase_client, COMPETITIONS),
        storage,
        bucket=resolved_settings.images_bucket,
        max_upload_bytes=max_upload_bytes,
    )
    document_service = DocumentService(
        SupabaseRecordRepository(supabase_client, DOCUMENTS),
        storage,
        bucket=resolved_settings.documents_bucket,
    )
    joker_draw_service = JokerDrawService(
        repository=SupabaseJokerDrawRepository(supabase_client),
        storage=storage,
        bucket=resolved_settings.winners_bucket,
        max_upload_bytes=max_upload_bytes,
    )

    async def close_resources() -> None:
        await image_fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        account_service=account_service,
        gallery_service=gallery_service,
        social_service=social_service,
        message_service=MessageService(SupabaseMessageRepository(supabase_client)),
        event_service=event_service,
        competition_service=competition_service,
        document_service=document_service,
        result_service=ResultService(SupabaseResultRepository(supabase_client)),
        joker_draw_service=joker_draw_service,
        storage_admin_service=StorageAdminService(
            storage, resolved_settings.required_buckets
        ),
        close_resources=close_resources,
    )
