"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import TypeVar
from uuid import UUID, uuid4

import pytest

from clubsite.config import Settings
from clubsite.containers import AppContainer
from clubsite.domain.content import (
    Competition,
    Document,
    Event,
    JokerDrawEntry,
    JokerDrawState,
    Result,
    ResultItem,
)
from clubsite.domain.errors import AuthError, RepositoryError, StorageError
from clubsite.domain.files import FileUpload
from clubsite.domain.gallery import Album, GalleryImage, ImageMetadata
from clubsite.domain.messages import Message, MessageStatus
from clubsite.domain.social import Comment, Like
from clubsite.domain.users import Actor, AdminUser, AuthSession, UserProfile
from clubsite.services.accounts import AccountService, IdentityProvider, ProfileRepository
from clubsite.services.content import (
    CompetitionService,
    DocumentService,
    EventService,
    RecordRepository,
)
from clubsite.services.gallery import (
    AlbumRepository,
    GalleryImageRepository,
    GalleryService,
    ImageFetcher,
)
from clubsite.services.joker_draw import JokerDrawRepository, JokerDrawService
from clubsite.services.messages import MessageRepository, MessageService
from clubsite.services.results import ResultRepository, ResultService
from clubsite.services.social import CommentRepository, LikeRepository, SocialService
from clubsite.services.storage import ObjectStorage, StorageAdminService

T = TypeVar("T")

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
MEMBER_ID = UUID("11111111-1111-4111-8111-111111111111")
ADMIN_ID = UUID("22222222-2222-4222-8222-222222222222")
MEMBER_TOKEN = "member-token"
ADMIN_TOKEN = "admin-token"

_BASE_TIME = datetime.now(tz=UTC)
_TICKS = count()


def tick() -> datetime:
    """Return a strictly increasing timestamp so ordering is deterministic."""
    return _BASE_TIME + timedelta(seconds=next(_TICKS))


def image_upload(
    filename: str = "photo.png",
    content_type: str = "image/png",
    data: bytes = PNG_BYTES,
) -> FileUpload:
    return FileUpload(data=data, filename=filename, content_type=content_type)


@dataclass
class FakeObjectStorage(ObjectStorage):
    """In-memory object store keyed by (bucket, path)."""

    objects: dict[tuple[str, str], bytes] = field(default_factory=dict)
    buckets: list[str] = field(default_factory=list)
    created_buckets: list[dict[str, object]] = field(default_factory=list)
    fail_uploads: bool = False
    fail_removals: bool = False

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        if self.fail_uploads:
            raise StorageError("Failed to upload file")
        if (bucket, path) in self.objects and not upsert:
            raise StorageError("The resource already exists")
        self.objects[(bucket, path)] = data
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"https://storage.test/{bucket}/{path}"

    def remove(self, bucket: str, paths: list[str]) -> None:
        if self.fail_removals:
            raise StorageError("Failed to delete file")
        for path in paths:
            self.objects.pop((bucket, path), None)

    def list_buckets(self) -> list[str]:
        return list(self.buckets)

    def create_bucket(
        self,
        name: str,
        public: bool,
        file_size_limit: int,
        allowed_mime_types: list[str],
    ) -> None:
        self.buckets.append(name)
        self.created_buckets.append(
            {
                "name": name,
                "public": public,
                "file_size_limit": file_size_limit,
                "allowed_mime_types": allowed_mime_types,
            }
        )

    def paths(self, bucket: str) -> list[str]:
        return [path for stored_bucket, path in self.objects if stored_bucket == bucket]


@dataclass
class FakeImageFetcher(ImageFetcher):
    """Returns canned downloads by URL."""

    responses: dict[str, FileUpload] = field(default_factory=dict)

    async def fetch(self, url: str) -> FileUpload:
        if url not in self.responses:
            raise StorageError(f"Failed to fetch image from {url}")
        return self.responses[url]


@dataclass
class InMemoryAlbumRepository(AlbumRepository):
    """In-memory album repository for tests."""

    albums: dict[UUID, Album] = field(default_factory=dict)

    def create_album(self, title: str, description: str | None) -> Album:
        now = tick()
        album = Album(
            id=uuid4(),
            title=title,
            description=description,
            cover_image_path=None,
            created_at=now,
            updated_at=now,
        )
        self.albums[album.id] = album
        return album

    def get_album(self, album_id: UUID) -> Album | None:
        return self.albums.get(album_id)

    def list_albums(self) -> list[Album]:
        return sorted(
            self.albums.values(), key=lambda album: album.created_at, reverse=True
        )

    def update_album(self, album_id: UUID, fields: dict[str, object]) -> Album:
        album = replace(self.albums[album_id], **fields, updated_at=tick())
        self.albums[album_id] = album
        return album

    def set_cover(self, album_id: UUID, image_path: str | None) -> Album:
        return self.update_album(album_id, {"cover_image_path": image_path})

    def clear_covers(self, image_path: str) -> int:
        covered = [
            album.id
            for album in self.albums.values()
            if album.cover_image_path == image_path
        ]
        for album_id in covered:
            self.set_cover(album_id, None)
        return len(covered)

    def delete_album(self, album_id: UUID) -> None:
        self.albums.pop(album_id, None)


@dataclass
class InMemoryGalleryImageRepository(GalleryImageRepository):
    """In-memory gallery image repository for tests."""

    images: dict[UUID, GalleryImage] = field(default_factory=dict)
    fail_create: bool = False

    def create_image(
        self, metadata: ImageMetadata, album_id: UUID | None, storage_path: str
    ) -> GalleryImage:
        if self.fail_create:
            raise RepositoryError("Failed to create gallery image record")
        now = tick()
        image = GalleryImage(
            id=uuid4(),
            title=metadata.title,
            alt=metadata.alt,
            description=metadata.description,
            category=metadata.category,
            album_id=album_id,
            storage_path=storage_path,
            created_at=now,
            updated_at=now,
        )
        self.images[image.id] = image
        return image

    def get_image(self, image_id: UUID) -> GalleryImage | None:
        return self.images.get(image_id)

    def get_image_by_path(self, storage_path: str) -> GalleryImage | None:
        for image in self.images.values():
            if image.storage_path == storage_path:
                return image
        return None

    def list_images(
        self, category: str | None = None, album_id: UUID | None = None
    ) -> list[GalleryImage]:
        images = [
            image
            for image in self.images.values()
            if (not category or image.category == category)
            and (not album_id or image.album_id == album_id)
        ]
        return sorted(images, key=lambda image: image.created_at, reverse=True)

    def update_image(self, image_id: UUID, fields: dict[str, object]) -> GalleryImage:
        image = replace(self.images[image_id], **fields, updated_at=tick())
        self.images[image_id] = image
        return image

    def detach_album(self, album_id: UUID) -> None:
        for image in list(self.images.values()):
            if image.album_id == album_id:
                self.images[image.id] = replace(image, album_id=None)

    def delete_image(self, image_id: UUID) -> None:
        self.images.pop(image_id, None)


@dataclass
class InMemoryLikeRepository(LikeRepository):
    """In-memory like repository keyed by (event, user)."""

    likes: dict[tuple[UUID, UUID], Like] = field(default_factory=dict)

    def remove_like(self, event_id: UUID, user_id: UUID) -> bool:
        return self.likes.pop((event_id, user_id), None) is not None

    def add_like(self, event_id: UUID, user_id: UUID) -> None:
        self.likes.setdefault(
            (event_id, user_id),
            Like(id=uuid4(), event_id=event_id, user_id=user_id, created_at=tick()),
        )

    def has_like(self, event_id: UUID, user_id: UUID) -> bool:
        return (event_id, user_id) in self.likes

    def list_likes(self, event_id: UUID) -> list[Like]:
        return [like for like in self.likes.values() if like.event_id == event_id]

    def count_likes(self, event_id: UUID) -> int:
        return len(self.list_likes(event_id))


@dataclass
class InMemoryCommentRepository(CommentRepository):
    """In-memory comment repository for tests."""

    comments: dict[UUID, Comment] = field(default_factory=dict)

    def create_comment(self, event_id: UUID, user_id: UUID, content: str) -> Comment:
        comment = Comment(
            id=uuid4(),
            event_id=event_id,
            user_id=user_id,
            content=content,
            created_at=tick(),
        )
        self.comments[comment.id] = comment
        return comment

    def get_comment(self, comment_id: UUID) -> Comment | None:
        return self.comments.get(comment_id)

    def list_comments(self, event_id: UUID) -> list[Comment]:
        return sorted(
            (c for c in self.comments.values() if c.event_id == event_id),
            key=lambda comment: comment.created_at,
        )

    def delete_comment(self, comment_id: UUID) -> None:
        self.comments.pop(comment_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory user profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def get_profiles(self, user_ids: list[UUID]) -> dict[UUID, UserProfile]:
        return {
            user_id: self.profiles[user_id]
            for user_id in user_ids
            if user_id in self.profiles
        }

    def create_profile(
        self, user_id: UUID, email: str | None, full_name: str | None
    ) -> UserProfile:
        profile = UserProfile(
            id=user_id, email=email, full_name=full_name, avatar_url=None
        )
        self.profiles[user_id] = profile
        return profile

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserProfile:
        profile = replace(self.profiles[user_id], **fields)
        self.profiles[user_id] = profile
        return profile


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Token-based identity provider kept in memory."""

    tokens: dict[str, Actor] = field(default_factory=dict)
    admins: set[UUID] = field(default_factory=set)
    accounts: dict[str, tuple[str, UUID]] = field(default_factory=dict)
    metadata: dict[UUID, dict[str, object]] = field(default_factory=dict)
    confirm_email: bool = False

    def sign_up(
        self, email: str, password: str, attributes: dict[str, object]
    ) -> AuthSession:
        if email in self.accounts:
            raise AuthError("User already registered")
        user_id = uuid4()
        self.accounts[email] = (password, user_id)
        self.metadata[user_id] = dict(attributes)
        if self.confirm_email:
            return AuthSession(
                user_id=user_id, email=email, access_token="", refresh_token=""
            )
        return self._issue(user_id, email)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        stored = self.accounts.get(email)
        if stored is None or stored[0] != password:
            raise AuthError("Invalid email or password")
        return self._issue(stored[1], email)

    def get_user(self, access_token: str) -> Actor | None:
        return self.tokens.get(access_token)

    def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)

    def update_user(self, user_id: UUID, attributes: dict[str, object]) -> None:
        self.metadata.setdefault(user_id, {}).update(attributes)

    def is_admin(self, user_id: UUID) -> bool:
        return user_id in self.admins

    def list_admins(self) -> list[AdminUser]:
        return [AdminUser(id=user_id) for user_id in sorted(self.admins, key=str)]

    def remove_admin(self, user_id: UUID) -> bool:
        if user_id not in self.admins:
            return False
        self.admins.discard(user_id)
        return True

    def _issue(self, user_id: UUID, email: str) -> AuthSession:
        token = f"token-{uuid4().hex}"
        self.tokens[token] = Actor(id=user_id, email=email)
        return AuthSession(
            user_id=user_id,
            email=email,
            access_token=token,
            refresh_token=f"refresh-{token}",
        )


@dataclass
class InMemoryMessageRepository(MessageRepository):
    """In-memory contact message repository for tests."""

    messages: dict[UUID, Message] = field(default_factory=dict)

    def create_message(self, fields: dict[str, object]) -> Message:
        now = tick()
        message = Message(id=uuid4(), created_at=now, updated_at=now, **fields)
        self.messages[message.id] = message
        return message

    def get_message(self, message_id: UUID) -> Message | None:
        return self.messages.get(message_id)

    def list_messages(self, status: MessageStatus | None = None) -> list[Message]:
        messages = [
            message
            for message in self.messages.values()
            if status is None or message.status == status
        ]
        return sorted(messages, key=lambda message: message.created_at, reverse=True)

    def update_status(
        self, message_id: UUID, status: MessageStatus, updated_at: datetime
    ) -> Message:
        message = replace(
            self.messages[message_id], status=status, updated_at=updated_at
        )
        self.messages[message_id] = message
        return message

    def delete_message(self, message_id: UUID) -> None:
        self.messages.pop(message_id, None)

    def count_by_status(self, status: MessageStatus) -> int:
        return len(self.list_messages(status))


@dataclass
class InMemoryRecordRepository(RecordRepository[T]):
    """In-memory table for one content type."""

    model: Callable[..., T]
    defaults: dict[str, object] = field(default_factory=dict)
    records: dict[UUID, T] = field(default_factory=dict)
    fail_create: bool = False
    fail_update: bool = False

    def list_records(
        self,
        filters: dict[str, object] | None = None,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[T]:
        rows = [
            record
            for record in self.records.values()
            if all(
                getattr(record, name) == value
                for name, value in (filters or {}).items()
            )
        ]
        return sorted(
            rows, key=lambda record: getattr(record, order_by), reverse=descending
        )

    def get_record(self, record_id: UUID) -> T | None:
        return self.records.get(record_id)

    def create_record(self, fields: dict[str, object]) -> T:
        if self.fail_create:
            raise RepositoryError("Failed to create record")
        now = tick()
        record = self.model(
            **{
                **self.defaults,
                **fields,
                "id": uuid4(),
                "created_at": now,
                "updated_at": now,
            }
        )
        self.records[record.id] = record  # type: ignore[attr-defined]
        return record

    def update_record(self, record_id: UUID, fields: dict[str, object]) -> T:
        if self.fail_update:
            raise RepositoryError("Failed to update record")
        record = replace(self.records[record_id], **fields)  # type: ignore[type-var]
        self.records[record_id] = record
        return record

    def delete_record(self, record_id: UUID) -> None:
        self.records.pop(record_id, None)


def event_repository() -> InMemoryRecordRepository[Event]:
    return InMemoryRecordRepository(Event, defaults={"description": ""})


def competition_repository() -> InMemoryRecordRepository[Competition]:
    return InMemoryRecordRepository(Competition, defaults={"description": ""})


def document_repository() -> InMemoryRecordRepository[Document]:
    return InMemoryRecordRepository(
        Document, defaults={"description": "", "filetype": "", "filesize": ""}
    )


@dataclass
class InMemoryResultRepository(ResultRepository):
    """In-memory results and result items."""

    results: dict[UUID, Result] = field(default_factory=dict)
    items: list[ResultItem] = field(default_factory=list)
    fail_items: bool = False

    def list_results(self, category: str | None = None) -> list[Result]:
        results = [
            result
            for result in self.results.values()
            if not category or result.category == category
        ]
        return sorted(results, key=lambda result: result.created_at, reverse=True)

    def get_result(self, result_id: UUID) -> Result | None:
        return self.results.get(result_id)

    def create_result(self, fields: dict[str, object]) -> Result:
        now = tick()
        result = Result(id=uuid4(), created_at=now, updated_at=now, **fields)
        self.results[result.id] = result
        return result

    def update_result(self, result_id: UUID, fields: dict[str, object]) -> Result:
        result = replace(self.results[result_id], **fields)
        self.results[result_id] = result
        return result

    def delete_result(self, result_id: UUID) -> None:
        self.results.pop(result_id, None)

    def list_items(self, result_ids: list[UUID]) -> list[ResultItem]:
        return [item for item in self.items if item.result_id in result_ids]

    def create_items(self, result_id: UUID, items: list[dict[str, str]]) -> None:
        if self.fail_items:
            raise RepositoryError("Failed to create result items")
        for item in items:
            self.items.append(
                ResultItem(
                    id=uuid4(),
                    result_id=result_id,
                    position=item["position"],
                    name=item["name"],
                    created_at=tick(),
                )
            )

    def delete_items(self, result_id: UUID) -> None:
        self.items = [item for item in self.items if item.result_id != result_id]


@dataclass
class InMemoryJokerDrawRepository(JokerDrawRepository):
    """In-memory joker draw row plus history."""

    current: JokerDrawState | None = None
    history: list[JokerDrawEntry] = field(default_factory=list)

    def get_current(self) -> JokerDrawState | None:
        return self.current

    def save_current(self, state: JokerDrawState) -> JokerDrawState:
        self.current = state
        return state

    def append_history(self, state: JokerDrawState) -> None:
        self.history.append(
            JokerDrawEntry(
                id=len(self.history) + 1,
                last_winner=state.last_winner,
                last_win_amount=state.last_win_amount,
                current_jackpot=state.current_jackpot,
                winner_image_path=state.winner_image_path,
                recorded_at=state.updated_at,
            )
        )

    def list_history(self, limit: int) -> list[JokerDrawEntry]:
        return list(reversed(self.history))[:limit]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        environment="test",
    )


@pytest.fixture
def storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        tokens={
            MEMBER_TOKEN: Actor(id=MEMBER_ID, email="member@example.com"),
            ADMIN_TOKEN: Actor(id=ADMIN_ID, email="admin@example.com"),
        },
        admins={ADMIN_ID},
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository(
        profiles={
            MEMBER_ID: UserProfile(
                id=MEMBER_ID,
                email="member@example.com",
                full_name="Mary Member",
                avatar_url=None,
            ),
            ADMIN_ID: UserProfile(
                id=ADMIN_ID,
                email="admin@example.com",
                full_name="Alan Admin",
                avatar_url="https://storage.test/profiles/admin.png",
            ),
        }
    )


@pytest.fixture
def gallery_service(storage: FakeObjectStorage) -> GalleryService:
    return GalleryService(
        album_repository=InMemoryAlbumRepository(),
        image_repository=InMemoryGalleryImageRepository(),
        storage=storage,
        image_fetcher=FakeImageFetcher(),
    )


@pytest.fixture
def social_service(
    identity: FakeIdentityProvider, profile_repository: InMemoryProfileRepository
) -> SocialService:
    return SocialService(
        like_repository=InMemoryLikeRepository(),
        comment_repository=InMemoryCommentRepository(),
        profile_repository=profile_repository,
        roles=identity,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    storage: FakeObjectStorage,
    identity: FakeIdentityProvider,
    profile_repository: InMemoryProfileRepository,
    gallery_service: GalleryService,
    social_service: SocialService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        account_service=AccountService(
            identity=identity,
            profile_repository=profile_repository,
            storage=storage,
        ),
        gallery_service=gallery_service,
        social_service=social_service,
        message_service=MessageService(InMemoryMessageRepository()),
        event_service=EventService(event_repository(), storage),
        competition_service=CompetitionService(competition_repository(), storage),
        document_service=DocumentService(document_repository(), storage),
        result_service=ResultService(InMemoryResultRepository()),
        joker_draw_service=JokerDrawService(InMemoryJokerDrawRepository(), storage),
        storage_admin_service=StorageAdminService(storage, settings.required_buckets),
        close_resources=close_resources,
    )
