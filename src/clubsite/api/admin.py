"""Admin dashboard endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from clubsite.api.dependencies import get_container, require_admin
from clubsite.api.schemas import AdminUserOut, BucketIn, envelope, serialize
from clubsite.containers import AppContainer
from clubsite.domain.users import Actor

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/storage/buckets")
async def check_buckets(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Report which required storage buckets exist."""
    return envelope(container.storage_admin_service.check_buckets())


@router.post("/storage/buckets", status_code=201)
async def create_bucket(
    payload: BucketIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create a public image bucket."""
    container.storage_admin_service.create_bucket(payload.name)
    return envelope(message=f"Bucket {payload.name.strip()} created")


@router.get("/messages/unread-count")
async def unread_count(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the number of unread contact messages."""
    return envelope({"count": container.message_service.count_unread()})


@router.get("/users")
async def list_admin_users(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List the users holding the administrative role."""
    admins = container.account_service.list_admins()
    return envelope([serialize(AdminUserOut, admin) for admin in admins])


@router.delete("/users/{user_id}")
async def remove_admin_user(
    user_id: UUID,
    actor: Actor = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Revoke another user's administrative role."""
    container.account_service.remove_admin(actor, user_id)
    return envelope(message="Admin access removed")
