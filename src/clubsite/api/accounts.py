"""Sign-up, sign-in and profile endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, Request

from clubsite.api.dependencies import (
    bearer_token,
    get_container,
    read_required_file,
    require_actor,
)
from clubsite.api.schemas import (
    ProfileOut,
    ProfilePatch,
    SessionOut,
    SignInIn,
    SignUpIn,
    envelope,
    serialize,
)
from clubsite.containers import AppContainer
from clubsite.domain.errors import AuthError
from clubsite.domain.users import Actor, UserProfile

router = APIRouter(tags=["accounts"])


def _profile(profile: UserProfile, actor: Actor) -> dict[str, object]:
    return ProfileOut.model_validate(
        {**asdict(profile), "is_admin": actor.is_admin}
    ).model_dump(by_alias=True, mode="json")


@router.post("/auth/sign-up", status_code=201)
async def sign_up(
    payload: SignUpIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Register a member account."""
    session = container.account_service.sign_up(
        payload.email, payload.password, payload.full_name
    )
    message = (
        "Account created"
        if session.access_token
        else "Check your email to confirm your account"
    )
    return envelope(serialize(SessionOut, session), message)


@router.post("/auth/sign-in")
async def sign_in(
    payload: SignInIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Exchange email and password for a session."""
    session = container.account_service.sign_in(payload.email, payload.password)
    return envelope(serialize(SessionOut, session), "Signed in")


@router.post("/auth/sign-out")
async def sign_out(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Revoke the caller's session."""
    token = bearer_token(authorization)
    if token is None:
        raise AuthError()
    container.account_service.sign_out(token)
    return envelope(message="Signed out")


@router.get("/me")
async def get_me(
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's profile."""
    profile = container.account_service.get_profile(actor)
    return envelope(_profile(profile, actor))


@router.patch("/me")
async def update_me(
    payload: ProfilePatch,
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change the caller's display name."""
    profile = container.account_service.update_profile(actor, payload.full_name)
    return envelope(_profile(profile, actor), "Profile updated")


@router.post("/me/avatar")
async def upload_avatar(
    request: Request,
    actor: Actor = Depends(require_actor),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace the caller's avatar."""
    _, upload = await read_required_file(request)
    url = container.account_service.upload_avatar(actor, upload)
    return envelope({"avatarUrl": url}, "Avatar updated")
