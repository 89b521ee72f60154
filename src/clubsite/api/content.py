"""Event, competition, document and result endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from clubsite.api.dependencies import get_container, read_form, require_admin
from clubsite.api.schemas import (
    CompetitionForm,
    CompetitionOut,
    DocumentForm,
    DocumentOut,
    EventForm,
    EventOut,
    ResultIn,
    ResultOut,
    envelope,
    form_fields,
    serialize,
)
from clubsite.containers import AppContainer
from clubsite.domain.content import Competition, Document, Event, Result
from clubsite.services.content import ContentService

router = APIRouter(tags=["content"])


def _event(service: ContentService[Event], event: Event) -> dict[str, object]:
    url = service.file_url(event.image_path) if event.image_path else None
    return serialize(EventOut, event, image_url=url)


def _competition(
    service: ContentService[Competition], competition: Competition
) -> dict[str, object]:
    url = service.file_url(competition.image_path) if competition.image_path else None
    return serialize(CompetitionOut, competition, image_url=url)


def _document(service: ContentService[Document], document: Document) -> dict[str, object]:
    url = service.file_url(document.file_path) if document.file_path else None
    return serialize(DocumentOut, document, file_url=url)


def _result(result: Result) -> dict[str, object]:
    return serialize(ResultOut, result)


# Events


@router.get("/events")
async def list_events(
    category: str | None = None, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return events, optionally for one category."""
    service = container.event_service
    return envelope([_event(service, event) for event in service.list_events(category)])


@router.post("/events", status_code=201, dependencies=[Depends(require_admin)])
async def create_event(
    request: Request, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an event from a multipart form with an optional image."""
    fields, upload = await read_form(request, "image")
    service = container.event_service
    event = service.create(form_fields(EventForm, fields), upload)
    return envelope(_event(service, event), "Event created")


@router.get("/events/{event_id}")
async def get_event(
    event_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return one event."""
    service = container.event_service
    return envelope(_event(service, service.get(event_id)))


@router.patch("/events/{event_id}", dependencies=[Depends(require_admin)])
async def update_event(
    event_id: UUID,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update an event; a new image replaces the old one."""
    fields, upload = await read_form(request, "image")
    service = container.event_service
    event = service.update(event_id, form_fields(EventForm, fields), upload)
    return envelope(_event(service, event), "Event updated")


@router.delete("/events/{event_id}", dependencies=[Depends(require_admin)])
async def delete_event(
    event_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete an event."""
    container.event_service.delete(event_id)
    return envelope(message="Event deleted")


# Competitions


@router.get("/competitions")
async def list_competitions(
    status: str | None = None, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return competitions, optionally for one status."""
    service = container.competition_service
    return envelope(
        [_competition(service, item) for item in service.list_competitions(status)]
    )


@router.post("/competitions", status_code=201, dependencies=[Depends(require_admin)])
async def create_competition(
    request: Request, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create a competition from a multipart form with an optional image."""
    fields, upload = await read_form(request, "image")
    service = container.competition_service
    competition = service.create(form_fields(CompetitionForm, fields), upload)
    return envelope(_competition(service, competition), "Competition created")


@router.get("/competitions/{competition_id}")
async def get_competition(
    competition_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return one competition."""
    service = container.competition_service
    return envelope(_competition(service, service.get(competition_id)))


@router.patch("/competitions/{competition_id}", dependencies=[Depends(require_admin)])
async def update_competition(
    competition_id: UUID,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update a competition."""
    fields, upload = await read_form(request, "image")
    service = container.competition_service
    competition = service.update(
        competition_id, form_fields(CompetitionForm, fields), upload
    )
    return envelope(_competition(service, competition), "Competition updated")


@router.delete("/competitions/{competition_id}", dependencies=[Depends(require_admin)])
async def delete_competition(
    competition_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete a competition."""
    container.competition_service.delete(competition_id)
    return envelope(message="Competition deleted")


# Documents


@router.get("/documents")
async def list_documents(
    category: str | None = None, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return documents, optionally for one category."""
    service = container.document_service
    return envelope(
        [_document(service, item) for item in service.list_documents(category)]
    )


@router.post("/documents", status_code=201, dependencies=[Depends(require_admin)])
async def create_document(
    request: Request, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create a document from a multipart form with an optional file."""
    fields, upload = await read_form(request, "file")
    service = container.document_service
    document = service.create(form_fields(DocumentForm, fields), upload)
    return envelope(_document(service, document), "Document created")


@router.get("/documents/{document_id}")
async def get_document(
    document_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return one document."""
    service = container.document_service
    return envelope(_document(service, service.get(document_id)))


@router.patch("/documents/{document_id}", dependencies=[Depends(require_admin)])
async def update_document(
    document_id: UUID,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update a document; a new file replaces the old one."""
    fields, upload = await read_form(request, "file")
    service = container.document_service
    document = service.update(document_id, form_fields(DocumentForm, fields), upload)
    return envelope(_document(service, document), "Document updated")


@router.delete("/documents/{document_id}", dependencies=[Depends(require_admin)])
async def delete_document(
    document_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete a document and its file."""
    container.document_service.delete(document_id)
    return envelope(message="Document deleted")


# Results


@router.get("/results")
async def list_results(
    category: str | None = None, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return results with their items."""
    results = container.result_service.list_results(category)
    return envelope([_result(result) for result in results])


@router.post("/results", status_code=201, dependencies=[Depends(require_admin)])
async def create_result(
    payload: ResultIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create a result with its items."""
    fields = payload.model_dump(exclude={"items"}, exclude_unset=True)
    items = [item.model_dump() for item in payload.items or []]
    result = container.result_service.create_result(fields, items)
    return envelope(_result(result), "Result created")


@router.get("/results/{result_id}")
async def get_result(
    result_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return one result."""
    return envelope(_result(container.result_service.get_result(result_id)))


@router.patch("/results/{result_id}", dependencies=[Depends(require_admin)])
async def update_result(
    result_id: UUID,
    payload: ResultIn,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update a result; a given item list replaces the existing items."""
    fields = payload.model_dump(exclude={"items"}, exclude_unset=True)
    items = (
        [item.model_dump() for item in payload.items]
        if payload.items is not None
        else None
    )
    result = container.result_service.update_result(result_id, fields, items)
    return envelope(_result(result), "Result updated")


@router.delete("/results/{result_id}", dependencies=[Depends(require_admin)])
async def delete_result(
    result_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Delete a result and its items."""
    container.result_service.delete_result(result_id)
    return envelope(message="Result deleted")
