"""Check-in routes for the event door staff."""
import csv
import io
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from checkin.attendees.coordinator import CheckInCoordinator
from checkin.attendees.registry import build_coordinator
from checkin.attendees.stores import EventStore
from checkin.core.database import get_session
from checkin.models import Event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{event_id}/check-in", tags=["check-in"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

EXPORT_COLUMNS = ["name", "email", "ticket_type", "checked_in", "checked_in_at", "source", "ticket_code"]


class AccessDenied(Exception):
    """Raised when the acting user may not run check-in for an event."""


class EventMissing(Exception):
    """Raised when the event in the path does not exist."""


def get_coordinator(session: Session = Depends(get_session)) -> CheckInCoordinator:
    """Dependency building a coordinator for the request's session."""
    return build_coordinator(session)


def get_current_user_id(x_user_id: int | None = Header(default=None)) -> int | None:
    """Acting user id, as forwarded by the upstream auth layer."""
    return x_user_id


def get_event(
    event_id: int,
    session: Session = Depends(get_session),
    user_id: int | None = Depends(get_current_user_id),
) -> Event:
    """Load the event and make sure the acting user owns it."""
    event = EventStore(session).get(event_id)
    if event is None:
        raise EventMissing()
    # TODO: allow vendor staff roles once role assignments are exposed upstream
    if user_id is None or event.owner_id != user_id:
        raise AccessDenied()
    return event


async def access_denied_handler(request: Request, exc: AccessDenied):
    return JSONResponse({"error": "Access denied"}, status_code=403)


async def event_missing_handler(request: Request, exc: EventMissing):
    return JSONResponse({"error": "Event not found"}, status_code=404)


@router.get("", response_class=HTMLResponse)
async def check_in_page(
    request: Request,
    event: Event = Depends(get_event),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """
    Display the check-in desk for an event.

    Shows headline numbers (total, checked in, remaining) and every attendee
    across RSVPs and paid tickets, each with a check-in toggle.
    """
    return templates.TemplateResponse(
        request,
        "check_in.html",
        {
            "event": event,
            "attendees": coordinator.list_attendees(event),
            "stats": coordinator.stats(event),
        },
    )


@router.get("/attendees")
async def list_attendees(
    event: Event = Depends(get_event),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """List every attendee of the event as JSON."""
    attendees = coordinator.list_attendees(event)
    return {"results": [attendee.model_dump(mode="json") for attendee in attendees]}


@router.get("/search")
async def search_attendees(
    q: str = Query(""),
    event: Event = Depends(get_event),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """
    Search attendees by name or email.

    Matching is a case-insensitive substring match; an empty query returns
    every attendee.
    """
    results = coordinator.search_attendees(event, q)
    return {"results": [attendee.model_dump(mode="json") for attendee in results]}


@router.get("/stats")
async def check_in_stats(
    event: Event = Depends(get_event),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """Return total, checked-in and remaining attendee counts."""
    return coordinator.stats(event).as_dict()


@router.post("/toggle/{attendee_id}")
async def toggle_check_in(
    attendee_id: int,
    type: str = Query("rsvp"),
    event: Event = Depends(get_event),
    user_id: int | None = Depends(get_current_user_id),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """
    Toggle an attendee's check-in state.

    Checks the attendee in if they are not checked in, otherwise undoes the
    check-in. The response always reports success so existing check-in
    clients keep working; ``checked_in`` is the new state and ``status``
    says whether anything actually changed.
    """
    result = coordinator.toggle(attendee_id, type, user_id, event_id=event.id)
    return JSONResponse({
        "success": True,
        "checked_in": result.checked_in,
        "status": result.status.value,
    })


@router.get("/export")
async def export_attendees(
    event: Event = Depends(get_event),
    coordinator: CheckInCoordinator = Depends(get_coordinator),
):
    """Download the attendee list with check-in state as CSV."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in coordinator.export_rows(event):
        writer.writerow(row)

    logger.info(f"Exported attendees for event {event.id}")
    return Response(
        buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="event-{event.id}-attendees.csv"'},
    )
