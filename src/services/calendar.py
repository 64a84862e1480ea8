"""
Event fetching from MS Graph.

Graph events are normalised into CalendarEvent here and nowhere else:
response types, cancellation and organizer/attendee addresses all map onto
the report's own types.
"""

import asyncio
import re
from datetime import datetime
from zoneinfo import ZoneInfo

from core.config import CALENDAR_PAGE_SIZE, CALENDAR_USER, TIME_ZONE
from core.errors import ExternalFetchFailure
from core.graph_client import create_graph_client
from models.events import CalendarEvent, ResponseStatus

# Graph responseType -> ResponseStatus
RESPONSE_STATUS_MAP = {
    "accepted": ResponseStatus.YES,
    "declined": ResponseStatus.NO,
    "tentativelyaccepted": ResponseStatus.MAYBE,
    "organizer": ResponseStatus.OWNER,
}


def _enum_text(value) -> str:
    """Graph SDK enums carry their wire value in .value; plain strings pass through."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def parse_response_status(event) -> ResponseStatus:
    """Map Graph's response_status / is_organizer onto ResponseStatus."""
    response = getattr(getattr(event, "response_status", None), "response", None)
    status = RESPONSE_STATUS_MAP.get(_enum_text(response).lower(), ResponseStatus.UNKNOWN)
    if status is ResponseStatus.UNKNOWN and getattr(event, "is_organizer", False):
        return ResponseStatus.OWNER
    return status


def parse_graph_datetime(value, default_tz: ZoneInfo) -> datetime | None:
    """Parse a Graph DateTimeTimeZone into an aware datetime."""
    if value is None or not value.date_time:
        return None

    text = value.date_time.replace("Z", "+00:00")
    # Graph returns 7 fractional digits, fromisoformat accepts at most 6
    text = re.sub(r"(\.\d{6})\d+", r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        tz_name = getattr(value, "time_zone", None)
        try:
            tz = ZoneInfo(tz_name) if tz_name else default_tz
        except (KeyError, ValueError):
            tz = default_tz
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _address(recipient) -> str:
    email = getattr(recipient, "email_address", None)
    if email is None:
        return ""
    return email.address or email.name or ""


def strip_html(text: str) -> str:
    """Simple HTML stripping for event bodies."""
    if "<" not in text:
        return text
    text = re.sub(r"<[^>]+>", "\n", text)
    return re.sub(r"\n{2,}", "\n", text).strip()


def parse_event(event, default_tz: ZoneInfo) -> CalendarEvent | None:
    """Parse MS Graph event into our format. Returns None if it has no usable times."""
    start = parse_graph_datetime(event.start, default_tz)
    end = parse_graph_datetime(event.end, default_tz)
    if start is None or end is None:
        return None

    description = ""
    if event.body and event.body.content:
        description = strip_html(event.body.content.strip())

    organizer = _address(event.organizer) if event.organizer else ""
    creators = (organizer,) if organizer else ()
    guests = tuple(a for a in (_address(att) for att in (event.attendees or [])) if a)

    return CalendarEvent(
        title=event.subject or "",
        description=description,
        start=start,
        end=end,
        cancelled=bool(event.is_cancelled),
        my_status=parse_response_status(event),
        creators=creators,
        guests=guests,
    )


class GraphEventSource:
    """Events from the default calendar of one mailbox, via the calendar view."""

    def __init__(self, user_id: str = CALENDAR_USER, time_zone: str = TIME_ZONE):
        self.user_id = user_id
        self.tz = ZoneInfo(time_zone)

    def get_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """Fetch events overlapping [start, end). Any Graph failure is raised as ExternalFetchFailure."""
        if not self.user_id:
            raise ExternalFetchFailure("CALENDAR_USER is not set; cannot fetch calendar events.")
        try:
            return asyncio.run(self._fetch(start, end))
        except ExternalFetchFailure:
            raise
        except Exception as e:
            raise ExternalFetchFailure(f"Error fetching calendar events: {e}") from e

    async def _fetch(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        from msgraph.generated.users.item.calendar.calendar_view.calendar_view_request_builder import (
            CalendarViewRequestBuilder,
        )

        graph = create_graph_client()
        query_params = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetQueryParameters(
            start_date_time=start.isoformat(),
            end_date_time=end.isoformat(),
            orderby=["start/dateTime"],
            top=CALENDAR_PAGE_SIZE,
        )
        config = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetRequestConfiguration(
            query_parameters=query_params
        )
        # Ask Graph for times in the report zone
        config.headers.add("Prefer", f'outlook.timezone="{self.tz.key}"')

        builder = graph.users.by_user_id(self.user_id).calendar.calendar_view
        response = await builder.get(request_configuration=config)

        events = []
        while response is not None:
            for raw in response.value or []:
                parsed = parse_event(raw, self.tz)
                if parsed is not None:
                    events.append(parsed)
            if not response.odata_next_link:
                break
            response = await builder.with_url(response.odata_next_link).get()

        print(f"  Fetched {len(events)} events for {self.user_id}")
        return events
