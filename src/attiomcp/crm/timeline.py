"""Activity timeline: notes, meetings and email threads merged by date."""

from typing import Any, List

from attiomcp.crm import ids
from attiomcp.crm.models import TimelineEvent, TimelineEventType
from attiomcp.crm.values import first_text


def note_event(note: dict) -> TimelineEvent:
    """Normalize an Attio note."""
    return TimelineEvent(
        type=TimelineEventType.NOTE,
        id=ids.note_id(note.get("id")),
        date=first_text(note, "created_at"),
        title=first_text(note, "title"),
        content=first_text(note, "content_plaintext", "content"),
    )


def meeting_event(meeting: dict) -> TimelineEvent:
    """Normalize an Attio meeting."""
    return TimelineEvent(
        type=TimelineEventType.MEETING,
        id=ids.meeting_id(meeting.get("id")),
        date=first_text(meeting, "start_time", "created_at"),
        title=first_text(meeting, "title", "subject"),
        content=first_text(meeting, "description"),
    )


def thread_event(thread: dict) -> TimelineEvent:
    """Normalize an Attio email thread."""
    return TimelineEvent(
        type=TimelineEventType.THREAD,
        id=ids.thread_id(thread.get("id")),
        date=first_text(thread, "created_at"),
        title=first_text(thread, "subject"),
        content=first_text(thread, "body_plaintext", "body"),
    )


def sort_timeline(events: List[TimelineEvent]) -> List[TimelineEvent]:
    """Most recent first; undated events last, keeping their input order.

    Dates are ISO-8601 strings, so lexical order is chronological.
    """
    dated = sorted((e for e in events if e.date), key=lambda e: e.date, reverse=True)
    undated = [e for e in events if not e.date]
    return dated + undated


def build_activity_timeline(notes: Any, meetings: Any, threads: Any) -> List[TimelineEvent]:
    """Merge notes, meetings and threads into one descending timeline.

    Each collection may be a bare list, a `{"data": [...]}` envelope, or None.
    """
    events: List[TimelineEvent] = []
    for items, build in (
        (notes, note_event),
        (meetings, meeting_event),
        (threads, thread_event),
    ):
        events.extend(build(item) for item in ids.unwrap_list(items) if isinstance(item, dict))
    return sort_timeline(events)
