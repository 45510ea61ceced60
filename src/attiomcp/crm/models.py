"""Shaped CRM output models.

These are the display-ready structures returned to the calling agent.
They are built per request from raw Attio responses and never persisted.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


class ShapedRecord(BaseModel):
    """Compact projection of a raw Attio record for search results."""

    id: Optional[str] = Field(None, description="Record id (unwrapped)")
    object_type: Optional[str] = Field(None, description="Object slug, e.g. 'people'")
    name: str = Field(..., description="Resolved display name")
    email: Optional[str] = Field(None, description="Primary email address")
    company: Optional[str] = Field(None, description="Primary company name")
    values: Dict[str, Any] = Field(default_factory=dict, description="Flattened attribute values")


class ListSummary(BaseModel):
    """One entry of the available lists (pipelines) catalog."""

    id: Optional[str] = None
    name: Optional[str] = None
    object_type: Optional[str] = Field(None, description="Parent object of the list")


class PipelineStageSummary(BaseModel):
    """Aggregate for one pipeline stage.

    `total_value` is None only when no entry in the stage carried a numeric
    value; a stage whose values sum to zero reports 0.
    """

    stage: str
    count: int = Field(0, ge=0)
    total_value: Optional[Number] = None


class PipelineEntrySummary(BaseModel):
    """Per-entry projection inside a pipeline summary."""

    id: Optional[str] = None
    record_name: str
    stage: Optional[str] = None
    value: Optional[Number] = None


class PipelineSummary(BaseModel):
    """Summary of one list (pipeline): stage aggregates and entries."""

    list_id: str
    list_name: str
    total_entries: int = 0
    stages: List[PipelineStageSummary] = Field(default_factory=list)
    entries: List[PipelineEntrySummary] = Field(default_factory=list)


class EnrichedTask(BaseModel):
    """Task with assignees and linked records resolved to display names."""

    id: Optional[str] = None
    content: Optional[str] = None
    is_completed: bool = False
    deadline: Optional[str] = Field(None, description="ISO-8601 deadline")
    assignees: List[str] = Field(default_factory=list)
    linked_records: List[str] = Field(default_factory=list)


class TaskBuckets(BaseModel):
    """Enriched tasks split by completion, each ordered by deadline."""

    open: List[EnrichedTask] = Field(default_factory=list)
    completed: List[EnrichedTask] = Field(default_factory=list)


class TimelineEventType(str, Enum):
    """Source of a timeline event."""

    NOTE = "note"
    MEETING = "meeting"
    THREAD = "thread"


class TimelineEvent(BaseModel):
    """Normalized note, meeting or email thread for an activity timeline."""

    type: TimelineEventType
    id: Optional[str] = None
    date: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
