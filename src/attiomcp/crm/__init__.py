"""CRM data shaping for Attio.

This module provides pure, total transformations from Attio's raw,
dynamically-typed attribute model to flat, readable structures:
- Attribute value classification and flattening
- Record display names
- Search result shaping
- Pipeline stage summaries
- Task enrichment
- Activity timelines

No I/O and no state between calls. Malformed or partial input degrades
to a fallback value (None, a sentinel label, an empty collection) instead
of raising.
"""

from attiomcp.crm.models import (
    EnrichedTask,
    ListSummary,
    PipelineEntrySummary,
    PipelineStageSummary,
    PipelineSummary,
    ShapedRecord,
    TaskBuckets,
    TimelineEvent,
    TimelineEventType,
)
from attiomcp.crm.names import extract_record_name
from attiomcp.crm.pipeline import (
    NO_STAGE,
    compute_pipeline_summary,
    find_list,
    summarize_lists,
)
from attiomcp.crm.search import shape_search_results
from attiomcp.crm.tasks import enrich_tasks, member_name_map
from attiomcp.crm.timeline import build_activity_timeline
from attiomcp.crm.values import (
    AttributeValue,
    ValueKind,
    classify_value,
    extract_value,
    flatten_values,
)

__all__ = [
    # Values
    "AttributeValue",
    "ValueKind",
    "classify_value",
    "extract_value",
    "flatten_values",
    # Names
    "extract_record_name",
    # Shaping
    "shape_search_results",
    "compute_pipeline_summary",
    "summarize_lists",
    "find_list",
    "NO_STAGE",
    "enrich_tasks",
    "member_name_map",
    "build_activity_timeline",
    # Models
    "ShapedRecord",
    "ListSummary",
    "PipelineStageSummary",
    "PipelineEntrySummary",
    "PipelineSummary",
    "EnrichedTask",
    "TaskBuckets",
    "TimelineEvent",
    "TimelineEventType",
]
