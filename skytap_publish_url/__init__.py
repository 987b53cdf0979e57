"""Resolve the desktops URL of a Skytap publish set and save it to a file."""

__version__ = "0.1.0"

# Core components
from skytap_publish_url.context import (
    BuildContext,
    RuntimeContext,
    StepParameters,
    StepState,
)
from skytap_publish_url.client import SkytapClient, build_list_url, check_response_for_errors
from skytap_publish_url.identifiers import resolve_runtime_id
from skytap_publish_url.publish_sets import (
    Found,
    NotFound,
    PublishSetRecord,
    PublishSetType,
    Rejected,
    parse_publish_sets,
    resolve_published_url,
    select_publish_set,
)
from skytap_publish_url.writer import write_url

# Steps
from skytap_publish_url.steps import Step, ListPublishedUrlStep

__all__ = [
    # Version
    "__version__",
    # Core
    "BuildContext",
    "RuntimeContext",
    "StepParameters",
    "StepState",
    "SkytapClient",
    "build_list_url",
    "check_response_for_errors",
    "resolve_runtime_id",
    "Found",
    "NotFound",
    "Rejected",
    "PublishSetRecord",
    "PublishSetType",
    "parse_publish_sets",
    "select_publish_set",
    "resolve_published_url",
    "write_url",
    # Steps
    "Step",
    "ListPublishedUrlStep",
]
