from skytap_publish_url.steps.base import Step
from skytap_publish_url.steps.list_published_url import ListPublishedUrlStep

__all__ = ["Step", "ListPublishedUrlStep"]
