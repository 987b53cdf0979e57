"""Base class for build steps."""

from typing import Optional

from skytap_publish_url.context import BuildContext


class Step:
    """A build step: ``validate`` checks its parameters, ``execute`` runs it.

    ``execute`` reports the outcome as a bool; errors never escape it.
    """

    display_name = "Skytap Step"

    def validate(self) -> bool:
        raise NotImplementedError

    def execute(self, build_ctx: BuildContext, client: Optional[object] = None) -> bool:
        raise NotImplementedError
