"""List Published URL For Configuration step."""

from pathlib import Path
from typing import Optional

from skytap_publish_url.client import SkytapClient
from skytap_publish_url.context import (
    BuildContext,
    RuntimeContext,
    StepParameters,
    StepState,
)
from skytap_publish_url.exceptions import PreconditionError, SkytapPublishError
from skytap_publish_url.identifiers import resolve_runtime_id
from skytap_publish_url.logging_config import get_logger
from skytap_publish_url.publish_sets import parse_publish_sets, resolve_published_url
from skytap_publish_url.steps.base import Step
from skytap_publish_url.writer import write_url

logger = get_logger("steps")


class ListPublishedUrlStep(Step):
    """Resolve a publish set's desktops URL and save it to a file.

    The step holds only its parameters. Everything derived while running
    (runtime id, credentials, resolved paths) lives in a RuntimeContext
    created per call to ``execute``.
    """

    display_name = "List Published URL For Configuration"

    def __init__(
        self,
        url_name: str,
        url_file: str,
        configuration_id: str = "",
        configuration_file: str = "",
    ) -> None:
        self.params = StepParameters(
            url_name=url_name,
            url_file=url_file,
            configuration_id=configuration_id,
            configuration_file=configuration_file,
        )

    @classmethod
    def from_parameters(cls, params: StepParameters) -> "ListPublishedUrlStep":
        return cls(
            url_name=params.url_name,
            url_file=params.url_file,
            configuration_id=params.configuration_id,
            configuration_file=params.configuration_file,
        )

    def check_preconditions(self) -> None:
        """Raise PreconditionError for the first missing or conflicting parameter."""
        p = self.params

        if not p.url_file:
            raise PreconditionError(
                "No value was provided for the URL save filename. Please provide a filename."
            )

        if not p.url_name:
            raise PreconditionError(
                "No value was provided for URL name. Please provide a valid url name."
            )

        if p.configuration_id and p.configuration_file:
            raise PreconditionError(
                "Values were provided for both configuration ID and file. "
                "Please provide just one or the other."
            )

        if not p.configuration_id and not p.configuration_file:
            raise PreconditionError(
                "No value was provided for configuration ID or file. Please provide "
                "either a valid Skytap configuration ID, or a valid configuration file."
            )

    def validate(self) -> bool:
        try:
            self.check_preconditions()
        except PreconditionError as e:
            logger.error(str(e))
            return False
        return True

    def execute(
        self,
        build_ctx: BuildContext,
        client: Optional[SkytapClient] = None,
        base_url: Optional[str] = None,
    ) -> bool:
        """Run the step; ``base_url`` only applies when no client is passed in."""
        logger.info("----------------------------------------")
        logger.info(f"{self.display_name} Step")
        logger.info("----------------------------------------")

        run = RuntimeContext()

        if not self.validate():
            self._transition(run, StepState.FAILED)
            return False

        owns_client = client is None
        try:
            if owns_client:
                client = SkytapClient(base_url=base_url)
            self._run(run, build_ctx, client)
        except SkytapPublishError as e:
            logger.error(
                str(e),
                extra={
                    "error_type": type(e).__name__,
                    "failed_state": run.state.value,
                    "configuration_id": run.runtime_configuration_id,
                },
            )
            logger.error("Failing build step.")
            self._transition(run, StepState.FAILED)
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error in {run.state.value} state: {e}",
                extra={"failed_state": run.state.value, "error": str(e)},
                exc_info=True,
            )
            self._transition(run, StepState.FAILED)
            return False
        finally:
            if owns_client and client is not None:
                client.close()

        self._transition(run, StepState.SUCCEEDED)
        return True

    def _run(self, run: RuntimeContext, build_ctx: BuildContext, client: SkytapClient) -> None:
        p = self.params

        run.auth_credentials = build_ctx.auth_credentials()

        # Env vars are resolved at run time; bare file names land in the workspace
        configuration_file = build_ctx.expand(p.configuration_file)
        if configuration_file:
            run.resolved_configuration_file = build_ctx.full_path(configuration_file)
        run.resolved_url_file = build_ctx.full_path(build_ctx.expand(p.url_file))

        self._transition(run, StepState.RESOLVING)
        run.runtime_configuration_id = resolve_runtime_id(
            p.configuration_id, run.resolved_configuration_file
        )

        logger.info(f"Configuration ID: {run.runtime_configuration_id}")
        logger.info(f"Configuration File: {run.resolved_configuration_file or ''}")
        logger.info(f"URL Name: {p.url_name}")
        logger.info(f"URL Save Filename: {run.resolved_url_file}")

        self._transition(run, StepState.REQUESTING)
        request_url = client.list_url(run.runtime_configuration_id)
        body = client.get(request_url, run.auth_credentials)

        self._transition(run, StepState.PARSING)
        records = parse_publish_sets(body)

        self._transition(run, StepState.SELECTING)
        published_url = resolve_published_url(records, p.url_name)

        self._transition(run, StepState.WRITING)
        write_url(Path(run.resolved_url_file), published_url)

    @staticmethod
    def _transition(run: RuntimeContext, state: StepState) -> None:
        logger.debug(
            f"Step state {run.state.value} -> {state.value}",
            extra={"from_state": run.state.value, "to_state": state.value},
        )
        run.state = state
