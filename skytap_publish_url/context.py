"""Step parameters, per-run state and the host build context."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from string import Template
from typing import Dict, Optional

from skytap_publish_url.config import ENV_API_KEY, ENV_USER, build_auth_credentials
from skytap_publish_url.exceptions import ConfigurationError


@dataclass(frozen=True)
class StepParameters:
    """The four strings a user configures on the step."""
    url_name: str
    url_file: str
    configuration_id: str = ""
    configuration_file: str = ""

    def __post_init__(self):
        # None and "" both mean "not provided"
        for name in ("url_name", "url_file", "configuration_id", "configuration_file"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")


class StepState(Enum):
    VALIDATING = "validating"
    RESOLVING = "resolving"
    REQUESTING = "requesting"
    PARSING = "parsing"
    SELECTING = "selecting"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RuntimeContext:
    """State of a single step invocation. Never shared between runs."""
    runtime_configuration_id: Optional[str] = None
    auth_credentials: Optional[str] = None
    resolved_configuration_file: Optional[Path] = None
    resolved_url_file: Optional[Path] = None
    state: StepState = StepState.VALIDATING


@dataclass
class BuildContext:
    """What the host build supplies: environment, workspace and credentials."""
    workspace: Path = field(default_factory=Path.cwd)
    env: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_environment(cls, workspace: Optional[Path] = None) -> "BuildContext":
        return cls(
            workspace=Path(workspace) if workspace is not None else Path.cwd(),
            env=dict(os.environ),
        )

    def expand(self, value: str) -> str:
        """Expand ``$VAR`` and ``${VAR}`` references; unknown ones are kept."""
        if not value:
            return value
        return Template(value).safe_substitute(self.env)

    def full_path(self, name: str) -> Path:
        """Absolute paths are returned as-is, bare names land in the workspace."""
        path = Path(name).expanduser()
        if path.is_absolute():
            return path
        return (Path(self.workspace) / path).absolute()

    def auth_credentials(self) -> str:
        user = self.env.get(ENV_USER)
        api_key = self.env.get(ENV_API_KEY)
        if not user or not api_key:
            raise ConfigurationError(
                f"Skytap credentials are not configured (set {ENV_USER} and {ENV_API_KEY})"
            )
        return build_auth_credentials(user, api_key)
