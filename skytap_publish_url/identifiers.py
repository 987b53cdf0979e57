"""Derive the runtime configuration id from a literal or an id file."""

import json
from pathlib import Path
from typing import Optional, Union

from skytap_publish_url.config import CONFIGURATION_ID_KEY
from skytap_publish_url.exceptions import IdentifierResolutionError
from skytap_publish_url.logging_config import get_logger

logger = get_logger("identifiers")


def read_id_from_file(file_path: Union[str, Path]) -> str:
    """Read a JSON object from ``file_path`` and return its ``id`` as a string.

    Raises:
        IdentifierResolutionError: If the file is missing or unreadable, is not a
            JSON object, or has no usable ``id`` field.
    """
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise IdentifierResolutionError(f"Configuration file not found: {path}")
    except json.JSONDecodeError as e:
        raise IdentifierResolutionError(
            f"Configuration file {path} is not valid JSON: {e}"
        ) from e
    except OSError as e:
        raise IdentifierResolutionError(
            f"Could not read configuration file {path}: {e}"
        ) from e

    if not isinstance(data, dict):
        raise IdentifierResolutionError(
            f"Configuration file {path} does not contain a JSON object"
        )

    value = data.get(CONFIGURATION_ID_KEY)
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise IdentifierResolutionError(
            f"Configuration file {path} has no '{CONFIGURATION_ID_KEY}' field"
        )
    value = str(value)
    if not value:
        raise IdentifierResolutionError(
            f"Configuration file {path} has an empty '{CONFIGURATION_ID_KEY}' field"
        )

    logger.debug(
        f"Read configuration id {value} from {path}",
        extra={"configuration_id": value, "file": str(path)},
    )
    return value


def resolve_runtime_id(
    id_literal: Optional[str], file_path: Optional[Union[str, Path]]
) -> str:
    """Return ``id_literal`` when set, otherwise the id stored in ``file_path``."""
    if id_literal:
        return id_literal
    if not file_path:
        raise IdentifierResolutionError(
            "Neither a configuration id nor a configuration file was provided"
        )
    return read_id_from_file(file_path)
