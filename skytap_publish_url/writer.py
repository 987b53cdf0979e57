"""Persist the resolved URL."""

from pathlib import Path
from typing import Union

from skytap_publish_url.exceptions import WriteError
from skytap_publish_url.logging_config import get_logger

logger = get_logger("writer")


def write_url(path: Union[str, Path], content: str) -> None:
    """Overwrite ``path`` with exactly ``content`` (no trailing newline)."""
    logger.info(f"Outputting url to file: {path}", extra={"url_file": str(path)})
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Failed to save url to file: {path} ({e})") from e
