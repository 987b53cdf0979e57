"""Publish set records: decoding the API response and picking the URL."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from skytap_publish_url.config import PUBLISH_SETS_KEY
from skytap_publish_url.exceptions import (
    MalformedResponseError,
    PublishSetNotFoundError,
    PublishSetResolutionError,
    UnsupportedPublishSetTypeError,
)
from skytap_publish_url.logging_config import get_logger

logger = get_logger("publish_sets")

MULTIPLE_URL_REASON = "URLs for individual VMs are not supported."


class PublishSetType(Enum):
    """Publish set types: SINGLE_URL, MULTIPLE_URL, OTHER."""

    SINGLE_URL = "single_url"
    MULTIPLE_URL = "multiple_url"
    OTHER = "other"

    @classmethod
    def from_api(cls, value: str) -> "PublishSetType":
        if value == cls.SINGLE_URL.value:
            return cls.SINGLE_URL
        if value == cls.MULTIPLE_URL.value:
            return cls.MULTIPLE_URL
        return cls.OTHER


@dataclass(frozen=True)
class PublishSetRecord:
    name: str
    publish_set_type: PublishSetType
    desktops_url: Optional[str] = None
    raw_type: str = ""
    id: Optional[str] = None
    url: Optional[str] = None  # the publish set resource itself


@dataclass(frozen=True)
class Found:
    url: str


@dataclass(frozen=True)
class NotFound:
    name: str


@dataclass(frozen=True)
class Rejected:
    reason: str
    publish_set_type: Optional[PublishSetType] = None


ResolutionResult = Union[Found, NotFound, Rejected]


def _optional_str(element: Dict[str, Any], key: str, index: int) -> Optional[str]:
    value = element.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedResponseError(
            f"publish_sets[{index}].{key} must be a string, got {type(value).__name__}"
        )
    return str(value)


def _lenient_str(element: Dict[str, Any], key: str) -> Optional[str]:
    value = element.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value)


def _required_str(element: Dict[str, Any], key: str, index: int) -> str:
    value = element.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(
            f"publish_sets[{index}] is missing a string '{key}' field"
        )
    return value


def _decode_record(element: Any, index: int) -> PublishSetRecord:
    if not isinstance(element, dict):
        raise MalformedResponseError(f"publish_sets[{index}] is not an object")

    name = _required_str(element, "name", index)
    raw_type = _required_str(element, "publish_set_type", index)
    publish_set_type = PublishSetType.from_api(raw_type)

    desktops_url = None
    if publish_set_type is PublishSetType.SINGLE_URL:
        desktops_url = _optional_str(element, "desktops_url", index)

    return PublishSetRecord(
        name=name,
        publish_set_type=publish_set_type,
        desktops_url=desktops_url,
        raw_type=raw_type,
        id=_lenient_str(element, "id"),
        url=_lenient_str(element, "url"),
    )


def parse_publish_sets(body: str) -> List[PublishSetRecord]:
    """Decode a configuration response body into publish set records.

    Records keep the order of the ``publish_sets`` array. Run
    ``check_response_for_errors`` on the body before calling this.

    Raises:
        MalformedResponseError: If the body is not a JSON object with a
            ``publish_sets`` array of well-formed entries.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Response body is not a JSON object")
    if PUBLISH_SETS_KEY not in data:
        raise MalformedResponseError(f"Response has no '{PUBLISH_SETS_KEY}' field")

    elements = data[PUBLISH_SETS_KEY]
    if not isinstance(elements, list):
        raise MalformedResponseError(f"'{PUBLISH_SETS_KEY}' is not an array")

    records = [_decode_record(element, i) for i, element in enumerate(elements)]
    logger.debug(
        f"Parsed {len(records)} publish sets", extra={"publish_set_count": len(records)}
    )
    return records


def select_publish_set(
    records: Sequence[PublishSetRecord], target_name: str
) -> ResolutionResult:
    """Find ``target_name`` (exact, case-sensitive) and apply the type policy.

    The first matching single_url or multiple_url record decides the result;
    matching records of any other type are skipped.
    """
    logger.info("Scanning publish_sets ...")

    for record in records:
        logger.debug(f"Publish Set Name: {record.name}")
        if record.name != target_name:
            continue

        logger.info(f"Publish Set Name matched: {record.name}")

        if record.publish_set_type is PublishSetType.MULTIPLE_URL:
            return Rejected(MULTIPLE_URL_REASON, PublishSetType.MULTIPLE_URL)

        if record.publish_set_type is PublishSetType.SINGLE_URL:
            if not record.desktops_url:
                return Rejected(
                    f"Publish set '{record.name}' has no desktops_url",
                    PublishSetType.SINGLE_URL,
                )
            return Found(record.desktops_url)

        logger.debug(
            f"Skipping publish set '{record.name}' of type '{record.raw_type}'",
            extra={"publish_set_type": record.raw_type},
        )

    logger.info(f"No publish_sets matched user provided name: {target_name}")
    return NotFound(target_name)


def resolve_published_url(records: Sequence[PublishSetRecord], target_name: str) -> str:
    """Like select_publish_set, but returns the URL or raises.

    Raises:
        UnsupportedPublishSetTypeError: The matched publish set is multiple_url.
        PublishSetNotFoundError: No publish set has the requested name.
        PublishSetResolutionError: The matched publish set has no URL.
    """
    result = select_publish_set(records, target_name)
    if isinstance(result, Found):
        return result.url
    if isinstance(result, Rejected):
        if result.publish_set_type is PublishSetType.MULTIPLE_URL:
            raise UnsupportedPublishSetTypeError(result.reason)
        raise PublishSetResolutionError(result.reason)
    raise PublishSetNotFoundError(
        f"URL Name: {target_name} could not be found in publish_sets"
    )
