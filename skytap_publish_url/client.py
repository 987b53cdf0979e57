"""Skytap API access: request URL building, the GET call and API error checks."""

import json
from typing import Optional

import httpx

from skytap_publish_url import config
from skytap_publish_url.exceptions import ApiError, TransportError
from skytap_publish_url.logging_config import get_logger

logger = get_logger("client")


def build_list_url(configuration_id: str, base_url: str = config.DEFAULT_BASE_URL) -> str:
    """URL listing the publish sets of ``configuration_id``."""
    url = f"{base_url.rstrip('/')}/configurations/{configuration_id}"
    logger.info(f"Request URL: {url}", extra={"request_url": url})
    return url


def _api_error_text(body: str) -> Optional[str]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    for key in ("error", "errors"):
        value = data.get(key)
        if value:
            if isinstance(value, list):
                return "; ".join(str(v) for v in value)
            return str(value)
    return None


def check_response_for_errors(body: str, status_code: int = 200) -> None:
    """Raise ApiError when the status or the body signals an API error."""
    error_text = _api_error_text(body)
    if status_code >= 400:
        message = f"Skytap API request failed with HTTP {status_code}"
        if error_text:
            message = f"{message}: {error_text}"
        raise ApiError(message, status_code=status_code)
    if error_text:
        raise ApiError(f"Skytap API returned an error: {error_text}", status_code=status_code)


class SkytapClient:
    """
    Thin synchronous wrapper over httpx.Client for the Skytap REST API.

    An existing ``http_client`` can be passed in (tests use one backed by
    ``httpx.MockTransport``); it is then owned by the caller and not closed here.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url or config.get_env(config.ENV_BASE_URL, config.DEFAULT_BASE_URL)
        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            if timeout is None:
                timeout = config.http_timeout()
            if verify is None:
                verify = config.get_bool_env(config.ENV_VERIFY_SSL, True)
            self._client = httpx.Client(timeout=timeout, verify=verify)
            self._owns_client = True

    def list_url(self, configuration_id: str) -> str:
        return build_list_url(configuration_id, self.base_url)

    def get(self, url: str, credentials: str) -> str:
        """GET ``url`` and return the body after checking it for API errors.

        Raises:
            TransportError: The request could not be completed.
            ApiError: HTTP error status or an error reported in the body.
        """
        headers = {
            "Authorization": f"Basic {credentials}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        try:
            response = self._client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"request_url": url, "error": str(e)},
            )
            raise TransportError(f"Request to {url} failed: {e}") from e

        body = response.text
        logger.debug(
            f"Response status {response.status_code} from {url}",
            extra={"request_url": url, "status_code": response.status_code},
        )
        check_response_for_errors(body, response.status_code)
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
