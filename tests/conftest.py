import json

import httpx
import pytest

from skytap_publish_url.client import SkytapClient
from skytap_publish_url.context import BuildContext


@pytest.fixture
def build_ctx(tmp_path):
    """Build context rooted in a temp workspace with credentials set."""
    return BuildContext(
        workspace=tmp_path,
        env={"SKYTAP_USER": "jenkins", "SKYTAP_API_KEY": "secret", "WORKSPACE": str(tmp_path)},
    )


@pytest.fixture
def publish_sets_body():
    """Factory for a configuration response with the given publish sets."""

    def _body(*publish_sets):
        return json.dumps({"id": "123", "publish_sets": list(publish_sets)})

    return _body


@pytest.fixture
def make_client():
    """Factory for a SkytapClient whose HTTP calls go to ``handler``."""
    clients = []

    def _make(handler, base_url="https://cloud.skytap.com"):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return SkytapClient(base_url=base_url, http_client=http_client)

    yield _make
    for c in clients:
        c.close()
