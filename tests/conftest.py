import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from assetgen.config import Settings, StoredConfig
from assetgen.server import create_app

IMAGE_URL = "https://images.example.com/generated/asset.png"
FAKE_IMAGE = b"\x89PNG\r\n\x1a\nnot-really-an-image"


class FakeOpenAI:
    """Answers OpenAI image generation calls and the follow-up download."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status = 200
        self.error_message = "Something went wrong"
        self.data: List[Dict[str, Any]] = [{"url": IMAGE_URL}]
        self.download_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/images/generations"):
            if self.status != 200:
                return httpx.Response(
                    self.status,
                    json={
                        "error": {
                            "message": self.error_message,
                            "type": "invalid_request_error",
                        }
                    },
                )
            return httpx.Response(200, json={"created": 1700000000, "data": self.data})
        if str(request.url) == IMAGE_URL:
            return httpx.Response(self.download_status, content=FAKE_IMAGE)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def generation_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/images/generations")]

    def last_generation_payload(self) -> Optional[Dict[str, Any]]:
        calls = self.generation_requests
        return json.loads(calls[-1].content) if calls else None


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "generated-assets"


@pytest.fixture
def settings(tmp_path, storage_dir):
    return Settings(
        _env_file=None,
        asset_storage_path=str(storage_dir),
        config_path=str(tmp_path / "missing-config.json"),
    )


@pytest.fixture
def stored_config():
    return StoredConfig()


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def app(settings, stored_config, fake_openai):
    app = create_app(settings, stored_config, transport=fake_openai.transport)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
