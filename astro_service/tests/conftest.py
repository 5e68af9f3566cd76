import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.v1.api import get_content_generator
from app.db import build_engine, build_session_factory, create_tables
from app.main import app
from app.services.content_service import ContentGenerator
from app.services.order_service import OrderService


class GeminiStub:
    """Fake generateContent endpoint that records every request it receives"""

    def __init__(self, text="The stars are aligned for you.", status_code=200, body=None):
        self.text = text
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        payload = {"candidates": [{"content": {"parts": [{"text": self.text}]}}]}
        return httpx.Response(self.status_code, json=payload)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]

    def generator(self) -> ContentGenerator:
        return ContentGenerator(api_key="test-key", transport=httpx.MockTransport(self))


@pytest.fixture
def generator():
    return ContentGenerator(api_key=None)


@pytest.fixture
def client(generator):
    app.dependency_overrides[get_content_generator] = lambda: generator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def gemini():
    return GeminiStub()


@pytest.fixture
def gemini_client(gemini):
    generator = gemini.generator()
    app.dependency_overrides[get_content_generator] = lambda: generator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def order_service():
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield OrderService(build_session_factory(engine))
    engine.dispose()
