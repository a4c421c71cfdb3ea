"""
Pytest configuration and fixtures for the UI Prototyper tests.
"""
import os

# Set test environment variables before importing config
os.environ["GEMINI_API_KEY"] = ""
os.environ["google_ai"] = ""
os.environ["PREVIEW_STORE_BACKEND"] = "memory"
os.environ["LOG_FILE"] = ""
os.environ.setdefault("RATE_LIMIT_REQUESTS", "1000")

import httpx
import pytest
import pytest_asyncio

from index import app
from models.sandbox import RenderState, SandboxOutcome
from routes import dependencies
from services.canvas_session import CanvasSessionRegistry, get_canvas_sessions
from services.generation_client import GenerationClient, MissingCredentialError, get_generation_client
from services.preview_store import MemoryPreviewStore, get_preview_store
from services.sandbox_renderer import SandboxRenderer, get_sandbox_renderer


class FakeGenerationClient(GenerationClient):
    """Generation client that answers from memory instead of the network."""

    def __init__(self, response=None, error=None, api_key="test-key"):
        super().__init__(api_key=api_key)
        self.response = response
        self.error = error
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.is_configured:
            raise MissingCredentialError("GEMINI_API_KEY not found in environment variables")
        if self.error is not None:
            raise self.error
        return self.response


class FakeRenderer(SandboxRenderer):
    """Renderer that returns a fixed terminal state without a browser."""

    def __init__(self, state=RenderState.MOUNTED, error_message=None, screenshot=None, error=None):
        self.state = state
        self.error_message = error_message
        self.screenshot = screenshot
        self.error = error
        self.calls = []

    async def render(self, source_text, component_name=None, screenshot=False):
        self.calls.append((source_text, component_name, screenshot))
        if self.error is not None:
            raise self.error
        return SandboxOutcome(
            state=self.state,
            component_name=component_name or "GeneratedComponent",
            error_message=self.error_message,
            screenshot=self.screenshot if screenshot else None,
        )


class FailingStore(MemoryPreviewStore):
    """Store whose writes always fail."""

    def __init__(self, error):
        super().__init__()
        self.error = error

    async def create(self, prompt, source_text):
        raise self.error


@pytest.fixture
def fake_client_factory():
    return FakeGenerationClient


@pytest.fixture
def fake_renderer_factory():
    return FakeRenderer


@pytest.fixture
def failing_store_factory():
    return FailingStore


@pytest.fixture
def store():
    return MemoryPreviewStore()


@pytest.fixture
def generation_client():
    """Unconfigured client: generation takes the fallback path."""
    return FakeGenerationClient(api_key=None)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def canvas_registry():
    return CanvasSessionRegistry()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    dependencies.rate_limiter_storage.clear()
    yield
    dependencies.rate_limiter_storage.clear()


@pytest.fixture
def override_services(store, generation_client, renderer, canvas_registry):
    """Point the app's dependencies at in-memory test doubles."""
    app.dependency_overrides[get_preview_store] = lambda: store
    app.dependency_overrides[get_generation_client] = lambda: generation_client
    app.dependency_overrides[get_sandbox_renderer] = lambda: renderer
    app.dependency_overrides[get_canvas_sessions] = lambda: canvas_registry
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(override_services):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=override_services),
        base_url="http://test",
    ) as client:
        yield client
