"""
HTTP tests for the FastAPI app, with the model, store and renderer replaced
by in-memory doubles.
"""
import html
import io
import logging

from PIL import Image

from config import settings
from models.sandbox import RenderState
from services.generation_client import GenerationClientError, get_generation_client
from services.preview_store import PreviewStoreError, get_preview_store


class TestGenerate:

    async def test_generate_without_credential_returns_fallback(self, async_client, store):
        response = await async_client.post("/api/generate", json={"prompt": "a pricing card"})

        assert response.status_code == 201
        body = response.json()
        assert "a pricing card" in body["source_text"]
        assert body["label"] == "GeneratedComponent"
        assert (await store.read(body["preview_id"])) is not None

    async def test_generated_preview_is_readable(self, async_client):
        created = (await async_client.post("/api/generate", json={"prompt": "a pricing card"})).json()

        response = await async_client.get(f"/api/previews/{created['preview_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["prompt"] == "a pricing card"
        assert body["source_text"] == created["source_text"]

    async def test_blank_prompt_is_rejected(self, async_client):
        response = await async_client.post("/api/generate", json={"prompt": "   "})
        assert response.status_code == 422

    async def test_model_failure_still_creates_preview(self, async_client, override_services, fake_client_factory):
        client = fake_client_factory(error=GenerationClientError("model overloaded"))
        override_services.dependency_overrides[get_generation_client] = lambda: client

        response = await async_client.post("/api/generate", json={"prompt": "a login form"})

        assert response.status_code == 201
        assert "model overloaded" in response.json()["source_text"]

    async def test_store_failure_is_503(self, async_client, override_services, failing_store_factory):
        store = failing_store_factory(PreviewStoreError("down"))
        override_services.dependency_overrides[get_preview_store] = lambda: store

        response = await async_client.post("/api/generate", json={"prompt": "a pricing card"})

        assert response.status_code == 503

    async def test_rate_limit(self, async_client, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT_REQUESTS", 2)
        for _ in range(2):
            assert (await async_client.post("/api/generate", json={"prompt": "x"})).status_code == 201

        response = await async_client.post("/api/generate", json={"prompt": "x"})

        assert response.status_code == 429
        assert response.headers["retry-after"] == str(settings.RATE_LIMIT_WINDOW)


class TestPreviews:

    async def test_unknown_preview_is_404(self, async_client):
        response = await async_client.get("/api/previews/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Preview not found"

    async def test_delete_then_absent(self, async_client, store):
        preview_id = await store.create("p", '"use client"\n\nexport function A() { return null }')

        response = await async_client.delete(f"/api/previews/{preview_id}")
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        assert (await async_client.get(f"/api/previews/{preview_id}")).status_code == 404
        assert (await async_client.delete(f"/api/previews/{preview_id}")).status_code == 404

    async def test_preview_page(self, async_client, store):
        preview_id = await store.create("a <pricing> card", '"use client"\n\nexport default function Pricing() { return null }')

        response = await async_client.get(f"/preview/{preview_id}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        page = response.text
        assert 'sandbox="allow-scripts"' in page
        assert "srcdoc=" in page
        assert "a &lt;pricing&gt; card" in page
        assert "Preview" in page and "Code" in page
        assert html.escape("export default function Pricing()") in page

    async def test_missing_preview_page(self, async_client):
        response = await async_client.get("/preview/nope")
        assert response.status_code == 404
        assert "Preview not found" in response.text

    async def test_sandbox_document(self, async_client, store):
        preview_id = await store.create("p", '"use client"\n\nexport function Widget() { return null }')
        response = await async_client.get(f"/api/previews/{preview_id}/sandbox")
        assert response.status_code == 200
        assert '"componentName": "Widget"' in response.text

    async def test_snapshot_png(self, async_client, store, renderer):
        png = io.BytesIO()
        Image.new("RGB", (4, 4), (255, 0, 0)).save(png, format="PNG")
        renderer.screenshot = png.getvalue()
        preview_id = await store.create("p", '"use client"\n\nexport function Widget() { return null }')

        response = await async_client.get(f"/api/previews/{preview_id}/snapshot", params={"format": "jpg"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert 'filename="Widget.jpg"' in response.headers["content-disposition"]

    async def test_snapshot_of_failing_component_is_422(self, async_client, store, renderer):
        renderer.state = RenderState.FAILED
        renderer.error_message = "Unexpected token"
        preview_id = await store.create("p", "export function Broken() { return <div> }")

        response = await async_client.get(f"/api/previews/{preview_id}/snapshot")

        assert response.status_code == 422
        assert response.json()["state"] == "failed"
        assert response.json()["error_message"] == "Unexpected token"

    async def test_snapshot_without_screenshot_logs_missing_image(self, async_client, store, renderer, caplog):
        preview_id = await store.create("p", "\"use client\"\n\nexport function Widget() { return null }")

        with caplog.at_level(logging.WARNING, logger="routes.previews"):
            response = await async_client.get(f"/api/previews/{preview_id}/snapshot")

        assert response.status_code == 422
        assert response.json()["state"] == "mounted"
        messages = [r.getMessage() for r in caplog.records if r.name == "routes.previews"]
        assert len(messages) == 1
        assert "no screenshot was captured" in messages[0]
        assert "None" not in messages[0]

    async def test_snapshot_is_rate_limited(self, async_client, store, renderer, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT_REQUESTS", 2)
        png = io.BytesIO()
        Image.new("RGB", (4, 4)).save(png, format="PNG")
        renderer.screenshot = png.getvalue()
        preview_id = await store.create("p", "\"use client\"\n\nexport function Widget() { return null }")

        for _ in range(2):
            assert (await async_client.get(f"/api/previews/{preview_id}/snapshot")).status_code == 200

        response = await async_client.get(f"/api/previews/{preview_id}/snapshot")

        assert response.status_code == 429
        assert response.headers["retry-after"] == str(settings.RATE_LIMIT_WINDOW)
        assert len(renderer.calls) == 2

    async def test_snapshot_unsupported_format(self, async_client, store):
        preview_id = await store.create("p", "s")
        response = await async_client.get(f"/api/previews/{preview_id}/snapshot", params={"format": "svg"})
        assert response.status_code == 400


class TestDiagnostic:

    async def test_without_credential_is_500(self, async_client):
        response = await async_client.get("/api/test-api")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "API test failed"
        assert "error" in body

    async def test_success(self, async_client, override_services, fake_client_factory):
        client = fake_client_factory(response="Hello World!")
        override_services.dependency_overrides[get_generation_client] = lambda: client

        response = await async_client.get("/api/test-api")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "API is working correctly", "response": "Hello World!"}


class TestCanvas:

    async def _session(self, async_client):
        response = await async_client.post("/api/canvas/sessions")
        assert response.status_code == 201
        return response.json()["id"]

    async def test_submit_and_history(self, async_client):
        session_id = await self._session(async_client)

        for prompt in ["first", "second"]:
            response = await async_client.post(f"/api/canvas/sessions/{session_id}/submit", json={"prompt": prompt})
            assert response.status_code == 200

        body = response.json()
        assert body["result"]["label"] == "GeneratedComponent"
        assert body["result"]["render_state"] is None
        history = (await async_client.get(f"/api/canvas/sessions/{session_id}/history")).json()
        assert [entry["prompt"] for entry in history] == ["second", "first"]

    async def test_empty_prompt_warns(self, async_client):
        session_id = await self._session(async_client)

        response = await async_client.post(f"/api/canvas/sessions/{session_id}/submit", json={"prompt": ""})

        body = response.json()
        assert body["result"] is None
        assert body["console"][0]["kind"] == "warning"

    async def test_submit_with_render(self, async_client):
        session_id = await self._session(async_client)
        response = await async_client.post(
            f"/api/canvas/sessions/{session_id}/submit", json={"prompt": "a card", "render": True}
        )
        assert response.json()["result"]["render_state"] == "mounted"

    async def test_console_filter_and_clear(self, async_client):
        session_id = await self._session(async_client)
        await async_client.post(f"/api/canvas/sessions/{session_id}/submit", json={"prompt": ""})

        warnings = (await async_client.get(f"/api/canvas/sessions/{session_id}/console", params={"kind": "warning"})).json()
        assert len(warnings) == 1
        errors = (await async_client.get(f"/api/canvas/sessions/{session_id}/console", params={"kind": "error"})).json()
        assert errors == []

        assert (await async_client.delete(f"/api/canvas/sessions/{session_id}/console")).status_code == 200
        assert (await async_client.get(f"/api/canvas/sessions/{session_id}/console")).json() == []

    async def test_unknown_session_is_404(self, async_client):
        assert (await async_client.get("/api/canvas/sessions/nope/history")).status_code == 404

    async def test_end_session(self, async_client):
        session_id = await self._session(async_client)

        response = await async_client.delete(f"/api/canvas/sessions/{session_id}")

        assert response.status_code == 200
        assert response.json() == {"deleted": True, "id": session_id}
        assert (await async_client.get(f"/api/canvas/sessions/{session_id}/history")).status_code == 404
        assert (await async_client.delete(f"/api/canvas/sessions/{session_id}")).status_code == 404

    async def test_end_unknown_session_is_404(self, async_client):
        assert (await async_client.delete("/api/canvas/sessions/nope")).status_code == 404


async def test_health(async_client):
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_root_lists_endpoints(async_client):
    body = (await async_client.get("/")).json()
    assert body["endpoints"]["generate"] == "/api/generate"
    assert "Card" in body["supported_components"]
