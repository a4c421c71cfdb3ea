"""
Sandbox renderer: evaluates a generated component behind an isolation
boundary and reports whether it mounted.

The boundary is a headless Chromium page driven by Playwright. The page only
sees the assembled sandbox document; the host process never evaluates the
snippet itself.
"""
import logging
import time
from typing import List, Optional

from playwright.async_api import async_playwright

from config import settings
from models.canvas import ConsoleKind, ConsoleMessage
from models.sandbox import RenderState, SandboxOutcome
from services.component_resolver import resolve_component_name
from services.sandbox_document import build_sandbox_document

logger = logging.getLogger(__name__)

STATUS_EXPRESSION = "() => window.__SANDBOX_STATUS__ !== undefined"
READ_STATUS_EXPRESSION = "() => window.__SANDBOX_STATUS__"

CONSOLE_KINDS = {
    "error": ConsoleKind.ERROR,
    "warning": ConsoleKind.WARNING,
    "info": ConsoleKind.INFO,
}


class SandboxRenderer:
    """
    Interface for anything that can evaluate a component snippet and report
    the terminal render state. Implementations never raise for a broken
    snippet or a broken boundary; they return a failed outcome instead.
    """

    async def render(
        self,
        source_text: str,
        component_name: Optional[str] = None,
        screenshot: bool = False,
    ) -> SandboxOutcome:
        raise NotImplementedError


class PlaywrightSandboxRenderer(SandboxRenderer):
    def __init__(
        self,
        timeout_ms: int = settings.SANDBOX_RENDER_TIMEOUT_MS,
        width: int = settings.SANDBOX_VIEWPORT_WIDTH,
        height: int = settings.SANDBOX_VIEWPORT_HEIGHT,
    ):
        self.timeout_ms = timeout_ms
        self.width = width
        self.height = height

    async def render(
        self,
        source_text: str,
        component_name: Optional[str] = None,
        screenshot: bool = False,
    ) -> SandboxOutcome:
        """
        Load the sandbox document for `source_text` in a fresh page and wait
        for it to publish its terminal state.

        Args:
            source_text: Sanitized component source
            component_name: Identifier to mount; resolved from the source when omitted
            screenshot: Also capture a full-page PNG of the result

        Returns:
            SandboxOutcome with state mounted or failed
        """
        start_time = time.time()
        component_name = component_name or resolve_component_name(source_text)
        document = build_sandbox_document(source_text, component_name)
        console: List[ConsoleMessage] = []

        def on_console(message):
            kind = CONSOLE_KINDS.get(message.type, ConsoleKind.LOG)
            console.append(ConsoleMessage.create(kind, message.text))

        def on_page_error(error):
            console.append(ConsoleMessage.create(ConsoleKind.ERROR, str(error)))

        logger.info(f"Rendering component '{component_name}' in sandbox ({self.width}x{self.height})")

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True)
                try:
                    page = await browser.new_page()
                    page.on("console", on_console)
                    page.on("pageerror", on_page_error)

                    await page.set_viewport_size({"width": self.width, "height": self.height})
                    await page.set_content(document, wait_until="load", timeout=self.timeout_ms)
                    await page.wait_for_function(STATUS_EXPRESSION, timeout=self.timeout_ms)
                    status = await page.evaluate(READ_STATUS_EXPRESSION)

                    screenshot_bytes = None
                    if screenshot:
                        screenshot_bytes = await page.screenshot(type="png", full_page=True)
                finally:
                    await browser.close()

        except Exception as e:
            logger.error(f"Sandbox render failed for '{component_name}': {str(e)}")
            return SandboxOutcome(
                state=RenderState.FAILED,
                component_name=component_name,
                error_message=f"Sandbox unavailable: {str(e)}",
                console=console,
            )

        state = RenderState.MOUNTED if status.get("state") == "mounted" else RenderState.FAILED
        render_time = time.time() - start_time
        logger.info(f"Component '{component_name}' {state.value} in {render_time:.2f}s")

        return SandboxOutcome(
            state=state,
            component_name=component_name,
            error_message=status.get("message"),
            error_stack=status.get("stack"),
            console=console,
            screenshot=screenshot_bytes,
        )


# Global renderer instance - created on first use
sandbox_renderer = None


def get_sandbox_renderer() -> SandboxRenderer:
    """Get or create the sandbox renderer"""
    global sandbox_renderer
    if sandbox_renderer is None:
        sandbox_renderer = PlaywrightSandboxRenderer()
    return sandbox_renderer
