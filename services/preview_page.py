"""
Shareable preview page: the stored prompt as a header, a Preview tab holding
the sandbox document in an isolated iframe, and a Code tab with the source.
"""
import html
import logging

from models.generation import PreviewRecord
from services.sandbox_document import IFRAME_SANDBOX, build_sandbox_document

logger = logging.getLogger(__name__)

PAGE_CSS = """
body { margin: 0; font-family: ui-sans-serif, system-ui, sans-serif; background: #f8fafc; color: #0f172a; }
.page { max-width: 1100px; margin: 0 auto; padding: 24px; }
.page h1 { font-size: 1.5rem; margin: 0 0 4px; }
.page .prompt { color: #64748b; margin: 0 0 16px; }
.tabs { display: flex; gap: 4px; margin-bottom: 12px; }
.tabs button { border: 1px solid #e2e8f0; background: #fff; border-radius: 6px; padding: 6px 14px; cursor: pointer; }
.tabs button[aria-selected="true"] { background: #0f172a; color: #fff; }
.panel { background: #fff; border: 1px solid #e2e8f0; border-radius: 8px; overflow: hidden; }
.panel[hidden] { display: none; }
.panel iframe { width: 100%; height: 75vh; border: 0; }
.panel pre { margin: 0; padding: 16px; overflow: auto; font-size: 13px; max-height: 75vh; }
.missing { text-align: center; padding-top: 20vh; }
.missing a { color: #0f172a; }
"""

TAB_SCRIPT = """
document.querySelectorAll(".tabs button").forEach(function (button) {
  button.addEventListener("click", function () {
    document.querySelectorAll(".tabs button").forEach(function (other) {
      var selected = other === button;
      other.setAttribute("aria-selected", selected ? "true" : "false");
      document.getElementById(other.dataset.panel).hidden = !selected;
    });
  });
});
"""


def render_preview_page(record: PreviewRecord) -> str:
    """Build the preview page for a stored generation."""
    document = build_sandbox_document(record.source_text, title="Component Preview", banner=record.prompt)
    logger.debug(f"Rendering preview page for {record.id}")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>UI Prototype Preview</title>
<style>{PAGE_CSS}</style>
</head>
<body>
<div class="page">
  <h1>UI Prototype Preview</h1>
  <p class="prompt">{html.escape(record.prompt)}</p>
  <div class="tabs" role="tablist">
    <button role="tab" aria-selected="true" data-panel="preview-panel">Preview</button>
    <button role="tab" aria-selected="false" data-panel="code-panel">Code</button>
  </div>
  <div class="panel" id="preview-panel">
    <iframe title="Component Preview" sandbox="{IFRAME_SANDBOX}" srcdoc="{html.escape(document, quote=True)}"></iframe>
  </div>
  <div class="panel" id="code-panel" hidden>
    <pre><code>{html.escape(record.source_text)}</code></pre>
  </div>
</div>
<script>{TAB_SCRIPT}</script>
</body>
</html>
"""


def render_missing_page() -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Preview not found</title>
<style>{PAGE_CSS}</style>
</head>
<body>
<div class="page missing">
  <h1>Preview not found</h1>
  <p class="prompt">The preview you're looking for doesn't exist or has been removed.</p>
  <a href="/">Back to Prototyper</a>
</div>
</body>
</html>
"""
