"""
Sandbox document assembly.

Builds a self-contained HTML page that evaluates a generated component with
stand-ins for the component library, then mounts it behind an error boundary.
React, ReactDOM, Babel standalone and Tailwind are loaded from CDNs and the
snippet is compiled client-side, so no build step is involved.

The page reports its terminal state three ways:
- window.__SANDBOX_STATUS__ = {state, message, stack}
- document.body.dataset.sandboxState
- window.parent.postMessage({type: "sandbox-status", ...})

State is "mounted" or "failed". Nothing thrown by the snippet escapes the
page: evaluation errors and render errors both end in the failure panel.
"""

import html
import json
import logging
import re
from typing import Any, Dict, List, Optional

from config.component_library import (
    COMPONENT_STAND_INS,
    GENERIC_STAND_IN,
    ICON_PACKAGE,
    REACT_HOOKS,
    VOID_TAGS,
    get_stand_in,
    get_supported_component_names,
    is_supported_component,
)
from services.code_sanitizer import collect_imported_names, prepare_for_sandbox
from services.component_resolver import resolve_component_name

logger = logging.getLogger(__name__)

REACT_URL = "https://unpkg.com/react@18/umd/react.development.js"
REACT_DOM_URL = "https://unpkg.com/react-dom@18/umd/react-dom.development.js"
BABEL_URL = "https://unpkg.com/@babel/standalone/babel.min.js"
TAILWIND_URL = "https://cdn.tailwindcss.com"

# iframe sandbox flags: scripts run, same-origin access is withheld
IFRAME_SANDBOX = "allow-scripts"

# Namespace that generated code may use as LucideIcons.Name
ICON_NAMESPACE = "LucideIcons"

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

SANDBOX_CSS = """
:root {
  --background: hsl(0 0% 100%);
  --foreground: hsl(222.2 84% 4.9%);
  --muted: hsl(210 40% 96.1%);
  --muted-foreground: hsl(215.4 16.3% 46.9%);
  --border: hsl(214.3 31.8% 91.4%);
  --radius: 0.5rem;
}
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', sans-serif;
  margin: 0;
  padding: 1rem;
  background: var(--background);
  color: var(--foreground);
}
.preview-info {
  margin-bottom: 1rem;
  padding: 0.75rem;
  border-radius: var(--radius);
  background: var(--muted);
  font-size: 0.875rem;
  color: var(--muted-foreground);
}
.sandbox-icon {
  display: inline-block;
  width: 1em;
  height: 1em;
  border: 2px solid currentColor;
  border-radius: 4px;
  vertical-align: middle;
  box-sizing: border-box;
}
.sandbox-error {
  padding: 1rem;
  margin: 1rem 0;
  border-radius: var(--radius);
  background: hsl(0 100% 97%);
  border: 1px solid hsl(0 84.2% 90.2%);
  color: hsl(0 84.2% 45%);
}
.sandbox-error pre {
  font-size: 12px;
  margin-top: 10px;
  overflow: auto;
  max-height: 200px;
  white-space: pre-wrap;
}
"""

# Runs as a plain script after React/Babel load. Expects SANDBOX_CONFIG.
SANDBOX_RUNTIME = r"""
(function () {
  var config = window.SANDBOX_CONFIG;
  var rootElement = document.getElementById("root");

  function describe(error) {
    if (error === null || error === undefined) {
      return { message: "Unknown error", stack: null };
    }
    return {
      message: String(error.message || error),
      stack: error.stack ? String(error.stack) : null
    };
  }

  function report(state, error) {
    var status = { state: state, message: null, stack: null };
    if (error !== undefined) {
      var details = describe(error);
      status.message = details.message;
      status.stack = details.stack;
    }
    window.__SANDBOX_STATUS__ = status;
    document.body.dataset.sandboxState = state;
    try {
      window.parent.postMessage(Object.assign({ type: "sandbox-status" }, status), "*");
    } catch (ignored) {}
  }

  function showFailure(title, error) {
    var details = describe(error);
    var panel = document.createElement("div");
    panel.className = "sandbox-error";
    var heading = document.createElement("h3");
    heading.textContent = title;
    var message = document.createElement("p");
    message.textContent = details.message;
    panel.appendChild(heading);
    panel.appendChild(message);
    if (details.stack) {
      var stack = document.createElement("pre");
      stack.textContent = details.stack;
      panel.appendChild(stack);
    }
    rootElement.innerHTML = "";
    rootElement.appendChild(panel);
  }

  window.addEventListener("error", function (event) {
    try {
      window.parent.postMessage({ type: "sandbox-console", kind: "error", content: String(event.message) }, "*");
    } catch (ignored) {}
  });

  if (typeof React === "undefined" || typeof ReactDOM === "undefined" || typeof Babel === "undefined") {
    var missing = new Error("Sandbox libraries failed to load");
    showFailure("Evaluation Error", missing);
    report("failed", missing);
    return;
  }

  var h = React.createElement;

  function failurePanel(title, error) {
    var details = describe(error);
    return h("div", { className: "sandbox-error" },
      h("h3", null, title),
      h("p", null, details.message),
      details.stack ? h("pre", null, details.stack) : null
    );
  }

  var standInCache = {};
  function standIn(name) {
    if (standInCache[name]) {
      return standInCache[name];
    }
    var spec = config.standIns[name] || config.genericStandIn;
    var Component = React.forwardRef(function (props, ref) {
      var rest = Object.assign({}, props);
      var className = rest.className;
      var children = rest.children;
      var onCheckedChange = rest.onCheckedChange;
      delete rest.className;
      delete rest.children;
      config.nonDomProps.forEach(function (key) { delete rest[key]; });
      if (typeof onCheckedChange === "function") {
        if (spec.tag === "input") {
          rest.onChange = function (event) { onCheckedChange(event.target.checked); };
        } else {
          rest.onClick = function () { onCheckedChange(!props.checked); };
        }
      }
      var merged = Object.assign({}, spec.props || {}, rest, {
        ref: ref,
        className: [spec.class_name, className].filter(Boolean).join(" "),
        "data-stand-in": name
      });
      if (config.voidTags.indexOf(spec.tag) !== -1) {
        return h(spec.tag, merged);
      }
      return h(spec.tag, merged, children);
    });
    Component.displayName = name;
    standInCache[name] = Component;
    return Component;
  }

  var iconCache = {};
  function icon(name) {
    if (iconCache[name]) {
      return iconCache[name];
    }
    var Icon = function (props) {
      var rest = Object.assign({}, props);
      var size = rest.size;
      ["size", "color", "strokeWidth", "absoluteStrokeWidth", "children"].forEach(function (key) { delete rest[key]; });
      return h("span", Object.assign(rest, {
        className: ["sandbox-icon", props && props.className].filter(Boolean).join(" "),
        style: size ? Object.assign({ width: size, height: size }, rest.style) : rest.style,
        "data-icon": name,
        "aria-hidden": "true"
      }));
    };
    Icon.displayName = name;
    iconCache[name] = Icon;
    return Icon;
  }

  function lookupProxy(factory) {
    return new Proxy({}, {
      get: function (target, key) {
        return typeof key === "string" ? factory(key) : undefined;
      }
    });
  }
  var iconSet = lookupProxy(icon);
  var standInSet = lookupProxy(standIn);

  function resolveBinding(binding) {
    var whole = binding.target === "default" || binding.target === "*";
    switch (binding.kind) {
      case "react":
        return whole ? React : React[binding.target];
      case "icon":
        return icon(whole ? binding.name : binding.target);
      case "icons":
        return iconSet;
      case "namespace":
        return standInSet;
      default:
        return standIn(whole ? binding.name : binding.target);
    }
  }

  var scope = {};
  config.bindings.forEach(function (binding) {
    scope[binding.name] = resolveBinding(binding);
  });
  var names = Object.keys(scope);
  var componentName = config.componentName;

  var Component;
  try {
    var compiled = Babel.transform(config.source, {
      presets: [["typescript", { isTSX: true, allExtensions: true }], "react"],
      filename: "component.tsx"
    }).code;
    var body = "return (function () {\n" + compiled + "\n" +
      "if (typeof " + componentName + " === 'undefined') {\n" +
      "  throw new ReferenceError('Component \"" + componentName + "\" is not defined');\n" +
      "}\n" +
      "return " + componentName + ";\n" +
      "})();";
    var factory = Function.apply(null, names.concat([body]));
    Component = factory.apply(null, names.map(function (name) { return scope[name]; }));
  } catch (error) {
    showFailure("Evaluation Error", error);
    report("failed", error);
    return;
  }

  class SandboxErrorBoundary extends React.Component {
    constructor(props) {
      super(props);
      this.state = { error: null };
    }
    static getDerivedStateFromError(error) {
      return { error: error };
    }
    componentDidCatch(error) {
      report("failed", error);
    }
    componentDidMount() {
      if (!this.state.error) {
        report("mounted");
      }
    }
    render() {
      if (this.state.error) {
        return failurePanel("Component Error", this.state.error);
      }
      return this.props.children;
    }
  }

  try {
    ReactDOM.createRoot(rootElement).render(
      h(SandboxErrorBoundary, null, h("div", { className: "preview-container" }, h(Component)))
    );
  } catch (error) {
    showFailure("Component Error", error);
    report("failed", error);
  }
})();
"""

# Props generated code passes to library components that plain elements reject
NON_DOM_PROPS = [
    "variant",
    "size",
    "asChild",
    "onCheckedChange",
    "onValueChange",
    "onOpenChange",
    "onSelect",
    "defaultOpen",
    "orientation",
    "sideOffset",
    "align",
    "side",
    "collapsible",
    "decorative",
    "forceMount",
    "delayDuration",
]


def _script_json(value: Any) -> str:
    """Serialize a value for embedding inside a <script> element."""
    return (
        json.dumps(value, ensure_ascii=False)
        .replace("</", "<\\/")
        .replace("<!--", "<\\!--")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _binding(name: str, kind: str, target: str) -> Dict[str, str]:
    return {"name": name, "kind": kind, "target": target}


def build_scope_bindings(source_text: str) -> List[Dict[str, str]]:
    """
    Work out which name is bound to which stand-in in the evaluation scope.

    Every library stand-in and React hook is always visible; names the
    snippet imports are added on top, so an import of something the sandbox
    does not know still resolves to a generic container.
    """
    bindings: Dict[str, Dict[str, str]] = {}

    for component_name in COMPONENT_STAND_INS:
        bindings[component_name] = _binding(component_name, "component", component_name)
    for hook in REACT_HOOKS:
        bindings[hook] = _binding(hook, "react", hook)
    bindings["React"] = _binding("React", "react", "default")
    bindings[ICON_NAMESPACE] = _binding(ICON_NAMESPACE, "icons", "*")

    for imported in collect_imported_names(source_text):
        if not IDENTIFIER_RE.match(imported.local):
            continue
        if imported.module == "react":
            kind = "react"
        elif imported.module == ICON_PACKAGE or imported.module.startswith(ICON_PACKAGE + "/"):
            kind = "icons" if imported.imported == "*" else "icon"
        elif imported.imported == "*":
            kind = "namespace"
        else:
            kind = "component"
            if not is_supported_component(imported.imported):
                logger.info(f"No stand-in for '{imported.imported}' from {imported.module}, using generic container")
        bindings[imported.local] = _binding(imported.local, kind, imported.imported)

    return list(bindings.values())


def build_sandbox_config(source_text: str, component_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the configuration object the sandbox runtime reads.

    Args:
        source_text: Sanitized component source as stored
        component_name: Identifier to mount; resolved from the source when omitted
    """
    if not component_name or not IDENTIFIER_RE.match(component_name):
        if component_name:
            logger.warning(f"Ignoring invalid component name '{component_name}'")
        component_name = resolve_component_name(source_text)

    stand_ins = {name: dict(get_stand_in(name)) for name in get_supported_component_names()}
    return {
        "source": prepare_for_sandbox(source_text),
        "componentName": component_name,
        "bindings": build_scope_bindings(source_text),
        "standIns": stand_ins,
        "genericStandIn": dict(GENERIC_STAND_IN),
        "voidTags": sorted(VOID_TAGS),
        "nonDomProps": NON_DOM_PROPS,
    }


def build_sandbox_document(
    source_text: str,
    component_name: Optional[str] = None,
    title: str = "Component Preview",
    banner: Optional[str] = None,
) -> str:
    """
    Assemble the self-contained sandbox page for a generated component.

    Args:
        source_text: Sanitized component source as stored
        component_name: Identifier to mount; resolved from the source when omitted
        title: Page title
        banner: Optional text shown above the component (e.g. the prompt)

    Returns:
        Complete HTML string
    """
    config = build_sandbox_config(source_text, component_name)
    logger.debug(
        f"Assembling sandbox document for '{config['componentName']}' "
        f"({len(config['source'])} characters, {len(config['bindings'])} bindings)"
    )

    banner_html = ""
    if banner:
        banner_html = f'<div class="preview-info"><strong>Preview:</strong> {html.escape(banner)}</div>\n'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{html.escape(title)}</title>
<script src="{REACT_URL}"></script>
<script src="{REACT_DOM_URL}"></script>
<script src="{BABEL_URL}"></script>
<script src="{TAILWIND_URL}"></script>
<style>
{SANDBOX_CSS}
</style>
</head>
<body>
{banner_html}<div id="root"></div>
<script>
window.SANDBOX_CONFIG = {_script_json(config)};
</script>
<script>
{SANDBOX_RUNTIME}
</script>
</body>
</html>
"""