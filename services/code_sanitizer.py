"""
Code sanitizer: normalizes raw model output into a renderable component snippet.

These are deliberately simple regular-expression passes over untrusted text,
not a parser. Nothing in this module raises on odd input; when no pattern
applies the text comes back trimmed.
"""
import logging
import re
from typing import List, NamedTuple

from config.component_library import COMPONENT_LIBRARY_PREFIX, DEFAULT_COMPONENT_NAME

logger = logging.getLogger(__name__)

CLIENT_DIRECTIVE = '"use client"'

# ```tsx\n...``` with an optional info string on the opening line
FENCED_BLOCK_RE = re.compile(r"```[\w+-]*[^\S\n]*[^\n`]*\n(.*?)```", re.DOTALL)
# ```...``` written on one line
INLINE_FENCE_RE = re.compile(r"```(.*?)```", re.DOTALL)

DIRECTIVE_RE = re.compile(r"""^\s*(['"])use client\1[ \t]*;?[ \t]*(?:\r?\n)?""")

LIBRARY_IMPORT_RE = re.compile(
    r"""^[ \t]*import\s+(?:type\s+)?\{[^}]*\}\s*from\s*["']"""
    + re.escape(COMPONENT_LIBRARY_PREFIX)
    + r"""[^"']*["'][ \t]*;?[ \t]*\r?\n?""",
    re.MULTILINE,
)
IMPORT_RE = re.compile(
    r"""^[ \t]*import\s+(?:[\w*\s{},$]*?\s*from\s*)?["'][^"']+["'][ \t]*;?[ \t]*\r?\n?""",
    re.MULTILINE,
)
NAMED_IMPORT_RE = re.compile(
    r"""import\s+(?:type\s+)?(?:(?P<default>[\w$]+)\s*,\s*)?\{(?P<names>[^}]*)\}\s*from\s*["'](?P<module>[^"']+)["']"""
)
DEFAULT_IMPORT_RE = re.compile(
    r"""import\s+(?P<default>[\w$]+)\s+from\s*["'](?P<module>[^"']+)["']"""
)
NAMESPACE_IMPORT_RE = re.compile(
    r"""import\s+\*\s+as\s+(?P<alias>[\w$]+)\s+from\s*["'](?P<module>[^"']+)["']"""
)

EXPORT_LIST_RE = re.compile(
    r"""^[ \t]*export\s*\{[^}]*\}(?:\s*from\s*["'][^"']+["'])?[ \t]*;?[ \t]*\r?$\n?""", re.MULTILINE
)
EXPORT_DEFAULT_NAME_RE = re.compile(r"^[ \t]*export\s+default\s+[\w$]+[ \t]*;?[ \t]*\r?$\n?", re.MULTILINE)
ANONYMOUS_DEFAULT_RE = re.compile(r"\bexport\s+default\s+(?=(?:async\s+)?function\s*\(|\(|[\w$]+\s*=>)")
EXPORT_DEFAULT_RE = re.compile(r"\bexport\s+default\s+")
EXPORT_DECLARATION_RE = re.compile(
    r"\bexport\s+(?=(?:async\s+)?(?:function|const|let|var|class|interface|type|enum)\b)"
)


class ImportBinding(NamedTuple):
    """One name brought into scope by an import statement."""
    module: str
    local: str
    imported: str  # "default", "*" or the exported name


def extract_code_block(text: str) -> str:
    """
    Keep only the content of the first fenced block, trimmed.
    Text without a fence comes back trimmed and otherwise unchanged.
    """
    if not text:
        return ""

    match = FENCED_BLOCK_RE.search(text) or INLINE_FENCE_RE.search(text)
    if match is None:
        return text.strip()
    return match.group(1).strip()


def has_client_directive(text: str) -> bool:
    return DIRECTIVE_RE.match(text) is not None


def ensure_client_directive(text: str) -> str:
    """Prepend the client directive unless the text already starts with it."""
    if has_client_directive(text):
        return text
    if not text:
        return CLIENT_DIRECTIVE
    return f"{CLIENT_DIRECTIVE}\n\n{text}"


def sanitize_generated_code(text: str) -> str:
    """
    Normalize raw model output into stored component source.

    Strips markdown fences (first block wins) and makes sure the client
    directive leads the text. Running it again on its own output changes
    nothing.
    """
    original_length = len(text or "")
    code = extract_code_block(text or "")
    code = ensure_client_directive(code)
    logger.debug(f"Generated code sanitized: {original_length} -> {len(code)} characters")
    return code


def collect_imported_names(text: str) -> List[ImportBinding]:
    """
    List the names the snippet imports, in source order.

    Used before imports are stripped so the sandbox can bind each name to a
    stand-in. Type-only specifiers are skipped.
    """
    bindings: List[ImportBinding] = []

    for match in NAMED_IMPORT_RE.finditer(text):
        module = match.group("module")
        if match.group("default"):
            bindings.append(ImportBinding(module, match.group("default"), "default"))
        for specifier in match.group("names").split(","):
            specifier = specifier.strip()
            if not specifier or specifier.startswith("type "):
                continue
            parts = re.split(r"\s+as\s+", specifier)
            imported = parts[0].strip()
            local = parts[-1].strip()
            if local:
                bindings.append(ImportBinding(module, local, imported))

    for match in DEFAULT_IMPORT_RE.finditer(text):
        if match.group("default") == "type":
            continue
        bindings.append(ImportBinding(match.group("module"), match.group("default"), "default"))

    for match in NAMESPACE_IMPORT_RE.finditer(text):
        bindings.append(ImportBinding(match.group("module"), match.group("alias"), "*"))

    return bindings


def strip_client_directive(text: str) -> str:
    return DIRECTIVE_RE.sub("", text, count=1)


def strip_imports(text: str) -> str:
    """Rewrite component-library imports to nothing, then drop every other import."""
    text = LIBRARY_IMPORT_RE.sub("", text)
    return IMPORT_RE.sub("", text)


def strip_exports(text: str, default_name: str = DEFAULT_COMPONENT_NAME) -> str:
    """
    Turn exported declarations into plain declarations.

    An anonymous default export is bound to `default_name`; a trailing
    `export default Name;` is dropped since Name is already declared.
    """
    text = EXPORT_LIST_RE.sub("", text)
    text = EXPORT_DEFAULT_NAME_RE.sub("", text)
    text = ANONYMOUS_DEFAULT_RE.sub(f"const {default_name} = ", text, count=1)
    text = EXPORT_DEFAULT_RE.sub("", text)
    return EXPORT_DECLARATION_RE.sub("", text)


def prepare_for_sandbox(text: str) -> str:
    """
    Make stored source evaluable inside the sandbox scope, where the
    stand-ins replace every import.
    """
    code = strip_client_directive(text.strip())
    code = strip_imports(code)
    code = strip_exports(code)
    return code.strip()
