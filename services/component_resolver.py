"""
Component name resolver.

Finds the identifier of the component to mount by scanning the source for
export patterns in a fixed priority order. This is a heuristic text scan: a
matching substring inside a comment or string literal can fool it, and that
is accepted.
"""
import logging
import re
from typing import List, Optional, Pattern, Tuple

from config.component_library import DEFAULT_COMPONENT_NAME

logger = logging.getLogger(__name__)

# Tried in order, first hit wins
EXPORT_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("default_function", re.compile(r"export\s+default\s+(?:async\s+)?function\s+([A-Za-z_$][\w$]*)")),
    ("named_function", re.compile(r"export\s+(?:async\s+)?function\s+([A-Za-z_$][\w$]*)")),
    ("named_const", re.compile(r"export\s+const\s+([A-Za-z_$][\w$]*)\s*(?::[^=]+)?=")),
]


def find_component_name(source_text: str) -> Optional[str]:
    """Return the first exported component name, or None when nothing matches."""
    for pattern_name, pattern in EXPORT_PATTERNS:
        match = pattern.search(source_text or "")
        if match:
            logger.debug(f"Component name '{match.group(1)}' resolved by {pattern_name}")
            return match.group(1)
    return None


def resolve_component_name(source_text: str, default: str = DEFAULT_COMPONENT_NAME) -> str:
    """
    Determine the identifier of the component to render.

    Args:
        source_text: Sanitized component source
        default: Identifier used when no export pattern matches

    Returns:
        The component name
    """
    name = find_component_name(source_text)
    if name is None:
        logger.debug(f"No export pattern matched, using default component name '{default}'")
        return default
    return name
