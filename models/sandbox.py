"""
Sandbox rendering models.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

from models.canvas import ConsoleMessage


class RenderState(str, Enum):
    IDLE = "idle"
    SANITIZING = "sanitizing"
    RESOLVING = "resolving"
    EVALUATING = "evaluating"
    MOUNTED = "mounted"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RenderState.MOUNTED, RenderState.FAILED})


class SandboxOutcome(BaseModel):
    """
    Result of evaluating a snippet behind the sandbox boundary.
    """
    state: RenderState
    component_name: str
    error_message: Optional[str] = None
    error_stack: Optional[str] = None
    console: List[ConsoleMessage] = Field(default_factory=list)
    screenshot: Optional[bytes] = Field(default=None, exclude=True)

    @property
    def mounted(self) -> bool:
        return self.state == RenderState.MOUNTED
