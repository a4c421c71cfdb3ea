"""
Canvas session models: prompt history and the diagnostic console.
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid


class ConsoleKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    LOG = "log"


class ConsoleMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: ConsoleKind
    content: str
    timestamp: datetime

    @classmethod
    def create(cls, kind: ConsoleKind, content: str) -> "ConsoleMessage":
        return cls(id=str(uuid.uuid4()), kind=kind, content=content, timestamp=datetime.now(timezone.utc))


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    timestamp: datetime


class CanvasSubmitRequest(BaseModel):
    prompt: str
    render: bool = False  # also evaluate the result in the sandbox renderer


class GenerationResultView(BaseModel):
    source_text: str
    preview_id: str
    label: Optional[str] = None
    render_state: Optional[str] = None


class CanvasSubmitResponse(BaseModel):
    """
    What the canvas shows after a submission. `result` is None when the
    prompt was rejected before generation.
    """
    result: Optional[GenerationResultView] = None
    history: List[HistoryEntry]
    console: List[ConsoleMessage]
