"""
Canvas sessions: the prompt history and diagnostic console that accompany
one user's prototyping workspace.
"""
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, List, Optional, Tuple
import logging
import uuid

from config import settings
from models.canvas import ConsoleKind, ConsoleMessage, HistoryEntry
from models.generation import GenerationResult
from models.sandbox import SandboxOutcome
from services.generation_service import UIGenerationService
from services.render_pipeline import RenderCycle
from services.sandbox_renderer import SandboxRenderer

logger = logging.getLogger(__name__)


class CanvasSession:
    """
    History is most-recent-first and unbounded for the life of the session.
    The console keeps only the newest `console_limit` messages.
    """

    def __init__(self, session_id: str, console_limit: int = settings.CONSOLE_MESSAGE_LIMIT):
        self.id = session_id
        self.created_at = datetime.now(timezone.utc)
        self._history: List[HistoryEntry] = []
        self._console: Deque[ConsoleMessage] = deque(maxlen=console_limit)

    @property
    def history(self) -> List[HistoryEntry]:
        return list(self._history)

    def console(self, kind: Optional[ConsoleKind] = None) -> List[ConsoleMessage]:
        if kind is None:
            return list(self._console)
        return [message for message in self._console if message.kind == kind]

    def add_console_message(self, kind: ConsoleKind, content: str) -> ConsoleMessage:
        message = ConsoleMessage.create(kind, content)
        self._console.append(message)
        return message

    def clear_console(self):
        self._console.clear()

    def add_history_entry(self, prompt: str) -> HistoryEntry:
        entry = HistoryEntry(id=str(uuid.uuid4()), prompt=prompt, timestamp=datetime.now(timezone.utc))
        self._history.insert(0, entry)
        return entry

    def _record_outcome(self, outcome: SandboxOutcome):
        for message in outcome.console:
            self._console.append(message)
        if outcome.mounted:
            self.add_console_message(ConsoleKind.INFO, f'Component "{outcome.component_name}" processed successfully.')
        else:
            self.add_console_message(
                ConsoleKind.ERROR,
                f"Error processing component code: {outcome.error_message or 'Unknown error'}",
            )

    async def submit(
        self,
        prompt: str,
        service: UIGenerationService,
        renderer: Optional[SandboxRenderer] = None,
    ) -> Tuple[Optional[GenerationResult], Optional[SandboxOutcome]]:
        """
        Generate a component for `prompt` and record it in the session.

        An empty prompt only adds a warning. Otherwise the console is cleared
        before generation starts. When a renderer is given the result is also
        evaluated in the sandbox and failures land in the console as errors.
        """
        if not prompt.strip():
            self.add_console_message(ConsoleKind.WARNING, "Please enter a prompt before generating.")
            return None, None

        self.clear_console()
        self.add_console_message(ConsoleKind.INFO, f'Generating UI for prompt: "{prompt}"')

        try:
            result = await service.generate(prompt)
        except Exception as e:
            logger.error(f"Canvas session {self.id}: generation failed: {str(e)}", exc_info=True)
            self.add_console_message(ConsoleKind.ERROR, f"Error generating UI: {str(e) or 'Unknown error'}")
            return None, None

        self.add_history_entry(prompt)

        outcome = None
        if renderer is not None:
            outcome = await RenderCycle(renderer).run(result.source_text)
            self._record_outcome(outcome)

        self.add_console_message(ConsoleKind.INFO, "UI component generated successfully.")
        return result, outcome


class CanvasSessionRegistry:
    def __init__(self):
        self._sessions: Dict[str, CanvasSession] = {}

    def create(self) -> CanvasSession:
        session = CanvasSession(str(uuid.uuid4()))
        self._sessions[session.id] = session
        logger.info(f"Created canvas session {session.id}")
        return session

    def get(self, session_id: str) -> Optional[CanvasSession]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        if self._sessions.pop(session_id, None) is None:
            logger.warning(f"Canvas session not found for removal, ID: {session_id}")
            return False
        logger.info(f"Removed canvas session {session_id}")
        return True

    def __len__(self) -> int:
        return len(self._sessions)


# Global registry instance - created on first use
canvas_sessions = None


def get_canvas_sessions() -> CanvasSessionRegistry:
    """Get or create the canvas session registry"""
    global canvas_sessions
    if canvas_sessions is None:
        canvas_sessions = CanvasSessionRegistry()
    return canvas_sessions
