"""
Render cycle for one component snippet.

    Idle -> Sanitizing -> Resolving -> Evaluating -> Mounted | Failed

Every step may also go straight to Failed. A cycle runs once; a new snippet
needs a new cycle.
"""
import logging
from typing import List, Optional, Tuple

from models.sandbox import TERMINAL_STATES, RenderState, SandboxOutcome
from services.code_sanitizer import sanitize_generated_code
from services.component_resolver import resolve_component_name
from services.sandbox_renderer import SandboxRenderer

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    RenderState.IDLE: {RenderState.SANITIZING},
    RenderState.SANITIZING: {RenderState.RESOLVING, RenderState.FAILED},
    RenderState.RESOLVING: {RenderState.EVALUATING, RenderState.FAILED},
    RenderState.EVALUATING: {RenderState.MOUNTED, RenderState.FAILED},
    RenderState.MOUNTED: set(),
    RenderState.FAILED: set(),
}


class RenderCycleError(Exception):
    """Raised on an illegal state transition, e.g. running a cycle twice."""


class RenderCycle:
    def __init__(self, renderer: SandboxRenderer):
        self.renderer = renderer
        self.state = RenderState.IDLE
        self.transitions: List[Tuple[RenderState, RenderState]] = []
        self.outcome: Optional[SandboxOutcome] = None

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def _advance(self, new_state: RenderState):
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise RenderCycleError(f"Illegal render transition {self.state.value} -> {new_state.value}")
        logger.debug(f"Render cycle {self.state.value} -> {new_state.value}")
        self.transitions.append((self.state, new_state))
        self.state = new_state

    async def run(self, source_text: str, screenshot: bool = False) -> SandboxOutcome:
        """
        Drive the snippet through the cycle and return the terminal outcome.
        No step is retried.
        """
        self._advance(RenderState.SANITIZING)
        code = sanitize_generated_code(source_text)

        self._advance(RenderState.RESOLVING)
        component_name = resolve_component_name(code)

        self._advance(RenderState.EVALUATING)
        try:
            outcome = await self.renderer.render(code, component_name, screenshot=screenshot)
        except Exception as e:
            logger.error(f"Renderer raised for '{component_name}': {str(e)}", exc_info=True)
            outcome = SandboxOutcome(
                state=RenderState.FAILED,
                component_name=component_name,
                error_message=str(e),
            )

        if outcome.state not in TERMINAL_STATES:
            logger.warning(f"Renderer returned non-terminal state {outcome.state.value}, treating as failed")
            outcome = outcome.model_copy(update={"state": RenderState.FAILED})

        self._advance(outcome.state)
        self.outcome = outcome
        return outcome
