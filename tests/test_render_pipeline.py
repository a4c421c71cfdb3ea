"""
Tests for the render cycle state machine.
"""
import pytest

from models.sandbox import RenderState
from services.render_pipeline import RenderCycle, RenderCycleError

SOURCE = "```tsx\nexport default function Hero() { return <h1>Hi</h1> }\n```"


async def test_successful_cycle_visits_every_state(renderer):
    cycle = RenderCycle(renderer)

    outcome = await cycle.run(SOURCE)

    assert outcome.state == RenderState.MOUNTED
    assert cycle.state == RenderState.MOUNTED
    assert cycle.finished
    assert [new for _, new in cycle.transitions] == [
        RenderState.SANITIZING,
        RenderState.RESOLVING,
        RenderState.EVALUATING,
        RenderState.MOUNTED,
    ]


async def test_renderer_receives_sanitized_source_and_resolved_name(renderer):
    await RenderCycle(renderer).run(SOURCE)
    source_text, component_name, screenshot = renderer.calls[0]
    assert source_text.startswith('"use client"')
    assert "```" not in source_text
    assert component_name == "Hero"
    assert screenshot is False


async def test_failed_render_is_terminal(fake_renderer_factory):
    renderer = fake_renderer_factory(state=RenderState.FAILED, error_message="Undefined is not a function")
    cycle = RenderCycle(renderer)

    outcome = await cycle.run(SOURCE)

    assert outcome.state == RenderState.FAILED
    assert outcome.error_message == "Undefined is not a function"
    assert cycle.transitions[-1] == (RenderState.EVALUATING, RenderState.FAILED)


async def test_renderer_exception_becomes_failure(fake_renderer_factory):
    cycle = RenderCycle(fake_renderer_factory(error=RuntimeError("browser crashed")))
    outcome = await cycle.run(SOURCE)
    assert outcome.state == RenderState.FAILED
    assert "browser crashed" in outcome.error_message


async def test_non_terminal_outcome_is_treated_as_failure(fake_renderer_factory):
    cycle = RenderCycle(fake_renderer_factory(state=RenderState.EVALUATING))
    outcome = await cycle.run(SOURCE)
    assert outcome.state == RenderState.FAILED


async def test_cycle_runs_once(renderer):
    """No retry: a finished cycle refuses to run again."""
    cycle = RenderCycle(renderer)
    await cycle.run(SOURCE)
    with pytest.raises(RenderCycleError):
        await cycle.run(SOURCE)
    assert len(renderer.calls) == 1


async def test_screenshot_flag_is_forwarded(fake_renderer_factory):
    renderer = fake_renderer_factory(screenshot=b"png-bytes")
    outcome = await RenderCycle(renderer).run(SOURCE, screenshot=True)
    assert outcome.screenshot == b"png-bytes"
