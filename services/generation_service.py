"""
Generation service: prompt in, stored component source out.
"""
import logging

from models.generation import DiagnosticResult, GenerationResult
from prompts.ui_prompts import DIAGNOSTIC_PROMPT, create_generation_prompt
from services.code_sanitizer import sanitize_generated_code
from services.component_resolver import resolve_component_name
from services.fallback_component import generate_fallback_component
from services.generation_client import GenerationClient, MissingCredentialError
from services.preview_store import PreviewStore

logger = logging.getLogger(__name__)


class UIGenerationService:
    def __init__(self, client: GenerationClient, store: PreviewStore):
        self.client = client
        self.store = store

    async def _generate_source(self, prompt: str) -> str:
        if not self.client.is_configured:
            logger.info("No API key found, using fallback component")
            return generate_fallback_component(prompt)

        raw_text = await self.client.generate(create_generation_prompt(prompt))
        return sanitize_generated_code(raw_text)

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Generate a component for `prompt` and store it as a preview.

        Model failures never reach the caller: the fallback component is
        stored instead, carrying the error message. Only a store failure while
        saving the fallback propagates (as PreviewStoreError).
        """
        logger.info(f"Starting UI generation, prompt length: {len(prompt)}")
        try:
            source_text = await self._generate_source(prompt)
            preview_id = await self.store.create(prompt, source_text)
        except Exception as e:
            logger.error(f"Error in UI generation: {str(e)}", exc_info=True)
            logger.info("Generating fallback component due to error")
            source_text = generate_fallback_component(prompt, str(e) or type(e).__name__)
            preview_id = await self.store.create(prompt, source_text)

        label = resolve_component_name(source_text)
        logger.info(f"Generation stored as preview {preview_id} (component '{label}')")
        return GenerationResult(source_text=source_text, preview_id=preview_id, label=label)


async def run_diagnostic(client: GenerationClient) -> DiagnosticResult:
    """Send a fixed trivial prompt and report whether the model answered."""
    logger.info(f"Running API diagnostic, credential configured: {client.is_configured}")
    try:
        text = await client.generate(DIAGNOSTIC_PROMPT)
    except MissingCredentialError as e:
        logger.warning(f"API diagnostic skipped: {str(e)}")
        return DiagnosticResult(success=False, message="API test failed", error=str(e))
    except Exception as e:
        logger.error(f"API diagnostic failed: {str(e)}", exc_info=True)
        return DiagnosticResult(success=False, message="API test failed", error=str(e) or "Unknown error")

    return DiagnosticResult(success=True, message="API is working correctly", response=text)
