"""
Runtime configuration for the UI Prototyper backend.

Values come from the environment (a local .env file is loaded first).
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value in (None, ""):
        return None
    return float(value)


# Generation client
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("google_ai")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GENERATION_MAX_OUTPUT_TOKENS = int(os.getenv("GENERATION_MAX_OUTPUT_TOKENS", "4000"))
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
GENERATION_TIMEOUT = _optional_float("GENERATION_TIMEOUT")  # seconds, unset = transport default

# Preview store
PREVIEW_STORE_BACKEND = os.getenv("PREVIEW_STORE_BACKEND", "memory")  # "memory" or "supabase"
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
PREVIEW_TABLE = os.getenv("PREVIEW_TABLE", "previews")

# Sandbox renderer
SANDBOX_RENDER_TIMEOUT_MS = int(os.getenv("SANDBOX_RENDER_TIMEOUT_MS", "15000"))
SANDBOX_VIEWPORT_WIDTH = int(os.getenv("SANDBOX_VIEWPORT_WIDTH", "1280"))
SANDBOX_VIEWPORT_HEIGHT = int(os.getenv("SANDBOX_VIEWPORT_HEIGHT", "800"))

# HTTP layer
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "10"))  # per window, 0 disables
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", "60"))  # seconds

# Canvas sessions
CONSOLE_MESSAGE_LIMIT = int(os.getenv("CONSOLE_MESSAGE_LIMIT", "100"))

LOG_FILE = os.getenv("LOG_FILE", "ui-prototyper.log")
