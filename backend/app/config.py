# =============================
# backend/app/config.py
# =============================
from __future__ import annotations
import os
from dotenv import load_dotenv

load_dotenv()

# Provider
PERPLEXITY_API_KEY: str | None = os.environ.get("PERPLEXITY_API_KEY")
if not PERPLEXITY_API_KEY:
    raise RuntimeError("Please set PERPLEXITY_API_KEY in the environment or .env")
PERPLEXITY_API_URL = os.environ.get("PERPLEXITY_API_URL", "https://api.perplexity.ai").rstrip("/")
_timeout = os.environ.get("PERPLEXITY_TIMEOUT")
PERPLEXITY_TIMEOUT: float | None = float(_timeout) if _timeout else None  # unset => no timeout

# Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8080))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# SSE
SSE_KEEPALIVE_SEC = float(os.environ.get("SSE_KEEPALIVE_SEC", 15))
SHUTDOWN_GRACE_SEC = float(os.environ.get("SHUTDOWN_GRACE_SEC", 5))  # backstop for in-flight requests
