# =============================
# backend/app/routes/health.py
# =============================
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..mcp.session import store

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Perplexity MCP Server is running!"


@router.get("/health")
def health_check():
    return {"status": "healthy", "message": "Backend is running", "sessions": len(store)}
