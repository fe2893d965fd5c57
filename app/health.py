# app/health.py
from fastapi import APIRouter

from app.config import get_settings

router = APIRouter()

@router.get("/health")
def health():
    settings = get_settings()
    return {"ok": True, "store": "memory" if settings.mock_mode else "supabase"}

@router.get("/mcp/info")
def mcp_info():
    return {"status":"ok","transport":"streamable-http","path":"/mcp"}

@router.get("/mcp/health")
def mcp_health():
    return {"ok": True}
