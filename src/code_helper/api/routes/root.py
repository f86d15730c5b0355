from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint listing the available routes."""
    return {
        "meta": {
            "title": "AI Code Helper API",
            "description": "Explain, fix, convert and document code with a hosted LLM.",
            "version": "0.1.0",
            "tasks": ["explain", "fix", "convert", "document"],
        },
        "links": {
            "self": "/",
            "code-helper": "/api/code-helper",
            "signup": "/auth/signup",
            "login": "/auth/login",
            "health": "/api/health",
            "ready": "/api/health/ready",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
