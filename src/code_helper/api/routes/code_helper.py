from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, Depends, Request

from code_helper.api.dependencies import get_completion_client, get_settings
from code_helper.api.schemas import CodeHelperRequest, CodeHelperResponse
from code_helper.config import Settings
from code_helper.core.ports.completion import CompletionClient
from code_helper.core.tasks import run_task
from code_helper.errors import CompletionError
from code_helper.llm.factory import completion_options
from code_helper.models import CodeTaskRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["code-helper"])

_DISCONNECT_POLL_SECONDS = 0.5

T = TypeVar("T")


async def _cancel_on_disconnect(request: Request, work: Awaitable[T], provider: str) -> T:
    """Await *work*, cancelling it if the HTTP client goes away first."""
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=_DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("client disconnected from %s, cancelling completion", request.url.path)
                task.cancel()
                raise CompletionError(provider, "timeout", "Client disconnected before the completion finished")
    finally:
        if not task.done():
            task.cancel()


@router.post("/code-helper", response_model=CodeHelperResponse, response_model_by_alias=True)
async def code_helper(
    body: CodeHelperRequest,
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> CodeHelperResponse:
    """Run an explain / fix / convert / document task against the configured LLM provider."""
    task_request = CodeTaskRequest.create(
        body.task_type,
        body.code,
        source_language=body.language,
        target_language=body.target_language,
        extra=body.extra,
    )
    result = await _cancel_on_disconnect(
        request,
        run_task(client, task_request, completion_options(settings), settings.max_code_length),
        client.provider,
    )
    return CodeHelperResponse(task_type=task_request.task_type, result=result)
