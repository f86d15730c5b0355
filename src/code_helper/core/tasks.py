import logging
import time

from code_helper.core.ports.completion import CompletionClient
from code_helper.core.prompts import build_prompt, check_code_size
from code_helper.models import CodeTaskRequest, CompletionOptions

logger = logging.getLogger(__name__)


async def run_task(
    client: CompletionClient,
    request: CodeTaskRequest,
    options: CompletionOptions,
    max_code_length: int = 0,
) -> str:
    """Validate *request*, render its prompt in the client's style and return the completion text."""
    check_code_size(request.source_code, max_code_length)
    prompt = build_prompt(request, client.prompt_style)

    t0 = time.perf_counter()
    result = await client.complete(prompt, options)
    logger.info(
        "task %s via %s (%s): %d chars in, %d chars out, %.2fs",
        request.task_type,
        client.provider,
        options.model,
        len(request.source_code),
        len(result),
        time.perf_counter() - t0,
    )
    return result
