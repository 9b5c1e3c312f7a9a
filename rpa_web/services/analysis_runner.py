from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from rpa_web.adapters.assistant_client import AssistantClient, ThreadMessage
from rpa_web.domain.errors import EmptyResponse, PollTimeout, RunFailure
from rpa_web.domain.models import AnalysisKind, AnalysisResult, StatusUpdate
from rpa_web.services.prompts import prompt_for
from rpa_web.services.response_formatter import format_response

logger = logging.getLogger(__name__)

PENDING_STATUSES = {"queued", "in_progress"}
SUCCESS_STATUS = "completed"
GENERIC_FAILURE_MESSAGE = "Analysis failed"

Emit = Callable[[StatusUpdate], None]


def _extract_answer(messages: List[ThreadMessage], kind: AnalysisKind) -> str:
    reply = next((m for m in messages if m.role == "assistant"), None)
    if reply is None:
        raise EmptyResponse(kind)

    texts = [s.text or "" for s in reply.segments if s.type == "text"]
    if not texts:
        raise EmptyResponse(kind)
    return "\n\n".join(texts)


@dataclass
class AnalysisRunner:
    """
    Service layer: runs one analysis kind against an uploaded paper.
    Thread -> message (+ file_search attachment) -> run -> poll -> answer -> format.
    Progress is reported only through the emit channel.
    """
    client: AssistantClient
    assistant_ids: Dict[AnalysisKind, str]
    poll_interval_seconds: float = 2.0
    max_poll_attempts: int = 150

    async def run_analysis(self, file_id: str, kind: AnalysisKind, emit: Emit) -> AnalysisResult:
        emit(StatusUpdate(AnalysisResult.loading(kind)))

        try:
            content = await self._analyze(file_id, kind)
            result = AnalysisResult.complete(kind, content)
        except Exception as e:
            logger.exception("%s analysis failed", kind.value)
            result = AnalysisResult.failed(kind, str(e) or GENERIC_FAILURE_MESSAGE)

        emit(StatusUpdate(result))
        return result

    async def _analyze(self, file_id: str, kind: AnalysisKind) -> str:
        thread_id = await self.client.create_thread()
        await self.client.post_message(thread_id, prompt_for(kind), file_id)

        run_id = await self.client.create_run(thread_id, self.assistant_ids[kind])
        logger.info("%s: started run %s on thread %s", kind.value, run_id, thread_id)

        await self._wait_for_run(thread_id, run_id, kind)

        messages = await self.client.list_messages(thread_id)
        raw = _extract_answer(messages, kind)
        return format_response(raw, kind)

    async def _wait_for_run(self, thread_id: str, run_id: str, kind: AnalysisKind) -> None:
        status = await self.client.get_run_status(thread_id, run_id)
        attempts = 1

        while status in PENDING_STATUSES:
            if attempts >= self.max_poll_attempts:
                raise PollTimeout(kind, attempts)
            await asyncio.sleep(self.poll_interval_seconds)
            status = await self.client.get_run_status(thread_id, run_id)
            attempts += 1
            logger.debug("%s: run %s status=%s (check %d)", kind.value, run_id, status, attempts)

        if status != SUCCESS_STATUS:
            # failed, cancelled, expired, incomplete, requires_action
            raise RunFailure(kind, status)
        logger.info("%s: run %s completed after %d status checks", kind.value, run_id, attempts)
