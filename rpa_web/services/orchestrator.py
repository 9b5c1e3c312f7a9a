from __future__ import annotations

import asyncio
import logging
from typing import Optional

from rpa_web.adapters.assistant_client import AssistantClient
from rpa_web.domain.errors import ValidationError
from rpa_web.domain.models import (
    AnalysisKind,
    AnalysisResult,
    PaperUpload,
    StatusUpdate,
    UploadSession,
)
from rpa_web.services.analysis_runner import AnalysisRunner
from rpa_web.services.results_board import ResultsBoard

logger = logging.getLogger(__name__)

UPLOAD_FAILURE_MESSAGE = "Upload failed"


class UploadOrchestrator:
    """
    Owns the upload session and the results board.
    Uploads the paper once, fans the three analyses out over the same file handle,
    and feeds their status updates to the board through a queue.
    """

    def __init__(
        self,
        client: AssistantClient,
        runner: AnalysisRunner,
        board: Optional[ResultsBoard] = None,
        *,
        cleanup_uploaded_file: bool = True,
    ):
        self.client = client
        self.runner = runner
        self.board = board or ResultsBoard()
        self.cleanup_uploaded_file = cleanup_uploaded_file
        self.session = UploadSession()
        self.last_cleanup: Optional[str] = None   # "deleted" | "failed" | "skipped"
        self._running = False

    @property
    def busy(self) -> bool:
        """True from the start of an upload until every job has settled."""
        return self._running or self.board.busy

    def select_file(self, paper: Optional[PaperUpload]) -> bool:
        """File-selection gate. Returns True when the paper was accepted."""
        if paper is None:
            return False
        if self.busy:
            logger.warning("Ignoring selection of %r while an analysis is running", paper.filename)
            return False

        self.board.reset()
        if paper.is_pdf:
            self.session = UploadSession(paper=paper)
            return True

        self.session = UploadSession()
        message = str(ValidationError())
        logger.info("Rejected %r (content type %r)", paper.filename, paper.content_type)
        self.board.banner = message
        self.board.apply(StatusUpdate(AnalysisResult.failed(AnalysisKind.INSIGHTS, message)))
        return False

    async def analyze(self, paper: Optional[PaperUpload] = None) -> None:
        if self.busy:
            logger.warning("Analysis already running; request ignored")
            return

        if paper is not None and not self.select_file(paper):
            return

        paper = self.session.paper
        if paper is None:
            return

        self._running = True
        try:
            await self._run(paper)
        finally:
            self._running = False
            await self.client.aclose()

    async def _run(self, paper: PaperUpload) -> None:
        self.board.reset()
        self.last_cleanup = None

        try:
            file_id = await self.client.upload_file(paper)
        except Exception as e:
            logger.exception("Upload of %s failed", paper.filename)
            self.board.fail_all(str(e) or UPLOAD_FAILURE_MESSAGE)
            return

        self.session.file_id = file_id

        queue: asyncio.Queue = asyncio.Queue()
        consumer = asyncio.create_task(self._consume(queue))
        try:
            await asyncio.gather(
                *(self.runner.run_analysis(file_id, kind, queue.put_nowait) for kind in AnalysisKind)
            )
        finally:
            queue.put_nowait(None)
            try:
                await consumer
            finally:
                await self._release(file_id)
                self.session.file_id = None

    async def _consume(self, queue: asyncio.Queue) -> None:
        while True:
            update = await queue.get()
            if update is None:
                return
            self.board.apply(update)

    async def _release(self, file_id: str) -> None:
        if not self.cleanup_uploaded_file:
            self.last_cleanup = "skipped"
            return

        try:
            await self.client.delete_file(file_id)
        except Exception:
            logger.warning("Could not delete uploaded file %s", file_id, exc_info=True)
            self.last_cleanup = "failed"
            return

        logger.info("Deleted uploaded file %s", file_id)
        self.last_cleanup = "deleted"
