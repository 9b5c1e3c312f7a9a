from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from rpa_web.adapters.assistant_client import AssistantClient, ContentSegment, ThreadMessage
from rpa_web.domain.models import AnalysisKind, PaperUpload

ASSISTANT_IDS = {
    AnalysisKind.INSIGHTS: "asst-insights",
    AnalysisKind.ACHIEVEMENTS: "asst-achievements",
    AnalysisKind.RESEARCH_IDEAS: "asst-research",
}


def reply(*texts: str) -> List[ThreadMessage]:
    """Thread listing (newest first) with one assistant answer above the user prompt."""
    return [
        ThreadMessage(role="assistant", segments=[ContentSegment(type="text", text=t) for t in texts]),
        ThreadMessage(role="user", segments=[ContentSegment(type="text", text="prompt")]),
    ]


# -----------------------------
# Test double
# -----------------------------
class FakeAssistantClient(AssistantClient):
    """
    Scripted assistant service. Run statuses and thread listings are keyed by assistant id;
    the last scripted status repeats once the script runs out.
    """

    def __init__(
        self,
        statuses: Optional[Dict[str, List[str]]] = None,
        replies: Optional[Dict[str, List[ThreadMessage]]] = None,
        *,
        upload_error: Optional[Exception] = None,
        delete_error: Optional[Exception] = None,
        thread_error: Optional[Exception] = None,
    ):
        self.statuses = {k: list(v) for k, v in (statuses or {}).items()}
        self.replies = replies or {}
        self.upload_error = upload_error
        self.delete_error = delete_error
        self.thread_error = thread_error

        self.uploads: List[PaperUpload] = []
        self.posted: Dict[str, tuple] = {}
        self.run_assistant: Dict[str, str] = {}
        self.status_checks: Dict[str, int] = {}
        self.deleted: List[str] = []
        self.events: List[tuple] = []
        self.closed = 0
        self._threads = 0

    async def upload_file(self, paper: PaperUpload) -> str:
        self.events.append(("upload", paper.filename))
        if self.upload_error is not None:
            raise self.upload_error
        self.uploads.append(paper)
        return "file-1"

    async def create_thread(self) -> str:
        if self.thread_error is not None:
            raise self.thread_error
        self._threads += 1
        thread_id = f"thread-{self._threads}"
        self.events.append(("thread", thread_id))
        return thread_id

    async def post_message(self, thread_id: str, text: str, file_id: str) -> str:
        self.posted[thread_id] = (text, file_id)
        return f"msg-{thread_id}"

    async def create_run(self, thread_id: str, assistant_id: str) -> str:
        self.run_assistant[thread_id] = assistant_id
        return f"run-{thread_id}"

    async def get_run_status(self, thread_id: str, run_id: str) -> str:
        assistant_id = self.run_assistant[thread_id]
        self.status_checks[assistant_id] = self.status_checks.get(assistant_id, 0) + 1
        script = self.statuses.get(assistant_id, ["completed"])
        return script.pop(0) if len(script) > 1 else script[0]

    async def list_messages(self, thread_id: str) -> List[ThreadMessage]:
        assistant_id = self.run_assistant[thread_id]
        self.events.append(("messages", thread_id))
        return self.replies.get(assistant_id, reply("Default point"))

    async def delete_file(self, file_id: str) -> None:
        self.events.append(("delete", file_id))
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(file_id)

    async def aclose(self) -> None:
        self.closed += 1


@pytest.fixture
def assistant_ids():
    return dict(ASSISTANT_IDS)


@pytest.fixture
def fake_client_cls():
    return FakeAssistantClient


@pytest.fixture
def make_reply():
    return reply


@pytest.fixture
def pdf_paper():
    return PaperUpload(filename="paper.pdf", content_type="application/pdf", data=b"%PDF-1.7 fake")


@pytest.fixture
def text_file():
    return PaperUpload(filename="notes.txt", content_type="text/plain", data=b"hello")
