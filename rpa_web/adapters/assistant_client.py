from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from openai import AsyncOpenAI, OpenAIError

from rpa_web.domain.errors import UploadError
from rpa_web.domain.models import PDF_MEDIA_TYPE, PaperUpload

logger = logging.getLogger(__name__)

UPLOAD_PURPOSE = "assistants"
FILE_SEARCH_TOOL = {"type": "file_search"}


@dataclass(frozen=True)
class ContentSegment:
    type: str                   # "text" | "image_file" | ...
    text: Optional[str] = None


@dataclass(frozen=True)
class ThreadMessage:
    role: str
    segments: List[ContentSegment]


class AssistantClient:
    """Port to the hosted assistant service."""

    async def upload_file(self, paper: PaperUpload) -> str:
        raise NotImplementedError

    async def create_thread(self) -> str:
        raise NotImplementedError

    async def post_message(self, thread_id: str, text: str, file_id: str) -> str:
        raise NotImplementedError

    async def create_run(self, thread_id: str, assistant_id: str) -> str:
        raise NotImplementedError

    async def get_run_status(self, thread_id: str, run_id: str) -> str:
        raise NotImplementedError

    async def list_messages(self, thread_id: str) -> List[ThreadMessage]:
        """Messages newest first."""
        raise NotImplementedError

    async def delete_file(self, file_id: str) -> None:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release connections opened during one analysis."""
        return None


class OpenAIAssistantClient(AssistantClient):
    """
    Adapter: OpenAI Assistants API (files + beta threads/messages/runs).
    """

    def __init__(self, client_factory: Callable[[], AsyncOpenAI]):
        self._client_factory = client_factory
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._sdk: Optional[AsyncOpenAI] = None

    @classmethod
    def from_settings(cls, api_key: str = "", base_url: str = "") -> "OpenAIAssistantClient":
        # empty api_key lets the SDK fall back to OPENAI_API_KEY
        kwargs = {}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        return cls(lambda: AsyncOpenAI(**kwargs))

    @property
    def _client(self) -> AsyncOpenAI:
        # one SDK client per analysis; each Flask async request runs on its own loop
        # and aclose() must run on the loop that opened the client
        loop = asyncio.get_running_loop()
        if self._sdk is None or self._loop is not loop:
            self._sdk = self._client_factory()
            self._loop = loop
        return self._sdk

    async def aclose(self) -> None:
        sdk, self._sdk, self._loop = self._sdk, None, None
        if sdk is not None:
            await sdk.close()

    async def upload_file(self, paper: PaperUpload) -> str:
        try:
            uploaded = await self._client.files.create(
                file=(paper.filename, paper.data, PDF_MEDIA_TYPE),
                purpose=UPLOAD_PURPOSE,
            )
        except OpenAIError as e:
            raise UploadError(f"Upload failed: {e}") from e
        logger.info("Uploaded %s (%d bytes) as %s", paper.filename, len(paper.data), uploaded.id)
        return uploaded.id

    async def create_thread(self) -> str:
        thread = await self._client.beta.threads.create()
        return thread.id

    async def post_message(self, thread_id: str, text: str, file_id: str) -> str:
        message = await self._client.beta.threads.messages.create(
            thread_id,
            role="user",
            content=text,
            attachments=[{"file_id": file_id, "tools": [FILE_SEARCH_TOOL]}],
        )
        return message.id

    async def create_run(self, thread_id: str, assistant_id: str) -> str:
        run = await self._client.beta.threads.runs.create(thread_id=thread_id, assistant_id=assistant_id)
        return run.id

    async def get_run_status(self, thread_id: str, run_id: str) -> str:
        run = await self._client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
        return run.status

    async def list_messages(self, thread_id: str) -> List[ThreadMessage]:
        page = await self._client.beta.threads.messages.list(thread_id)

        out: List[ThreadMessage] = []
        for msg in page.data:
            segments = []
            for item in msg.content or []:
                text = None
                if item.type == "text" and getattr(item, "text", None) is not None:
                    text = item.text.value
                segments.append(ContentSegment(type=item.type, text=text))
            out.append(ThreadMessage(role=msg.role, segments=segments))
        return out

    async def delete_file(self, file_id: str) -> None:
        await self._client.files.delete(file_id)
