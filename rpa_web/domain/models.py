######## models.py
########

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PDF_MEDIA_TYPE = "application/pdf"


class AnalysisKind(Enum):
    # declaration order is the panel order and the fan-out order
    INSIGHTS = "INSIGHTS"
    ACHIEVEMENTS = "ACHIEVEMENTS"
    RESEARCH_IDEAS = "RESEARCH_IDEAS"


class AnalysisStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class AnalysisResult:
    kind: AnalysisKind
    content: str = ""
    status: AnalysisStatus = AnalysisStatus.IDLE
    error: Optional[str] = None         # only when status == ERROR

    @classmethod
    def idle(cls, kind: AnalysisKind) -> "AnalysisResult":
        return cls(kind=kind)

    @classmethod
    def loading(cls, kind: AnalysisKind) -> "AnalysisResult":
        return cls(kind=kind, status=AnalysisStatus.LOADING)

    @classmethod
    def complete(cls, kind: AnalysisKind, content: str) -> "AnalysisResult":
        if not content:
            raise ValueError("Completed result needs content.")
        return cls(kind=kind, content=content, status=AnalysisStatus.COMPLETE)

    @classmethod
    def failed(cls, kind: AnalysisKind, message: str) -> "AnalysisResult":
        return cls(kind=kind, status=AnalysisStatus.ERROR, error=message)

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "content": self.content,
            "status": self.status.value,
            "error": self.error,
        }


@dataclass(frozen=True)
class StatusUpdate:
    """Event a job emits; the results board is its only consumer."""
    result: AnalysisResult

    @property
    def kind(self) -> AnalysisKind:
        return self.result.kind


@dataclass(frozen=True)
class PaperUpload:
    filename: str
    content_type: str
    data: bytes

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_MEDIA_TYPE


@dataclass
class UploadSession:
    paper: Optional[PaperUpload] = None
    file_id: Optional[str] = None       # remote handle, shared read-only by the jobs
