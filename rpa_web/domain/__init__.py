from .models import (
    AnalysisKind,
    AnalysisResult,
    AnalysisStatus,
    PaperUpload,
    StatusUpdate,
    UploadSession,
)

__all__ = [
    "AnalysisKind",
    "AnalysisResult",
    "AnalysisStatus",
    "PaperUpload",
    "StatusUpdate",
    "UploadSession",
]
