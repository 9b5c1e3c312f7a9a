from __future__ import annotations

from rpa_web.domain.models import AnalysisKind

PDF_REQUIRED_MESSAGE = "Please upload a PDF file"


class AnalyzerError(Exception):
    """Base for failures the pipeline turns into an error status."""


class ValidationError(AnalyzerError):
    def __init__(self, message: str = PDF_REQUIRED_MESSAGE):
        super().__init__(message)


class UploadError(AnalyzerError):
    pass


class RunFailure(AnalyzerError):
    def __init__(self, kind: AnalysisKind, status: str = "failed"):
        self.kind = kind
        self.status = status
        super().__init__(f"Analysis failed for {kind.value}")


class EmptyResponse(AnalyzerError):
    def __init__(self, kind: AnalysisKind):
        self.kind = kind
        super().__init__(f"No response received for {kind.value}")


class PollTimeout(AnalyzerError, TimeoutError):
    def __init__(self, kind: AnalysisKind, attempts: int):
        self.kind = kind
        self.attempts = attempts
        super().__init__(f"Analysis timed out for {kind.value} after {attempts} status checks")
