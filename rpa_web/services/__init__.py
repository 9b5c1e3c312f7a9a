from .analysis_runner import AnalysisRunner
from .orchestrator import UploadOrchestrator
from .response_formatter import format_response
from .results_board import ResultsBoard

__all__ = [
    "AnalysisRunner",
    "UploadOrchestrator",
    "format_response",
    "ResultsBoard",
]
