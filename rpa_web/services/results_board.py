from __future__ import annotations

from typing import Dict, Optional

from rpa_web.domain.models import AnalysisKind, AnalysisResult, AnalysisStatus, StatusUpdate

# allowed source states per target state
_ALLOWED_FROM = {
    AnalysisStatus.IDLE: set(),
    AnalysisStatus.LOADING: {AnalysisStatus.IDLE},
    AnalysisStatus.COMPLETE: {AnalysisStatus.LOADING},
    AnalysisStatus.ERROR: {AnalysisStatus.IDLE, AnalysisStatus.LOADING},
}


class ResultsBoard:
    """
    Single owner of the AnalysisKind -> AnalysisResult mapping.
    Always holds exactly one result per kind; only reset() moves a kind back to idle.
    """

    def __init__(self):
        self._results: Dict[AnalysisKind, AnalysisResult] = {}
        self.banner: Optional[str] = None
        self.reset()

    def reset(self) -> None:
        self._results = {kind: AnalysisResult.idle(kind) for kind in AnalysisKind}
        self.banner = None

    def get(self, kind: AnalysisKind) -> AnalysisResult:
        return self._results[kind]

    def results(self) -> Dict[AnalysisKind, AnalysisResult]:
        return dict(self._results)

    def apply(self, update: StatusUpdate) -> None:
        current = self._results[update.kind].status
        target = update.result.status
        if current not in _ALLOWED_FROM[target]:
            raise ValueError(f"{update.kind.value}: illegal transition {current.value} -> {target.value}")
        self._results[update.kind] = update.result

    def fail_all(self, message: str) -> None:
        for kind in AnalysisKind:
            self.apply(StatusUpdate(AnalysisResult.failed(kind, message)))

    @property
    def busy(self) -> bool:
        return any(r.status is AnalysisStatus.LOADING for r in self._results.values())

    def snapshot(self) -> dict:
        return {
            "banner": self.banner,
            "results": {kind.value: r.to_dict() for kind, r in self._results.items()},
        }
