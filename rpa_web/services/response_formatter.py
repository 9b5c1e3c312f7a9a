from __future__ import annotations

import re

from rpa_web.domain.models import AnalysisKind

SECTION_TITLES = {
    AnalysisKind.INSIGHTS: "Key Research Insights",
    AnalysisKind.ACHIEVEMENTS: "Notable Achievements",
    AnalysisKind.RESEARCH_IDEAS: "Research Opportunities",
}

_heading_re = re.compile(r"^#.*$", flags=re.MULTILINE)
_preamble_re = re.compile(r"^(?:Introduction|Summary):?.*$", flags=re.MULTILINE)
_marker_re = re.compile(r"^(\d+\.|[-*•])")


def format_response(raw_text: str, kind: AnalysisKind) -> str:
    """
    Normalizes free-text assistant output into the panel layout:
    a "## <title>" heading, a blank line, then one marked line per point.

    Lines without a numbered ("1.") or bullet ("-", "*", "•") marker get "- ".
    Markdown headings and Introduction/Summary preamble lines are dropped.
    """
    text = (raw_text or "").strip().replace("\r\n", "\n").replace("\r", "\n")

    text = _heading_re.sub("", text).strip()
    text = _preamble_re.sub("", text).strip()

    lines: list[str] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        lines.append(line if _marker_re.match(line) else f"- {line}")

    return f"## {SECTION_TITLES[kind]}\n\n" + "\n".join(lines)
