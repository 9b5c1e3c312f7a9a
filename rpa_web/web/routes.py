## routes.py
from __future__ import annotations

from types import SimpleNamespace

import markdown
from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for
from markupsafe import Markup, escape

from rpa_web.domain.models import AnalysisKind, AnalysisStatus, PaperUpload
from rpa_web.services.orchestrator import UploadOrchestrator

BUSY_MESSAGE = "An analysis is already running. Wait for it to finish before uploading another paper."

# kind -> (card title, idle description)
PANELS = {
    AnalysisKind.INSIGHTS: (
        "Key Insights",
        "Top points and key findings from the research paper",
    ),
    AnalysisKind.ACHIEVEMENTS: (
        "Unique Achievements",
        "Novel methods, groundbreaking results, and significant innovations",
    ),
    AnalysisKind.RESEARCH_IDEAS: (
        "Research Opportunities",
        "Future research directions and identified gaps",
    ),
}


def render_markdown(text: str) -> Markup:
    """Panel content -> HTML. Model output is escaped first so raw HTML in it stays inert."""
    return Markup(markdown.markdown(str(escape(text)), extensions=["sane_lists"]))


def create_blueprint(orchestrator: UploadOrchestrator) -> Blueprint:
    bp = Blueprint("web", __name__)

    def render_page(code: int = 200, notice: str | None = None):
        board = orchestrator.board
        paper = orchestrator.session.paper

        panels = []
        for kind, (title, description) in PANELS.items():
            result = board.get(kind)
            panels.append(SimpleNamespace(
                kind=kind.value,
                title=title,
                description=description,
                result=result,
                html=render_markdown(result.content) if result.status is AnalysisStatus.COMPLETE else None,
            ))

        return render_template(
            "index.html",
            panels=panels,
            banner=board.banner,
            notice=notice,
            filename=paper.filename if paper else None,
            busy=orchestrator.busy,
        ), code

    @bp.get("/")
    def index():
        return render_page()

    @bp.post("/analyze")
    async def analyze():
        upload = request.files.get("paper")
        if upload is None or not upload.filename:
            return redirect(url_for("web.index"))

        if orchestrator.busy:
            current_app.logger.warning("Refused upload %r: analysis already running", upload.filename)
            return render_page(409, notice=BUSY_MESSAGE)

        paper = PaperUpload(
            filename=upload.filename,
            content_type=upload.mimetype,
            data=upload.read(),
        )

        if not orchestrator.select_file(paper):
            current_app.logger.info("Rejected upload %r (%s)", paper.filename, paper.content_type)
            return render_page(400)

        current_app.logger.info("Analyzing %r (%d bytes)", paper.filename, len(paper.data))
        await orchestrator.analyze()

        statuses = {k.value: r.status.value for k, r in orchestrator.board.results().items()}
        current_app.logger.info("Analysis of %r finished: %s", paper.filename, statuses)
        return render_page()

    @bp.get("/api/results")
    def results():
        return jsonify(orchestrator.board.snapshot())

    return bp
