from __future__ import annotations

from typing import Optional

from flask import Flask

from rpa_web.adapters.assistant_client import AssistantClient, OpenAIAssistantClient
from rpa_web.config import AppSettings, IniConfig, setup_logging
from rpa_web.services.analysis_runner import AnalysisRunner
from rpa_web.services.orchestrator import UploadOrchestrator
from rpa_web.web.routes import create_blueprint


def create_app(
    settings: Optional[AppSettings] = None,
    client: Optional[AssistantClient] = None,
) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    setup_logging(settings.log_level)

    if client is None:
        client = OpenAIAssistantClient.from_settings(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )

    runner = AnalysisRunner(
        client=client,
        assistant_ids=settings.assistant_ids,
        poll_interval_seconds=settings.poll_interval_seconds,
        max_poll_attempts=settings.max_poll_attempts,
    )

    orchestrator = UploadOrchestrator(
        client=client,
        runner=runner,
        cleanup_uploaded_file=settings.cleanup_uploaded_file,
    )

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(orchestrator))
    app.extensions["rpa_orchestrator"] = orchestrator

    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app
