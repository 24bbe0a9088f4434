"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (Firestore client, shared HTTP
client, Firebase Auth / FCM / LLM clients, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.llm import LLMSuggestionClient
from app.infrastructure.firebase import close_firebase, init_firebase
from app.infrastructure.firebase.auth import FirebaseAuthClient
from app.infrastructure.firebase.client import get_project_id, get_service_account
from app.infrastructure.firebase.messaging import FCMClient, get_messaging_credentials
from app.infrastructure.security.jwt import FirebaseTokenVerifier

logger = logging.getLogger(__name__)


def _wire_services(app: FastAPI, http_client: httpx.AsyncClient) -> None:
    """Put the outbound service clients on app.state (None when not configured)."""
    settings = get_settings()
    project_id = get_project_id()

    app.state.token_verifier = (
        FirebaseTokenVerifier(project_id, http_client) if project_id else None
    )

    api_key = settings.firebase_web_api_key
    app.state.auth_provider = (
        FirebaseAuthClient(api_key.get_secret_value(), http_client)
        if api_key and api_key.get_secret_value()
        else None
    )

    service_account = get_service_account()
    app.state.push_sender = None
    if service_account and project_id:
        app.state.push_sender = FCMClient(
            project_id,
            get_messaging_credentials(service_account),
            http_client,
            base_url=settings.public_base_url,
        )

    app.state.suggestion_service = None
    if settings.llm_configured:
        app.state.suggestion_service = LLMSuggestionClient(
            http_client,
            api_url=settings.llm_api_url,
            api_key=settings.llm_api_key.get_secret_value(),
            model=settings.llm_model,
            timeout=settings.llm_timeout_seconds,
            app_name=settings.app_name,
            site_url=settings.public_base_url,
        )
    logger.info(
        "Services: auth=%s push=%s suggestions=%s",
        app.state.auth_provider is not None,
        app.state.push_sender is not None,
        app.state.suggestion_service is not None,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Firestore client, shared HTTP client and service
    clients, telemetry (if enabled). Shutdown order: shared HTTP client
    close, Firestore client close, telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    if not init_firebase():
        logger.warning("Firestore not initialized; data endpoints will answer 503")

    # Shared HTTP client for Firebase Auth, FCM, token certs and the LLM (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=30.0)
    _wire_services(app, app.state.http_client)

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_httpx()
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Shared HTTP client closed")

    await close_firebase()

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
