# =============================================================================
# Sentry Error Tracking Integration
# =============================================================================
#
# Setup:
#   Set ITEMKEEPER_SENTRY_DSN=https://...@sentry.io/...
#
# Usage:
#   init_sentry() runs at app startup (itemkeeper/api/app.py). Server-side
#   pipeline failures are reported with capture_pipeline_failure().
#
# =============================================================================

from __future__ import annotations

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from itemkeeper.config import Settings, get_settings
from itemkeeper.pipeline.exceptions import ServicePipelineException, ValidationException

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings | None = None) -> bool:
    """
    Initialize Sentry error tracking.

    Returns True if initialized, False if skipped (no DSN).
    """
    settings = settings or get_settings()

    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        # Don't send PII by default
        send_default_pii=False,
        before_send=_filter_events,
        before_send_transaction=_filter_transactions,
    )

    logger.info(f"Sentry initialized for {settings.environment}")
    return True


def _filter_events(event: dict, hint: dict) -> dict | None:
    """Drop client-correctable failures and scrub credentials."""
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]
        if isinstance(exc_value, ValidationException):
            return None

    if "request" in event and "headers" in event["request"]:
        headers = event["request"]["headers"]
        for key in list(headers.keys()):
            if key.lower() in ("authorization", "cookie", "x-api-key"):
                headers[key] = "[Filtered]"

    return event


def _filter_transactions(event: dict, hint: dict) -> dict | None:
    if event.get("transaction", "") in ("/health", "/healthz"):
        return None
    return event


def capture_pipeline_failure(error: ServicePipelineException) -> str | None:
    """
    Report a server-side pipeline failure with its tracing context.

    Returns the event ID if captured, None otherwise.
    """
    if not sentry_sdk.get_client().is_active():
        logger.error(f"Pipeline failure (Sentry disabled): {error}", exc_info=error)
        return None

    with sentry_sdk.new_scope() as scope:
        scope.set_context("pipeline", error.context)
        scope.set_tag("operation", str(error.get_context("operation")))
        scope.set_tag("failure", type(error).__name__)
        return sentry_sdk.capture_exception(error)
