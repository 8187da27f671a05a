# File: boardview/observability/sentry.py | Version: 1.1 | Title: Optional Sentry initialization
import logging
import os

from boardview.core.config import settings

log = logging.getLogger(__name__)


def init_sentry_if_configured() -> bool:
    """Initialise sentry-sdk when SENTRY_DSN is set. Returns True if enabled."""
    dsn = os.getenv("SENTRY_DSN", "").strip()
    if not dsn:
        log.info("Sentry disabled (no SENTRY_DSN).")
        return False

    try:
        import sentry_sdk

        traces = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
        sentry_sdk.init(
            dsn=dsn,
            environment=settings.ENVIRONMENT,
            release=settings.RELEASE,
            traces_sample_rate=traces,
            # card property bags may hold user content
            send_default_pii=False,
        )
        log.info("Sentry initialized (env=%s).", settings.ENVIRONMENT)
        return True
    except Exception as e:  # pragma: no cover (best-effort)
        log.warning("Sentry init failed: %s", e)
        return False
