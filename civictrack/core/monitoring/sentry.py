# Standard library imports
import logging

# Third-party imports
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

# Local application imports
from civictrack.settings import settings


def setup_sentry() -> bool:
    """
    Initialise Sentry for production deployments.

    Warnings are recorded as breadcrumbs and errors are sent as events.
    Returns True when Sentry was initialised.
    """
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return False

    if sentry_sdk.get_client().is_active():
        return True

    sentry_logging = LoggingIntegration(
        level=logging.WARNING,
        event_level=logging.ERROR,
    )
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[sentry_logging, FastApiIntegration()],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,  # tweak for performance
    )
    return True
