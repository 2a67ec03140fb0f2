# Standard library imports
import os

# Local application imports
from civictrack.settings.common import CommonSettings
from civictrack.settings.dev import DevSettings
from civictrack.settings.production import ProductionSettings


def get_settings() -> CommonSettings:
    """
    Return an instance of the appropriate settings class
    based on the ENVIRONMENT environment variable.
    """
    env = os.environ.get("ENVIRONMENT", "dev").lower()
    if env == "production":
        return ProductionSettings()  # type: ignore[call-arg]
    if env == "dev":
        return DevSettings()
    return CommonSettings()


settings = get_settings()
