"""
Centralized configuration for the Master Label service.

Pydantic v2 settings management: values come from ``MASTERLABEL_*``
environment variables (or a local ``.env``), are validated at startup and
are immutable for the lifetime of the process.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Every setting has a default, so the service starts with an empty
    environment.
    """

    # ---------------------------------------------------------------------
    # Digital Product Passport links
    # ---------------------------------------------------------------------

    public_base_url: Annotated[
        str,
        Field(
            default="",
            description=(
                "Origin of the public DPP pages, used to build QR code URLs. "
                "Empty yields host-relative URLs."
            ),
        ),
    ]

    dpp_resolver_format: Annotated[
        Literal["default", "gs1"],
        Field(
            default="default",
            description="'gs1' emits GS1 Digital Link paths (/01/<gtin>/21/<serial>)",
        ),
    ]

    # ---------------------------------------------------------------------
    # Rendering
    # ---------------------------------------------------------------------

    default_locale: Annotated[
        Literal["en", "de"],
        Field(default="en", description="Locale for package counter text"),
    ]

    max_label_count: Annotated[
        int,
        Field(
            default=999,
            ge=1,
            le=999,
            description="Upper bound for one multi-label series request",
        ),
    ]

    # ---------------------------------------------------------------------
    # Operational
    # ---------------------------------------------------------------------

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Field(default="INFO"),
    ]

    model_config = SettingsConfigDict(
        env_prefix="MASTERLABEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


# -------------------------------------------------------------------------
# Settings Dependency Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Dependency injection provider for application settings.

    Uses an explicit singleton pattern within the FastAPI lifecycle.
    """
    return Settings()
