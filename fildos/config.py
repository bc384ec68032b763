"""FilDOS configuration."""

from pydantic import AliasChoices, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from .folders import DEFAULT_PROVENANCE_TAG
from .types import Address


class FilDOSConfig(BaseSettings):
    """
    FilDOS configuration.

    Uses Pydantic BaseSettings for automatic environment variable loading.
    Environment variables are prefixed with FILDOS_.

    Required environment variables:
        FILDOS_ADDRESS: Operating address that owns minted folders and
            signs uploads (e.g., "0x1234...abcd")

    Optional environment variables:
        FILDOS_AI_SERVICE_URL: Semantic search service (default: http://localhost:5000)
        FILDOS_SEARCH_TIMEOUT: Search request timeout in seconds (default: 30)
        FILDOS_PROVENANCE_TAG: Tag added to every attached file (default: uploaded-via-mcp)
        FILDOS_INITIAL_BALANCE_WEI: Balance of the operating address in the
            in-memory ledger (default: 0)
        FILDOS_LOG_LEVEL: Logging level (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_prefix="FILDOS_",
        env_file=".env",
        extra="ignore",
    )

    # Operating address - required
    address: Address

    # Semantic search service base URL
    ai_service_url: HttpUrl = Field(
        default=HttpUrl("http://localhost:5000"),
        validation_alias=AliasChoices("ai_service_url", "FILDOS_AI_SERVICE_URL", "AI_SERVICE_URL"),
    )

    # Search request timeout (seconds)
    search_timeout: float = Field(default=30.0, gt=0)

    # Provenance tag appended to every attached file
    provenance_tag: str = Field(default=DEFAULT_PROVENANCE_TAG, min_length=1)

    # Native balance seeded into the in-memory ledger
    initial_balance_wei: int = Field(default=0, ge=0)

    log_level: str = "INFO"
