from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HnsResolverSettings(BaseSettings):
    """hnsres service configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    host: str = Field(
        "0.0.0.0",
        validation_alias=AliasChoices("HOSTNAME", "host"),
        description="The host address for the HTTP server to listen on.",
    )
    port: int = Field(
        3100,
        validation_alias=AliasChoices("PORT", "port"),
        description="The port for the HTTP server to listen on.",
    )
    hsd_network: str = Field(
        "main",
        validation_alias=AliasChoices("HSD_NETWORK", "hsd_network"),
        description="Handshake network the hsd node runs on (main, testnet, regtest, simnet).",
    )
    hsd_host: str = Field(
        "localhost",
        validation_alias=AliasChoices("HSD_HOST", "hsd_host"),
        description="Hostname of the hsd node serving JSON-RPC.",
    )
    hsd_port: int = Field(
        12037,
        validation_alias=AliasChoices("HSD_PORT", "hsd_port"),
        description="JSON-RPC port of the hsd node.",
    )
    hsd_api_key: str = Field(
        "foo",
        validation_alias=AliasChoices("HSD_API_KEY", "hsd_api_key"),
        description="API key used as the basic-auth password for the hsd node.",
        repr=False,
    )
    hsd_timeout_seconds: float = Field(
        10.0,
        validation_alias=AliasChoices("HNSRES_HSD_TIMEOUT_SECONDS", "hsd_timeout_seconds"),
        gt=0,
        description="Total timeout for a single hsd JSON-RPC call.",
    )
    cache_ttl_seconds: float = Field(
        300.0,
        validation_alias=AliasChoices("HNSRES_CACHE_TTL_SECONDS", "cache_ttl_seconds"),
        gt=0,
        description="How long fetched domain records (including empty results) are cached.",
    )
    log_level: str = Field(
        "INFO",
        validation_alias=AliasChoices("HNSRES_LOG_LEVEL", "log_level"),
        description="Minimum loguru level for the stderr sink.",
    )
    debug_scopes: str = Field(
        "",
        validation_alias=AliasChoices("HNSRES_DEBUG_SCOPES", "debug_scopes"),
        description="Comma separated modules (e.g. dns.cache,server) that log at DEBUG.",
    )
