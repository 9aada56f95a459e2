"""Application configuration using Pydantic settings."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LimitsSettings(BaseModel):
    max_document_bytes: int = 10_000_000


class ObservabilitySettings(BaseModel):
    otel_service_name: str = "event-model-modeler"
    otel_exporter_otlp_endpoint: str | None = None
    log_level: str = "INFO"
    log_json: bool = False


class StorageSettings(BaseModel):
    artifact_dir: str = Field(
        default="./.artifacts",
        description="Local directory for generated specifications when no bucket is configured",
    )
    s3_endpoint: str | None = None
    s3_region: str | None = None
    s3_bucket: str | None = None


class StaticSettings(BaseModel):
    public_dir: str = "public"
    host: str = "0.0.0.0"
    port: int = 4000


class ScaffoldSettings(BaseModel):
    file_extension: str = Field(default="js", description="Extension used for proposed scaffold files")


class ModelerSettings(BaseSettings):
    limits: LimitsSettings = LimitsSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    storage: StorageSettings = StorageSettings()
    static: StaticSettings = StaticSettings()
    scaffold: ScaffoldSettings = ScaffoldSettings()
    environment: Literal["dev", "qa", "prod"] | str = "dev"

    model_config = SettingsConfigDict(env_nested_delimiter="__", env_prefix="MODELER_", case_sensitive=False)


@lru_cache(maxsize=1)
def get_settings(**kwargs: Any) -> ModelerSettings:
    """Return cached settings instance."""
    return ModelerSettings(**kwargs)


__all__ = ["ModelerSettings", "get_settings"]
