"""Service settings for the CORTEX scoring engine.

Settings use the CORTEX_ENGINE_ env prefix. Scoring weights and thresholds
are fixed constants in ``core/`` and are intentionally absent here; only
output sizing and logging are configurable.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for cortex-scoring-engine.

    Environment variable prefix: CORTEX_ENGINE_
    """

    service_name: str = "cortex-scoring-engine"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Output sizing
    priority_moves_limit: int = Field(default=6, ge=1)
    guides_per_pillar: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(env_prefix="CORTEX_ENGINE_")
