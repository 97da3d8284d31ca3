"""Environment configuration using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulatorSettings(BaseSettings):
    """Runtime settings read from the environment or a .env file.

    Command-line flags take precedence over these values.
    """

    config_path: str | None = Field(default=None, alias="PRICE_SIM_CONFIG")
    outdir: str | None = Field(default=None, alias="PRICE_SIM_OUTDIR")
    log_level: str = Field(default="INFO", alias="PRICE_SIM_LOG_LEVEL")
    log_json: bool = Field(default=False, alias="PRICE_SIM_LOG_JSON")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
