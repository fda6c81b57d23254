"""Application configuration using Pydantic settings."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from parade.constants import DEFAULT_PORT, MAX_PLAYERS, MIN_PLAYERS, PORT_RETRY_LIMIT


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    A single instance is built at startup and handed to the engine and
    transport constructors. Nothing reads settings from module state.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, description="First port to try")
    port_retry_limit: int = Field(
        default=PORT_RETRY_LIMIT, ge=1, description="Ports to try before giving up"
    )

    # Game Configuration
    human_player_count: int = Field(default=2, ge=0, description="Human players")
    ai_player_count: int = Field(default=0, ge=0, description="Automated players")
    username: str = Field(default="Player", description="Local player's username")
    blackjack_mode: bool = Field(default=False, description="Enable side wagers")

    # Bot Configuration
    ai_think_time: float = Field(default=0.0, ge=0.0, description="Delay before AI moves")
    seed: Optional[int] = Field(default=None, description="Shuffle seed for replays")

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "username must not be blank"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_player_count(self) -> "Settings":
        total = self.total_players
        if not MIN_PLAYERS <= total <= MAX_PLAYERS:
            msg = f"total players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {total}"
            raise ValueError(msg)
        return self

    @property
    def total_players(self) -> int:
        """Number of seats at the table."""
        return self.human_player_count + self.ai_player_count
