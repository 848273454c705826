"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class RulesConfig(BaseModel):
    """Game rules configuration."""

    hand_size: int = Field(default=7, ge=1)
    winning_score: int = Field(default=5, ge=1)
    max_custom_per_player: int = Field(default=20, ge=0)

    # Random draws give up after this many collisions
    draw_attempts: int = Field(default=100, ge=1)

    min_players: int = Field(default=3, ge=2)
    max_players: int = Field(default=8, ge=2)


class DeckConfig(BaseModel):
    """Deck asset configuration."""

    asset_path: str = "cah-all-compact.json"
    select_all_by_default: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class EventLogConfig(BaseModel):
    """Configuration for the JSONL event log."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    deck: DeckConfig = DeckConfig()
    logging: LoggingConfig = LoggingConfig()
    event_log: EventLogConfig = EventLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
