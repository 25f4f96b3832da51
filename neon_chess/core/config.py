"""Game configuration: the knobs consumed by the engine and its surrounding layers."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from neon_chess.core.shared_types import Side, Strength

DEFAULT_DATABASE_URL = "sqlite:///neon_chess.db"


class GameConfig(BaseModel):
    """
    Configuration surface of a game.

    * starting_side: the side that makes the first move
    * strength: tier of the automated opponent
    * ai_side: side played by the automated opponent (None: two human players)
    * ai_delay_seconds: cosmetic pause a host may take before showing the reply. The engine never sleeps.
    """

    starting_side: Side = Side.WHITE
    strength: Strength = Strength.MEDIUM
    ai_side: Optional[Side] = Side.BLACK
    ai_delay_seconds: float = Field(default=0.5, ge=0)
    database_url: str = DEFAULT_DATABASE_URL


def load_config(config_path: str | Path | None = None) -> GameConfig:
    """Load a JSON configuration file. No path means: all defaults."""
    if config_path is None:
        return GameConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    return GameConfig.model_validate_json(config_path.read_text())
