"""Unit tests for /neon_chess/core/config.py"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from neon_chess.core.config import DEFAULT_DATABASE_URL, GameConfig, load_config
from neon_chess.core.shared_types import Side, Strength


def test_defaults() -> None:
    config = load_config()
    assert config == GameConfig()
    assert config.starting_side == Side.WHITE
    assert config.strength == Strength.MEDIUM
    assert config.ai_side == Side.BLACK
    assert config.database_url == DEFAULT_DATABASE_URL


def test_load_from_json(tmp_path: Path) -> None:
    config_file = tmp_path / "game.json"
    config_file.write_text(
        '{"starting_side": "black", "strength": 3, "ai_side": null, "ai_delay_seconds": 0}'
    )
    config = load_config(config_file)
    assert config.starting_side == Side.BLACK
    assert config.strength == Strength.HARD
    assert config.ai_side is None
    assert config.ai_delay_seconds == 0


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "content",
    ['{"strength": 0}', '{"starting_side": "red"}', '{"ai_delay_seconds": -1}', "not json"],
)
def test_invalid_config(content: str, tmp_path: Path) -> None:
    config_file = tmp_path / "game.json"
    config_file.write_text(content)
    with pytest.raises(ValidationError):
        load_config(str(config_file))
