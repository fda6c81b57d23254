"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from parade.config import Settings


class TestSettings:
    """Test configuration validation."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        monkeypatch.delenv("PARADE_PORT", raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 5000
        assert settings.port_retry_limit == 100
        assert settings.total_players == 2
        assert not settings.blackjack_mode

    def test_environment(self, monkeypatch):
        """Values come from PARADE_ variables."""
        monkeypatch.setenv("PARADE_AI_PLAYER_COUNT", "3")
        monkeypatch.setenv("PARADE_BLACKJACK_MODE", "true")
        settings = Settings(_env_file=None)
        assert settings.ai_player_count == 3
        assert settings.blackjack_mode

    @pytest.mark.parametrize(("humans", "ai"), [(1, 0), (0, 1), (4, 3), (7, 0)])
    def test_table_size(self, humans, ai):
        """Totals outside 2-6 are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, human_player_count=humans, ai_player_count=ai)

    def test_blank_username(self):
        """Test usernames are stripped and must not be blank."""
        assert Settings(_env_file=None, username="  Ann ").username == "Ann"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, username="   ")
