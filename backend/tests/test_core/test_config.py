"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from dragons.core.config import Settings


class TestSettings:
    def test_reads_environment(self, settings):
        assert settings.SECRET_KEY == "test-secret-key-for-unit-tests"
        assert settings.DATABASE_NAME == "test_deadlines_dragons"
        assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 15

    def test_defaults(self, settings):
        assert settings.API_PREFIX == "/api"
        assert settings.ALGORITHM == "HS256"
        assert settings.TEAM_MAX_SIZE == 4
        assert settings.LOG_FILE is None

    def test_secret_key_required(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_explicit_values_win(self):
        settings = Settings(SECRET_KEY="x", MONGODB_URL="mongodb://db:27017", TEAM_MAX_SIZE=3)
        assert settings.TEAM_MAX_SIZE == 3
        assert settings.MONGODB_URL == "mongodb://db:27017"

    @pytest.mark.parametrize("size", [0, 5, 6])
    def test_team_max_size_out_of_range(self, size):
        with pytest.raises(ValidationError):
            Settings(TEAM_MAX_SIZE=size)

    def test_team_max_size_lower_bound(self):
        assert Settings(TEAM_MAX_SIZE=1).TEAM_MAX_SIZE == 1
