"""Tests for settings."""

import pytest

from todolist_service.config import DEV_SECRET, Settings


class TestSettings:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.jwt_secret == DEV_SECRET
        assert s.jwt_algorithms == ("HS256",)
        assert s.seed_sample_data is True
        assert s.strict_ownership is False
        assert s.jwt_audience is None

    def test_from_env(self):
        s = Settings.from_env({
            "TODOLIST_JWT_SECRET": "s",
            "TODOLIST_JWT_ALGORITHMS": "HS256, HS512",
            "TODOLIST_JWT_AUDIENCE": "api://todo",
            "TODOLIST_SEED_SAMPLE_DATA": "false",
            "TODOLIST_STRICT_OWNERSHIP": "yes",
            "TODOLIST_LOG_LEVEL": "debug",
        })
        assert s.jwt_secret == "s"
        assert s.jwt_algorithms == ("HS256", "HS512")
        assert s.jwt_audience == "api://todo"
        assert s.seed_sample_data is False
        assert s.strict_ownership is True
        assert s.log_level == "DEBUG"

    def test_bad_flag_rejected(self):
        with pytest.raises(ValueError):
            Settings.from_env({"TODOLIST_STRICT_OWNERSHIP": "maybe"})

    def test_decision_log_size_cast(self):
        assert Settings.from_env({"TODOLIST_DECISION_LOG_SIZE": "25"}).decision_log_size == 25

    def test_empty_algorithms_fall_back(self):
        assert Settings.from_env({"TODOLIST_JWT_ALGORITHMS": ""}).jwt_algorithms == ("HS256",)
