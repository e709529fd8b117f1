import os

import pytest

from core import config
from core.config import CategoryThresholds, Settings, get_settings, load_env
from core.models import Category

ENV_NAMES = ("TOPSIS_HIGH_THRESHOLD", "TOPSIS_MEDIUM_THRESHOLD",
             "TOPSIS_WEIGHT_TOLERANCE", "TOPSIS_LOG_LEVEL")


class TestCategoryThresholds:
    def test_defaults(self):
        t = CategoryThresholds()
        assert t.high == 0.7
        assert t.medium == 0.5

    @pytest.mark.parametrize("score, expected", [
        (1.0, Category.HIGH),
        (0.7, Category.HIGH),
        (0.6999999, Category.MEDIUM),
        (0.5, Category.MEDIUM),
        (0.4999999, Category.LOW),
        (0.0, Category.LOW),
    ])
    def test_inclusive_lower_bounds(self, score, expected):
        assert CategoryThresholds().categorize(score) is expected

    def test_medium_above_high_rejected(self):
        with pytest.raises(ValueError, match="must not exceed"):
            CategoryThresholds(high=0.4, medium=0.6)


class TestGetSettings:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ENV_NAMES:
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        assert get_settings() == Settings()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TOPSIS_HIGH_THRESHOLD", "0.8")
        monkeypatch.setenv("TOPSIS_MEDIUM_THRESHOLD", "0.4")
        monkeypatch.setenv("TOPSIS_WEIGHT_TOLERANCE", "0.01")
        monkeypatch.setenv("TOPSIS_LOG_LEVEL", "debug")
        s = get_settings()
        assert s.thresholds == CategoryThresholds(high=0.8, medium=0.4)
        assert s.weight_tolerance == 0.01
        assert s.log_level == "DEBUG"

    def test_malformed_env_names_variable(self, monkeypatch):
        monkeypatch.setenv("TOPSIS_HIGH_THRESHOLD", "high")
        with pytest.raises(ValueError, match="TOPSIS_HIGH_THRESHOLD"):
            get_settings()


class TestLoadEnv:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
        yield
        # load_env writes os.environ directly
        for name in ENV_NAMES:
            os.environ.pop(name, None)

    @pytest.fixture
    def env_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("# thresholds\nTOPSIS_HIGH_THRESHOLD=0.85\n\nTOPSIS_LOG_LEVEL = warning\n")
        return path

    def test_existing_variables_win(self, env_file, monkeypatch):
        monkeypatch.setenv("TOPSIS_LOG_LEVEL", "ERROR")
        load_env(env_file)
        assert os.environ["TOPSIS_HIGH_THRESHOLD"] == "0.85"
        assert os.environ["TOPSIS_LOG_LEVEL"] == "ERROR"

    def test_get_settings_reads_env_file(self, env_file, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", env_file)
        assert "TOPSIS_HIGH_THRESHOLD" not in os.environ

        settings = get_settings()
        assert settings.thresholds.high == 0.85
        assert settings.log_level == "WARNING"

    def test_missing_file_is_ignored(self, tmp_path):
        load_env(tmp_path / "absent.env")
        assert "TOPSIS_HIGH_THRESHOLD" not in os.environ
