import pytest

from .. import config as config_module
from ..config import Config, get_bool_config_value, get_file_first_config_value


class TestConfigResolution:
    """Test cases for file > env > default resolution."""

    def test_default_when_nothing_set(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        monkeypatch.delenv("UNO_TEST_SETTING", raising=False)
        assert get_file_first_config_value("uno_test_setting", "UNO_TEST_SETTING", "fallback") == "fallback"

    def test_env_beats_default(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        monkeypatch.setenv("UNO_TEST_SETTING", "from-env")
        assert get_file_first_config_value("uno_test_setting", "UNO_TEST_SETTING", "fallback") == "from-env"

    def test_file_beats_env(self, monkeypatch, tmp_path):
        (tmp_path / "uno_test_setting").write_text("from-file\n")
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        monkeypatch.setenv("UNO_TEST_SETTING", "from-env")
        assert get_file_first_config_value("uno_test_setting", "UNO_TEST_SETTING", "fallback") == "from-file"

    def test_empty_file_is_skipped(self, monkeypatch, tmp_path):
        (tmp_path / "uno_test_setting").write_text("   ")
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        monkeypatch.setenv("UNO_TEST_SETTING", "from-env")
        assert get_file_first_config_value("uno_test_setting", "UNO_TEST_SETTING") == "from-env"

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("False", False), ("off", False)])
    def test_bool_values(self, monkeypatch, tmp_path, raw, expected):
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        monkeypatch.setenv("UNO_TEST_FLAG", raw)
        assert get_bool_config_value("uno_test_flag", "UNO_TEST_FLAG") is expected

    def test_refresh_picks_up_enforce_flag(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module, "SECRET_FILE_DIRS", [str(tmp_path)])
        original = Config.UNO_ENFORCE_RULES
        try:
            monkeypatch.setenv("UNO_ENFORCE_RULES", "true")
            Config.refresh()
            assert Config.UNO_ENFORCE_RULES is True
        finally:
            monkeypatch.delenv("UNO_ENFORCE_RULES", raising=False)
            Config.refresh()
            Config.UNO_ENFORCE_RULES = original
