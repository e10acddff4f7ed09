import logging
import pytest

from optres import config
from optres.config import Settings, configure, get_settings, reset_settings

pytestmark = [pytest.mark.unit]


@pytest.fixture
def restore_settings(monkeypatch):
    monkeypatch.setattr("optres.config._settings", Settings())


class TestSettingsFromEnv:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s == Settings(chain_traceback=True, trace_indent="\t", log_captured=True)

    def test_reads_flags(self):
        """GIVEN OPTRES_* 환경 변수
           WHEN Settings.from_env로 읽으면
           THEN 각 값이 반영된다
        """
        s = Settings.from_env(
            {"OPTRES_CHAIN_TRACEBACK": "off", "OPTRES_TRACE_INDENT": "  ", "OPTRES_LOG_CAPTURED": "No"}
        )
        assert s.chain_traceback is False
        assert s.trace_indent == "  "
        assert s.log_captured is False

    def test_rejects_unknown_flag(self):
        with pytest.raises(ValueError, match="OPTRES_LOG_CAPTURED"):
            Settings.from_env({"OPTRES_LOG_CAPTURED": "maybe"})

    def test_invalid_environment_at_load_falls_back_to_defaults(self, monkeypatch, caplog):
        """GIVEN 해석할 수 없는 OPTRES_CHAIN_TRACEBACK 값
           WHEN 모듈 로드 경로(_load_settings)로 설정을 읽으면
           THEN 예외 없이 기본값을 쓰고 경고를 남긴다
        """
        monkeypatch.setenv("OPTRES_CHAIN_TRACEBACK", "sometimes")
        caplog.set_level(logging.WARNING, logger="optres.config")
        assert config._load_settings() == Settings()
        assert "OPTRES_CHAIN_TRACEBACK" in caplog.text


class TestConfigure:
    def test_configure_replaces_fields(self, restore_settings):
        updated = configure(chain_traceback=False)
        assert updated.chain_traceback is False
        assert get_settings() is updated
        assert updated.trace_indent == "\t"

    def test_configure_rejects_unknown_fields(self, restore_settings):
        with pytest.raises(TypeError):
            configure(colour=True)

    def test_reset_reads_environment(self, restore_settings, monkeypatch):
        monkeypatch.setenv("OPTRES_TRACE_INDENT", ">>")
        assert reset_settings().trace_indent == ">>"
