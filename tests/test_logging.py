"""Tests for loguru-based logging setup."""

from loguru import logger

from forvo_pronounce.config import ForvoSettings


class TestSetupLogging:
    def setup_method(self):
        logger.remove()

    def test_setup_creates_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FORVO_LOG_DIR", raising=False)
        log_dir = tmp_path / "logs"
        settings = ForvoSettings(_env_file=None, log_dir=log_dir)
        settings.setup_logging()
        assert log_dir.exists()

    def test_setup_adds_file_sink(self, tmp_path):
        log_dir = tmp_path / "logs"
        settings = ForvoSettings(_env_file=None, log_dir=log_dir)
        settings.setup_logging()
        logger.bind(stage="test").info("hello from test")
        log_file = log_dir / "forvo-pronounce.log"
        assert log_file.exists()
        assert "hello from test" in log_file.read_text()

    def test_stage_context_in_output(self, tmp_path):
        log_dir = tmp_path / "logs"
        settings = ForvoSettings(_env_file=None, log_dir=log_dir)
        settings.setup_logging()
        logger.bind(stage="download").info("downloading")
        content = (log_dir / "forvo-pronounce.log").read_text()
        assert "download" in content

    def test_debug_reaches_file_at_info_level(self, tmp_path):
        log_dir = tmp_path / "logs"
        settings = ForvoSettings(_env_file=None, log_dir=log_dir, log_level="INFO")
        settings.setup_logging()
        logger.debug("debug detail")
        content = (log_dir / "forvo-pronounce.log").read_text()
        assert "debug detail" in content

    def test_default_stage_empty(self, tmp_path):
        log_dir = tmp_path / "logs"
        settings = ForvoSettings(_env_file=None, log_dir=log_dir)
        settings.setup_logging()
        logger.info("no stage bound")
        content = (log_dir / "forvo-pronounce.log").read_text()
        assert "no stage bound" in content

    def test_verbose_lowers_stderr_level(self, tmp_path, capsys):
        settings = ForvoSettings(_env_file=None, log_dir=tmp_path / "logs", verbose=True)
        settings.setup_logging()
        logger.debug("verbose detail")
        assert "verbose detail" in capsys.readouterr().err

    def test_debug_hidden_on_stderr_without_verbose(self, tmp_path, capsys):
        settings = ForvoSettings(_env_file=None, log_dir=tmp_path / "logs")
        settings.setup_logging()
        logger.debug("quiet detail")
        assert "quiet detail" not in capsys.readouterr().err
