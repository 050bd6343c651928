import logging
from unittest.mock import patch

from dormkeep.logging import TEXT_FORMAT, configure_logging, reconfigure


class TestConfigureLogging:
    def test_json_format(self):
        with patch("dormkeep.logging.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_json = True
            configure_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        from pythonjsonlogger.json import JsonFormatter

        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_text_format_and_level(self):
        with patch("dormkeep.logging.settings") as mock_settings:
            mock_settings.log_level = "debug"
            mock_settings.log_json = False
            configure_logging()

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == TEXT_FORMAT

    def test_unknown_level_falls_back_to_info(self):
        with patch("dormkeep.logging.settings") as mock_settings:
            mock_settings.log_level = "chatty"
            mock_settings.log_json = False
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_reconfigure_replaces_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.NullHandler())
        reconfigure()
        assert len(root.handlers) == 1
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
