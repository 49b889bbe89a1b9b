"""Tests for logging setup helpers."""

import logging

from shared.utils.logging import get_log_level, mask_sensitive, setup_stdlib_logging


class TestLogLevel:
    def test_environment_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("STOREFRONT_ENVIRONMENT", "production")
        assert get_log_level() == "INFO"

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestMaskSensitive:
    def test_card_details_keep_last_four(self):
        event = mask_sensitive(None, "info", {"event": "charge", "payment_details": "4111111111111111"})
        assert event["payment_details"] == "****1111"

    def test_tokens_fully_masked(self):
        event = mask_sensitive(None, "info", {"event": "login", "token": "eyJhbGciOi.payload.sig", "password": "pw"})
        assert event["token"] == "****"
        assert event["password"] == "****"

    def test_other_keys_untouched(self):
        event = mask_sensitive(None, "info", {"event": "x", "order_id": 42, "token": None})
        assert event == {"event": "x", "order_id": 42, "token": None}


class TestFileHandlers:
    def test_rotating_files_only_with_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        root = logging.getLogger()
        saved = root.handlers[:]
        try:
            setup_stdlib_logging(tmp_path / "logs")
            assert len(root.handlers) == 3
            assert (tmp_path / "logs").is_dir()

            setup_stdlib_logging()
            assert len(root.handlers) == 1
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved
