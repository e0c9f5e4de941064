# tests/test_settings.py
"""
Settings Tests - Environment Loading and Field Validation

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxtrend.config (Settings)
- fxtrend.shared.validators (validation helpers)
"""
from datetime import date

import pytest
from pydantic import ValidationError

from fxtrend.config import PROVIDER_EARLIEST_DATE, Settings
from fxtrend.domain.models import PreviousBaseline
from fxtrend.shared.validators import (
    validate_bot_token,
    validate_chat_id,
    validate_currency_code,
    validate_url_template,
)


class TestValidators:
    def test_chat_id(self):
        assert validate_chat_id("@my_channel")
        assert validate_chat_id("-1001234567890")
        assert validate_chat_id("12345")
        assert not validate_chat_id("my channel")
        assert not validate_chat_id("")

    def test_bot_token(self):
        assert validate_bot_token("123456789:" + "A" * 35)
        assert not validate_bot_token("123:short")

    def test_currency_code(self):
        assert validate_currency_code("USD")
        assert validate_currency_code("1inch")
        assert not validate_currency_code("us-dollar")
        assert not validate_currency_code("x")

    def test_url_template(self):
        assert validate_url_template("https://h/{date}/{base}.json", "date", "base")
        assert not validate_url_template("http://h/{date}/{base}.json", "date", "base")
        assert not validate_url_template("https://h/{date}.json", "date", "base")


class TestSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)  # no .env
        s = Settings()

        assert (s.base_currency, s.target_currency) == ("usd", "zar")
        assert s.fetch_batch_size == 8
        assert s.refresh_interval_seconds == 3600
        assert s.currency_list_ttl_seconds == 86400
        assert s.history_start == PROVIDER_EARLIEST_DATE
        assert s.previous_baseline is PreviousBaseline.DAILY_SLOT
        assert s.cache_dir.name

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BASE_CURRENCY", "EUR")
        monkeypatch.setenv("TARGET_CURRENCY", "gbp")
        monkeypatch.setenv("FXTREND_CACHE_DIR", str(tmp_path))
        monkeypatch.setenv("HISTORY_START", "2024-06-01")
        monkeypatch.setenv("PREVIOUS_BASELINE", "prior_available")

        s = Settings()

        assert (s.base_currency, s.target_currency) == ("eur", "gbp")
        assert s.cache_dir == tmp_path
        assert s.history_start == date(2024, 6, 1)
        assert s.previous_baseline is PreviousBaseline.PRIOR_AVAILABLE

    @pytest.mark.parametrize("field,value", [
        ("BASE_CURRENCY", "not a code"),
        ("CHAT_ID", "chat me"),
        ("BOT_TOKEN", "nope"),
        ("FETCH_BATCH_SIZE", "0"),
        ("PRIMARY_URL_TEMPLATE", "https://example.test/{date}.json"),
        ("CURRENCY_LIST_URL", "ftp://example.test/list.json"),
    ])
    def test_invalid_values_rejected(self, monkeypatch, field, value):
        monkeypatch.setenv(field, value)
        with pytest.raises(ValidationError):
            Settings()
