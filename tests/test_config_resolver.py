"""Tests for effective configuration resolution"""
import pytest

from conftest import make_feed, make_settings
from helpdesk_bridge.services.config_resolver import coerce_mailbox_id, resolve_config
from helpdesk_bridge.services.errors import ConfigurationError


class TestMailboxResolution:

    def test_default_used_without_override(self):
        config = resolve_config(make_settings(default_mailbox_id="99"), make_feed(mailbox_id=""))
        assert config.mailbox_id == 99

    def test_default_used_when_override_missing(self):
        config = resolve_config(make_settings(default_mailbox_id="99"), make_feed(mailbox_id=None))
        assert config.mailbox_id == 99

    def test_override_wins_over_default(self):
        config = resolve_config(make_settings(default_mailbox_id="99"), make_feed(mailbox_id="42"))
        assert config.mailbox_id == 42

    def test_falls_back_to_one(self):
        config = resolve_config(make_settings(default_mailbox_id=""), make_feed(mailbox_id=""))
        assert config.mailbox_id == 1

    @pytest.mark.parametrize("override,default,expected", [
        ("0", "99", 99),
        ("", "0", 1),
        ("0", "0", 1),
    ])
    def test_zero_mailbox_counts_as_unset(self, override, default, expected):
        config = resolve_config(make_settings(default_mailbox_id=default), make_feed(mailbox_id=override))
        assert config.mailbox_id == expected

    def test_non_numeric_override_ignored(self):
        config = resolve_config(make_settings(default_mailbox_id="7"), make_feed(mailbox_id="support"))
        assert config.mailbox_id == 7

    @pytest.mark.parametrize("value,expected", [
        ("42", 42), (" 7 ", 7), ("12abc", 12), ("abc", None), ("", None), (None, None),
    ])
    def test_coerce_mailbox_id(self, value, expected):
        assert coerce_mailbox_id(value) == expected


class TestCredentials:

    def test_trailing_slash_stripped(self):
        config = resolve_config(make_settings(base_url="https://support.example.com/"), make_feed())
        assert config.base_url == "https://support.example.com"

    @pytest.mark.parametrize("overrides", [
        {"base_url": ""},
        {"base_url": "   "},
        {"api_key": ""},
        {"base_url": "", "api_key": ""},
    ])
    def test_missing_url_or_key(self, overrides):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(make_settings(**overrides), make_feed())
        assert exc_info.value.kind == "api_not_configured"
        assert "not configured" in exc_info.value.message

    def test_libredesk_requires_secret(self):
        with pytest.raises(ConfigurationError):
            resolve_config(make_settings(vendor="libredesk", api_secret=""), make_feed())

    def test_libredesk_with_secret(self):
        config = resolve_config(make_settings(vendor="libredesk", api_secret="s3cret"), make_feed())
        assert config.vendor == "libredesk"
        assert config.api_secret == "s3cret"

    def test_unknown_vendor_is_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(make_settings(vendor="zendesk"), make_feed())
        assert exc_info.value.kind == "api_not_configured"
        assert "zendesk" in exc_info.value.message
