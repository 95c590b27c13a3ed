# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx

from websubclient import config
from websubclient.config import DEFAULT_USER_AGENT, AuthConfig, ClientConfig, FollowRedirects
from websubclient.errors import (
    ClientInitializationError,
    ErrorCategory,
    SubscriptionInitiationFailedError,
    categorize_error_type,
    categorize_exception,
    error_category_to_reason,
)
from websubclient.websub.models import Mode


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("WEBSUB_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("WEBSUB_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("WEBSUB_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("WEBSUB_HTTP_MAX_BODY_BYTES", "2048")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 2048


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("WEBSUB_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("WEBSUB_HTTP_MAX_BODY_BYTES", "-5")
    monkeypatch.delenv("WEBSUB_USER_AGENT", raising=False)

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_body_bytes == config.HttpSettings.max_body_bytes
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_follow_redirects_env_and_budget(monkeypatch):
    monkeypatch.setenv("WEBSUB_FOLLOW_REDIRECTS", "yes")
    monkeypatch.setenv("WEBSUB_MAX_REDIRECTS", "3")
    cfg = config.load_client_config()
    assert cfg.follow_redirects == FollowRedirects(enabled=True, max_count=3)
    assert cfg.redirect_budget == 3

    monkeypatch.setenv("WEBSUB_FOLLOW_REDIRECTS", "off")
    assert config.load_client_config().redirect_budget == 0

    monkeypatch.setenv("WEBSUB_FOLLOW_REDIRECTS", "true")
    monkeypatch.setenv("WEBSUB_MAX_REDIRECTS", "many")
    assert config.load_client_config().redirect_budget == FollowRedirects.max_count


def test_redirect_budget_disabled_or_absent():
    assert ClientConfig().redirect_budget == 0
    assert ClientConfig(follow_redirects=FollowRedirects(enabled=False, max_count=9)).redirect_budget == 0
    assert ClientConfig(follow_redirects=FollowRedirects(enabled=True, max_count=-2)).redirect_budget == 0


def test_auth_config_repr_hides_secrets():
    auth = AuthConfig(username="alice", password="hunter2", bearer_token="tok")
    text = repr(auth)
    assert "alice" in text
    assert "hunter2" not in text
    assert "tok" not in text


def test_load_client_config_keeps_auth(monkeypatch):
    monkeypatch.delenv("WEBSUB_FOLLOW_REDIRECTS", raising=False)
    auth = AuthConfig(bearer_token="tok")
    cfg = config.load_client_config(auth=auth)
    assert cfg.auth is auth
    assert cfg.redirect_budget == 0


def test_categorize_exception():
    request = httpx.Request("POST", "https://hub.example")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no such host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("boom")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_error_type():
    assert categorize_error_type("ReadTimeout") == ErrorCategory.TIMEOUT
    assert categorize_error_type("ConnectError") == ErrorCategory.CONNECTION_ERROR
    assert categorize_error_type("SomethingElse") == ErrorCategory.UNKNOWN_ERROR
    assert categorize_error_type(None) == ErrorCategory.UNKNOWN_ERROR


def test_subscription_initiation_failed_error_fields():
    err = SubscriptionInitiationFailedError(
        Mode.UNSUBSCRIBE,
        "https://hub.example",
        "hub responded with status 500: down",
        status_code=500,
        category=ErrorCategory.HUB_REJECTED,
    )
    assert str(err) == "Unsubscription initiation failed for hub https://hub.example: hub responded with status 500: down"
    assert err.to_dict() == {
        "mode": "unsubscribe",
        "hub": "https://hub.example",
        "cause": "hub responded with status 500: down",
        "status_code": 500,
        "category": "HUB_REJECTED",
    }


def test_client_initialization_error_is_value_error():
    assert issubclass(ClientInitializationError, ValueError)


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.TIMEOUT)
    assert error_category_to_reason(None) == ""
