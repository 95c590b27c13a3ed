# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

import pytest

from websubclient.errors import ErrorCategory, SubscriptionInitiationFailedError
from websubclient.http.models import HttpResponse
from websubclient.websub.classifier import UNKNOWN_CAUSE, classify_response
from websubclient.websub.models import Mode, Redirect, SubscriptionChangeRequest, SubscriptionOutcome

HUB = "https://hub.example/hub"
REQUEST = SubscriptionChangeRequest(callback="https://cb.example/cb", topic="https://pub.example/feed")
CLASSIFIER_LOGGER = "websubclient.websub.classifier"


def _warnings(caplog):
    return [r for r in caplog.records if r.name == CLASSIFIER_LOGGER and r.levelno == logging.WARNING]


def test_202_is_success_without_warning(caplog):
    caplog.set_level(logging.WARNING)
    response = HttpResponse(ok=True, status_code=202)
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 0)
    assert isinstance(outcome, SubscriptionOutcome)
    assert outcome.ok is True
    assert outcome.response.hub == HUB
    assert outcome.response.topic == REQUEST.topic
    assert outcome.response.raw_response is response
    assert _warnings(caplog) == []


@pytest.mark.parametrize("status", [200, 201, 204])
def test_other_2xx_is_success_with_warning(caplog, status):
    caplog.set_level(logging.WARNING)
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, HttpResponse(ok=True, status_code=status), 0)
    assert outcome.ok is True
    warnings = _warnings(caplog)
    assert len(warnings) == 1
    assert str(status) in warnings[0].getMessage()


def test_transport_failure_wraps_message():
    response = HttpResponse(ok=False, error_message="connection refused", error_type="ConnectError")
    outcome = classify_response(HUB, Mode.UNSUBSCRIBE, REQUEST, response, 3)
    assert outcome.ok is False
    err = outcome.error
    assert isinstance(err, SubscriptionInitiationFailedError)
    assert err.mode is Mode.UNSUBSCRIBE
    assert err.hub == HUB
    assert err.status_code is None
    assert err.category == ErrorCategory.CONNECTION_ERROR
    assert "connection refused" in str(err)
    assert str(err).startswith("Unsubscription initiation failed")


@pytest.mark.parametrize("status", [307, 308])
def test_redirect_with_budget_yields_location(status):
    response = HttpResponse(ok=False, status_code=status, headers={"location": "https://redirected.example/hub"})
    decision = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 1)
    assert decision == Redirect(location="https://redirected.example/hub")


def test_relative_redirect_is_resolved_against_hub():
    response = HttpResponse(ok=False, status_code=307, headers={"Location": "/v2/hub"})
    decision = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 1)
    assert decision == Redirect(location="https://hub.example/v2/hub")


def test_redirect_without_location_fails():
    response = HttpResponse(ok=False, status_code=308, headers={"Location": "  "})
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 2)
    assert outcome.ok is False
    assert outcome.error.status_code == 308
    assert outcome.error.category == ErrorCategory.REDIRECT_REFUSED
    assert "Location" in outcome.error.cause


def test_redirect_without_budget_fails():
    response = HttpResponse(ok=False, status_code=307, headers={"Location": "https://redirected.example/hub"})
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 0)
    assert outcome.ok is False
    assert outcome.error.category == ErrorCategory.REDIRECT_REFUSED
    assert "disabled" in outcome.error.cause


def test_non_2xx_includes_readable_body():
    response = HttpResponse(ok=False, status_code=404, text="unknown topic")
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 0)
    assert outcome.ok is False
    assert "unknown topic" in str(outcome.error)
    assert outcome.error.status_code == 404
    assert outcome.error.category == ErrorCategory.HUB_REJECTED


def test_non_2xx_without_body_reports_unknown_cause():
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, HttpResponse(ok=False, status_code=500, text="  "), 0)
    assert UNKNOWN_CAUSE in outcome.error.cause


@pytest.mark.parametrize("status", [301, 302, 303])
def test_other_redirect_statuses_are_failures(status):
    response = HttpResponse(ok=False, status_code=status, headers={"Location": "https://redirected.example/hub"})
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 5)
    assert isinstance(outcome, SubscriptionOutcome)
    assert outcome.ok is False


def test_outcome_unwrap_and_invariants():
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, HttpResponse(ok=False, status_code=400, text="bad"), 0)
    with pytest.raises(SubscriptionInitiationFailedError):
        outcome.unwrap()
    with pytest.raises(ValueError):
        SubscriptionOutcome()
    success = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, HttpResponse(ok=True, status_code=202), 0)
    assert success.unwrap() is success.response
    assert success.to_dict()["response"] == {"hub": HUB, "topic": REQUEST.topic, "status_code": 202}


def test_transport_failure_prefers_recorded_category():
    response = HttpResponse(ok=False, error_message="handshake failed", error_type="Oops", meta={"error_category": "SSL_ERROR"})
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 0)
    assert outcome.error.category == ErrorCategory.SSL_ERROR


def test_response_without_status_is_transport_failure():
    response = HttpResponse(ok=True, status_code=None, error_message="stream reset")
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 1)
    assert outcome.ok is False
    assert outcome.error.status_code is None
    assert "stream reset" in outcome.error.cause


@pytest.mark.parametrize("location", ["http://[::1/hub", "https://[not-an-ip/hub"])
def test_redirect_with_unparseable_location_fails(location):
    response = HttpResponse(ok=False, status_code=307, headers={"Location": location})
    outcome = classify_response(HUB, Mode.SUBSCRIBE, REQUEST, response, 1)
    assert isinstance(outcome, SubscriptionOutcome)
    assert outcome.ok is False
    assert outcome.error.status_code == 307
    assert outcome.error.category == ErrorCategory.REDIRECT_REFUSED
    assert location in outcome.error.cause
