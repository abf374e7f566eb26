"""Tests for pipeline mode transitions and the connectivity check."""

from __future__ import annotations

import pytest

from pricing_helper.domain.coercion import InputValidationError
from pricing_helper.domain.models import FeatureInput, IdentifierInput, PipelineMode
from pricing_helper.domain.session import PricingSession


def test_session_defaults():
    session = PricingSession()
    assert session.mode is PipelineMode.BY_IDENTIFIER
    assert session.base_price == ""
    assert session.recommendation is None
    assert session.booking_week is None
    assert session.start_date
    assert isinstance(session.active_input, IdentifierInput)


def test_active_input_follows_mode(workflow):
    assert workflow.modes.active_input is workflow.session.identifier_input
    workflow.select_mode("by_feature_set")
    assert isinstance(workflow.modes.active_input, FeatureInput)
    assert workflow.modes.mode is PipelineMode.BY_FEATURE_SET


def test_select_mode_sends_nothing(workflow, fake_service):
    workflow.select_mode(PipelineMode.BY_FEATURE_SET)
    workflow.select_mode(PipelineMode.BY_IDENTIFIER)
    assert fake_service.calls == []


def test_unknown_mode_is_rejected(workflow):
    with pytest.raises(InputValidationError):
        workflow.select_mode("by_guesswork")
    assert workflow.session.mode is PipelineMode.BY_IDENTIFIER


def test_health_check_success(workflow):
    health = workflow.check_health()
    assert health is not None
    assert workflow.session.health == health
    assert workflow.session.health_state.error == ""


def test_health_failure_is_isolated(workflow, fake_service):
    workflow.recommend_by_identifier(row_index=5)
    workflow.check_health()

    fake_service.fail("/health", 500, {"detail": "booking model missing"})
    assert workflow.check_health() is None

    session = workflow.session
    assert session.health is None
    assert session.health_state.error == "booking model missing"
    assert session.recommendation is not None
    assert session.recommendation_state.error == ""
    assert session.booking_state.error == ""


def test_set_api_base_redirects_client(workflow, client):
    workflow.set_api_base(" http://127.0.0.1:1/ ")
    assert workflow.session.api_base == "http://127.0.0.1:1/"
    assert client.base_url == "http://127.0.0.1:1"
