"""
Unit Tests for the application review state machine
"""
import pytest

from core.exceptions import InvalidTransitionError, ValidationFailedError
from earngage.application_service.application_service import (
    check_status_transition,
    parse_application_status,
)
from earngage.application_service.models import ApplicationStatus as S
from earngage.campaign_service.campaign_service import parse_campaign_status
from earngage.campaign_service.models import CampaignStatus

pytestmark = pytest.mark.unit


class TestApplicationTransitions:

    @pytest.mark.parametrize("current", [S.PENDING, S.APPROVED])
    @pytest.mark.parametrize("new", list(S))
    def test_pending_and_approved_move_freely(self, current, new):
        check_status_transition(current, new)

    def test_rejected_may_reopen(self):
        check_status_transition(S.REJECTED, S.PENDING)

    @pytest.mark.parametrize("new", [S.APPROVED, S.REJECTED, S.COMPLETED])
    def test_rejected_may_not_move_elsewhere(self, new):
        with pytest.raises(InvalidTransitionError, match="rejected"):
            check_status_transition(S.REJECTED, new)

    @pytest.mark.parametrize("new", list(S))
    def test_completed_is_terminal(self, new):
        with pytest.raises(InvalidTransitionError, match="completed"):
            check_status_transition(S.COMPLETED, new)


class TestStatusParsing:

    def test_valid(self):
        assert parse_application_status("approved") == S.APPROVED
        assert parse_campaign_status("cancelled") == CampaignStatus.CANCELLED

    def test_invalid_application_status(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_application_status("archived")
        assert "Must be one of: pending, approved, rejected, completed" in str(exc_info.value)

    def test_invalid_campaign_status(self):
        with pytest.raises(ValidationFailedError):
            parse_campaign_status("paused")
