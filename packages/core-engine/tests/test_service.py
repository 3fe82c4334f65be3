"""Tests for the assessment service (submit → history → current → check)."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from riskprofile_shared.types.enums import ReassessmentReason, RiskCategory, RiskTrend

from riskprofile.analysis.service import AssessmentService, parse_answers
from riskprofile.config import RiskProfileConfig
from riskprofile.errors import AssessmentNotFoundError, InvalidSubmissionError
from riskprofile.scoring.reassessment import months_before


class TestParseAnswers:
    """Test suite for raw submission validation."""

    def test_wire_payload(self):
        answers = parse_answers([{"questionId": "age", "answer": "18-30"}])
        assert answers[0].question_id == "age"

    def test_snake_case_payload(self):
        answers = parse_answers([{"question_id": "age", "answer": "18-30"}])
        assert answers[0].answer == "18-30"

    @pytest.mark.parametrize("raw", [None, []])
    def test_empty_rejected(self, raw):
        with pytest.raises(InvalidSubmissionError):
            parse_answers(raw)

    @pytest.mark.parametrize(
        "entry",
        [
            {"questionId": 3, "answer": "18-30"},
            {"questionId": "age", "answer": 3},
            {"questionId": "age"},
            "age=18-30",
        ],
    )
    def test_malformed_entry_rejected(self, entry):
        with pytest.raises(InvalidSubmissionError):
            parse_answers([entry])

    def test_invalid_submission_is_value_error(self):
        with pytest.raises(ValueError):
            parse_answers([])


class TestSubmit:
    """Test suite for AssessmentService.submit."""

    def test_submit_aggressive(self, service, aggressive_answers, now):
        result = service.submit("alice", aggressive_answers, now=now)

        assert result.assessment.risk_profile == RiskCategory.AGGRESSIVE
        assert result.assessment.risk_score == pytest.approx(3.0)
        assert result.assessment.completed_at == now
        assert result.profile.name == "Aggressive"
        assert result.skipped == ()

    def test_submit_persists_and_updates_state(self, service, store, lowest_answers, now):
        service.submit("alice", lowest_answers, life_event="retirement", notes="n", now=now)

        state = store.get_state("alice")
        assert state.risk_tolerance == RiskCategory.CONSERVATIVE
        assert state.last_risk_assessment == now
        stored = store.history("alice")[0]
        assert stored.life_event == "retirement"
        assert stored.notes == "n"
        assert len(stored.answers) == 10

    def test_submit_raw_dicts(self, service, now):
        raw = [
            {"questionId": "risk_tolerance", "answer": "moderate"},
            {"questionId": "financial_goals", "answer": "moderate_growth"},
        ]
        result = service.submit("bob", raw, now=now)
        assert result.assessment.risk_score == pytest.approx(2.0)
        assert result.assessment.risk_profile == RiskCategory.MODERATE

    def test_unmatched_answers_reported(self, service, now):
        raw = [
            {"questionId": "risk_tolerance", "answer": "aggressive"},
            {"questionId": "shoe_size", "answer": "42"},
        ]
        result = service.submit("bob", raw, now=now)
        assert result.skipped == ("shoe_size",)
        assert result.assessment.risk_profile == RiskCategory.AGGRESSIVE

    def test_only_unmatched_answers_store_zero_score(self, service, store, now):
        """Non-empty but unmatched submissions score 0 and classify conservative."""
        result = service.submit("bob", [{"questionId": "x", "answer": "y"}], now=now)
        assert result.assessment.risk_score == 0
        assert result.assessment.risk_profile == RiskCategory.CONSERVATIVE
        assert store.count("bob") == 1

    def test_empty_submission_rejected_before_scoring(self, store):
        scorer = MagicMock()
        service = AssessmentService(store=store, config=RiskProfileConfig(), scorer=scorer)

        with pytest.raises(InvalidSubmissionError):
            service.submit("alice", [])

        scorer.score.assert_not_called()
        assert store.count() == 0

    def test_missing_user_rejected(self, service, aggressive_answers):
        with pytest.raises(InvalidSubmissionError):
            service.submit("", aggressive_answers)

    def test_non_string_notes_rejected(self, service, aggressive_answers):
        with pytest.raises(InvalidSubmissionError):
            service.submit("alice", aggressive_answers, notes=123)

    def test_blank_life_event_stored_as_none(self, service, store, aggressive_answers, now):
        service.submit("alice", aggressive_answers, life_event="", now=now)
        assert store.history("alice")[0].life_event is None


class TestQueries:
    """Test suite for history, current profile and reassessment check."""

    def test_questions(self, service):
        assert len(service.questions()) == 10

    def test_history_newest_first(self, service, aggressive_answers, lowest_answers, now):
        service.submit("alice", lowest_answers, now=now - timedelta(days=200))
        service.submit("alice", aggressive_answers, now=now)

        history = service.history("alice")
        assert [r.assessment.risk_profile for r in history] == [
            RiskCategory.AGGRESSIVE,
            RiskCategory.CONSERVATIVE,
        ]
        assert history[1].profile.name == "Conservative"

    def test_current(self, service, aggressive_answers, now):
        service.submit("alice", aggressive_answers, now=now)
        current = service.current("alice")
        assert current.risk_profile == RiskCategory.AGGRESSIVE
        assert current.last_assessment == now
        assert current.profile.recommended_allocation["stocks"] == "70-90%"

    def test_current_not_found(self, service):
        with pytest.raises(AssessmentNotFoundError):
            service.current("ghost")

    def test_check_without_assessment(self, service, now):
        decision = service.reassessment_check("ghost", now=now)
        assert decision.should_reassess is True
        assert decision.reason == ReassessmentReason.NO_PREVIOUS_ASSESSMENT
        assert decision.current_profile is None

    def test_check_recent(self, service, aggressive_answers, now):
        service.submit("alice", aggressive_answers, now=months_before(now, 2))
        decision = service.reassessment_check("alice", now=now)
        assert decision.should_reassess is False
        assert decision.current_profile == RiskCategory.AGGRESSIVE

    def test_check_stale(self, service, aggressive_answers, now):
        service.submit("alice", aggressive_answers, now=months_before(now, 13))
        decision = service.reassessment_check("alice", now=now)
        assert decision.reason == ReassessmentReason.ANNUAL_REASSESSMENT_DUE

    def test_check_uses_configured_windows(self, store, aggressive_answers, now):
        config = RiskProfileConfig({"reassessment": {"annual_months": 3, "advisory_months": 1}})
        service = AssessmentService(store=store, config=config)
        service.submit("alice", aggressive_answers, now=months_before(now, 4))
        assert service.reassessment_check("alice", now=now).reason == (
            ReassessmentReason.ANNUAL_REASSESSMENT_DUE
        )


class TestHistoryTrend:
    """Test suite for the per-entry trend on assessment history."""

    def test_single_assessment_is_current(self, service, aggressive_answers, now):
        """The only assessment has nothing to compare against."""
        service.submit("alice", aggressive_answers, now=now)
        assert [r.trend for r in service.history("alice")] == [RiskTrend.CURRENT]

    def test_all_trend_outcomes(self, service, aggressive_answers, lowest_answers, now):
        """Each entry is compared with the assessment taken before it."""
        service.submit("alice", lowest_answers, now=now - timedelta(days=30))
        service.submit("alice", aggressive_answers, now=now - timedelta(days=20))
        service.submit("alice", aggressive_answers, now=now - timedelta(days=10))
        service.submit("alice", lowest_answers, now=now)

        assert [r.trend for r in service.history("alice")] == [
            RiskTrend.INCREASED,
            RiskTrend.STABLE,
            RiskTrend.DECREASED,
            RiskTrend.CURRENT,
        ]

    def test_submit_result_has_no_trend(self, service, aggressive_answers, now):
        """Trends are only computed for history listings."""
        assert service.submit("alice", aggressive_answers, now=now).trend is None

    def test_empty_history(self, service):
        """A user with no assessments gets an empty list."""
        assert service.history("ghost") == []
