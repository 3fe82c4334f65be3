"""Tests for JSON payloads and the HTML report."""

import json
from datetime import timedelta

from riskprofile.reporting import json_report
from riskprofile.reporting.html_report import HTMLReportGenerator
from riskprofile.scoring.catalog import QUESTION_CATALOG


class TestJsonPayloads:
    """Test suite for the JSON payload builders."""

    def test_questions_payload(self):
        payload = json_report.questions_payload(QUESTION_CATALOG)
        assert payload["success"] is True
        assert payload["data"]["totalQuestions"] == 10
        first = payload["data"]["questions"][0]
        assert first["id"] == "age"
        assert first["question"] == "What is your age?"
        assert first["type"] == "single_choice"
        assert first["options"][0] == {"value": "18-30", "label": "18-30 years", "score": 3.0}

    def test_submit_payload(self, service, aggressive_answers, now):
        result = service.submit("alice", aggressive_answers, now=now)
        payload = json_report.submit_payload(result)

        assert payload["message"] == "Risk assessment completed successfully"
        data = payload["data"]
        assert data["assessment"]["riskProfile"] == "AGGRESSIVE"
        assert data["assessment"]["completedAt"] == now.isoformat()
        assert data["profile"]["name"] == "Aggressive"
        assert "scoreRange" not in data["profile"]
        assert data["profile"]["recommendedAllocation"]["cash"] == "0-5%"

    def test_history_payload(self, service, aggressive_answers, lowest_answers, now):
        service.submit("alice", lowest_answers, life_event="birth", now=now - timedelta(days=5))
        service.submit("alice", aggressive_answers, now=now)

        items = json_report.history_payload(service.history("alice"))["data"]["assessments"]
        assert [i["riskProfile"] for i in items] == ["AGGRESSIVE", "CONSERVATIVE"]
        assert items[1]["lifeEvent"] == "birth"
        assert items[1]["profile"]["scoreRange"] == {"min": 0.0, "max": 1.8}

    def test_history_payload_trend(self, service, aggressive_answers, lowest_answers, now):
        """Each history item carries its trend against the previous assessment."""
        service.submit("alice", lowest_answers, now=now - timedelta(days=5))
        service.submit("alice", aggressive_answers, now=now)

        items = json_report.history_payload(service.history("alice"))["data"]["assessments"]
        assert [i["trend"] for i in items] == ["decreased", "current"]

    def test_current_payload(self, service, aggressive_answers, now):
        service.submit("alice", aggressive_answers, now=now)
        data = json_report.current_payload(service.current("alice"))["data"]
        assert data["riskProfile"] == "AGGRESSIVE"
        assert data["lastAssessment"] == now.isoformat()

    def test_reassessment_payload(self, service, now):
        data = json_report.reassessment_payload(service.reassessment_check("ghost", now=now))["data"]
        assert data == {
            "shouldReassess": True,
            "reason": "No previous assessment found",
            "reasonCode": "no_previous_assessment",
            "lastAssessment": None,
            "currentProfile": None,
        }

    def test_dumps_is_valid_json(self):
        text = json_report.dumps(json_report.questions_payload(QUESTION_CATALOG))
        assert json.loads(text)["data"]["totalQuestions"] == 10


class TestHTMLReport:
    """Test suite for the HTML report generator."""

    def test_generate(self, service, aggressive_answers, now):
        result = service.submit("alice", aggressive_answers, notes="<b>hi</b>", now=now)
        html = HTMLReportGenerator().generate(result)

        assert html.startswith("<!DOCTYPE html>")
        assert "Aggressive" in html
        assert "3.00" in html
        assert "What is your age?" in html
        assert "18-30 years" in html
        # Notes are escaped
        assert "&lt;b&gt;hi&lt;/b&gt;" in html

    def test_generate_with_history(self, service, aggressive_answers, lowest_answers, now):
        service.submit("alice", lowest_answers, life_event="inheritance", now=now - timedelta(days=3))
        result = service.submit("alice", aggressive_answers, now=now)
        html = HTMLReportGenerator().generate(result, service.history("alice"))

        assert "History (2)" in html
        assert "inheritance" in html
        assert "<th>Trend</th>" in html
        assert "decreased" in html

    def test_generate_to_file(self, service, aggressive_answers, now, tmp_path):
        result = service.submit("alice", aggressive_answers, now=now)
        out = tmp_path / "reports" / "alice.html"
        path = HTMLReportGenerator().generate_to_file(result, str(out))
        assert out.exists()
        assert path == str(out.resolve())
