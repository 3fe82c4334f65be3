"""JSON payloads for riskprofile results.

Each builder returns a plain dict with camelCase keys, shaped like the
``{"success": true, "data": {...}}`` envelope the web client consumes.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Iterable, Optional

from riskprofile_shared.types.models import (
    Question,
    ReassessmentDecision,
    RiskProfileDetails,
)

from riskprofile.analysis.service import AssessmentResult, CurrentProfile


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _envelope(data: dict[str, Any], message: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": True}
    if message:
        payload["message"] = message
    payload["data"] = data
    return payload


def profile_payload(details: RiskProfileDetails) -> dict[str, Any]:
    """Category metadata as shown next to a result."""
    return {
        "name": details.name,
        "description": details.description,
        "scoreRange": {"min": details.score_range.min, "max": details.score_range.max},
        "characteristics": list(details.characteristics),
        "recommendedAllocation": dict(details.recommended_allocation),
    }


def question_payload(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "question": question.prompt,
        "type": question.type.value,
        "options": [
            {"value": o.value, "label": o.label, "score": o.score}
            for o in question.options
        ],
        "weight": question.weight,
    }


def questions_payload(questions: Iterable[Question]) -> dict[str, Any]:
    items = [question_payload(q) for q in questions]
    return _envelope({"questions": items, "totalQuestions": len(items)})


def submit_payload(result: AssessmentResult) -> dict[str, Any]:
    a = result.assessment
    profile = profile_payload(result.profile)
    profile.pop("scoreRange")
    return _envelope(
        {
            "assessment": {
                "id": str(a.id),
                "riskScore": a.risk_score,
                "riskProfile": a.risk_profile.value,
                "completedAt": _iso(a.completed_at),
            },
            "profile": profile,
        },
        message="Risk assessment completed successfully",
    )


def history_payload(results: Iterable[AssessmentResult]) -> dict[str, Any]:
    return _envelope({
        "assessments": [
            {
                "id": str(r.assessment.id),
                "riskScore": r.assessment.risk_score,
                "riskProfile": r.assessment.risk_profile.value,
                "lifeEvent": r.assessment.life_event,
                "notes": r.assessment.notes,
                "completedAt": _iso(r.assessment.completed_at),
                "trend": r.trend.value if r.trend else None,
                "profile": profile_payload(r.profile),
            }
            for r in results
        ]
    })


def current_payload(current: CurrentProfile) -> dict[str, Any]:
    return _envelope({
        "riskProfile": current.risk_profile.value,
        "lastAssessment": _iso(current.last_assessment),
        "profile": profile_payload(current.profile),
    })


def reassessment_payload(decision: ReassessmentDecision) -> dict[str, Any]:
    return _envelope({
        "shouldReassess": decision.should_reassess,
        "reason": decision.message,
        "reasonCode": decision.reason.value if decision.reason else None,
        "lastAssessment": _iso(decision.last_assessment),
        "currentProfile": decision.current_profile.value if decision.current_profile else None,
    })


def dumps(payload: dict[str, Any]) -> str:
    """Serialize a payload to indented JSON."""
    return json.dumps(payload, indent=2, ensure_ascii=False)
