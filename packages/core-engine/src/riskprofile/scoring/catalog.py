"""Risk questionnaire catalog and category metadata.

The question weights, option scores and category thresholds are versioned
together under CATALOG_VERSION. Changing any of them changes how existing
scores classify, so bump the version whenever one of them moves.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from riskprofile_shared.types.enums import RiskCategory
from riskprofile_shared.types.models import (
    AnswerOption,
    Question,
    RiskProfileDetails,
    ScoreRange,
)

CATALOG_VERSION = "2024.1"


def _opt(value: str, label: str, score: float) -> AnswerOption:
    return AnswerOption(value=value, label=label, score=score)


# ─── Questions ─────────────────────────────────────────────────────────────────

QUESTION_CATALOG: tuple[Question, ...] = (
    Question(
        id="age",
        prompt="What is your age?",
        options=(
            _opt("18-30", "18-30 years", 3),
            _opt("31-40", "31-40 years", 2),
            _opt("41-50", "41-50 years", 2),
            _opt("51-60", "51-60 years", 1),
            _opt("60+", "60+ years", 1),
        ),
        weight=1.2,
    ),
    Question(
        id="investment_horizon",
        prompt="How long do you plan to invest before needing the money?",
        options=(
            _opt("1-3_years", "1-3 years", 1),
            _opt("3-5_years", "3-5 years", 2),
            _opt("5-10_years", "5-10 years", 2.5),
            _opt("10-20_years", "10-20 years", 3),
            _opt("20+_years", "20+ years", 3),
        ),
        weight=1.5,
    ),
    Question(
        id="risk_tolerance",
        prompt="How would you describe your risk tolerance?",
        options=(
            _opt("conservative", "Conservative - I prefer stable, low-risk investments", 1),
            _opt("moderate", "Moderate - I can handle some ups and downs", 2),
            _opt("aggressive", "Aggressive - I can handle significant volatility for higher returns", 3),
        ),
        weight=2.0,
    ),
    Question(
        id="financial_goals",
        prompt="What is your primary financial goal?",
        options=(
            _opt("preserve_capital", "Preserve capital and maintain purchasing power", 1),
            _opt("moderate_growth", "Moderate growth with some risk", 2),
            _opt("maximum_growth", "Maximum growth potential, accepting higher risk", 3),
        ),
        weight=1.8,
    ),
    Question(
        id="emergency_fund",
        prompt="How much emergency savings do you have?",
        options=(
            _opt("less_than_3_months", "Less than 3 months of expenses", 1),
            _opt("3-6_months", "3-6 months of expenses", 2),
            _opt("6-12_months", "6-12 months of expenses", 2.5),
            _opt("12+_months", "12+ months of expenses", 3),
        ),
        weight=1.3,
    ),
    Question(
        id="income_stability",
        prompt="How stable is your current income?",
        options=(
            _opt("very_stable", "Very stable (government job, tenured position)", 3),
            _opt("stable", "Stable (established company, good job security)", 2.5),
            _opt("moderate", "Moderate (some uncertainty but generally secure)", 2),
            _opt("unstable", "Unstable (contract work, commission-based, new business)", 1),
        ),
        weight=1.4,
    ),
    Question(
        id="investment_experience",
        prompt="What is your experience with investments?",
        options=(
            _opt("none", "No experience", 1),
            _opt("beginner", "Beginner (some basic knowledge)", 1.5),
            _opt("intermediate", "Intermediate (regular investor)", 2.5),
            _opt("advanced", "Advanced (experienced investor)", 3),
        ),
        weight=1.6,
    ),
    Question(
        id="loss_reaction",
        prompt="How would you react if your investment lost 20% of its value in a short period?",
        options=(
            _opt("panic_sell", "I would panic and sell immediately", 1),
            _opt("concerned_sell", "I would be concerned and consider selling", 1.5),
            _opt("hold_wait", "I would hold and wait for recovery", 2.5),
            _opt("buy_more", "I would see it as a buying opportunity", 3),
        ),
        weight=2.2,
    ),
    Question(
        id="debt_level",
        prompt="What is your current debt situation?",
        options=(
            _opt("high_debt", "High debt (credit cards, loans >50% of income)", 1),
            _opt("moderate_debt", "Moderate debt (mortgage, some loans)", 2),
            _opt("low_debt", "Low debt (just mortgage or car payment)", 2.5),
            _opt("no_debt", "No significant debt", 3),
        ),
        weight=1.1,
    ),
    Question(
        id="financial_knowledge",
        prompt="How would you rate your knowledge of financial markets and investments?",
        options=(
            _opt("none", "No knowledge", 1),
            _opt("basic", "Basic understanding", 1.5),
            _opt("good", "Good understanding", 2.5),
            _opt("expert", "Expert level", 3),
        ),
        weight=1.7,
    ),
)

QUESTIONS_BY_ID: Mapping[str, Question] = MappingProxyType(
    {q.id: q for q in QUESTION_CATALOG}
)


# ─── Categories & Thresholds ───────────────────────────────────────────────────

# Closed upper bounds: a score equal to a threshold belongs to the lower category.
CONSERVATIVE_MAX = 1.8
MODERATE_MAX = 2.4

RISK_PROFILES: Mapping[RiskCategory, RiskProfileDetails] = MappingProxyType({
    RiskCategory.CONSERVATIVE: RiskProfileDetails(
        category=RiskCategory.CONSERVATIVE,
        name="Conservative",
        description="You prefer stable, low-risk investments with predictable returns.",
        score_range=ScoreRange(min=0.0, max=CONSERVATIVE_MAX),
        characteristics=(
            "Focus on capital preservation",
            "Prefer bonds and stable dividend stocks",
            "Low tolerance for volatility",
            "Suitable for short-term goals or retirement",
        ),
        recommended_allocation={"bonds": "60-80%", "stocks": "20-40%", "cash": "5-10%"},
    ),
    RiskCategory.MODERATE: RiskProfileDetails(
        category=RiskCategory.MODERATE,
        name="Moderate",
        description="You can handle some market volatility for balanced growth potential.",
        score_range=ScoreRange(min=CONSERVATIVE_MAX, max=MODERATE_MAX),
        characteristics=(
            "Balanced approach to growth and stability",
            "Diversified portfolio across asset classes",
            "Moderate tolerance for volatility",
            "Suitable for medium-term goals",
        ),
        recommended_allocation={"bonds": "40-60%", "stocks": "40-60%", "cash": "5-10%"},
    ),
    RiskCategory.AGGRESSIVE: RiskProfileDetails(
        category=RiskCategory.AGGRESSIVE,
        name="Aggressive",
        description="You can handle significant volatility for maximum growth potential.",
        score_range=ScoreRange(min=MODERATE_MAX, max=3.0),
        characteristics=(
            "Focus on maximum growth potential",
            "Higher allocation to stocks and alternative investments",
            "High tolerance for volatility",
            "Suitable for long-term goals",
        ),
        recommended_allocation={"bonds": "10-30%", "stocks": "70-90%", "cash": "0-5%"},
    ),
})


def get_question(question_id: str) -> Optional[Question]:
    """Find a question by id. Returns None for unknown ids."""
    return QUESTIONS_BY_ID.get(question_id)


def get_profile_details(category: RiskCategory | str) -> RiskProfileDetails:
    """Return the static metadata for a category (accepts the enum or its name)."""
    return RISK_PROFILES[RiskCategory(category)]
