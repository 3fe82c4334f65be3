"""Weighted questionnaire scorer for riskprofile.

Turns a set of questionnaire answers into a risk score (the weighted mean
of the selected option scores) and a risk category:
  - score <= 1.8  → CONSERVATIVE
  - score <= 2.4  → MODERATE
  - otherwise     → AGGRESSIVE

Answers that reference an unknown question or option are skipped, never
rejected. If nothing matches, the score is 0.0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from riskprofile_shared.types.enums import RiskCategory
from riskprofile_shared.types.models import Answer, Question

from riskprofile.scoring.catalog import (
    CONSERVATIVE_MAX,
    MODERATE_MAX,
    QUESTIONS_BY_ID,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Detailed result of scoring one answer set."""

    weighted_total: float
    total_weight: float
    matched: tuple[str, ...] = field(default_factory=tuple)
    skipped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def score(self) -> float:
        """Weighted mean, or 0.0 when no answer matched."""
        if self.total_weight > 0:
            return self.weighted_total / self.total_weight
        return 0.0

    @property
    def category(self) -> RiskCategory:
        return classify(self.score)


class RiskScorer:
    """Scores answer sets against a question catalog.

    The scorer holds no mutable state; one instance can be shared freely
    between threads.
    """

    def __init__(self, catalog: Mapping[str, Question] | None = None):
        self.catalog = catalog if catalog is not None else QUESTIONS_BY_ID

    def score(self, answers: Iterable[Answer]) -> ScoreBreakdown:
        """Score an answer set and report which answers counted.

        Args:
            answers: Submitted answers, in any order.

        Returns:
            ScoreBreakdown with the weighted total, weight sum and the
            ids of matched and skipped answers.
        """
        weighted: list[float] = []
        weights: list[float] = []
        matched: list[str] = []
        skipped: list[str] = []

        for answer in answers:
            question = self.catalog.get(answer.question_id)
            if question is None:
                logger.debug("Skipping answer for unknown question %r", answer.question_id)
                skipped.append(answer.question_id)
                continue

            option = question.get_option(answer.answer)
            if option is None:
                logger.debug(
                    "Skipping unknown option %r for question %r",
                    answer.answer,
                    answer.question_id,
                )
                skipped.append(answer.question_id)
                continue

            weighted.append(option.score * question.weight)
            weights.append(question.weight)
            matched.append(question.id)

        # fsum is exactly rounded, so the result does not depend on answer order
        return ScoreBreakdown(
            weighted_total=math.fsum(weighted),
            total_weight=math.fsum(weights),
            matched=tuple(matched),
            skipped=tuple(skipped),
        )

    def compute_score(self, answers: Iterable[Answer]) -> float:
        return self.score(answers).score


_DEFAULT_SCORER = RiskScorer()


def compute_score(
    answers: Iterable[Answer],
    catalog: Mapping[str, Question] | None = None,
) -> float:
    """Compute the weighted risk score of an answer set.

    Returns 0.0 if no answer matches a known question and option.
    """
    scorer = _DEFAULT_SCORER if catalog is None else RiskScorer(catalog)
    return scorer.compute_score(answers)


def classify(score: float) -> RiskCategory:
    """Map a risk score to its category."""
    if score <= CONSERVATIVE_MAX:
        return RiskCategory.CONSERVATIVE
    elif score <= MODERATE_MAX:
        return RiskCategory.MODERATE
    return RiskCategory.AGGRESSIVE
