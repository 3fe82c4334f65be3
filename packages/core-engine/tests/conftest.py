"""Shared pytest fixtures for riskprofile tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from riskprofile_shared.types.models import Answer

from riskprofile.analysis.service import AssessmentService
from riskprofile.config import RiskProfileConfig
from riskprofile.storage.store import AssessmentStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config lookups and the default database inside tmp_path."""
    monkeypatch.delenv("RISKPROFILE_CONFIG", raising=False)
    monkeypatch.setenv("RISKPROFILE_DB", str(tmp_path / "default.db"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def now() -> datetime:
    """A fixed reference time."""
    return datetime(2024, 8, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path: Path) -> AssessmentStore:
    """Create a temporary assessment store."""
    return AssessmentStore(db_path=tmp_path / "assessments.db")


@pytest.fixture
def service(store: AssessmentStore) -> AssessmentService:
    """Assessment service backed by the temporary store."""
    return AssessmentService(store=store, config=RiskProfileConfig())


@pytest.fixture
def aggressive_answers() -> list[Answer]:
    """Top-scoring answers for five of the questions."""
    return [
        Answer(question_id="age", answer="18-30"),
        Answer(question_id="investment_horizon", answer="10-20_years"),
        Answer(question_id="risk_tolerance", answer="aggressive"),
        Answer(question_id="financial_goals", answer="maximum_growth"),
        Answer(question_id="emergency_fund", answer="12+_months"),
    ]


@pytest.fixture
def lowest_answers() -> list[Answer]:
    """The lowest-scoring option for every question in the catalog."""
    return [
        Answer(question_id="age", answer="60+"),
        Answer(question_id="investment_horizon", answer="1-3_years"),
        Answer(question_id="risk_tolerance", answer="conservative"),
        Answer(question_id="financial_goals", answer="preserve_capital"),
        Answer(question_id="emergency_fund", answer="less_than_3_months"),
        Answer(question_id="income_stability", answer="unstable"),
        Answer(question_id="investment_experience", answer="none"),
        Answer(question_id="loss_reaction", answer="panic_sell"),
        Answer(question_id="debt_level", answer="high_debt"),
        Answer(question_id="financial_knowledge", answer="none"),
    ]
