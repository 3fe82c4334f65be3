"""SQLite-backed assessment store.

Persists completed assessments and each user's current risk state.
Assessments are append-only; the user state row is overwritten on every
new assessment, in the same transaction as the insert.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

from riskprofile_shared.constants.constants import DEFAULT_DB_PATH
from riskprofile_shared.types.enums import RiskCategory
from riskprofile_shared.types.models import Answer, Assessment, UserRiskState

logger = logging.getLogger(__name__)


class AssessmentStore:
    """SQLite store for assessments and per-user risk state."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file. Defaults to
                     ~/.riskprofile/assessments.db
        """
        self.db_path = Path(db_path) if db_path else Path(DEFAULT_DB_PATH)
        self._ensure_db()

    def _ensure_db(self) -> None:
        """Create the database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS assessments (
                    id            TEXT PRIMARY KEY,
                    user_id       TEXT NOT NULL,
                    answers       TEXT NOT NULL,
                    risk_score    REAL NOT NULL,
                    risk_profile  TEXT NOT NULL,
                    life_event    TEXT,
                    notes         TEXT,
                    completed_at  TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_assessments_user
                ON assessments (user_id, completed_at)
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS user_risk_state (
                    user_id               TEXT PRIMARY KEY,
                    risk_tolerance        TEXT,
                    last_risk_assessment  TEXT
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        """Open a connection to the SQLite database."""
        return sqlite3.connect(str(self.db_path))

    # ─── Public API ───────────────────────────────────────────────────────

    def record(self, assessment: Assessment) -> Assessment:
        """Store an assessment and make it the user's current state."""
        answers_json = json.dumps(
            [a.model_dump(by_alias=True) for a in assessment.answers],
            ensure_ascii=False,
        )
        completed_at = assessment.completed_at.isoformat()

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO assessments
                    (id, user_id, answers, risk_score, risk_profile,
                     life_event, notes, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(assessment.id),
                    assessment.user_id,
                    answers_json,
                    assessment.risk_score,
                    assessment.risk_profile.value,
                    assessment.life_event,
                    assessment.notes,
                    completed_at,
                ),
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO user_risk_state
                    (user_id, risk_tolerance, last_risk_assessment)
                VALUES (?, ?, ?)
                """,
                (assessment.user_id, assessment.risk_profile.value, completed_at),
            )

        logger.info(
            "Stored assessment %s for user %s: %s (%.2f)",
            assessment.id,
            assessment.user_id,
            assessment.risk_profile.value,
            assessment.risk_score,
        )
        return assessment

    def history(self, user_id: str) -> list[Assessment]:
        """Return a user's assessments, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, user_id, answers, risk_score, risk_profile,
                       life_event, notes, completed_at
                FROM assessments
                WHERE user_id = ?
                ORDER BY completed_at DESC, rowid DESC
                """,
                (user_id,),
            ).fetchall()

        return [self._row_to_assessment(row) for row in rows]

    def get_state(self, user_id: str) -> Optional[UserRiskState]:
        """Return the user's current risk state, or None if never assessed."""
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT user_id, risk_tolerance, last_risk_assessment
                FROM user_risk_state WHERE user_id = ?
                """,
                (user_id,),
            ).fetchone()

        if row is None:
            return None

        uid, tolerance, last = row
        return UserRiskState(
            user_id=uid,
            risk_tolerance=RiskCategory(tolerance) if tolerance else None,
            last_risk_assessment=datetime.fromisoformat(last) if last else None,
        )

    def count(self, user_id: str | None = None) -> int:
        """Count stored assessments, optionally for one user."""
        with self._connect() as conn:
            if user_id is None:
                return conn.execute("SELECT COUNT(*) FROM assessments").fetchone()[0]
            return conn.execute(
                "SELECT COUNT(*) FROM assessments WHERE user_id = ?",
                (user_id,),
            ).fetchone()[0]

    def stats(self) -> dict[str, Any]:
        """Get store statistics."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM assessments").fetchone()[0]
            users = conn.execute("SELECT COUNT(*) FROM user_risk_state").fetchone()[0]
            by_profile = dict(conn.execute(
                "SELECT risk_tolerance, COUNT(*) FROM user_risk_state GROUP BY risk_tolerance"
            ).fetchall())

        return {
            "total_assessments": total,
            "users": users,
            "current_profiles": by_profile,
            "db_path": str(self.db_path),
        }

    @staticmethod
    def _row_to_assessment(row: tuple) -> Assessment:
        aid, user_id, answers_json, score, profile, life_event, notes, completed_at = row
        return Assessment(
            id=UUID(aid),
            user_id=user_id,
            answers=tuple(Answer.model_validate(a) for a in json.loads(answers_json)),
            risk_score=score,
            risk_profile=RiskCategory(profile),
            life_event=life_event,
            notes=notes,
            completed_at=datetime.fromisoformat(completed_at),
        )
