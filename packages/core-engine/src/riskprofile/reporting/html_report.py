"""HTML report generator for riskprofile.

Generates a self-contained, single-file HTML risk profile report
with inline CSS. Uses Jinja2 templating.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from jinja2 import Environment

from riskprofile.analysis.service import AssessmentResult
from riskprofile.scoring.catalog import CATALOG_VERSION, QUESTIONS_BY_ID

logger = logging.getLogger(__name__)

# ─── Inline HTML template (no external files needed) ─────────────────────────

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Risk Profile Report - {{ user_id }}</title>
<style>
:root {
  --bg: #f8fafc;
  --surface: #ffffff;
  --border: #e2e8f0;
  --text: #0f172a;
  --text-muted: #64748b;
  --accent: #2563eb;
  --conservative: #16a34a;
  --moderate: #ca8a04;
  --aggressive: #dc2626;
  --font: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
}
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: var(--font); background: var(--bg); color: var(--text); line-height: 1.6; }
.container { max-width: 960px; margin: 0 auto; padding: 2rem; }
h1 { font-size: 1.8rem; font-weight: 700; margin-bottom: 0.5rem; }
h2 { font-size: 1.3rem; font-weight: 600; margin-bottom: 1rem; color: var(--accent); }
.section {
  background: var(--surface);
  border: 1px solid var(--border);
  border-radius: 12px;
  padding: 1.5rem;
  margin-bottom: 1.5rem;
}
.muted { color: var(--text-muted); font-size: 0.9rem; }
.badge { display: inline-block; padding: 0.2rem 0.8rem; border-radius: 999px; color: #fff; font-weight: 600; }
.badge.CONSERVATIVE { background: var(--conservative); }
.badge.MODERATE { background: var(--moderate); }
.badge.AGGRESSIVE { background: var(--aggressive); }
.score { font-size: 2.4rem; font-weight: 700; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 0.5rem; border-bottom: 1px solid var(--border); }
th { color: var(--text-muted); font-weight: 600; font-size: 0.85rem; text-transform: uppercase; }
.footer { text-align: center; color: var(--text-muted); font-size: 0.8rem; padding: 1rem; }
</style>
</head>
<body>
<div class="container">

<div class="section">
  <h1>Risk Profile Report</h1>
  <div class="muted">User {{ user_id }} &middot; completed {{ completed_at }}</div>
</div>

<div class="section">
  <h2>Your Profile</h2>
  <div class="score">{{ "%.2f"|format(risk_score) }}</div>
  <span class="badge {{ category }}">{{ profile.name }}</span>
  <p style="margin-top: 1rem">{{ profile.description }}</p>
  <ul style="margin: 1rem 0 0 1.5rem">
    {% for c in profile.characteristics %}
    <li>{{ c }}</li>
    {% endfor %}
  </ul>
</div>

<div class="section">
  <h2>Recommended Allocation</h2>
  <table>
    <thead><tr><th>Asset class</th><th>Range</th></tr></thead>
    <tbody>
      {% for asset, pct in profile.recommended_allocation.items() %}
      <tr><td>{{ asset|capitalize }}</td><td>{{ pct }}</td></tr>
      {% endfor %}
    </tbody>
  </table>
</div>

<div class="section">
  <h2>Answers</h2>
  <table>
    <thead><tr><th>Question</th><th>Answer</th></tr></thead>
    <tbody>
      {% for a in answers %}
      <tr><td>{{ a.question }}</td><td>{{ a.answer }}</td></tr>
      {% endfor %}
    </tbody>
  </table>
  {% if life_event or notes %}
  <p class="muted" style="margin-top: 1rem">
    {% if life_event %}Life event: {{ life_event }}{% endif %}
    {% if notes %}<br>Notes: {{ notes }}{% endif %}
  </p>
  {% endif %}
</div>

{% if history %}
<div class="section">
  <h2>History ({{ history|length }})</h2>
  <table>
    <thead><tr><th>Completed</th><th>Score</th><th>Profile</th><th>Trend</th><th>Life event</th></tr></thead>
    <tbody>
      {% for h in history %}
      <tr>
        <td>{{ h.completed_at }}</td>
        <td>{{ "%.2f"|format(h.risk_score) }}</td>
        <td><span class="badge {{ h.category }}">{{ h.name }}</span></td>
        <td>{{ h.trend or "-" }}</td>
        <td>{{ h.life_event or "-" }}</td>
      </tr>
      {% endfor %}
    </tbody>
  </table>
</div>
{% endif %}

</div>

<div class="footer">
  Generated by riskprofile &middot; catalog {{ catalog_version }} &middot; {{ generated_at }}
</div>

</body>
</html>
"""


class HTMLReportGenerator:
    """Generates self-contained HTML risk profile reports.

    Reports include the score and category, the category's
    characteristics and recommended allocation, the submitted answers,
    and optionally the user's assessment history.
    """

    def __init__(self) -> None:
        self._env = Environment(autoescape=True)
        self._template = self._env.from_string(_HTML_TEMPLATE)

    def generate(
        self,
        result: AssessmentResult,
        history: Sequence[AssessmentResult] | None = None,
    ) -> str:
        """Generate an HTML report for one assessment.

        Args:
            result: The assessment to report on.
            history: Optional earlier assessments, newest first.

        Returns:
            Self-contained HTML string.
        """
        a = result.assessment

        answers = []
        for ans in a.answers:
            question = QUESTIONS_BY_ID.get(ans.question_id)
            option = question.get_option(ans.answer) if question else None
            answers.append({
                "question": question.prompt if question else ans.question_id,
                "answer": option.label if option else ans.answer,
            })

        history_rows = [
            {
                "completed_at": h.assessment.completed_at.strftime("%Y-%m-%d %H:%M"),
                "risk_score": h.assessment.risk_score,
                "category": h.assessment.risk_profile.value,
                "name": h.profile.name,
                "trend": h.trend.value if h.trend else None,
                "life_event": h.assessment.life_event,
            }
            for h in (history or [])
        ]

        context = {
            "user_id": a.user_id,
            "completed_at": a.completed_at.strftime("%Y-%m-%d %H:%M"),
            "risk_score": a.risk_score,
            "category": a.risk_profile.value,
            "profile": result.profile,
            "answers": answers,
            "life_event": a.life_event,
            "notes": a.notes,
            "history": history_rows,
            "catalog_version": CATALOG_VERSION,
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M"),
        }

        return self._template.render(**context)

    def generate_to_file(
        self,
        result: AssessmentResult,
        output_path: str,
        history: Sequence[AssessmentResult] | None = None,
    ) -> str:
        """Generate HTML report and write to file.

        Returns:
            The resolved output file path.
        """
        html = self.generate(result, history)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")

        logger.info("HTML report written to: %s", output_path)
        return str(path.resolve())
