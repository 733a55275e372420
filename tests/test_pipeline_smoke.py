import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import ats_engine.main  # noqa: F401
from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.api import ScoreRequest
from ats_engine.services.scoring_service import run_resume_scoring

RESUME_TEXT = """SKILLS
Python, SQL, React
EDUCATION
State University, BSc Computer Science
PROJECTS
- Built a budgeting app used by 300 students
- Designed a CLI that cut log triage time 50%
EXPERIENCE
- Assisted the IT desk with laptop setups
"""


class PipelineSmokeTests(unittest.TestCase):
    def test_safe_imports_and_scoring_config_lookup(self):
        self.assertEqual(get_scoring_value("algorithm_version"), "v2.1.0-2026.01")

    def test_coop_resume_end_to_end(self):
        request = ScoreRequest(
            resume_text=RESUME_TEXT,
            parsed_resume={
                "contact": "sam@example.com",
                "skills": ["Python", "SQL", "React"],
                "projects": "- Built a budgeting app used by 300 students\n- Designed a CLI that cut log triage time 50%",
                "education": [{"institution": "State University", "degree": "BSc", "dates": "2021 - 2025"}],
            },
            keywords=[
                {"keyword": "Python", "matched": True},
                {"keyword": "SQL", "matched": True},
                {"keyword": "Java", "matched": False},
                {"keyword": "AWS", "matched": False},
            ],
            candidate_type="coop",
            experience_level="student",
        )
        first = run_resume_scoring(request)
        second = run_resume_scoring(request)

        stable = {"ats_score": {"calculated_at"}}
        self.assertEqual(first.model_dump(exclude=stable), second.model_dump(exclude=stable))
        self.assertEqual(first.section_order.recommended_order[0], "skills")
        self.assertTrue(first.section_order.is_correct_order)
        self.assertEqual(first.ats_score.breakdown.categories["keyword_alignment"].score, 50)
        self.assertEqual(first.ats_score.breakdown.categories["skills_coverage"].score, 100)
        self.assertEqual(first.content_quality.details.total_bullets, 2)
        self.assertEqual(first.bullet_source, "structured")
        self.assertEqual(first.quantification_density, 100)
        self.assertEqual(first.calibration.priority_boosts.quantification, -1)
        self.assertEqual(
            [suggestion.id for suggestion in first.structural_suggestions],
            ["rule-coop-projects-heading"],
        )
        self.assertEqual(first.calibration.priority_boosts.keyword, 1)
        self.assertEqual(first.calibration.focus_areas[0], "quantification_projects")
        self.assertTrue(
            any(item.message.startswith("Add missing keywords") for item in first.ats_score.action_items)
        )


if __name__ == "__main__":
    unittest.main()
