import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.schemas.resume import EducationEntry, ExperienceEntry, ParsedResume
from ats_engine.scoring.bullets import (
    calculate_quantification_density,
    extract_bullets,
    extract_bullets_from_resume,
)

MARKED_RESUME = """EXPERIENCE
Acme Corp, Backend Engineer
• Led migration of 40 services to Kubernetes
- Built a data pipeline processing 2M records daily
• Led migration of 40 services to Kubernetes
• short
* Maintained internal tooling for the support team
"""

PLAIN_RESUME = """John Doe
john@example.com
EXPERIENCE
Developed a reporting dashboard used by managers
Jan 2020 - Present
Improved onboarding flow for new customers
"""


class BulletExtractionTests(unittest.TestCase):
    def test_marker_lines_are_preferred(self):
        result = extract_bullets(MARKED_RESUME, ["Kubernetes", "Python"])
        self.assertEqual(result.source, "pattern")
        self.assertEqual(
            [bullet.text for bullet in result.bullets],
            [
                "Led migration of 40 services to Kubernetes",
                "Built a data pipeline processing 2M records daily",
                "Maintained internal tooling for the support team",
            ],
        )
        first = result.bullets[0]
        self.assertTrue(first.has_metric)
        self.assertTrue(first.has_strong_verb)
        self.assertEqual(first.first_word, "led")
        self.assertEqual(first.keywords, ("Kubernetes",))
        self.assertFalse(result.bullets[2].has_strong_verb)

    def test_newline_fallback_skips_headings_contacts_and_dates(self):
        result = extract_bullets(PLAIN_RESUME)
        self.assertEqual(result.source, "newline")
        self.assertEqual(
            [bullet.text for bullet in result.bullets],
            [
                "Developed a reporting dashboard used by managers",
                "Improved onboarding flow for new customers",
            ],
        )

    def test_extraction_is_deterministic(self):
        self.assertEqual(extract_bullets(MARKED_RESUME), extract_bullets(MARKED_RESUME))

    def test_dash_without_space_is_a_marker(self):
        result = extract_bullets("-Led a team of engineers on payments\n-Built the ledger service in Go\n")
        self.assertEqual(result.source, "pattern")
        self.assertEqual(
            [bullet.text for bullet in result.bullets],
            ["Led a team of engineers on payments", "Built the ledger service in Go"],
        )

    def test_leading_negative_number_is_not_a_marker(self):
        result = extract_bullets("-15% churn after the pricing change\nRetained key accounts through renewals\n")
        self.assertEqual(result.source, "newline")
        self.assertEqual(result.bullets[0].text, "-15% churn after the pricing change")

    def test_empty_text(self):
        result = extract_bullets("")
        self.assertEqual(result.bullets, ())

    def test_structured_sources_are_counted(self):
        parsed = ParsedResume(
            experience=[
                ExperienceEntry(
                    company="Acme",
                    title="Engineer",
                    dates="2021 - 2023",
                    bullet_points=[
                        "Built billing APIs handling 1,200 requests per second",
                        "Built billing APIs handling 1,200 requests per second",
                    ],
                )
            ],
            projects="• Created a budgeting app with 300 users\n• Designed a CLI for log triage",
            education=[
                EducationEntry(
                    institution="State University",
                    degree="BSc Computer Science",
                    dates="2017 - 2021",
                    bullet_points=["Tutored first-year students in algorithms"],
                )
            ],
        )
        bullets, sources = extract_bullets_from_resume(parsed)
        self.assertEqual(len(bullets), 4)
        self.assertEqual((sources.experience, sources.projects, sources.education), (1, 2, 1))

    def test_quantification_density(self):
        self.assertEqual(calculate_quantification_density(MARKED_RESUME), 67)
        self.assertEqual(calculate_quantification_density(""), 0)


if __name__ == "__main__":
    unittest.main()
