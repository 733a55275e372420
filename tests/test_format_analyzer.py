import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.schemas.resume import EducationEntry, ExperienceEntry, ParsedResume
from ats_engine.schemas.scoring import FormatIssue
from ats_engine.scoring.format_analyzer import (
    analyze_resume_format,
    estimate_page_count,
    sort_issues_by_severity,
)


def _job(dates: str = "01/2021 - 03/2023", bullets: int = 3) -> ExperienceEntry:
    return ExperienceEntry(
        company="Acme",
        title="Engineer",
        dates=dates,
        bullet_points=[f"Delivered project number {index} on schedule" for index in range(bullets)],
    )


class FormatAnalyzerTests(unittest.TestCase):
    def test_empty_resume_has_one_critical_issue_first(self):
        issues = analyze_resume_format(ParsedResume())
        critical = [issue for issue in issues if issue.type == "critical"]
        self.assertEqual(len(critical), 1)
        self.assertEqual(issues[0].type, "critical")
        self.assertEqual(issues[0].message, "No clear section headers detected")
        self.assertEqual(issues[0].source, "rule-based")

    def test_long_student_resume_is_flagged(self):
        parsed = ParsedResume(contact="jane@example.com", experience=[_job() for _ in range(4)])
        self.assertEqual(estimate_page_count(parsed), 2)
        messages = [issue.message for issue in analyze_resume_format(parsed, "student")]
        self.assertIn("Resume is approximately 2 pages", messages)
        self.assertEqual(analyze_resume_format(parsed, "experienced"), [])

    def test_short_resume_is_one_page(self):
        parsed = ParsedResume(contact="jane@example.com", experience=[_job(bullets=2)], skills=["Python"])
        self.assertEqual(estimate_page_count(parsed), 1)
        self.assertEqual(analyze_resume_format(parsed), [])

    def test_contact_checks(self):
        missing = analyze_resume_format(ParsedResume(skills=["Python"]))
        self.assertEqual([issue.message for issue in missing], ["Missing contact information"])

        sparse = analyze_resume_format(ParsedResume(skills=["Python"], contact="Jane"))
        self.assertEqual([issue.message for issue in sparse], ["Contact information may be incomplete"])

        for contact in ("jane@example.com", "555-123-4567", "Austin, TX"):
            self.assertEqual(analyze_resume_format(ParsedResume(skills=["Python"], contact=contact)), [])

    def test_mixed_date_formats(self):
        parsed = ParsedResume(
            contact="jane@example.com",
            experience=[_job("01/2021 - 03/2023", 1), _job("January 2019 - May 2020", 1)],
            education=[EducationEntry(institution="State University", degree="BSc", dates="2015-2019")],
        )
        issues = analyze_resume_format(parsed)
        self.assertEqual([issue.type for issue in issues], ["suggestion"])
        self.assertEqual(issues[0].message, "Inconsistent date formats detected")

    def test_two_date_formats_are_tolerated(self):
        parsed = ParsedResume(
            contact="jane@example.com",
            experience=[_job("01/2021 - 03/2023", 1), _job("January 2019 - May 2020", 1)],
        )
        self.assertEqual(analyze_resume_format(parsed), [])

    def test_sort_is_stable_within_severity(self):
        issues = [
            FormatIssue(type="suggestion", message="a", detail=""),
            FormatIssue(type="warning", message="b", detail=""),
            FormatIssue(type="suggestion", message="c", detail="", source="ai-detected"),
            FormatIssue(type="critical", message="d", detail=""),
        ]
        self.assertEqual([issue.message for issue in sort_issues_by_severity(issues)], ["d", "b", "a", "c"])


if __name__ == "__main__":
    unittest.main()
