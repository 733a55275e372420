import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.schemas.resume import EducationEntry, ExperienceEntry, ParsedResume
from ats_engine.scoring.section_order import (
    RECOMMENDED_ORDER,
    calculate_section_coverage,
    detect_section_order,
    generate_structural_suggestions,
    validate_section_order,
)


class SectionOrderTests(unittest.TestCase):
    def test_coop_out_of_order(self):
        result = validate_section_order(["skills", "experience", "education"], "coop")
        self.assertFalse(result.is_correct_order)
        self.assertTrue(result.violations)
        self.assertTrue({violation.section for violation in result.violations} & {"experience", "education"})
        self.assertEqual(result.recommended_order, RECOMMENDED_ORDER["coop"])

    def test_coop_in_order(self):
        result = validate_section_order(["skills", "education", "experience"], "coop")
        self.assertTrue(result.is_correct_order)
        self.assertEqual(result.violations, ())

    def test_violation_positions_and_description(self):
        result = validate_section_order(["experience", "summary"], "fulltime")
        by_section = {violation.section: violation for violation in result.violations}
        self.assertEqual(set(by_section), {"experience", "summary"})
        summary = by_section["summary"]
        self.assertEqual((summary.expected_position, summary.actual_position), (0, 1))
        self.assertEqual(
            summary.description,
            '"summary" appears at position 2 but should be at position 1 for fulltime candidates',
        )

    def test_unknown_sections_are_ignored(self):
        result = validate_section_order(["skills", "hobbies", "education", "volunteering", "experience"], "coop")
        self.assertTrue(result.is_correct_order)

    def test_fewer_than_two_known_sections(self):
        self.assertTrue(validate_section_order([], "fulltime").is_correct_order)
        self.assertTrue(validate_section_order(["education"], "fulltime").is_correct_order)
        self.assertTrue(validate_section_order(["hobbies", "education", "awards"], "fulltime").is_correct_order)

    def test_names_are_normalized_and_deduplicated(self):
        result = validate_section_order([" Skills ", "SKILLS", "Education"], "coop")
        self.assertTrue(result.is_correct_order)

    def test_unknown_candidate_type_falls_back_to_fulltime(self):
        with self.assertLogs("ats_engine.scoring.section_order", level="WARNING"):
            result = validate_section_order(["summary", "skills"], "intern")
        self.assertTrue(result.is_correct_order)
        self.assertEqual(result.recommended_order, RECOMMENDED_ORDER["fulltime"])

    def test_deterministic(self):
        sections = ["education", "skills", "projects", "experience"]
        self.assertEqual(
            validate_section_order(sections, "career_changer"),
            validate_section_order(sections, "career_changer"),
        )

    def test_detect_section_order(self):
        text = (
            "Jane Doe\n"
            "SUMMARY\n"
            "Backend engineer focused on payments.\n"
            "Technical Skills:\n"
            "Python, Go, PostgreSQL\n"
            "Work Experience\n"
            "Led the ledger rewrite\n"
            "VOLUNTEERING\n"
            "Mentor at a coding club\n"
        )
        self.assertEqual(detect_section_order(text), ["summary", "skills", "experience", "volunteering"])

    def test_section_coverage(self):
        parsed = ParsedResume(
            skills=["Python"],
            education=[EducationEntry(institution="State University", degree="BSc", dates="2020 - 2024")],
        )
        self.assertEqual(calculate_section_coverage(parsed, "coop"), 67)
        self.assertEqual(calculate_section_coverage(ParsedResume(), "fulltime"), 0)


def _resume(**sections) -> ParsedResume:
    return ParsedResume(**sections)


_JOB = [ExperienceEntry(company="Acme", title="Analyst", dates="2019 - 2023")]
_SCHOOL = [EducationEntry(institution="State University", degree="BSc", dates="2015 - 2019")]


def _ids(suggestions) -> list[str]:
    return [suggestion.id for suggestion in suggestions]


class StructuralSuggestionTests(unittest.TestCase):
    def test_coop_with_summary_and_experience_first(self):
        parsed = _resume(summary="Motivated student", experience=_JOB, education=_SCHOOL)
        suggestions = generate_structural_suggestions("coop", parsed, ["summary", "experience", "education"])
        self.assertEqual(
            _ids(suggestions),
            ["rule-coop-exp-before-edu", "rule-coop-no-skills-at-top", "rule-coop-generic-summary"],
        )
        self.assertEqual(suggestions[1].priority, "critical")
        self.assertEqual(suggestions[1].current_state, "Skills section is missing")

    def test_coop_skills_present_but_not_first(self):
        parsed = _resume(skills=["Python"], education=_SCHOOL)
        suggestions = generate_structural_suggestions("coop", parsed, ["education", "skills"])
        self.assertEqual(_ids(suggestions), ["rule-coop-no-skills-at-top"])
        self.assertEqual(suggestions[0].current_state, "Skills section is not positioned first")

    def test_coop_projects_heading(self):
        parsed = _resume(skills=["Python"], education=_SCHOOL, projects="• Built a budgeting app")
        suggestions = generate_structural_suggestions("coop", parsed, ["skills", "education", "projects"])
        self.assertEqual(_ids(suggestions), ["rule-coop-projects-heading"])
        self.assertEqual(suggestions[0].priority, "moderate")
        self.assertEqual(suggestions[0].category, "section_heading")

    def test_fulltime_education_before_experience(self):
        parsed = _resume(summary="Backend engineer", experience=_JOB, education=_SCHOOL)
        flagged = generate_structural_suggestions("fulltime", parsed, ["summary", "education", "experience"])
        self.assertEqual(_ids(flagged), ["rule-fulltime-edu-before-exp"])
        self.assertEqual(flagged[0].category, "section_order")
        self.assertEqual(
            generate_structural_suggestions("fulltime", parsed, ["summary", "experience", "education"]),
            [],
        )

    def test_career_changer_rules(self):
        parsed = _resume(experience=_JOB, education=_SCHOOL)
        suggestions = generate_structural_suggestions("career_changer", parsed, ["experience", "education"])
        self.assertEqual(
            _ids(suggestions),
            ["rule-career-changer-no-summary", "rule-career-changer-edu-below-exp"],
        )
        self.assertEqual(suggestions[0].priority, "critical")

        parsed = _resume(summary="Teacher moving into data analysis", experience=_JOB, education=_SCHOOL)
        self.assertEqual(
            generate_structural_suggestions("career_changer", parsed, ["summary", "education", "experience"]),
            [],
        )

    def test_non_standard_headers_match_whole_lines_only(self):
        text = "MY JOURNEY\nAcme Corp\n  My Toolkit  \nPython, SQL\nApplied Machine Learning to churn models\n"
        suggestions = generate_structural_suggestions("fulltime", _resume(), [], text)
        self.assertEqual(_ids(suggestions), ["rule-non-standard-headers"])
        self.assertEqual(
            suggestions[0].current_state,
            'Detected: "my journey" → "Professional Experience", "my toolkit" → "Technical Skills"',
        )
        self.assertEqual(generate_structural_suggestions("fulltime", _resume(), [], ""), [])

    def test_unknown_candidate_type_uses_fulltime_rules(self):
        parsed = _resume(experience=_JOB, education=_SCHOOL)
        with self.assertLogs("ats_engine.scoring.section_order", level="WARNING"):
            suggestions = generate_structural_suggestions("contractor", parsed, ["education", "experience"])
        self.assertEqual(_ids(suggestions), ["rule-fulltime-edu-before-exp"])


if __name__ == "__main__":
    unittest.main()
