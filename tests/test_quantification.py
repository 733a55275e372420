import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.scoring.quantification import best_tier, detect_quantifications, has_metric


def _tiers(text: str) -> list[tuple[str, str]]:
    return [(match.type, match.tier) for match in detect_quantifications(text)]


class QuantificationDetectorTests(unittest.TestCase):
    def test_currency_tiers(self):
        self.assertEqual(_tiers("Closed $2M in new business"), [("currency", "high")])
        self.assertEqual(_tiers("Managed a $150K budget"), [("currency", "medium")])
        self.assertEqual(_tiers("Raised $500 for charity"), [("currency", "low")])

    def test_percentage_tiers(self):
        self.assertEqual(_tiers("Kept uptime at 99% for the year"), [("percentage", "high")])
        self.assertEqual(_tiers("Cut latency 40% across regions"), [("percentage", "medium")])
        self.assertEqual(_tiers("Lifted conversion 10% quarter over quarter"), [("percentage", "low")])

    def test_multiplier_and_team(self):
        self.assertEqual(_tiers("Made the build 3x faster"), [("multiplier", "high")])
        self.assertEqual(_tiers("Made the build 1.5x faster"), [("multiplier", "high")])
        self.assertEqual(_tiers("Led a team of 12 across three sites"), [("other", "high")])

    def test_count_with_magnitude(self):
        self.assertEqual(_tiers("Served 2M users every day"), [("count", "high")])
        self.assertEqual(_tiers("Onboarded 5,000 users"), [("count", "medium")])
        self.assertEqual(_tiers("Migrated 2M+ records nightly"), [("count", "high")])

    def test_letter_followed_by_hyphen_is_not_a_magnitude(self):
        matches = detect_quantifications("Sold $40 t-shirts at the campus fair")
        self.assertEqual([(match.type, match.tier, match.raw_text) for match in matches], [("currency", "low", "$40")])
        self.assertEqual(_tiers("Launched a $500 m-commerce pilot"), [("currency", "low")])
        self.assertEqual(_tiers("Raised $1.2M"), [("currency", "high")])

    def test_overlap_keeps_higher_priority_family(self):
        matches = detect_quantifications("Saved $50,000 annually on hosting")
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].type, "currency")
        self.assertEqual(matches[0].raw_text, "$50,000")

        matches = detect_quantifications("Increased revenue by 40%")
        self.assertEqual([match.type for match in matches], ["percentage"])

    def test_matches_are_ordered_by_position(self):
        matches = detect_quantifications("Grew revenue 35% and saved $1.2M")
        self.assertEqual([match.type for match in matches], ["percentage", "currency"])

    def test_no_metrics(self):
        self.assertEqual(detect_quantifications(""), [])
        self.assertFalse(has_metric("Collaborated with design on onboarding"))
        self.assertIsNone(best_tier([]))

    def test_best_tier(self):
        self.assertEqual(best_tier(detect_quantifications("Saved $500 and grew sales 99%")), "high")


if __name__ == "__main__":
    unittest.main()
