import unittest
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.core.config.scoring import get_scoring_config, get_scoring_value, reload_scoring_config


class ScoringConfigTests(unittest.TestCase):
    def tearDown(self):
        reload_scoring_config()

    def _write(self, directory: str, text: str) -> Path:
        path = Path(directory) / "scoring.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("aggregate.weights.keyword_alignment"), 0.25)
        self.assertEqual(get_scoring_value("bullets.min_pattern_bullets"), 2)
        self.assertEqual(get_scoring_value("missing.path", "fallback"), "fallback")
        self.assertEqual(get_scoring_value("aggregate.weights.keyword_alignment.deeper", 1), 1)

    def test_default_weights_sum_to_one(self):
        weights = get_scoring_value("aggregate.weights")
        self.assertAlmostEqual(sum(weights.values()), 1.0, places=6)

    def test_reload_swaps_table(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "algorithm_version: test\nbullets:\n  min_length: 25\n")
            reload_scoring_config(path)
            self.assertEqual(get_scoring_value("bullets.min_length"), 25)
            self.assertIsNone(get_scoring_value("aggregate.weights"))

    def test_bad_config_raises_and_keeps_current_table(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(RuntimeError):
                reload_scoring_config(Path(tmp) / "missing.yaml")
            with self.assertRaises(RuntimeError):
                reload_scoring_config(self._write(tmp, "weights: [unclosed\n"))
            with self.assertRaises(RuntimeError):
                reload_scoring_config(self._write(tmp, "- just\n- a list\n"))
        self.assertEqual(get_scoring_value("aggregate.weights.keyword_alignment"), 0.25)


if __name__ == "__main__":
    unittest.main()
