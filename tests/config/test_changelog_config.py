import json
import tempfile
import unittest
from pathlib import Path

from vc_changelog.config.loader import ConfigError, load_config, rules_from_config
from vc_changelog.history.commit_classifier import DEFAULT_RULES


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def write_config(self, root: Path, data) -> None:
        content = data if isinstance(data, str) else json.dumps(data)
        (root / ".changelog.json").write_text(content, encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = load_config(Path(tmp))
            self.assertEqual(config["changelog"], "NEWS.md")
            self.assertEqual(config["exclude_grep"], "^Squash")
            self.assertEqual(config["missing_heading"], "append")
            self.assertEqual(config["rules"], {})
            self.assertEqual(rules_from_config(config), DEFAULT_RULES)

    def test_load_config_success(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(
                root,
                {
                    "changelog": "CHANGELOG.md",
                    "exclude_grep": "^WIP",
                    "missing_heading": "error",
                    "rules": {"additions": ["^feat: .+$"]},
                },
            )
            config = load_config(root)
            self.assertEqual(config["changelog"], "CHANGELOG.md")
            self.assertEqual(config["exclude_grep"], "^WIP")
            self.assertEqual(config["missing_heading"], "error")

            rules = rules_from_config(config)
            self.assertEqual(rules.additions, ("^feat: .+$",))
            self.assertEqual(rules.fixes, DEFAULT_RULES.fixes)
            self.assertEqual(rules.bumps, DEFAULT_RULES.bumps)
            self.assertEqual(rules.bug_references, DEFAULT_RULES.bug_references)

    def test_invalid_configurations(self) -> None:
        cases = [
            "{invalid}",
            "[]",
            {"unknown": 1},
            {"changelog": 3},
            {"exclude_grep": None},
            {"missing_heading": "ignore"},
            {"rules": []},
            {"rules": {"chores": ["^chore"]}},
            {"rules": {"fixes": "^fix"}},
            {"rules": {"fixes": [1]}},
            {"rules": {"bumps": ["[unclosed"]}},
        ]
        for data in cases:
            with self.subTest(data=data):
                with tempfile.TemporaryDirectory() as tmp:
                    root = Path(tmp)
                    self.write_config(root, data)
                    with self.assertRaises(ConfigError):
                        load_config(root)


if __name__ == "__main__":
    unittest.main()
