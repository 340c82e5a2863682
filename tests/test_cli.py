import contextlib
import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from HardenScore import cli
from HardenScore.core.config import OperatingSystemType, ProgramMode
from HardenScore.core.errors import UnsupportedPlatformError
from HardenScore.core.logs import ROOT_LOGGER


def pretend_linux(config):
    config.os_type = OperatingSystemType.LINUX
    config.os_name = "Ubuntu"
    config.os_version = "22.04"
    return config


def write_issue_file(root: Path, payload) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / "existence.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def removed_file_issue(target: Path):
    return {
        "Category": "issues.files.existence",
        "Issues": [
            {
                "Points": 5,
                "Description": "Removed the backdoor",
                "Path": str(target),
                "FileShouldExist": False,
            }
        ],
    }


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.issues = self.root / "Issues"
        patcher = mock.patch("HardenScore.cli.populate_platform", side_effect=pretend_linux)
        self.populate = patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._reset_logging)

    @staticmethod
    def _reset_logging() -> None:
        logger = logging.getLogger(ROOT_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def run_cli(self, *argv):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(io.StringIO()):
            code = cli.main(list(argv))
        return code, stdout.getvalue()


class TestResolveMode(unittest.TestCase):
    def test_prepare_and_start_lint_first(self) -> None:
        args = cli.build_parser().parse_args(["--prepare"])
        self.assertEqual(cli.resolve_mode(args), ProgramMode.CHECK | ProgramMode.PREPARE)

        args = cli.build_parser().parse_args(["--start"])
        self.assertEqual(cli.resolve_mode(args), ProgramMode.CHECK | ProgramMode.START)


class TestMain(CliTestCase):
    def test_no_mode_prints_help(self) -> None:
        code, output = self.run_cli()

        self.assertEqual(code, cli.EXIT_USAGE)
        self.assertIn("usage: hardenscore", output)

    def test_check_valid_directory(self) -> None:
        write_issue_file(self.issues, removed_file_issue(self.root / "backdoor.sh"))

        code, _ = self.run_cli("--check", "--quiet", "--issues-dir", str(self.issues))

        self.assertEqual(code, cli.EXIT_OK)

    def test_check_broken_directory(self) -> None:
        self.issues.mkdir()
        (self.issues / "broken.json").write_text("{ oops", encoding="utf-8")

        code, _ = self.run_cli("--check", "--quiet", "--issues-dir", str(self.issues))

        self.assertEqual(code, cli.EXIT_USAGE)

    def test_unsupported_platform(self) -> None:
        self.populate.side_effect = UnsupportedPlatformError("nope")

        code, _ = self.run_cli("--observe", "--quiet", "--issues-dir", str(self.issues))

        self.assertEqual(code, cli.EXIT_UNSUPPORTED_PLATFORM)

    def test_unloadable_issue_file(self) -> None:
        write_issue_file(self.issues, {"Category": "issues.files.existence", "Issues": [{"Points": 5}]})

        code, _ = self.run_cli("--observe", "--quiet", "--issues-dir", str(self.issues))

        self.assertEqual(code, cli.EXIT_LOAD_FAILED)

    def test_observe_writes_json_report(self) -> None:
        write_issue_file(self.issues, removed_file_issue(self.root / "backdoor.sh"))
        report = self.root / "out" / "score.json"

        code, _ = self.run_cli(
            "--observe",
            "--quiet",
            "--issues-dir", str(self.issues),
            "--output", str(report),
            "--format", "json",
        )

        self.assertEqual(code, cli.EXIT_OK)
        data = json.loads(report.read_text(encoding="utf-8"))
        self.assertEqual(data["tool"], "HardenScore")
        self.assertEqual(data["score"]["points_gained"], 5)
        self.assertEqual(data["score"]["issues_total"], 1)
        self.assertEqual(data["score"]["gained"], ["Removed the backdoor - 5 points"])
        self.assertEqual(data["score"]["status"], "gained")

    def test_config_file_sets_issue_directory(self) -> None:
        write_issue_file(self.issues, removed_file_issue(self.root / "backdoor.sh"))
        report = self.root / "score.txt"
        config = self.root / "hardenscore.json"
        config.write_text(json.dumps({"issues_dir": str(self.issues), "report": str(report)}), encoding="utf-8")

        code, _ = self.run_cli("--observe", "--quiet", "--config", str(config))

        self.assertEqual(code, cli.EXIT_OK)
        self.assertTrue(report.exists())


if __name__ == "__main__":
    unittest.main()
