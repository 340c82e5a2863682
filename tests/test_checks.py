import tempfile
import unittest
from pathlib import Path

from HardenScore.checks import builtin_checks
from HardenScore.checks.base import UnsupportedComparator
from HardenScore.checks.factory import comparators_for
from HardenScore.checks.files import FileContentsComparator, FileExistenceComparator
from HardenScore.checks.system import RegistryComparator, VersionComparator, normalize_registry_value
from HardenScore.core.base import CheckRegistry, SweepContext
from HardenScore.core.config import EngineConfig, OperatingSystemType, ProgramMode
from HardenScore.core.errors import CheckNotSupportedError, UnsupportedPlatformError
from HardenScore.core.issues import (
    ContentsIssue,
    ExistenceIssue,
    IssueDocument,
    RegistryIssue,
    VersionIssue,
)
from HardenScore.core.ledger import PointsStatus, ScoringLedger
from HardenScore.core.store import IssueStore
from HardenScore.core.sweep import run_sweep


def registry_issue(value, should_match=True, points=5):
    return RegistryIssue(
        points=points,
        description="Registry",
        registry_path="HKEY_LOCAL_MACHINE\\SOFTWARE\\Policies\\Test",
        registry_name="Setting",
        registry_value=value,
        should_match=should_match,
    )


def fake_reader(value):
    def reader(path, name):
        if isinstance(value, Exception):
            raise value
        return value

    return reader


class TestExistenceComparator(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.present = Path(self._tmp.name) / "present.txt"
        self.present.write_text("here", encoding="utf-8")
        self.absent = Path(self._tmp.name) / "absent.txt"
        self.comparator = FileExistenceComparator()

    def check(self, path, should_exist, points):
        return self.comparator.evaluate(
            ExistenceIssue(points=points, description="d", path=str(path), file_should_exist=should_exist)
        )

    def test_truth_table(self) -> None:
        self.assertTrue(self.check(self.present, True, 5))
        self.assertFalse(self.check(self.present, False, 5))
        self.assertFalse(self.check(self.absent, True, 5))
        self.assertTrue(self.check(self.absent, False, 5))

    def test_penalty_inverts(self) -> None:
        self.assertTrue(self.check(self.present, False, -5))
        self.assertFalse(self.check(self.absent, False, -5))
        self.assertFalse(self.check(self.present, True, -5))


class TestContentsComparator(unittest.TestCase):
    def test_needs_every_snippet(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "sshd_config"
            target.write_text("PermitRootLogin no\nPasswordAuthentication no\n", encoding="utf-8")
            comparator = FileContentsComparator()

            all_there = ContentsIssue(5, "d", str(target), ["PermitRootLogin no", "PasswordAuthentication no"])
            one_missing = ContentsIssue(5, "d", str(target), ["PermitRootLogin no", "X11Forwarding no"])

            self.assertTrue(comparator.evaluate(all_there))
            self.assertFalse(comparator.evaluate(one_missing))

    def test_missing_file_is_no_match(self) -> None:
        issue = ContentsIssue(5, "d", "/definitely/not/here/at/all", [])
        self.assertFalse(FileContentsComparator().evaluate(issue))


class TestRegistryComparator(unittest.TestCase):
    def test_binary_values_become_hex(self) -> None:
        self.assertEqual(normalize_registry_value(b"\x01\x0a\xff"), "01,0A,FF")
        comparator = RegistryComparator(fake_reader(b"\x01\x0a\xff"))
        self.assertTrue(comparator.evaluate(registry_issue("01,0a,ff")))

    def test_case_insensitive_string_match(self) -> None:
        comparator = RegistryComparator(fake_reader("Enabled"))
        self.assertTrue(comparator.evaluate(registry_issue("ENABLED")))
        self.assertFalse(comparator.evaluate(registry_issue("ENABLED", should_match=False)))

    def test_dword_compares_as_text(self) -> None:
        self.assertTrue(RegistryComparator(fake_reader(1)).evaluate(registry_issue("1")))

    def test_absent_value(self) -> None:
        comparator = RegistryComparator(fake_reader(None))
        self.assertTrue(comparator.evaluate(registry_issue(None)))
        self.assertTrue(comparator.evaluate(registry_issue("")))
        self.assertFalse(comparator.evaluate(registry_issue("1")))
        self.assertTrue(comparator.evaluate(registry_issue("1", should_match=False)))
        self.assertFalse(comparator.evaluate(registry_issue(None, should_match=False)))

    def test_access_denied_is_no_match(self) -> None:
        comparator = RegistryComparator(fake_reader(PermissionError("Access is denied")))
        with self.assertLogs("HardenScore.checks.system", level="WARNING"):
            self.assertFalse(comparator.evaluate(registry_issue("1")))


class TestVersionComparator(unittest.TestCase):
    def test_exact_match_only(self) -> None:
        comparator = VersionComparator("22.04")
        self.assertTrue(comparator.evaluate(VersionIssue(5, "d", "22.04")))
        self.assertFalse(comparator.evaluate(VersionIssue(5, "d", "22.04.1")))


class TestFactory(unittest.TestCase):
    def test_unknown_platform_is_rejected(self) -> None:
        with self.assertRaises(UnsupportedPlatformError):
            comparators_for(OperatingSystemType.UNKNOWN, "")

    def test_linux_has_no_registry(self) -> None:
        comparators = comparators_for(OperatingSystemType.LINUX, "22.04")
        self.assertIsInstance(comparators.registry, UnsupportedComparator)
        with self.assertRaises(CheckNotSupportedError):
            comparators.registry.evaluate(registry_issue("1"))

    def test_winnt_uses_given_registry_reader(self) -> None:
        comparators = comparators_for(OperatingSystemType.WINNT, "10.0.19045", fake_reader("yes"))
        self.assertTrue(comparators.registry.evaluate(registry_issue("YES")))


class TestCheckRegistry(unittest.TestCase):
    def test_duplicate_category_raises(self) -> None:
        registry = CheckRegistry()
        registry.extend(builtin_checks())
        with self.assertRaises(ValueError):
            registry.register(builtin_checks()[0])
        self.assertEqual(len(registry.create_all()), 4)


class SweepTestCase(unittest.TestCase):
    def make_context(self, os_type=OperatingSystemType.LINUX, documents=()):
        config = EngineConfig(mode=ProgramMode.OBSERVE, os_type=os_type, os_version="22.04")
        store = IssueStore(config)
        for document in documents:
            store.register(document)
        return SweepContext(
            store=store,
            ledger=ScoringLedger(),
            comparators=comparators_for(os_type, "22.04", fake_reader(None)),
            config=config,
        )

    def checks(self):
        registry = CheckRegistry()
        registry.extend(builtin_checks())
        return registry.create_all()


class TestSweepStateMachine(SweepTestCase):
    def test_found_kept_broken_and_forgotten(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "backdoor.sh"
            target.write_text("nc -l", encoding="utf-8")
            issue = ExistenceIssue(points=5, description="Backdoor removed", path=str(target), file_should_exist=False)
            context = self.make_context(documents=[IssueDocument("issues.files.existence", [issue])])
            checks = self.checks()

            ### File still there: nothing scored
            ledger = run_sweep(context, checks)
            self.assertEqual(ledger.status, PointsStatus.UNCHANGED)
            self.assertEqual(ledger.total_issues, 1)
            self.assertFalse(issue.triggered)

            ### Trainee removes it: newly gained
            target.unlink()
            ledger = run_sweep(context, checks)
            self.assertEqual(ledger.status, PointsStatus.GAINED)
            self.assertEqual(ledger.points_gained_descriptions, ["Backdoor removed - 5 points"])
            self.assertTrue(issue.triggered)

            ### Still removed: scored again, but no change
            ledger = run_sweep(context, checks)
            self.assertEqual(ledger.status, PointsStatus.UNCHANGED)
            self.assertEqual(ledger.points_gained_total, 5)

            ### Put back: regression
            target.write_text("nc -l", encoding="utf-8")
            ledger = run_sweep(context, checks)
            self.assertEqual(ledger.status, PointsStatus.LOST)
            self.assertEqual(ledger.points_gained_total, 0)
            self.assertFalse(issue.triggered)

    def test_penalty_issue(self) -> None:
        issue = VersionIssue(points=-3, description="Wrong release installed", expected="22.04")
        context = self.make_context(documents=[IssueDocument("issues.system.version", [issue])])

        ledger = run_sweep(context, self.checks())

        self.assertEqual(ledger.status, PointsStatus.LOST)
        self.assertEqual(ledger.points_lost_total, -3)
        self.assertEqual(ledger.total_issues, 0)
        self.assertTrue(issue.triggered)

    def test_unsupported_category_is_abandoned_once(self) -> None:
        issues = [registry_issue("1"), registry_issue("2")]
        context = self.make_context(documents=[IssueDocument("issues.system.registry", issues)])

        with self.assertLogs("HardenScore.core.base", level="WARNING") as captured:
            ledger = run_sweep(context, self.checks())

        self.assertEqual(len(captured.output), 1)
        self.assertEqual(ledger.total_issues, 1)
        self.assertEqual(ledger.status, PointsStatus.UNCHANGED)
        self.assertFalse(any(issue.triggered for issue in issues))

    def test_log_names_the_check_and_its_issue_file(self) -> None:
        issue = VersionIssue(points=2, description="Upgrade", expected="22.04")
        document = IssueDocument("issues.system.version", [issue], source="Issues/System/version.json")
        context = self.make_context(documents=[document])

        with self.assertLogs("HardenScore.core.base", level="DEBUG") as captured:
            run_sweep(context, self.checks())

        started = [line for line in captured.output if "Performing" in line]
        self.assertEqual(len(started), 1)
        self.assertIn("Operating System Version", started[0])
        self.assertIn("Issues/System/version.json", started[0])

    def test_registry_checks_run_on_winnt(self) -> None:
        issues = [registry_issue(None), registry_issue("1")]
        context = self.make_context(
            os_type=OperatingSystemType.WINNT,
            documents=[IssueDocument("issues.system.registry", issues)],
        )

        ledger = run_sweep(context, self.checks())

        self.assertEqual(ledger.total_issues, 2)
        self.assertEqual(ledger.points_gained_total, 5)
        self.assertEqual([issue.triggered for issue in issues], [True, False])


if __name__ == "__main__":
    unittest.main()
