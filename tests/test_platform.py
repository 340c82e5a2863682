import tempfile
import unittest
from pathlib import Path
from unittest import mock

from HardenScore.core import platform_info
from HardenScore.core.config import EngineConfig, OperatingSystemType
from HardenScore.core.errors import UnsupportedPlatformError


class TestLinuxVersion(unittest.TestCase):
    def test_description_is_reduced_to_digits_and_dots(self) -> None:
        self.assertEqual(platform_info.linux_version_from_description("Ubuntu 22.04.3 LTS"), "22.04.3")
        self.assertEqual(platform_info.linux_version_from_description("Debian GNU/Linux 12 (bookworm)"), "12")

    def test_os_release_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            release = Path(tmpdir) / "os-release"
            release.write_text('NAME="Ubuntu"\nPRETTY_NAME="Ubuntu 22.04.3 LTS"\n', encoding="utf-8")

            self.assertEqual(platform_info._os_release("NAME", release), "Ubuntu")
            self.assertEqual(platform_info._os_release("PRETTY_NAME", release), "Ubuntu 22.04.3 LTS")
            self.assertIsNone(platform_info._os_release("VERSION_ID", release))

    def test_lsb_release_wins(self) -> None:
        outputs = {
            ("lsb_release", "-i", "-s"): "Ubuntu",
            ("lsb_release", "-c", "-s"): "jammy",
            ("lsb_release", "-d", "-s"): "Ubuntu 22.04.3 LTS",
        }
        with mock.patch.object(platform_info, "_run", side_effect=lambda command: outputs[tuple(command)]):
            self.assertEqual(platform_info.detect_os_name(OperatingSystemType.LINUX), "Ubuntu jammy")
            self.assertEqual(platform_info.detect_os_version(OperatingSystemType.LINUX), "22.04.3")


class TestPopulatePlatform(unittest.TestCase):
    def test_unknown_platform_raises(self) -> None:
        with mock.patch.object(platform_info, "detect_os_type", return_value=OperatingSystemType.UNKNOWN):
            with self.assertRaises(UnsupportedPlatformError):
                platform_info.populate_platform(EngineConfig())

    def test_fills_in_config(self) -> None:
        with mock.patch.object(platform_info, "detect_os_type", return_value=OperatingSystemType.LINUX), \
                mock.patch.object(platform_info, "detect_os_name", return_value="Ubuntu jammy"), \
                mock.patch.object(platform_info, "detect_os_version", return_value="22.04"):
            config = platform_info.populate_platform(EngineConfig())

        self.assertIs(config.os_type, OperatingSystemType.LINUX)
        self.assertEqual(config.os_name, "Ubuntu jammy")
        self.assertEqual(config.os_version, "22.04")


if __name__ == "__main__":
    unittest.main()
