# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the platform info module. This module will allow the application to:

# 1. Work out which operating system family we're running on

# 2. Find the name and version of the operating system

# 3. Fill all of that into the EngineConfig once at startup

from __future__ import annotations

import logging
import os
import platform
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .config import EngineConfig, OperatingSystemType
from .errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)

### Where the os-release file lives on most Linux distros
OS_RELEASE = Path("/etc/os-release")

###########################################################################

"""

Name: detect_os_type

Function: Work out the OS family. A backslash path separator is the easy way to

spot Windows, otherwise we ask platform what kernel this is.

Arguments: None

Returns: OperatingSystemType

"""

def detect_os_type() -> OperatingSystemType:
    if os.sep == "\\":
        return OperatingSystemType.WINNT
    if platform.system().lower() == "linux":
        return OperatingSystemType.LINUX
    return OperatingSystemType.UNKNOWN

#$ End detect_os_type

###########################################################################

"""

Name: _run

Function: Run a command and return its trimmed output, or None if it isn't

installed or falls over.

Arguments: command - the command and its arguments

Returns: Output string or None

"""

def _run(command: List[str]) -> Optional[str]:
    ### Don't even try if the program isn't there
    if shutil.which(command[0]) is None:
        return None
    try:
        completed = subprocess.run(command, capture_output=True, text=True, check=False, timeout=10)
    except (OSError, subprocess.SubprocessError):
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip()

#$ End _run

###########################################################################

"""

Name: _os_release

Function: Read a field out of /etc/os-release (used when lsb_release is missing).

Arguments: key - the field name (like PRETTY_NAME)

            path - os-release file to read

Returns: The field value without quotes, or None

"""

def _os_release(key: str, path: Path = OS_RELEASE) -> Optional[str]:
    try:
        lines = path.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError:
        return None
    for line in lines:
        name, _, value = line.partition("=")
        if name.strip() == key:
            return value.strip().strip('"')
    return None

#$ End _os_release

###########################################################################

"""

Name: linux_version_from_description

Function: Reduce an OS description (like "Ubuntu 22.04.3 LTS") to just the

digits and dots ("22.04.3").

Arguments: description - the description string

Returns: The version string

"""

def linux_version_from_description(description: str) -> str:
    return re.sub(r"[^0-9.]+", "", description)

#$ End linux_version_from_description

###########################################################################

"""

Name: detect_os_name / detect_os_version

Function: Find the OS name and version for the given OS family.

Arguments: os_type - the OperatingSystemType we're on

Returns: String, or None if it couldn't be worked out

"""

def detect_os_name(os_type: OperatingSystemType) -> Optional[str]:
    if os_type is OperatingSystemType.WINNT:
        return f"{platform.system()} {platform.release()}".strip()
    if os_type is OperatingSystemType.LINUX:
        ### Distributor plus codename, like "Ubuntu jammy"
        distributor = _run(["lsb_release", "-i", "-s"])
        codename = _run(["lsb_release", "-c", "-s"])
        if distributor:
            return f"{distributor} {codename or ''}".strip()
        return _os_release("NAME")
    return None


def detect_os_version(os_type: OperatingSystemType) -> Optional[str]:
    if os_type is OperatingSystemType.WINNT:
        return platform.version() or None
    if os_type is OperatingSystemType.LINUX:
        description = _run(["lsb_release", "-d", "-s"]) or _os_release("PRETTY_NAME")
        if description is None:
            return None
        return linux_version_from_description(description)
    return None

#$ End detect_os_name / detect_os_version

###########################################################################

"""

Name: populate_platform

Function: Fill the OS details into the config. Anything we can't identify is

fatal, because none of the checks can be trusted without it.

Arguments: config - the EngineConfig to update

Returns: The same EngineConfig

"""

def populate_platform(config: EngineConfig) -> EngineConfig:
    os_type = detect_os_type()
    if os_type is OperatingSystemType.UNKNOWN:
        logger.error("Unable to identify what Operating System is in use")
        raise UnsupportedPlatformError("HardenScore does not support running on your Operating System")
    config.os_type = os_type
    logger.info("Operating System type: %s", os_type.name)

    name = detect_os_name(os_type)
    if name is None:
        raise UnsupportedPlatformError("HardenScore was not able to identify the name of the Operating System")
    config.os_name = name
    logger.info("Operating System name: %s", name)

    version = detect_os_version(os_type)
    if version is None:
        raise UnsupportedPlatformError("HardenScore was not able to identify the version of the Operating System")
    config.os_version = version
    logger.info("Operating System ver.: %s", version)
    return config

#$ End populate_platform
