# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the system check module. This module will allow the application to:

# 1. Read values out of the Windows registry and compare them to what's expected

# 2. Compare the OS version against the one the issue file wants

# 3. Score the "issues.system.registry" and "issues.system.version" categories

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from HardenScore.core.base import IssueCheck, SweepContext
from HardenScore.core.issues import SYSTEM_REGISTRY, SYSTEM_VERSION, RegistryIssue, VersionIssue

from .base import Comparator

logger = logging.getLogger(__name__)

### Reads a registry value: (key path, value name) -> value, or None if it isn't there
RegistryReader = Callable[[str, str], Any]

### Registry hive names (long and short) mapped to their winreg constants
HIVES = {
    "HKEY_CLASSES_ROOT": "HKEY_CLASSES_ROOT",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKEY_CURRENT_USER": "HKEY_CURRENT_USER",
    "HKCU": "HKEY_CURRENT_USER",
    "HKEY_LOCAL_MACHINE": "HKEY_LOCAL_MACHINE",
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKEY_USERS": "HKEY_USERS",
    "HKU": "HKEY_USERS",
    "HKEY_CURRENT_CONFIG": "HKEY_CURRENT_CONFIG",
    "HKCC": "HKEY_CURRENT_CONFIG",
}

###########################################################################

"""

Name: read_registry_value

Function: Read a value from the Windows registry. A missing key or value gives

None. Access denied is left to bubble up as PermissionError so the comparator

can log it.

Arguments: registry_path - full key path, starting with the hive name

            registry_name - name of the value under the key

Returns: The value (str, int, bytes, list...) or None

"""

def read_registry_value(registry_path: str, registry_name: str) -> Any:
    import winreg

    hive_name, _, subkey = registry_path.partition("\\")
    constant = HIVES.get(hive_name.upper())
    ### An unknown hive can't hold anything
    if constant is None:
        logger.warning("Unknown registry hive in path: %s", registry_path)
        return None
    try:
        with winreg.OpenKey(getattr(winreg, constant), subkey) as key:
            value, _value_type = winreg.QueryValueEx(key, registry_name)
    except FileNotFoundError:
        return None
    return value

#$ End read_registry_value

###########################################################################

"""

Name: normalize_registry_value

Function: Turn a registry value into a string we can compare. REG_BINARY comes

back as bytes and gets written the way regedit exports it: comma-separated

uppercase hex (like "01,0A,FF"). Multi-string values are joined with commas.

Everything else just goes through str().

Arguments: value - the raw registry value

Returns: String version of the value

"""

def normalize_registry_value(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return ",".join(f"{byte:02X}" for byte in value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)

#$ End normalize_registry_value

###########################################################################

"""

Name: RegistryComparator

Function: Does a registry value match what the issue expects? Comparison is

case-insensitive, and ShouldMatch=false flips it. A missing value matches when

the issue expects nothing there. If we aren't allowed to read the key it's

logged and counted as no match.

Arguments: reader - function used to read values (defaults to the real registry)

Returns: No value returned

"""

class RegistryComparator(Comparator):
    def __init__(self, reader: Optional[RegistryReader] = None) -> None:
        self.reader = reader or read_registry_value

    def evaluate(self, issue: RegistryIssue) -> bool:
        try:
            value = self.reader(issue.registry_path, issue.registry_name)
        except PermissionError as exc:
            logger.warning("Unable to access the registry key: %s\\%s", issue.registry_path, issue.registry_name)
            logger.warning("The error message is: %s", exc)
            logger.warning("Is HardenScore being run with the correct permissions?")
            return False

        ### Nothing there: did the issue want nothing there?
        if value is None:
            expected_absent = not issue.registry_value
            return expected_absent if issue.should_match else not expected_absent

        ### A null expected value never equals a value that exists
        if issue.registry_value is None:
            equal = False
        else:
            equal = normalize_registry_value(value).casefold() == issue.registry_value.casefold()
        return equal if issue.should_match else not equal

#$ End RegistryComparator

###########################################################################

"""

Name: VersionComparator

Function: Is the OS the exact version the issue expects? Case-sensitive, no

fuzzy matching. The version is worked out once at startup.

Arguments: os_version - the detected OS version

Returns: No value returned

"""

class VersionComparator(Comparator):
    def __init__(self, os_version: str) -> None:
        self.os_version = os_version

    def evaluate(self, issue: VersionIssue) -> bool:
        return self.os_version == issue.expected

#$ End VersionComparator

###########################################################################

"""

Name: SystemRegistryCheck / SystemVersionCheck

Function: Category checks for "issues.system.registry" and "issues.system.version".

Arguments: None (they're class definitions)

Returns: No value returned

"""

class SystemRegistryCheck(IssueCheck):
    category = SYSTEM_REGISTRY
    title = "Registry Settings"

    def compare(self, context: SweepContext, issue: RegistryIssue) -> bool:
        return context.comparators.registry.evaluate(issue)


class SystemVersionCheck(IssueCheck):
    category = SYSTEM_VERSION
    title = "Operating System Version"

    def compare(self, context: SweepContext, issue: VersionIssue) -> bool:
        return context.comparators.version.evaluate(issue)

#$ End SystemRegistryCheck / SystemVersionCheck
