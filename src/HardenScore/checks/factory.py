# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the comparator factory module. This module will allow the application to:

# 1. Build the right comparators for the operating system we're running on

# 2. Refuse up front when there aren't any for this OS

from __future__ import annotations

from typing import Callable, Dict, Optional

from HardenScore.core.config import OperatingSystemType
from HardenScore.core.errors import UnsupportedPlatformError

from .base import ComparatorSet, UnsupportedComparator
from .files import FileContentsComparator, FileExistenceComparator
from .system import RegistryComparator, RegistryReader, VersionComparator

###########################################################################

"""

Name: _linux_comparators / _winnt_comparators

Function: Build the comparator set for each OS family. Linux has no registry,

so registry issues get a comparator that always says "not supported".

Arguments: os_version - the detected OS version

            registry_reader - optional registry reader (WinNT only)

Returns: ComparatorSet

"""

def _linux_comparators(os_version: str, registry_reader: Optional[RegistryReader]) -> ComparatorSet:
    return ComparatorSet(
        existence=FileExistenceComparator(),
        contents=FileContentsComparator(),
        registry=UnsupportedComparator("This Operating System does not support registry issue checks"),
        version=VersionComparator(os_version),
    )


def _winnt_comparators(os_version: str, registry_reader: Optional[RegistryReader]) -> ComparatorSet:
    return ComparatorSet(
        existence=FileExistenceComparator(),
        contents=FileContentsComparator(),
        registry=RegistryComparator(registry_reader),
        version=VersionComparator(os_version),
    )

#$ End _linux_comparators / _winnt_comparators

### OS family -> builder
BUILDERS: Dict[OperatingSystemType, Callable[[str, Optional[RegistryReader]], ComparatorSet]] = {
    OperatingSystemType.LINUX: _linux_comparators,
    OperatingSystemType.WINNT: _winnt_comparators,
}

###########################################################################

"""

Name: comparators_for

Function: Pick the comparators for an OS. Called once at startup; the result is

handed to every sweep.

Arguments: os_type - the OperatingSystemType we're on

            os_version - the detected OS version

            registry_reader - optional replacement registry reader

Returns: ComparatorSet for that OS

"""

def comparators_for(
    os_type: OperatingSystemType,
    os_version: str,
    registry_reader: Optional[RegistryReader] = None,
) -> ComparatorSet:
    builder = BUILDERS.get(os_type)
    if builder is None:
        raise UnsupportedPlatformError("This Operating System is not supported for issue checks to be performed")
    return builder(os_version, registry_reader)

#$ End comparators_for
