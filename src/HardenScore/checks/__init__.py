"""Category checks and their OS-specific comparators."""
from __future__ import annotations

from typing import List, Type

from HardenScore.core.base import IssueCheck

from .files import FilesContentsCheck, FilesExistenceCheck
from .system import SystemRegistryCheck, SystemVersionCheck


def builtin_checks() -> List[Type[IssueCheck]]:
    return [
        FilesExistenceCheck,
        FilesContentsCheck,
        SystemRegistryCheck,
        SystemVersionCheck,
    ]
