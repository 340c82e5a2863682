# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the issues module. This module will allow the application to:

# 1. Define a typed record for each category of issue (existence, contents, registry, version)

# 2. Define the IssueDocument that groups a category with its list of issues

# 3. Turn parsed JSON into those records, complaining loudly if the shape is wrong

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .errors import IssueFormatError

### The category names used in issue files
FILES_EXISTENCE = "issues.files.existence"
FILES_CONTENTS = "issues.files.contents"
SYSTEM_REGISTRY = "issues.system.registry"
SYSTEM_VERSION = "issues.system.version"

###########################################################################

"""

Name: ExistenceIssue / ContentsIssue / RegistryIssue / VersionIssue

Function: One data class per issue category. They all share points, description

and triggered, and then add whatever the comparator for that category needs.

Arguments: None (they're dataclasses, so they're just fields)

Returns: No value returned (they're class definitions)

"""

@dataclass
class ExistenceIssue:
    ### Positive = reward for fixing, negative = penalty for breaking
    points: int
    ### Shown verbatim in the scoring report
    description: str
    ### File to look for
    path: str
    ### Should the file be there or not?
    file_should_exist: bool
    ### Was this issue satisfied as of the last sweep?
    triggered: bool = False

    @property
    def is_penalty(self) -> bool:
        return self.points <= 0


@dataclass
class ContentsIssue:
    points: int
    description: str
    path: str
    ### Every one of these must appear somewhere in the file
    contents: List[str] = field(default_factory=list)
    triggered: bool = False


@dataclass
class RegistryIssue:
    points: int
    description: str
    ### Full key path, hive included (like HKEY_LOCAL_MACHINE\SOFTWARE\...)
    registry_path: str
    ### Name of the value under the key
    registry_name: str
    ### Expected value (None or "" means "should not be there")
    registry_value: Optional[str]
    ### False flips the comparison ("must NOT equal this")
    should_match: bool = True
    triggered: bool = False


@dataclass
class VersionIssue:
    points: int
    description: str
    ### Exact OS version string we expect
    expected: str
    triggered: bool = False

#$ End ExistenceIssue / ContentsIssue / RegistryIssue / VersionIssue

### Any of the issue records above
Issue = Union[ExistenceIssue, ContentsIssue, RegistryIssue, VersionIssue]

###########################################################################

"""

Name: IssueDocument

Function: A whole issue file once it's been parsed: the category it belongs to

and its issues in file order.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class IssueDocument:
    category: str
    issues: List[Issue] = field(default_factory=list)
    ### Where the document came from (handy for log messages)
    source: Optional[str] = None

#$ End IssueDocument

###########################################################################

"""

Name: _require

Function: Pull a required field out of an issue entry and check its type.

Arguments: entry - the raw issue dictionary

            key - field name in the JSON

            kind - type (or tuple of types) the value must be

            index - position of the entry, for the error message

Returns: The field value

"""

def _require(entry: Mapping[str, Any], key: str, kind: Any, index: int) -> Any:
    ### Field missing altogether
    if key not in entry:
        raise IssueFormatError(f"Issue {index} is missing the '{key}' field")
    value = entry[key]
    ### bool is an int in Python, so don't let True sneak in as points
    if kind is int and isinstance(value, bool):
        raise IssueFormatError(f"Issue {index} field '{key}' must be an integer")
    if not isinstance(value, kind):
        raise IssueFormatError(f"Issue {index} field '{key}' has the wrong type ({type(value).__name__})")
    return value

#$ End _require

###########################################################################

"""

Name: _common_fields

Function: Read the fields every issue has: Points, Description and Triggered.

Zero points are rejected because they can never score anything.

Arguments: entry - the raw issue dictionary

            index - position of the entry, for the error message

Returns: Dictionary of keyword arguments for the record constructor

"""

def _common_fields(entry: Mapping[str, Any], index: int) -> Dict[str, Any]:
    points = _require(entry, "Points", int, index)
    if points == 0:
        raise IssueFormatError(f"Issue {index} must be worth a non-zero number of points")
    triggered = entry.get("Triggered", False)
    if not isinstance(triggered, bool):
        raise IssueFormatError(f"Issue {index} field 'Triggered' must be true or false")
    return {
        "points": points,
        "description": _require(entry, "Description", str, index),
        "triggered": triggered,
    }

#$ End _common_fields

###########################################################################

"""

Name: _parse_existence / _parse_contents / _parse_registry / _parse_version

Function: Build the typed record for one issue entry of each category.

Arguments: entry - the raw issue dictionary

            index - position of the entry, for the error message

Returns: The typed issue record

"""

def _parse_existence(entry: Mapping[str, Any], index: int) -> ExistenceIssue:
    return ExistenceIssue(
        path=_require(entry, "Path", str, index),
        file_should_exist=_require(entry, "FileShouldExist", bool, index),
        **_common_fields(entry, index),
    )


def _parse_contents(entry: Mapping[str, Any], index: int) -> ContentsIssue:
    contents = _require(entry, "Contents", list, index)
    ### Every expected snippet must be a string
    if not all(isinstance(item, str) for item in contents):
        raise IssueFormatError(f"Issue {index} field 'Contents' must be a list of strings")
    return ContentsIssue(
        path=_require(entry, "Path", str, index),
        contents=list(contents),
        **_common_fields(entry, index),
    )


def _parse_registry(entry: Mapping[str, Any], index: int) -> RegistryIssue:
    ### RegistryValue may be null (meaning "the value should be absent")
    value = entry.get("RegistryValue")
    if value is not None and not isinstance(value, str):
        raise IssueFormatError(f"Issue {index} field 'RegistryValue' must be a string or null")
    should_match = entry.get("ShouldMatch", True)
    if not isinstance(should_match, bool):
        raise IssueFormatError(f"Issue {index} field 'ShouldMatch' must be true or false")
    return RegistryIssue(
        registry_path=_require(entry, "RegistryPath", str, index),
        registry_name=_require(entry, "RegistryName", str, index),
        registry_value=value,
        should_match=should_match,
        **_common_fields(entry, index),
    )


def _parse_version(entry: Mapping[str, Any], index: int) -> VersionIssue:
    return VersionIssue(
        expected=_require(entry, "Expected", str, index),
        **_common_fields(entry, index),
    )

#$ End _parse_existence / _parse_contents / _parse_registry / _parse_version

### Which parser handles which category
PARSERS: Dict[str, Callable[[Mapping[str, Any], int], Issue]] = {
    FILES_EXISTENCE: _parse_existence,
    FILES_CONTENTS: _parse_contents,
    SYSTEM_REGISTRY: _parse_registry,
    SYSTEM_VERSION: _parse_version,
}

###########################################################################

"""

Name: parse_document

Function: Turn a parsed JSON object into an IssueDocument. The Category string

picks which record type every entry in Issues becomes.

Arguments: data - the parsed JSON (should be a dict)

            source - where it came from, for log messages

Returns: IssueDocument with typed issues

"""

def parse_document(data: Any, source: Optional[str] = None) -> IssueDocument:
    ### The top level has to be an object
    if not isinstance(data, dict):
        raise IssueFormatError("An issue file must contain a JSON object")
    category = data.get("Category")
    if not isinstance(category, str) or not category:
        raise IssueFormatError("An issue file must have a 'Category' string")
    ### Only categories we know how to check are allowed
    parser = PARSERS.get(category)
    if parser is None:
        raise IssueFormatError(f"Unknown issue category '{category}'")
    entries = data.get("Issues")
    if not isinstance(entries, list):
        raise IssueFormatError("An issue file must have an 'Issues' list")
    issues: List[Issue] = []
    ### Parse each issue in order
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise IssueFormatError(f"Issue {index} must be a JSON object")
        issues.append(parser(entry, index))
    return IssueDocument(category=category, issues=issues, source=source)

#$ End parse_document
