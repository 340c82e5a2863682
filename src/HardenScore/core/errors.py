# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the errors module. This module will allow the application to:

# 1. Define one base exception that everything in HardenScore raises from

# 2. Tell apart "skip this file" problems from "stop everything" problems

from __future__ import annotations

###########################################################################

"""

Name: HardenScoreError

Function: The base class for every error raised by HardenScore. Catch this one

if you just want to know "did HardenScore complain?".

Arguments: None (it's a class definition)

Returns: No value returned

"""

class HardenScoreError(Exception):
    """Base class for HardenScore errors."""

#$ End HardenScoreError

###########################################################################

"""

Name: IssueFormatError

Function: Raised when an issue document parses as JSON but doesn't look like

an issue document (missing Category, wrong field types, zero points...).

Arguments: None (it's a class definition)

Returns: No value returned

"""

class IssueFormatError(HardenScoreError):
    """An issue document has the wrong shape."""

#$ End IssueFormatError

###########################################################################

"""

Name: IssueFileError

Function: Raised when an issue file can't be loaded at all. This one is fatal

for the whole load, because a broken document format means the answer key is

broken, not just one file.

Arguments: path - the file that broke, message - what went wrong

Returns: No value returned

"""

class IssueFileError(HardenScoreError):
    def __init__(self, path: object, message: str) -> None:
        ### Keep the path around so callers can point at the guilty file
        self.path = path
        super().__init__(f"Unable to load issue file {path}: {message}")

#$ End IssueFileError

###########################################################################

"""

Name: DuplicateCategoryError

Function: Raised when a second document tries to claim a category that is

already registered. The first one always wins.

Arguments: category - the category that was already taken

Returns: No value returned

"""

class DuplicateCategoryError(HardenScoreError):
    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f'An issue file with a category of "{category}" already exists... skipping adding')

#$ End DuplicateCategoryError

###########################################################################

"""

Name: EncryptionError / DecryptionError

Function: Raised when an issue document can't be encrypted for deployment or

decrypted on the trainee machine (wrong machine, corrupted file, etc.).

Arguments: None (they're class definitions)

Returns: No value returned

"""

class EncryptionError(HardenScoreError):
    """An issue document could not be encrypted."""


class DecryptionError(HardenScoreError):
    """An issue document could not be decrypted."""

#$ End EncryptionError / DecryptionError

###########################################################################

"""

Name: CheckNotSupportedError

Function: Raised by a comparator when its check can't run on the current OS

(like registry checks on Linux, which has no registry).

Arguments: None (it's a class definition)

Returns: No value returned

"""

class CheckNotSupportedError(HardenScoreError):
    """A check cannot be performed on this operating system."""

#$ End CheckNotSupportedError

###########################################################################

"""

Name: UnsupportedPlatformError

Function: Raised when HardenScore has no comparators at all for the operating

system it's running on.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class UnsupportedPlatformError(HardenScoreError):
    """No comparators exist for this operating system."""

#$ End UnsupportedPlatformError
