# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the files check module. This module will allow the application to:

# 1. Check whether files exist (or have been removed) as the issue file expects

# 2. Check that files contain every snippet of text the issue file lists

# 3. Score the "issues.files.existence" and "issues.files.contents" categories

from __future__ import annotations

import logging
from pathlib import Path

from HardenScore.core.base import IssueCheck, SweepContext
from HardenScore.core.issues import FILES_CONTENTS, FILES_EXISTENCE, ContentsIssue, ExistenceIssue

from .base import Comparator

logger = logging.getLogger(__name__)

###########################################################################

"""

Name: FileExistenceComparator

Function: Is the file there when it should be (or gone when it shouldn't be)?

There are four cases:

  exists, should exist        -> match

  exists, shouldn't exist     -> no match

  missing, should exist       -> no match

  missing, shouldn't exist    -> match

For a penalty issue the answer is flipped before it gets scored.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class FileExistenceComparator(Comparator):
    def evaluate(self, issue: ExistenceIssue) -> bool:
        ### Only regular files count (a directory with the same name doesn't)
        exists = Path(issue.path).is_file()
        matched = exists == issue.file_should_exist
        if issue.is_penalty:
            return not matched
        return matched

#$ End FileExistenceComparator

###########################################################################

"""

Name: FileContentsComparator

Function: Does the file contain every expected snippet? Plain substring

matching, no regex. A missing file is a no straight away, and so is a file we

aren't allowed to read (that gets logged).

Arguments: None (it's a class definition)

Returns: No value returned

"""

class FileContentsComparator(Comparator):
    def evaluate(self, issue: ContentsIssue) -> bool:
        path = Path(issue.path)
        ### Can't check the contents of a file that isn't there
        if not path.is_file():
            return False
        try:
            text = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.warning("Unable to read the file %s: %s", path, exc)
            return False
        ### Every snippet must be in there somewhere
        return all(snippet in text for snippet in issue.contents)

#$ End FileContentsComparator

###########################################################################

"""

Name: FilesExistenceCheck

Function: Category check for "issues.files.existence".

Arguments: None (it's a class definition)

Returns: No value returned

"""

class FilesExistenceCheck(IssueCheck):
    category = FILES_EXISTENCE
    title = "File Existence"

    def compare(self, context: SweepContext, issue: ExistenceIssue) -> bool:
        return context.comparators.existence.evaluate(issue)

#$ End FilesExistenceCheck

###########################################################################

"""

Name: FilesContentsCheck

Function: Category check for "issues.files.contents".

Arguments: None (it's a class definition)

Returns: No value returned

"""

class FilesContentsCheck(IssueCheck):
    category = FILES_CONTENTS
    title = "File Contents"

    def compare(self, context: SweepContext, issue: ContentsIssue) -> bool:
        return context.comparators.contents.evaluate(issue)

#$ End FilesContentsCheck
