# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the comparator base module. This module will allow the application to:

# 1. Define the comparator interface (one yes/no question about the machine)

# 2. Group one comparator per category into a set for the current OS

# 3. Stand in for checks an OS can't do (like registry checks on Linux)

from __future__ import annotations

from dataclasses import dataclass

from HardenScore.core.errors import CheckNotSupportedError
from HardenScore.core.issues import Issue

###########################################################################

"""

Name: Comparator

Function: Answers one question: does the machine currently look the way this

issue says it should?

Arguments: None (it's a class definition)

Returns: No value returned

"""

class Comparator:
    """Compares live system state with one issue."""

    def evaluate(self, issue: Issue) -> bool:
        raise NotImplementedError

#$ End Comparator

###########################################################################

"""

Name: UnsupportedComparator

Function: The comparator an OS gets for a category it can't check. Every call

raises CheckNotSupportedError, which the category check catches once and then

skips the rest of the category.

Arguments: reason - why the check can't run

Returns: No value returned

"""

class UnsupportedComparator(Comparator):
    def __init__(self, reason: str) -> None:
        self.reason = reason

    def evaluate(self, issue: Issue) -> bool:
        raise CheckNotSupportedError(self.reason)

#$ End UnsupportedComparator

###########################################################################

"""

Name: ComparatorSet

Function: One comparator per issue category, all for the same OS. Built once at

startup by the factory and handed to every sweep.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class ComparatorSet:
    existence: Comparator
    contents: Comparator
    registry: Comparator
    version: Comparator

#$ End ComparatorSet
