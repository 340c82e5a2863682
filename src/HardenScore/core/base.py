# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the core base module. This module will allow the application to:

# 1. Define the base class for category checks (one per issue category)

# 2. Manage a registry of all available category checks

# 3. Provide context for a scoring sweep (store, ledger, comparators)

# 4. Turn a comparator's yes/no answer into points and a new triggered flag

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Type

from .config import EngineConfig
from .errors import CheckNotSupportedError
from .issues import Issue
from .ledger import ScoringLedger
from .store import IssueStore

if TYPE_CHECKING:
    from HardenScore.checks.base import ComparatorSet

logger = logging.getLogger(__name__)

###########################################################################

"""

Name: SweepContext

Function: Everything one sweep needs, passed in explicitly rather than hiding

in globals. The caller owns these and makes sure only one sweep runs at a time.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class SweepContext:
    ### The loaded issue documents
    store: IssueStore
    ### Where the points go
    ledger: ScoringLedger
    ### The OS-specific comparators, chosen once at startup
    comparators: "ComparatorSet"
    ### Runtime settings (read only)
    config: EngineConfig

#$ End SweepContext

###########################################################################

"""

Name: settle_issue

Function: Apply the result of one comparison to the ledger and the issue.

  matched, not triggered -> score it and tell the user (newly found)

  matched, triggered     -> score it quietly (still found)

  no match, triggered    -> regression (it was found, now it isn't)

  no match, not triggered -> nothing happened

Arguments: ledger - the ScoringLedger

            issue - the issue that was checked

            matched - what the comparator said

Returns: No value returned

"""

def settle_issue(ledger: ScoringLedger, issue: Issue, matched: bool) -> None:
    if matched:
        ledger.record_outcome(issue.points, issue.description, issue.triggered)
        issue.triggered = True
    elif issue.triggered:
        ledger.record_regression(issue.points, issue.description)
        issue.triggered = False

#$ End settle_issue

###########################################################################

"""

Name: IssueCheck

Function: Base class for the category checks. Each subclass looks after one

issue category and knows which comparator answers its questions.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class IssueCheck:
    """Base class for HardenScore category checks."""

    ### The issue category this check handles (like "issues.files.existence")
    category: str = ""
    ### A human-readable title (used in log messages)
    title: str = ""

    def compare(self, context: SweepContext, issue: Issue) -> bool:
        raise NotImplementedError(f"{type(self).__name__} does not implement compare()")

    ###########################################################################

    """

    Name: perform

    Function: Check every issue in this category against the machine and score

    it. If the comparator says the check can't run on this OS, give up on the

    whole category for this sweep: if it fails once it'll fail for every issue.

    Arguments: context - the SweepContext

    Returns: No value returned

    """

    def perform(self, context: SweepContext) -> None:
        document = context.store.get(self.category)
        ### No issue file for this category, nothing to do
        if document is None:
            logger.debug('Not performing checks for category "%s": no issue file loaded', self.category)
            return
        logger.debug("Performing %s checks for the category %s (from %s)", self.title, self.category, document.source)
        for issue in document.issues:
            ### Only rewards count towards the number of issues to find
            if issue.points > 0:
                context.ledger.track_issue()
            try:
                matched = self.compare(context, issue)
            except CheckNotSupportedError as exc:
                logger.warning("Unable to perform %s check: %s", self.category, exc)
                return
            settle_issue(context.ledger, issue, matched)
        logger.debug("Finished performing checks for the category: %s", self.category)

#$ End perform

#$ End IssueCheck

###########################################################################

"""

Name: CheckRegistry

Function: Keeps track of the category checks, one per category. Registering

the same category twice is a programming mistake, so it raises.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class CheckRegistry:
    def __init__(self) -> None:
        ### category -> IssueCheck class
        self._registry: Dict[str, Type[IssueCheck]] = {}

    def register(self, check_cls: Type[IssueCheck]) -> None:
        category = check_cls.category
        if not category:
            raise ValueError(f"{check_cls.__name__} has no category")
        ### No duplicates allowed
        if category in self._registry:
            raise ValueError(f"Duplicate check for category: {category}")
        self._registry[category] = check_cls

    def extend(self, check_classes: Iterable[Type[IssueCheck]]) -> None:
        for check_cls in check_classes:
            self.register(check_cls)

    def create_all(self) -> List[IssueCheck]:
        ### One fresh instance per registered check, in registration order
        return [cls() for cls in self._registry.values()]

#$ End CheckRegistry
