# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the ledger module. This module will allow the application to:

# 1. Keep a running tally of points gained and lost during a sweep

# 2. Remember a description for every scoring issue (for the scoring report)

# 3. Flag whether points were gained and/or lost, so the user can be told

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

###########################################################################

"""

Name: PointsStatus

Function: Flags saying what happened to the score this sweep. Points can be

gained and lost in the same sweep, so both can be set at once.

Arguments: None (it's an enum)

Returns: No value returned

"""

class PointsStatus(enum.Flag):
    UNCHANGED = 0
    GAINED = enum.auto()
    LOST = enum.auto()

#$ End PointsStatus

###########################################################################

"""

Name: ScoringLedger

Function: The scoreboard for one sweep. It's reset before the sweep, every

category check writes into it, and the reporting bits read it afterwards.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class ScoringLedger:
    ###########################################################################

    """

    Name: __init__

    Function: Start with an empty scoreboard.

    Arguments: None

    Returns: No value returned

    """

    def __init__(self) -> None:
        self.total_issues = 0
        self.points_gained_total = 0
        self.points_gained_descriptions: List[str] = []
        self.points_lost_total = 0
        self.points_lost_descriptions: List[str] = []
        self.status = PointsStatus.UNCHANGED

#$ End __init__

    ###########################################################################

    """

    Name: reset

    Function: Wipe the scoreboard clean ready for the next sweep. Calling it twice

    in a row is harmless.

    Arguments: None

    Returns: No value returned

    """

    def reset(self) -> None:
        ### Clear both change flags
        self.status = PointsStatus.UNCHANGED
        ### Zero the totals
        self.points_gained_total = 0
        self.points_lost_total = 0
        ### Forget the descriptions
        self.points_gained_descriptions.clear()
        self.points_lost_descriptions.clear()
        ### Issues get counted again as the sweep goes
        self.total_issues = 0

#$ End reset

    ### The name the run loop knows it by
    reset_scoring_data = reset

    ###########################################################################

    """

    Name: track_issue

    Function: Count one more issue that can be found (one with positive points).

    Arguments: None

    Returns: No value returned

    """

    def track_issue(self) -> None:
        self.total_issues += 1

#$ End track_issue

    ###########################################################################

    """

    Name: record_outcome

    Function: Score an issue whose check matched. Double negatives apply: positive

    points are a gain, negative points are a penalty. The change flag is only set

    when the issue wasn't already triggered, so the user isn't told about the same

    fix every single sweep.

    Arguments: points - points for the issue (signed)

            description - issue description

            was_triggered - True if this issue matched last sweep too

    Returns: No value returned

    """

    def record_outcome(self, points: int, description: str, was_triggered: bool) -> None:
        ### Zero points can't score anything
        if points == 0:
            return
        status = PointsStatus.GAINED if points > 0 else PointsStatus.LOST
        ### Only a fresh change is worth telling anyone about
        if not was_triggered:
            self.status |= status
            self._log_change(points, status, description)
        ### Update the right total and description list
        entry = f"{description} - {abs(points)} points"
        if points > 0:
            self.points_gained_total += points
            self.points_gained_descriptions.append(entry)
        else:
            self.points_lost_total += points
            self.points_lost_descriptions.append(entry)

#$ End record_outcome

    ###########################################################################

    """

    Name: record_regression

    Function: Flag an issue that matched last sweep but doesn't any more. This is

    backwards compared to record_outcome: breaking a fix loses points, while a

    penalty that no longer applies gains them. No totals change here because the

    issue simply isn't scored this sweep.

    Arguments: points - points for the issue (signed)

            description - issue description

    Returns: No value returned

    """

    def record_regression(self, points: int, description: str) -> None:
        if points == 0:
            return
        status = PointsStatus.GAINED if points < 0 else PointsStatus.LOST
        self.status |= status
        self._log_change(points, status, description)

#$ End record_regression

    @staticmethod
    def _log_change(points: int, status: PointsStatus, description: str) -> None:
        ### e.g. "5 points have been lost: Guest account enabled"
        logger.info("%d points have been %s: %s", abs(points), status.name.lower(), description)

    ###########################################################################

    """

    Name: points_total / issues_solved

    Function: Handy numbers for the report: the overall score and how many issues

    have been fixed this sweep.

    Arguments: None

    Returns: Integer

    """

    @property
    def points_total(self) -> int:
        return self.points_gained_total + self.points_lost_total

    @property
    def issues_solved(self) -> int:
        return len(self.points_gained_descriptions)

#$ End points_total / issues_solved

    ###########################################################################

    """

    Name: to_dict

    Function: Snapshot of the scoreboard as plain data (for JSON reports).

    Arguments: None

    Returns: Dictionary of the ledger values

    """

    def to_dict(self) -> Dict[str, object]:
        return {
            "points_gained": self.points_gained_total,
            "points_lost": abs(self.points_lost_total),
            "points_total": self.points_total,
            "issues_solved": self.issues_solved,
            "issues_total": self.total_issues,
            "penalties": len(self.points_lost_descriptions),
            "gained": list(self.points_gained_descriptions),
            "lost": list(self.points_lost_descriptions),
            "status": notification_kind(self) or "unchanged",
        }

#$ End to_dict

#$ End ScoringLedger

###########################################################################

"""

Name: notification_kind

Function: Decide what sort of notification the user should get after a sweep.

Arguments: ledger - the ScoringLedger after the sweep

Returns: "gained", "lost", "changed" (both), or None when nothing happened

"""

def notification_kind(ledger: ScoringLedger) -> Optional[str]:
    gained = bool(ledger.status & PointsStatus.GAINED)
    lost = bool(ledger.status & PointsStatus.LOST)
    ### Both at once
    if gained and lost:
        return "changed"
    if gained:
        return "gained"
    if lost:
        return "lost"
    ### Nothing to say
    return None

#$ End notification_kind
