# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the console module. This module will allow the application to:

# 1. Colour terminal output (when the terminal can cope with it)

# 2. Show the trainee a notification when their score changes

# 3. Print a one-line score summary after a sweep

from __future__ import annotations

import os
import sys
from typing import Optional

from .ledger import ScoringLedger, notification_kind

###########################################################################

"""

Name: Palette

Function: ANSI escape codes for the colours we use.

Arguments: None (it's a class with constants)

Returns: No value returned

"""

class Palette:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

#$ End Palette

###########################################################################

"""

Name: supports_color

Function: Is this stream a real terminal that isn't "dumb"? Pipes and files get

plain text.

Arguments: stream - the output stream to check (defaults to stdout)

Returns: Boolean - True if colours will render

"""

def supports_color(stream: object = sys.stdout) -> bool:
    return hasattr(stream, "isatty") and stream.isatty() and os.environ.get("TERM", "") != "dumb"

#$ End supports_color

### Decided once at import, can be switched off with --no-color
ENABLE_COLOR = supports_color()

###########################################################################

"""

Name: apply_color / set_color_enabled

Function: Wrap text in colour codes (or don't, if colour is off), and switch

colour on or off for the whole program.

Arguments: text - the string to colour, *codes - Palette codes / enabled - on or off

Returns: The (maybe) coloured string / nothing

"""

def apply_color(text: str, *codes: str) -> str:
    if not text or not ENABLE_COLOR:
        return text
    return "".join(codes) + text + Palette.RESET


def set_color_enabled(enabled: bool) -> None:
    global ENABLE_COLOR
    ENABLE_COLOR = enabled

#$ End apply_color / set_color_enabled

### What to tell the trainee for each kind of change
NOTIFICATIONS = {
    "gained": ("You have gained points!", Palette.GREEN),
    "lost": ("You have lost points!", Palette.RED),
    "changed": ("Your score has changed, points were gained and lost.", Palette.YELLOW),
}

###########################################################################

"""

Name: notification_message

Function: The message (already coloured) to show for the ledger's change flags.

Arguments: ledger - the ScoringLedger after a sweep

Returns: The message, or None if the score didn't change

"""

def notification_message(ledger: ScoringLedger) -> Optional[str]:
    kind = notification_kind(ledger)
    if kind is None:
        return None
    text, colour = NOTIFICATIONS[kind]
    return apply_color(f"[HardenScore] {text}", colour, Palette.BOLD)

#$ End notification_message

###########################################################################

"""

Name: show_notification / emit_summary

Function: Print the notification (if there is one) and the score summary line.

Arguments: ledger - the ScoringLedger after a sweep

Returns: No value returned

"""

def show_notification(ledger: ScoringLedger) -> None:
    message = notification_message(ledger)
    if message is not None:
        print(message)


def emit_summary(ledger: ScoringLedger) -> None:
    line = (
        f"Summary -> score={ledger.points_total} gained={ledger.points_gained_total} "
        f"lost={abs(ledger.points_lost_total)} solved={ledger.issues_solved}/{ledger.total_issues}"
    )
    print(apply_color(line, Palette.BOLD))

#$ End show_notification / emit_summary
