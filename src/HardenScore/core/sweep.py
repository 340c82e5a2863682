# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the sweep module. This module will allow the application to:

# 1. Run one scoring sweep over every category check

# 2. Work through the program modes (lint, observe, prepare, start) in order

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from .base import CheckRegistry, IssueCheck, SweepContext
from .config import EngineConfig, ProgramMode
from .ledger import ScoringLedger
from .store import IssueStore

if TYPE_CHECKING:
    from HardenScore.checks.base import ComparatorSet

logger = logging.getLogger(__name__)

###########################################################################

"""

Name: run_sweep

Function: One full scoring pass. The ledger is reset, then every check scores

its category. Only one sweep may run at a time on the same context.

Arguments: context - the SweepContext

            checks - category checks to run, in order

Returns: The ScoringLedger, filled in

"""

def run_sweep(context: SweepContext, checks: List[IssueCheck]) -> ScoringLedger:
    context.ledger.reset()
    for check in checks:
        check.perform(context)
    return context.ledger

#$ End run_sweep

###########################################################################

"""

Name: Engine

Function: Owns the store, the ledger and the comparators for the life of the

process, and works out what to do for the current program mode.

Arguments: config - EngineConfig (OS details must already be filled in)

            comparators - ComparatorSet to use (built from the OS if left out)

            registry - CheckRegistry to use (the built-in checks if left out)

Returns: No value returned

"""

class Engine:
    def __init__(
        self,
        config: EngineConfig,
        comparators: Optional["ComparatorSet"] = None,
        registry: Optional[CheckRegistry] = None,
    ) -> None:
        from HardenScore.checks import builtin_checks
        from HardenScore.checks.factory import comparators_for

        self.config = config
        self.store = IssueStore(config)
        self.ledger = ScoringLedger()
        ### Picked once, so an unsupported OS fails right here
        if comparators is None:
            comparators = comparators_for(config.os_type, config.os_version)
        if registry is None:
            registry = CheckRegistry()
            registry.extend(builtin_checks())
        self.context = SweepContext(store=self.store, ledger=self.ledger, comparators=comparators, config=config)
        self.checks = registry.create_all()
        ### Called with the ledger after every sweep (reports, notifications...)
        self.on_sweep: Optional[Callable[[ScoringLedger], None]] = None
        ### False if linting or preparing went wrong
        self.succeeded = True
        self._loaded = False

    ###########################################################################

    """

    Name: sweep

    Function: Load the issue files (first time only) and run a sweep.

    Arguments: None

    Returns: The ScoringLedger

    """

    def sweep(self) -> ScoringLedger:
        if not self._loaded:
            self.store.load_all()
            self._loaded = True
        ledger = run_sweep(self.context, self.checks)
        if self.on_sweep is not None:
            self.on_sweep(ledger)
        return ledger

#$ End sweep

    ###########################################################################

    """

    Name: perform_tasks

    Function: Do whatever the current mode asks for, once. The run loop keeps

    calling this until it says to stop.

      CHECK   - lint every issue file, stop if any are broken (only done once)

      OBSERVE - run a sweep

      PREPARE - encrypt the issue files, then stop

      START   - run a sweep and keep going

    Arguments: None

    Returns: Boolean - True when the caller should exit

    """

    def perform_tasks(self) -> bool:
        mode = self.config.mode
        logger.debug("Performing tasks for mode: %s", mode)

        if mode & ProgramMode.CHECK:
            logger.info("Performing linting on issue files")
            if not self.store.validate_all():
                logger.error("There was one or more problems linting the issue files")
                logger.error("Please check them and try running HardenScore again")
                self.succeeded = False
                return True
            ### Lint only once per run
            self.config.mode = mode = mode & ~ProgramMode.CHECK
            if not mode & (ProgramMode.OBSERVE | ProgramMode.PREPARE | ProgramMode.START):
                return True

        if mode & (ProgramMode.OBSERVE | ProgramMode.START):
            logger.info("Performing checks")
            self.sweep()

        if mode & ProgramMode.PREPARE:
            logger.info("Preparing for image release")
            self.succeeded = self.store.prepare_all()
            return True

        if mode & ProgramMode.START:
            logger.debug("Running normally, waiting for the next sweep")
            return False

        return True

#$ End perform_tasks

#$ End Engine
