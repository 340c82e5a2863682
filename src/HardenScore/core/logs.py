# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the logs module. This module will allow the application to:

# 1. Send HardenScore's log messages somewhere useful (stderr)

# 2. Pick how chatty the logs are (verbose, normal or quiet)

from __future__ import annotations

import logging
import sys

### Every module logs under this name (logging.getLogger(__name__))
ROOT_LOGGER = "HardenScore"
### Same layout as the rest of our tooling
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

###########################################################################

"""

Name: configure_logging

Function: Attach one stream handler to the HardenScore logger. Calling it again

swaps the handler rather than adding a second one (no doubled log lines).

Arguments: verbose - show debug messages

            quiet - only show warnings and worse

Returns: The configured logger

"""

def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    ### Quiet beats verbose if someone passes both
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    ### Throw away any handler from an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger

#$ End configure_logging
