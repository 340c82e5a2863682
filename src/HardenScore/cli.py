# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the CLI application for HardenScore. This application will allow users to:
# 1. Lint the issue files an instructor has written
# 2. Run the checks once and see the score
# 3. Encrypt the issue files before the image is handed out
# 4. Run on a trainee's machine, re-scoring every so often

from __future__ import annotations  # This lets us use fancy type hints like List[str] | None

import argparse  # For parsing command line arguments (the user's input)
import json  # For making JSON reports (computers love JSON)
import logging  # For telling the instructor what happened
import sys  # System stuff, like exiting the program
import time  # For sleeping between sweeps
from pathlib import Path  # For dealing with file paths in a cool way
from typing import Dict, List  # Type hints so we know what types things are

### Check if we're running as a script (not imported as a module)
if __package__ is None or __package__ == "":  # support running as a script
    # Add the parent directory to the path so Python can find our modules
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
#$ End conditional

### Import all the cool stuff from our HardenScore package
from HardenScore import __version__  # Get the version number (for bragging rights)
from HardenScore.core.config import EngineConfig, ProgramMode, apply_config_file  # Runtime settings
from HardenScore.core.console import emit_summary, set_color_enabled, show_notification  # Pretty output
from HardenScore.core.errors import IssueFileError, UnsupportedPlatformError  # Things that stop the show
from HardenScore.core.ledger import ScoringLedger  # The scoreboard
from HardenScore.core.logs import configure_logging  # Where the log messages go
from HardenScore.core.platform_info import populate_platform  # What machine are we on?
from HardenScore.core.sweep import Engine  # The thing that does the actual work
from HardenScore.core.utils import read_config  # Utility functions

logger = logging.getLogger(__name__)

### Exit codes, so scripts can tell what went wrong
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_UNSUPPORTED_PLATFORM = 10
EXIT_LOAD_FAILED = 20

###########################################################################################################

### The description string that tells people what this tool does
description = f"HardenScore {__version__} - scores how well a machine has been hardened against a set of known issues."

###########################################################################################################

"""

Name: build_parser

Function: Builds the argument parser that handles all the command line options.

Arguments: None

Returns: An ArgumentParser object that knows about all our options

"""

def build_parser() -> argparse.ArgumentParser:
    ### Create the main parser object with our program name and description
    parser = argparse.ArgumentParser(
        prog="hardenscore",
        description=description,
    )

    ### Add the --version flag so users can see what version they're running
    parser.add_argument(
        "--version",
        action="version",
        version=f"HardenScore {__version__}"
    )

    ### The modes (at least one of these is needed)
    parser.add_argument(
        "-c", "--check",
        action="store_true",
        help="Lint all issue files and exit"
    )
    parser.add_argument(
        "-o", "--observe",
        action="store_true",
        help="Run the issue checks once and show the score"
    )
    parser.add_argument(
        "-p", "--prepare",
        action="store_true",
        help="Lint and encrypt the issue files ready for image release"
    )
    parser.add_argument(
        "-s", "--start",
        action="store_true",
        help="Run normally on a prepared image, re-checking every interval"
    )

    ### Where the issue files live
    parser.add_argument(
        "--issues-dir",
        type=Path,
        help="Directory holding the issue files (defaults to ./Issues)"
    )

    ### Allow users to provide a config file for settings
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON configuration file"
    )

    ### How long to wait between sweeps
    parser.add_argument(
        "--interval",
        type=int,
        help="Seconds between checks when started (defaults to 60)"
    )

    ### Option to save the score summary to a file
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the score summary to file after every check"
    )

    ### Choose between text and JSON format (JSON is for machines, text is for humans)
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format for the score summary (defaults to text)",
    )

    ### Disable colors for people who don't like pretty things
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors"
    )

    ### Chattiness
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors, and don't print the summary"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages"
    )

    # Return the parser so we can use it to parse arguments
    return parser

#$ End build_parser

###########################################################################################################

"""

Name: resolve_mode

Function: Turn the mode flags into ProgramMode flags. Preparing and starting

always lint the issue files first.

Arguments: args - the parsed arguments

Returns: ProgramMode (HELP if nothing was asked for)

"""

def resolve_mode(args: argparse.Namespace) -> ProgramMode:
    mode = ProgramMode.HELP
    if args.check:
        mode |= ProgramMode.CHECK
    if args.observe:
        mode |= ProgramMode.OBSERVE
    if args.prepare:
        mode |= ProgramMode.CHECK | ProgramMode.PREPARE
    if args.start:
        mode |= ProgramMode.CHECK | ProgramMode.START
    return mode

#$ End resolve_mode

###########################################################################################################

"""

Name: build_config

Function: Put together the EngineConfig from the config file and the command

line (the command line wins).

Arguments: args - the parsed arguments

            parser - the parser (so we can complain nicely)

Returns: EngineConfig

"""

def build_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> EngineConfig:
    config = EngineConfig(mode=resolve_mode(args))

    ### If user provided a config file, try to read it
    if args.config:
        try:
            apply_config_file(config, read_config(args.config))
        except FileNotFoundError as exc:
            # Oops, file not found! Tell the user and exit
            parser.error(str(exc))
        except (ValueError, TypeError) as exc:
            parser.error(f"Invalid config file {args.config}: {exc}")
#$ End conditional

    ### Command line overrides
    if args.issues_dir:
        config.issues_dir = args.issues_dir.expanduser()
    if args.interval is not None:
        config.interval = args.interval
    if args.output:
        config.report_path = args.output.expanduser()
    return config

#$ End build_config

###########################################################################################################

"""

Name: main

Function: The main driver function. Works out the mode, checks the platform,

then keeps the engine running until it says it's done.

Arguments: argv - Optional list of command line arguments (None means use sys.argv)

Returns: Integer exit code (0 for success, non-zero for errors)

"""

def main(argv: List[str] | None = None) -> int:
    ### Build the parser and parse the arguments from the command line
    parser = build_parser()
    args = parser.parse_args(argv)

    ### Nothing asked for? Show the help and bail
    if resolve_mode(args) == ProgramMode.HELP:
        parser.print_help()
        return EXIT_USAGE
#$ End conditional

    configure_logging(verbose=args.verbose, quiet=args.quiet)
    if args.no_color:
        set_color_enabled(False)

    config = build_config(args, parser)

    ### Work out what we're running on and get the engine ready
    try:
        populate_platform(config)
        engine = Engine(config)
    except UnsupportedPlatformError as exc:
        logger.critical("An error occurred trying to start HardenScore: %s", exc)
        return EXIT_UNSUPPORTED_PLATFORM
#$ End try

    ### After every sweep: notify, summarise, and write the report if asked
    engine.on_sweep = lambda ledger: after_sweep(ledger, config, args.format, args.quiet)

    ### The main run loop
    try:
        while not engine.perform_tasks():
            logger.debug("Sleeping main run loop before re-running tasks")
            time.sleep(config.interval)
#$ End iteration
    except IssueFileError as exc:
        logger.critical("An error occurred trying to run HardenScore: %s", exc)
        return EXIT_LOAD_FAILED
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping")
#$ End try

    logger.info("HardenScore has finished performing any needed tasks")
    return EXIT_OK if engine.succeeded else EXIT_USAGE

#$ End main

###########################################################################################################

"""

Name: after_sweep

Function: Everything that happens once a sweep is done: tell the trainee if

their score changed, print the summary, and write the report file.

Arguments: ledger - the ScoringLedger after the sweep

           config - the EngineConfig (for report_path)

           fmt - report format ("json" or "text")

           quiet - don't print anything

Returns: No value returned

"""

def after_sweep(ledger: ScoringLedger, config: EngineConfig, fmt: str, quiet: bool) -> None:
    if not quiet:
        show_notification(ledger)
        emit_summary(ledger)
    if config.report_path is not None:
        write_report(ledger, config.report_path, fmt)

#$ End after_sweep

###########################################################################################################

"""

Name: build_report

Function: Turn the ledger into a report dictionary.

Arguments: ledger - the ScoringLedger after a sweep

Returns: Dictionary containing the report

"""

def build_report(ledger: ScoringLedger) -> Dict[str, object]:
    return {
        "tool": "HardenScore",  # Who we are
        "version": __version__,  # What version we are
        "score": ledger.to_dict(),  # The numbers and descriptions
    }

#$ End build_report

###########################################################################################################

"""

Name: write_report

Function: Writes the score report to a file in the specified format (JSON or text).

Arguments: ledger - the ScoringLedger to report on

           path - Where to write the file

           fmt - Format to use ("json" or "text")

Returns: No value returned

"""

def write_report(ledger: ScoringLedger, path: Path, fmt: str) -> None:
    report = build_report(ledger)
    ### Check what format the user wants
    if fmt == "json":
        payload = json.dumps(report, indent=2)
    else:
        payload = render_text_report(report)
#$ End conditional

    ### Make sure the directory exists (create it if it doesn't)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload + "\n", encoding="utf-8")

#$ End write_report

###########################################################################################################

"""

Name: render_text_report

Function: Converts the report dictionary into a human-readable text format.

Arguments: report - The report dictionary to render

Returns: String containing the formatted text report

"""

def render_text_report(report: Dict[str, object]) -> str:
    score = report.get("score", {})
    lines = [f"HardenScore v{report['version']}"]
    lines.append(
        f"Score -> total: {score.get('points_total', 0)}, gained: {score.get('points_gained', 0)}, lost: {score.get('points_lost', 0)}"
    )

    ### Issues fixed
    lines.append("")
    lines.append(f"{score.get('issues_solved', 0)} out of {score.get('issues_total', 0)} scored security issues fixed")
    for entry in score.get("gained", []):
        lines.append(f"    + {entry}")
#$ End iteration

    ### Penalties
    lines.append("")
    lines.append(f"{score.get('penalties', 0)} penalties assessed")
    for entry in score.get("lost", []):
        lines.append(f"    - {entry}")
#$ End iteration

    return "\n".join(lines)

#$ End render_text_report

###########################################################################################################

### This is the entry point when running the script directly
if __name__ == "__main__":
    sys.exit(main())
