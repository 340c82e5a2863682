# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the config module. This module will allow the application to:

# 1. Define the program modes HardenScore can run in (check, prepare, observe, start)

# 2. Define the operating systems we know how to check

# 3. Hold all the runtime settings in one place (EngineConfig)

# 4. Merge settings from a JSON config file with the command line

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

### Where the issue files live if nobody tells us otherwise
DEFAULT_ISSUES_DIR = Path("Issues")
### How long to wait between sweeps when running normally (seconds)
DEFAULT_INTERVAL = 60

###########################################################################

"""

Name: ProgramMode

Function: Flags describing what HardenScore has been asked to do. More than one

can be switched on at once (prepare always lints first, for example).

Arguments: None (it's an enum)

Returns: No value returned

"""

class ProgramMode(enum.Flag):
    HELP = 0
    ### Lint every issue file and bail if any are broken
    CHECK = enum.auto()
    ### Encrypt the issue files ready for the image to be released
    PREPARE = enum.auto()
    ### Run the checks once and report
    OBSERVE = enum.auto()
    ### Run normally on the trainee machine (issue files are encrypted)
    START = enum.auto()

#$ End ProgramMode

###########################################################################

"""

Name: OperatingSystemType

Function: The operating system families that HardenScore knows how to check.

Arguments: None (it's an enum)

Returns: No value returned

"""

class OperatingSystemType(enum.Enum):
    UNKNOWN = "unknown"
    LINUX = "linux"
    WINNT = "winnt"

#$ End OperatingSystemType

###########################################################################

"""

Name: EngineConfig

Function: A data class that holds everything the engine needs to know about

the machine and how it's been asked to run. It's filled in once at startup

and the core only ever reads from it.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class EngineConfig:
    ### What we've been asked to do
    mode: ProgramMode = ProgramMode.HELP
    ### Which OS family we're on
    os_type: OperatingSystemType = OperatingSystemType.UNKNOWN
    ### Human readable OS name (like "Ubuntu jammy")
    os_name: str = ""
    ### The OS version, captured once at startup
    os_version: str = ""
    ### Root directory holding the issue files
    issues_dir: Path = DEFAULT_ISSUES_DIR
    ### The machine name the encryption key is derived from (None = this machine)
    machine_name: Optional[str] = None
    ### Seconds to sleep between sweeps in start mode
    interval: int = DEFAULT_INTERVAL
    ### Where to write the scoring summary, if anywhere
    report_path: Optional[Path] = None

    ###########################################################################

    """

    Name: requires_decryption

    Function: Are the issue files encrypted in the current mode? Only a machine

    that's been started for real reads the encrypted artifacts.

    Arguments: None

    Returns: Boolean - True if issue files need decrypting

    """

    @property
    def requires_decryption(self) -> bool:
        return bool(self.mode & ProgramMode.START)

#$ End requires_decryption

#$ End EngineConfig

###########################################################################

"""

Name: apply_config_file

Function: Copy settings from a parsed JSON config file onto an EngineConfig.

Unknown keys are ignored so old config files keep working.

Arguments: engine_config - the EngineConfig to update

            values - dictionary from the JSON config file

Returns: The same EngineConfig, updated

"""

def apply_config_file(engine_config: EngineConfig, values: Dict[str, Any]) -> EngineConfig:
    ### Issue directory, with ~ expanded
    if values.get("issues_dir"):
        engine_config.issues_dir = Path(values["issues_dir"]).expanduser()
    ### Sleep interval between sweeps
    if values.get("interval") is not None:
        engine_config.interval = int(values["interval"])
    ### Where the report should go
    if values.get("report"):
        engine_config.report_path = Path(values["report"]).expanduser()
    ### Mostly useful for testing an image on another box
    if values.get("machine_name"):
        engine_config.machine_name = str(values["machine_name"])
    return engine_config

#$ End apply_config_file
