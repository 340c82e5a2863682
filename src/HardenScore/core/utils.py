# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the utils module. This module will allow the application to:

# 1. Load JSON resources from files

# 2. Read configuration files

# 3. Make random file names for the encrypted issue files

# 4. Walk a directory tree looking for files with a given extension

from __future__ import annotations

import json
import secrets
import string
from pathlib import Path
from typing import Any, Dict, List

### Characters allowed in a randomly generated file name
_NAME_ALPHABET = string.ascii_letters + string.digits

###########################################################################

"""

Name: load_json_resource

Function: Load a JSON file from a path and return the parsed data. Simple

and straightforward - just opens the file and parses it.

Arguments: path - path to the JSON file to load

Returns: Dictionary containing the parsed JSON data

"""

def load_json_resource(path: Path) -> Dict[str, Any]:
    ### Open the file and load the JSON
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)

#$ End load_json_resource

###########################################################################

"""

Name: read_config

Function: Read a configuration file from a path. If no path is provided,

return an empty dict. If the file doesn't exist, raise an error.

Arguments: path - optional path to the config file

Returns: Dictionary containing the parsed config data

"""

def read_config(path: Path | None) -> Dict[str, Any]:
    ### If no path provided, return empty config
    if path is None:
        return {}
    ### If the file doesn't exist, complain loudly
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    ### Load and return the JSON config
    return load_json_resource(path)

#$ End read_config

###########################################################################

"""

Name: random_name

Function: Make a random alphanumeric name. The encrypted issue files get one of

these so their names don't give away what's inside them.

Arguments: length - how many characters we want (defaults to 8)

Returns: A random string of letters and digits

"""

def random_name(length: int = 8) -> str:
    return "".join(secrets.choice(_NAME_ALPHABET) for _ in range(length))

#$ End random_name

###########################################################################

"""

Name: find_files

Function: Recursively find every file under a directory with the given

extension, sorted so the load order is the same every run.

Arguments: root - directory to search

            extension - file extension including the dot (like ".json")

Returns: Sorted list of file paths (empty if the directory doesn't exist)

"""

def find_files(root: Path, extension: str) -> List[Path]:
    ### No directory, no files
    if not root.is_dir():
        return []
    ### rglob walks all the subdirectories for us
    return sorted(path for path in root.rglob(f"*{extension}") if path.is_file())

#$ End find_files
