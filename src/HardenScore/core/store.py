# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the store module. This module will allow the application to:

# 1. Find every issue file under the issues directory

# 2. Lint (validate) issue files before they are used

# 3. Load issue files into memory, keyed by their category

# 4. Encrypt the issue files ready for the image to be handed out

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import EngineConfig
from .encryption import decrypt_text, encrypt_text
from .errors import (
    DecryptionError,
    DuplicateCategoryError,
    EncryptionError,
    IssueFileError,
    IssueFormatError,
)
from .issues import IssueDocument, parse_document
from .utils import find_files, random_name

logger = logging.getLogger(__name__)

### Extension for issue files while they're being written (readable JSON)
PLAINTEXT_EXTENSION = ".json"
### Extension for the encrypted issue files shipped on the image
ENCRYPTED_EXTENSION = ".issue"

###########################################################################

"""

Name: IssueStore

Function: Holds every loaded issue document, one per category. It's the only

thing that reads issue files from disk, and the only thing that encrypts them.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class IssueStore:
    ###########################################################################

    """

    Name: __init__

    Function: Set up an empty store for the given configuration.

    Arguments: config - EngineConfig (issues_dir, mode and machine_name are used)

    Returns: No value returned

    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        ### category -> IssueDocument
        self._documents: Dict[str, IssueDocument] = {}
        ### Set once validate_all has passed
        self._validated = False

#$ End __init__

    @property
    def root(self) -> Path:
        return self.config.issues_dir

    @property
    def extension(self) -> str:
        ### A started machine only has the encrypted files
        return ENCRYPTED_EXTENSION if self.config.requires_decryption else PLAINTEXT_EXTENSION

    ###########################################################################

    """

    Name: issue_files

    Function: Every issue file for the current mode, found recursively under the

    issues directory.

    Arguments: None

    Returns: Sorted list of paths

    """

    def issue_files(self) -> List[Path]:
        return find_files(self.root, self.extension)

#$ End issue_files

    ###########################################################################

    """

    Name: _read

    Function: Read an issue file's text, decrypting it first if we're running on

    the trainee machine.

    Arguments: path - the issue file

    Returns: The document text (JSON)

    """

    def _read(self, path: Path) -> str:
        content = path.read_text(encoding="utf-8")
        if self.config.requires_decryption:
            return decrypt_text(content, self.config.machine_name)
        return content

#$ End _read

    ###########################################################################

    """

    Name: validate

    Function: Lint one issue file: can it be read, parsed and turned into typed

    issues? Problems are logged with the path, never raised, so the caller can

    carry on with the rest of the files.

    Arguments: path - the issue file to lint

    Returns: Boolean - True if the file is fine (or will be skipped when loading)

    """

    def validate(self, path: Path) -> bool:
        try:
            text = self._read(path)
        except DecryptionError as exc:
            ### Loading skips files that won't decrypt, so linting does too
            logger.error('The issue file at "%s" could not be decrypted and will be skipped', path)
            logger.error("The error message is: %s", exc)
            return True
        except (OSError, UnicodeDecodeError) as exc:
            logger.error('The issue file at "%s" could not be linted correctly', path)
            logger.error("The error message is: %s", exc)
            return False
        try:
            parse_document(json.loads(text), source=str(path))
        except (RecursionError, json.JSONDecodeError, IssueFormatError) as exc:
            ### Something's wrong with this one, tell the user which and why
            logger.error('The issue file at "%s" could not be linted correctly', path)
            logger.error("The error message is: %s", exc)
            return False
        logger.debug('The issue file at "%s" was linted correctly', path)
        return True

#$ End validate

    ###########################################################################

    """

    Name: validate_all

    Function: Lint every issue file. Every file is checked even after a failure so

    the user sees all the problems in one go.

    Arguments: None

    Returns: Boolean - True only if every file linted cleanly

    """

    def validate_all(self) -> bool:
        logger.info("Preparing to lint all issue files")
        ok = True
        for path in self.issue_files():
            logger.debug("Preparing to lint issue file located at: %s", path)
            if not self.validate(path):
                ok = False
        logger.info("Finished linting all issue files")
        logger.debug("Successful linting of all issue files: %s", ok)
        self._validated = ok
        return ok

#$ End validate_all

    ###########################################################################

    """

    Name: register

    Function: Add a document to the store under its category. The first document

    for a category wins, later ones are refused.

    Arguments: document - the IssueDocument to add

    Returns: No value returned

    """

    def register(self, document: IssueDocument) -> None:
        if document.category in self._documents:
            raise DuplicateCategoryError(document.category)
        self._documents[document.category] = document

#$ End register

    ###########################################################################

    """

    Name: load_all

    Function: Load every issue file for the current mode into the store.

    Files that can't be decrypted and duplicate categories are logged and skipped.

    Anything else that stops a file parsing is fatal (IssueFileError), because

    the issue format itself is broken rather than one file being unreadable.

    Arguments: None

    Returns: No value returned

    """

    def load_all(self) -> None:
        logger.info("Preparing to load all issue files")
        if not self._validated:
            logger.warning("Issue files have not been linted, there may be problems loading them")
        for path in self.issue_files():
            logger.debug("Preparing to load issue file located at: %s", path)
            self._load(path)
        logger.info("Finished loading all issue files")

#$ End load_all

    def _load(self, path: Path) -> None:
        try:
            text = self._read(path)
        except DecryptionError as exc:
            ### Wrong machine or a corrupted file: skip it and keep going
            logger.error('The issue file at "%s" could not be decrypted: %s', path, exc)
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise IssueFileError(path, str(exc)) from exc
        try:
            document = parse_document(json.loads(text), source=str(path))
        except (RecursionError, json.JSONDecodeError, IssueFormatError) as exc:
            logger.error('The issue file at "%s" could not be loaded correctly', path)
            raise IssueFileError(path, str(exc)) from exc
        logger.debug("Issue file category: %s", document.category)
        try:
            self.register(document)
        except DuplicateCategoryError as exc:
            logger.warning("There was a problem adding the issue file: %s", exc)
            return
        logger.debug('The issue file at "%s" has been loaded', path)

    ###########################################################################

    """

    Name: get / categories

    Function: Look up a loaded document by category, or list the loaded categories.

    Arguments: category - the category to look up (get only)

    Returns: IssueDocument or None / list of categories

    """

    def get(self, category: str) -> Optional[IssueDocument]:
        return self._documents.get(category)

    def categories(self) -> List[str]:
        return list(self._documents.keys())

#$ End get / categories

    ###########################################################################

    """

    Name: prepare_all

    Function: Encrypt every plaintext issue file for release. Each one is written

    next to the original under a random name. Only when every single file worked

    are the plaintext originals deleted and empty directories tidied away. If any

    file fails, the encrypted copies made so far are removed and the originals are

    left exactly as they were.

    Arguments: None

    Returns: Boolean - True if everything was encrypted and the originals removed

    """

    def prepare_all(self) -> bool:
        logger.info("Preparing to encrypt all issue files")
        sources = find_files(self.root, PLAINTEXT_EXTENSION)
        written: List[Path] = []
        for source in sources:
            try:
                ### Encrypt the raw text so the file comes back byte-for-byte
                ciphertext = encrypt_text(source.read_text(encoding="utf-8"), self.config.machine_name)
                target = self._artifact_path(source.parent)
                target.write_text(ciphertext, encoding="utf-8")
            except (OSError, UnicodeDecodeError, EncryptionError) as exc:
                logger.error('The issue file at "%s" could not be encrypted: %s', source, exc)
                self._discard(written)
                logger.error("No issue files have been removed, please fix the problem and try again")
                return False
            logger.debug('Encrypted "%s" to "%s"', source, target)
            written.append(target)

        ### Everything is encrypted, so the plaintext can go
        for source in sources:
            source.unlink()
        self.prune_empty_directories(self.root, keep_root=True)
        logger.info("Finished encrypting %d issue files", len(sources))
        return True

#$ End prepare_all

    @staticmethod
    def _artifact_path(directory: Path) -> Path:
        ### Keep rolling until the name is free
        while True:
            candidate = directory / f"{random_name()}{ENCRYPTED_EXTENSION}"
            if not candidate.exists():
                return candidate

    @staticmethod
    def _discard(paths: List[Path]) -> None:
        for path in paths:
            try:
                path.unlink()
            except OSError as exc:
                logger.warning("Unable to remove partially prepared file %s: %s", path, exc)

    ###########################################################################

    """

    Name: prune_empty_directories

    Function: Remove empty directories depth-first. Subdirectories are handled

    first, then the directory itself is removed if nothing is left in it.

    Arguments: directory - where to start

            keep_root - don't remove the starting directory itself

    Returns: No value returned

    """

    @classmethod
    def prune_empty_directories(cls, directory: Path, keep_root: bool = False) -> None:
        if not directory.is_dir():
            return
        ### Children first
        for child in list(directory.iterdir()):
            if child.is_dir() and not child.is_symlink():
                cls.prune_empty_directories(child)
        if keep_root:
            return
        ### Nothing left? Then away it goes
        if not any(directory.iterdir()):
            logger.debug("Removing empty directory %s", directory)
            directory.rmdir()

#$ End prune_empty_directories

#$ End IssueStore
