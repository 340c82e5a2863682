# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the encryption module. This module will allow the application to:

# 1. Derive an AES key from the name of the machine we're running on

# 2. Encrypt issue documents so trainees can't just read the answer key

# 3. Decrypt them again on the machine they were prepared on

# The key comes from the machine name with no salt and a fixed IV. That ties the

# issue files to the image they ship on. It stops casual peeking, nothing more.

from __future__ import annotations

import base64
import binascii
import logging
import platform
from typing import Optional

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import DecryptionError, EncryptionError

logger = logging.getLogger(__name__)

### AES block size in bits (also what PKCS7 pads to)
BLOCK_SIZE = 128
### Key length in bytes (AES-128)
KEY_LENGTH = 16
### PBKDF2 rounds
DERIVATION_ITERATIONS = 1000
### The fixed initialisation vector
IV = bytes(
    [
        0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08,
        0x09, 0x10, 0x11, 0x12, 0x13, 0x14, 0x15, 0x16,
    ]
)

###########################################################################

"""

Name: machine_name

Function: Get the name of the machine we're running on. This is the "password"

the key is derived from.

Arguments: None

Returns: The machine's network name

"""

def machine_name() -> str:
    return platform.node()

#$ End machine_name

###########################################################################

"""

Name: derive_key

Function: Turn a machine name into an AES key using PBKDF2 (SHA-384, empty

salt). The name is encoded as UTF-16LE before hashing.

Arguments: name - the machine name, or None to use this machine's name

Returns: 16 bytes of key material

"""

def derive_key(name: Optional[str] = None) -> bytes:
    ### Fall back to the current machine if no name was given
    source = machine_name() if name is None else name
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA384(),
        length=KEY_LENGTH,
        salt=b"",
        iterations=DERIVATION_ITERATIONS,
    )
    return kdf.derive(source.encode("utf-16-le"))

#$ End derive_key

###########################################################################

"""

Name: _cipher

Function: Build an AES-CBC cipher with our fixed IV.

Arguments: key - the AES key

Returns: A Cipher object ready to make an encryptor or decryptor

"""

def _cipher(key: bytes) -> Cipher:
    return Cipher(algorithms.AES(key), modes.CBC(IV))

#$ End _cipher

###########################################################################

"""

Name: encrypt_text

Function: Encrypt a plaintext issue document. The text is UTF-8 encoded, PKCS7

padded, AES-CBC encrypted and then base64 encoded so it's safe to write as text.

Arguments: plaintext - the document text

            name - machine name to derive the key from (None = this machine)

Returns: Base64 string of the ciphertext

"""

def encrypt_text(plaintext: str, name: Optional[str] = None) -> str:
    try:
        ### Pad the UTF-8 bytes up to a whole number of blocks
        padder = padding.PKCS7(BLOCK_SIZE).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        ### Encrypt them
        encryptor = _cipher(derive_key(name)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except (TypeError, ValueError, UnicodeEncodeError) as exc:
        raise EncryptionError(f"Unable to encrypt issue document: {exc}") from exc
    ### Base64 so the artifact is plain ASCII
    return base64.b64encode(ciphertext).decode("ascii")

#$ End encrypt_text

###########################################################################

"""

Name: decrypt_text

Function: Reverse encrypt_text. Anything going wrong (bad base64, the wrong

machine's key, corrupt padding, garbage bytes) becomes a DecryptionError so the

caller can skip the file.

Arguments: ciphertext - base64 string written by encrypt_text

            name - machine name to derive the key from (None = this machine)

Returns: The original document text

"""

def decrypt_text(ciphertext: str, name: Optional[str] = None) -> str:
    try:
        ### Undo the base64 (validate so junk characters aren't silently dropped)
        raw = base64.b64decode(ciphertext.strip(), validate=True)
        ### Decrypt
        decryptor = _cipher(derive_key(name)).decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        ### Strip the padding (a wrong key nearly always fails here)
        unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
        data = unpadder.update(padded) + unpadder.finalize()
        return data.decode("utf-8")
    except (binascii.Error, ValueError, UnicodeDecodeError) as exc:
        logger.debug("Decryption failed: %s", exc)
        raise DecryptionError(f"Unable to decrypt issue document: {exc}") from exc

#$ End decrypt_text
