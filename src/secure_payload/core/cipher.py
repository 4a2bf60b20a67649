"""AES-192-CBC over raw bytes.

Two modes are offered. With an explicit IV the caller owns the IV and must
reuse it on decrypt. In embedded mode the codec picks the IV through an
:class:`IvStrategy` and prefixes it to the ciphertext, so the blob is
self-describing: ``iv || ciphertext``.
"""

import logging
import os
from typing import Protocol

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import (
    BlobTooShort,
    InvalidIvLength,
    InvalidKeyLength,
    InvalidLength,
    InvalidPadding,
    PlaintextTooShort,
)
from .keys import KEY_SIZE

__all__ = [
    "BLOCK_SIZE",
    "IV_SIZE",
    "BlockCipherCodec",
    "IvStrategy",
    "PlaintextPrefixIV",
    "RandomIV",
    "decrypt",
    "decrypt_with_iv",
    "encrypt",
    "encrypt_with_iv",
]

logger = logging.getLogger(__name__)

BLOCK_SIZE = algorithms.AES.block_size // 8
IV_SIZE = BLOCK_SIZE


def _check_key(key: bytes):
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key), KEY_SIZE)


def _check_iv(iv: bytes):
    if len(iv) != IV_SIZE:
        raise InvalidIvLength(len(iv), IV_SIZE)


def encrypt_with_iv(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    _check_key(key)
    _check_iv(iv)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt_with_iv(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    _check_key(key)
    _check_iv(iv)

    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise InvalidLength(
            f"Ciphertext length must be a non-zero multiple of {BLOCK_SIZE}, "
            f"got {len(ciphertext)}"
        )

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise InvalidPadding("Invalid PKCS#7 padding") from e


class IvStrategy(Protocol):
    """Chooses the IV for embedded-mode encryption."""

    name: str

    def generate(self, plaintext: bytes) -> bytes: ...


class PlaintextPrefixIV:
    """Use the first block of the plaintext as the IV.

    This is what the payment platform expects on the wire. Identical
    plaintexts encrypt to identical blobs, so do not pick this strategy
    for new integrations unless the remote side requires it.
    """

    name = "plaintext_prefix"

    def generate(self, plaintext: bytes) -> bytes:
        if len(plaintext) < IV_SIZE:
            raise PlaintextTooShort(len(plaintext), IV_SIZE)
        return plaintext[:IV_SIZE]


class RandomIV:
    name = "random"

    def generate(self, plaintext: bytes) -> bytes:
        return os.urandom(IV_SIZE)


class BlockCipherCodec:
    """Embedded-IV AES-192-CBC with a pluggable IV strategy.

    Decryption does not depend on the strategy: the IV always travels as
    the first 16 bytes of the blob.
    """

    def __init__(self, iv_strategy: IvStrategy | None = None):
        self.iv_strategy = iv_strategy or PlaintextPrefixIV()

    def __repr__(self):
        return f"{type(self).__name__}(iv_strategy={self.iv_strategy.name!r})"

    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        iv = self.iv_strategy.generate(plaintext)
        blob = iv + encrypt_with_iv(plaintext, key, iv)
        logger.debug(
            "Encrypted %d bytes into %d byte blob (iv: %s)",
            len(plaintext),
            len(blob),
            self.iv_strategy.name,
        )
        return blob

    def decrypt(self, blob: bytes, key: bytes) -> bytes:
        _check_key(key)
        if len(blob) < IV_SIZE:
            raise BlobTooShort(len(blob), IV_SIZE)

        iv, ciphertext = blob[:IV_SIZE], blob[IV_SIZE:]
        plaintext = decrypt_with_iv(ciphertext, key, iv)
        logger.debug("Decrypted %d byte blob", len(blob))
        return plaintext

    # Explicit-IV mode is strategy independent; exposed here so callers can
    # hold a single codec object.
    encrypt_with_iv = staticmethod(encrypt_with_iv)
    decrypt_with_iv = staticmethod(decrypt_with_iv)


_default_codec = BlockCipherCodec()


def encrypt(plaintext: bytes, key: bytes) -> bytes:
    """Embedded-IV encrypt with the wire-compatible plaintext-prefix IV."""
    return _default_codec.encrypt(plaintext, key)


def decrypt(blob: bytes, key: bytes) -> bytes:
    return _default_codec.decrypt(blob, key)
