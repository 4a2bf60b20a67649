"""Exception taxonomy for the payload core.

Every failure is raised to the caller; nothing here is retried or
swallowed. The transport layer decides what a failure means.
"""


class PayloadError(Exception):
    """Base class for all payload core failures."""


class EncodingError(PayloadError):
    """The text form is not valid standard Base64."""


class CipherError(PayloadError):
    """Block cipher failure, in either direction."""


class InvalidKeyLength(CipherError, ValueError):
    def __init__(self, length: int, expected: int):
        super().__init__(f"Key length must be {expected} bytes, got {length}")
        self.length = length


class InvalidIvLength(CipherError, ValueError):
    def __init__(self, length: int, expected: int):
        super().__init__(f"IV length must be {expected} bytes, got {length}")
        self.length = length


class EncryptionError(CipherError):
    pass


class PlaintextTooShort(EncryptionError):
    def __init__(self, length: int, minimum: int):
        super().__init__(
            f"Plaintext must be at least {minimum} bytes to form the IV, got {length}"
        )
        self.length = length


class DecryptionError(CipherError):
    pass


class InvalidLength(DecryptionError):
    pass


class InvalidPadding(DecryptionError):
    pass


class BlobTooShort(DecryptionError):
    def __init__(self, length: int, minimum: int):
        super().__init__(f"Ciphertext blob must be at least {minimum} bytes, got {length}")
        self.length = length


class DeserializationError(PayloadError):
    """Decrypted bytes do not match the expected record schema."""


class SigningError(PayloadError):
    """The attestation could not be canonicalized."""
