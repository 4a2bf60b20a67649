# Cryptographic core: key derivation, AES-192-CBC codec, payload
# encryption and HMAC signing. Everything here is pure and synchronous;
# secrets are always explicit arguments.
from .cipher import (
    BlockCipherCodec,
    PlaintextPrefixIV,
    RandomIV,
    decrypt,
    decrypt_with_iv,
    encrypt,
    encrypt_with_iv,
)
from .codec import PayloadCodec, decode_payload, encode_payload
from .errors import (
    BlobTooShort,
    CipherError,
    DecryptionError,
    DeserializationError,
    EncodingError,
    EncryptionError,
    InvalidIvLength,
    InvalidKeyLength,
    InvalidLength,
    InvalidPadding,
    PayloadError,
    PlaintextTooShort,
    SigningError,
)
from .keys import KEY_SIZE, derive_key
from .signer import canonicalize, sign, verify

__all__ = [
    "KEY_SIZE",
    "BlobTooShort",
    "BlockCipherCodec",
    "CipherError",
    "DecryptionError",
    "DeserializationError",
    "EncodingError",
    "EncryptionError",
    "InvalidIvLength",
    "InvalidKeyLength",
    "InvalidLength",
    "InvalidPadding",
    "PayloadCodec",
    "PayloadError",
    "PlaintextPrefixIV",
    "PlaintextTooShort",
    "RandomIV",
    "SigningError",
    "canonicalize",
    "decode_payload",
    "decrypt",
    "decrypt_with_iv",
    "derive_key",
    "encode_payload",
    "encrypt",
    "encrypt_with_iv",
    "sign",
    "verify",
]
