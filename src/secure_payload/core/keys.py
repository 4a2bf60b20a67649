from cryptography.hazmat.primitives import hashes

KEY_SIZE = 24  # AES-192


def derive_key(secret: str) -> bytes:
    """Turn a shared secret into a 24-byte AES-192 key.

    The key is the first 24 bytes of SHA-512 over the UTF-8 secret. It is
    recomputed on every call and never cached.
    """
    digest = hashes.Hash(hashes.SHA512())
    digest.update(secret.encode("utf-8"))
    return digest.finalize()[:KEY_SIZE]
