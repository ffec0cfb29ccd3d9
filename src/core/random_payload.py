import secrets


def random_hex(n: int) -> str:
    """Return ``n`` random bytes encoded as ``2 * n`` hex characters."""
    return secrets.token_hex(n)


def random_object(size: int) -> bytes:
    """Return an opaque payload of exactly ``size`` random bytes."""
    return secrets.token_bytes(size)
