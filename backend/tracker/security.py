"""Password hashing helpers.

Hashes are produced by a passlib `CryptContext`. `hex_sha256` yields the
bare SHA-256 hex digest stored by earlier tracker databases;
`pbkdf2_sha256` is salted and iterated. When `pbkdf2_sha256` is the
default, `hex_sha256` hashes are deprecated and get replaced on the
next successful login.
"""

from passlib.context import CryptContext

from .config import PASSWORD_SCHEMES


def build_password_context(default_scheme: str = "hex_sha256") -> CryptContext:
    deprecated = ["hex_sha256"] if default_scheme == "pbkdf2_sha256" else []
    return CryptContext(schemes=list(PASSWORD_SCHEMES), default=default_scheme, deprecated=deprecated)
