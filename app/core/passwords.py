# app/core/passwords.py
"""
Password credential hashing and verification.

Canonical stored format (all new writes):

    pbkdf2$<iterations>$<salt hex>$<derived key hex>

  - PBKDF2-HMAC-SHA256
  - 16-byte random salt
  - 32-byte (256-bit) derived key

Legacy format (read-only):

    <64 hex chars>   unsalted SHA-256 digest of the password

Legacy credentials still verify so that old accounts can log in; the
login flow re-hashes them into the canonical format (see needs_rehash).
"""
import hashlib
import hmac
import re
import secrets

from app.core.config import get_settings

settings = get_settings()

ALGORITHM = "pbkdf2"
HASH_NAME = "sha256"
SALT_BYTES = 16
KEY_BYTES = 32

_LEGACY_SHA256 = re.compile(r"^[0-9a-fA-F]{64}$")


def is_encodable(password: str) -> bool:
    """False for strings UTF-8 cannot encode (lone surrogates from JSON)."""
    try:
        password.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def hash_password(password: str, iterations: int | None = None) -> str:
    """
    Derive a salted credential string from a plaintext password.

    Two calls with the same password return different strings
    (fresh random salt each time).

    Callers reject passwords failing is_encodable() first.
    """
    iterations = iterations or settings.PBKDF2_ITERATIONS
    salt = secrets.token_bytes(SALT_BYTES)
    key = hashlib.pbkdf2_hmac(
        HASH_NAME, password.encode("utf-8"), salt, iterations, dklen=KEY_BYTES
    )
    return f"{ALGORITHM}${iterations}${salt.hex()}${key.hex()}"


def is_legacy_hash(stored: str) -> bool:
    """True for an unsalted SHA-256 hex digest (no delimiter)."""
    return bool(stored) and _LEGACY_SHA256.match(stored) is not None


def verify_password(password: str, stored: str) -> bool:
    """
    Check a plaintext password against a stored credential.

    Returns False on any malformed credential or unencodable password
    instead of raising.
    Comparison is constant-time (hmac.compare_digest).
    """
    if not password or not stored or not is_encodable(password):
        return False

    if is_legacy_hash(stored):
        digest = hashlib.sha256(password.encode("utf-8")).hexdigest()
        return hmac.compare_digest(digest, stored.lower())

    parts = stored.split("$")
    if len(parts) != 4 or parts[0] != ALGORITHM:
        return False

    try:
        iterations = int(parts[1])
        salt = bytes.fromhex(parts[2])
        expected = bytes.fromhex(parts[3])
    except ValueError:
        return False

    if iterations <= 0 or not salt or not expected:
        return False

    derived = hashlib.pbkdf2_hmac(
        HASH_NAME, password.encode("utf-8"), salt, iterations, dklen=len(expected)
    )
    return hmac.compare_digest(derived, expected)


def needs_rehash(stored: str) -> bool:
    """
    Whether a credential that just verified should be re-hashed and saved.

    True for legacy digests and for pbkdf2 credentials weaker than the
    configured iteration count.
    """
    if is_legacy_hash(stored):
        return True
    parts = stored.split("$")
    if len(parts) != 4 or parts[0] != ALGORITHM:
        return False
    try:
        return int(parts[1]) < settings.PBKDF2_ITERATIONS
    except ValueError:
        return False
