"""Credential verification against stored bcrypt hashes.

Usernames compare exactly (case-sensitive) after trimming surrounding
whitespace; passwords are trimmed the same way before hashing.  The first
candidate whose username and password both match wins, so duplicate
usernames resolve by scan order.  Passwords over bcrypt's 72-byte limit
never match.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import bcrypt

from hakot.domain.records import CredentialRecord, Principal, iter_credentials
from hakot.domain.types import AuthError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def missing_input(username: str | None, password: str | None) -> bool:
    """True if either value is empty once surrounding whitespace is removed."""
    return not (username or "").strip() or not (password or "").strip()


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash *password* with a fresh bcrypt salt.

    Raises:
        ValueError: If the password is longer than bcrypt accepts.
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        msg = f"Password is longer than {MAX_PASSWORD_BYTES} bytes"
        raise ValueError(msg)
    digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return digest.decode("ascii")


def check_password(password: str, password_hash: str) -> bool:
    """Constant-time check of *password* against a bcrypt *password_hash*.

    Raises:
        ValueError: If *password_hash* is not a readable bcrypt hash.
    """
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def verify_credentials(
    username: str,
    password: str,
    candidates: Iterable[CredentialRecord | Mapping[str, Any]],
) -> Principal | AuthError:
    """Find the driver matching *username* and *password* among *candidates*.

    Raw mappings are validated on the fly; malformed ones are skipped.
    A stored hash that bcrypt cannot read only disqualifies its own record.
    A match on a record without a full name ends the scan as a refusal.

    Returns:
        The matching :class:`Principal`, ``AuthError.MISSING_INPUT`` when
        either input is blank, or ``AuthError.INVALID_CREDENTIALS``.
    """
    if missing_input(username, password):
        return AuthError.MISSING_INPUT

    username = username.strip()
    password = password.strip()

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        logger.debug("Password exceeds %d bytes; no stored hash can match", MAX_PASSWORD_BYTES)
        return AuthError.INVALID_CREDENTIALS

    for record in iter_credentials(candidates):
        if record.username != username:
            continue
        try:
            matched = check_password(password, record.password_hash)
        except ValueError:
            logger.debug("Unreadable password hash on a candidate record; skipping")
            continue
        if not matched:
            continue
        if record.full_name is None:
            logger.debug("Matched driver record has no full name; refusing login")
            return AuthError.INVALID_CREDENTIALS
        return Principal(full_name=record.full_name)

    return AuthError.INVALID_CREDENTIALS
