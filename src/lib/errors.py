"""Error taxonomy for the vault core.

Unlock failures are collapsed by `src.lib.vault` into a single outcome, so
these classes exist for internal control flow and logging only.
"""
from __future__ import annotations

class VaultError(Exception):
	pass

class InvalidPassword(VaultError):
	"""Candidate password did not match the verification artifact."""

class CorruptContainer(VaultError):
	"""Stored text or decrypted payload is structurally malformed."""

class AuthenticationFailure(VaultError):
	"""The cipher rejected the ciphertext, nonce or tag."""

class VersionMismatch(VaultError):
	"""Decrypted collection carries an unsupported version tag."""

class StorageAbsent(VaultError):
	"""An expected storage slot is missing."""

class StorageError(VaultError): ...
