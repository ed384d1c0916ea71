"""Unlocked vault session.

Holds the decrypted credentials and the master password while unlocked and
persists every mutation by re-sealing the full collection. A lock serialises
mutations so there is never more than one save in flight.
"""
from __future__ import annotations
import logging, threading
from typing import Any, Callable, List, Optional, Tuple
from .errors import VaultError
from .models import Credential, new_credential
from .vault import Vault

log = logging.getLogger(__name__)

class UnlockError(VaultError):
	def __init__(self):
		super().__init__('Invalid master password')

class SessionLocked(VaultError): ...

class CredentialNotFound(VaultError, KeyError): ...

class VaultSession:
	def __init__(self, vault: Vault, password: str, credentials: List[Credential]):
		self._vault = vault
		self._password: Optional[str] = password
		self._credentials: Optional[List[Credential]] = list(credentials)
		self._write_lock = threading.Lock()

	@classmethod
	def open(cls, vault: Vault, password: str) -> 'VaultSession':
		creds = vault.unlock_vault(password)
		if creds is None:
			raise UnlockError()
		return cls(vault, password, creds)

	@property
	def locked(self) -> bool:
		return self._credentials is None

	@property
	def credentials(self) -> List[Credential]:
		return list(self._require())

	def get(self, credential_id: str) -> Credential:
		return _find(self._require(), credential_id)

	def add(self, name: str, username: str, password: str, **kwargs: Any) -> Credential:
		cred = new_credential(name, username, password, **kwargs)
		return self._mutate(lambda creds: (creds + [cred], cred))

	def update(self, credential_id: str, **changes: Any) -> Credential:
		def change(creds):
			current = _find(creds, credential_id)
			edited = Credential(**current.to_dict()).edit(**changes)
			return [edited if c.id == credential_id else c for c in creds], edited
		return self._mutate(change)

	def remove(self, credential_id: str) -> None:
		def change(creds):
			_find(creds, credential_id)
			return [c for c in creds if c.id != credential_id], None
		self._mutate(change)

	def lock(self) -> None:
		"""Drop plaintext references; Python cannot guarantee the memory is wiped."""
		with self._write_lock:
			self._credentials = None
			self._password = None
		log.info('Vault locked')

	def _mutate(self, change: Callable[[List[Credential]], Tuple[List[Credential], Any]]) -> Any:
		# lookup, edit and save all happen under the lock
		with self._write_lock:
			creds = self._require()
			updated, result = change(list(creds))
			self._vault.save_vault(updated, self._password)
			# only adopt the new list once it is persisted
			self._credentials = updated
			return result

	def _require(self) -> List[Credential]:
		if self._credentials is None:
			raise SessionLocked('Vault is locked')
		return self._credentials

def _find(creds: List[Credential], credential_id: str) -> Credential:
	for c in creds:
		if c.id == credential_id:
			return c
	raise CredentialNotFound(credential_id)
