"""Vault service: the only entry points front ends use.

Owns the two storage slots and collapses every unlock failure into `None`.
Callers must keep at most one save in flight; the last sealed collection
written wins.
"""
from __future__ import annotations
import asyncio, json, logging
from typing import Any, Dict, List, Mapping, Optional
from config.settings import MASTER_HASH_KEY, VAULT_STORAGE_KEY, VAULT_VERSION
from .auth import decode_artifact, make_verification_artifact, verify_password
from .codec import SealedContainer, open_vault, seal_vault
from .errors import InvalidPassword, StorageAbsent, StorageError, VaultError
from .models import Credential, VaultCollection
from .store import VaultStore

log = logging.getLogger(__name__)

class Vault:
	def __init__(self, store: VaultStore):
		self.store = store

	def vault_exists(self) -> bool:
		return self.store.get(MASTER_HASH_KEY) is not None

	def create_vault(self, password: str) -> None:
		if not password:
			raise ValueError('Master password must not be empty')
		if self.vault_exists():
			raise StorageError('Vault exists')
		artifact = make_verification_artifact(password)
		container = seal_vault(VaultCollection(), password)
		self.store.set_many({MASTER_HASH_KEY: artifact, VAULT_STORAGE_KEY: container})
		log.info('Vault created')

	def unlock_vault(self, password: str) -> Optional[List[Credential]]:
		"""Return the credentials, or None for any failure (reason not exposed)."""
		artifact = self.store.get(MASTER_HASH_KEY)
		if artifact is None:
			log.debug('Unlock refused: no vault')
			return None
		if not verify_password(password, artifact):
			log.debug('Unlock refused: verification failed')
			return None
		container = self.store.get(VAULT_STORAGE_KEY)
		if container is None:
			# Partial write recovery: artifact without container means an
			# interrupted create; seal an empty collection under the verified password.
			log.warning('Vault container missing; recreating empty collection')
			self.store.set(VAULT_STORAGE_KEY, seal_vault(VaultCollection(), password))
			return []
		try:
			collection = open_vault(container, password)
		except VaultError as e:
			log.debug('Unlock refused: %s', type(e).__name__)
			return None
		return collection.credentials

	def save_vault(self, credentials: List[Credential], password: str) -> None:
		"""Re-seal the whole collection with a fresh salt and nonce.

		Invalid credentials raise ValueError before the stored container is touched.
		"""
		artifact = self.store.get(MASTER_HASH_KEY)
		if artifact is None:
			raise StorageAbsent('No vault to save into')
		if not verify_password(password, artifact):
			raise InvalidPassword('Invalid master password')
		container = seal_vault(VaultCollection(list(credentials)), password)
		self.store.set(VAULT_STORAGE_KEY, container)
		log.info('Vault saved (%d credential(s))', len(credentials))

	def delete_vault(self) -> None:
		self.store.delete_many([VAULT_STORAGE_KEY, MASTER_HASH_KEY])
		log.info('Vault deleted')

	def export_vault(self) -> Optional[Dict[str, Any]]:
		encrypted = self.store.get(VAULT_STORAGE_KEY)
		artifact = self.store.get(MASTER_HASH_KEY)
		if not encrypted or not artifact:
			return None
		return {'encrypted': encrypted, 'hash': artifact, 'version': VAULT_VERSION}

	def import_vault(self, data: Mapping[str, Any] | str) -> None:
		"""Install an exported record; both slots are replaced together or not at all."""
		if isinstance(data, str):
			try:
				data = json.loads(data)
			except json.JSONDecodeError as e:
				raise StorageError(f'Import is not valid JSON: {e}') from None
		if not isinstance(data, Mapping):
			raise StorageError('Import must be an object')
		encrypted, artifact, version = data.get('encrypted'), data.get('hash'), data.get('version')
		if not isinstance(encrypted, str) or not encrypted or not isinstance(artifact, str) or not artifact:
			raise StorageError('Import requires both "encrypted" and "hash"')
		if not isinstance(version, int) or isinstance(version, bool) or version != VAULT_VERSION:
			raise StorageError(f'Unsupported export version: {version!r}')
		try:
			decode_artifact(artifact)
			SealedContainer.decode(encrypted)
		except (ValueError, TypeError, VaultError) as e:
			raise StorageError(f'Import rejected: {e}') from None
		self.store.set_many({MASTER_HASH_KEY: artifact, VAULT_STORAGE_KEY: encrypted})
		log.info('Vault imported')

	async def create_vault_async(self, password: str) -> None:
		await asyncio.to_thread(self.create_vault, password)

	async def unlock_vault_async(self, password: str) -> Optional[List[Credential]]:
		return await asyncio.to_thread(self.unlock_vault, password)

	async def save_vault_async(self, credentials: List[Credential], password: str) -> None:
		await asyncio.to_thread(self.save_vault, credentials, password)
