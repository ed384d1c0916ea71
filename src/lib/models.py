"""Credential data model and the canonical collection encoding."""
from __future__ import annotations
import json, time, uuid
from dataclasses import dataclass, field, asdict, fields, replace
from typing import Any, Dict, List, Optional
from config.settings import CATEGORIES, DEFAULT_CATEGORY, VAULT_VERSION
from .errors import CorruptContainer, VersionMismatch

IMMUTABLE_FIELDS = ('id', 'created_at')

def now_ms() -> int:
	return int(time.time() * 1000)

def new_id() -> str:
	return uuid.uuid4().hex

@dataclass
class Credential:
	id: str
	name: str
	username: str
	password: str
	category: str = DEFAULT_CATEGORY
	url: Optional[str] = None
	notes: Optional[str] = None
	created_at: int = 0
	updated_at: int = 0
	favorite: bool = False

	def __repr__(self) -> str:
		return f"Credential(id={self.id!r}, name={self.name!r}, category={self.category!r})"

	def validate(self) -> 'Credential':
		check_fields(asdict(self))
		return self

	def edit(self, **changes: Any) -> 'Credential':
		"""Apply field changes in place and bump `updated_at`.

		The merged record is checked before anything is assigned, so a bad
		change leaves the credential untouched.
		"""
		for key in changes:
			if key in IMMUTABLE_FIELDS:
				raise ValueError(f'{key} is immutable')
		check_fields(dict(asdict(self), **changes))
		for key, value in changes.items():
			setattr(self, key, value)
		self.updated_at = max(now_ms(), self.updated_at)
		return self

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	@classmethod
	def from_dict(cls, raw: Any) -> 'Credential':
		if not isinstance(raw, dict):
			raise CorruptContainer('Credential is not an object')
		try:
			check_fields(raw)
		except ValueError as e:
			raise CorruptContainer(str(e)) from None
		return cls(**raw)

_FIELD_NAMES = frozenset(f.name for f in fields(Credential))

def _is_text(value: Any) -> bool:
	if not isinstance(value, str):
		return False
	try:
		value.encode('utf-8')
	except UnicodeEncodeError:  # lone surrogates
		return False
	return True

def check_fields(raw: Dict[str, Any]) -> None:
	"""Raise ValueError unless `raw` is a complete, storable credential record."""
	unknown = set(raw) - _FIELD_NAMES
	if unknown:
		raise ValueError(f'Unknown credential fields: {sorted(unknown)}')
	for name in ('id', 'name', 'username', 'password', 'category'):
		if not _is_text(raw.get(name)):
			raise ValueError(f'Credential field {name!r} missing or not text')
	for name in ('url', 'notes'):
		if raw.get(name) is not None and not _is_text(raw[name]):
			raise ValueError(f'Credential field {name!r} not text')
	for name in ('created_at', 'updated_at'):
		value = raw.get(name)
		if not isinstance(value, int) or isinstance(value, bool):
			raise ValueError(f'Credential field {name!r} not an integer')
	if not isinstance(raw.get('favorite'), bool):
		raise ValueError("Credential field 'favorite' not a boolean")
	if raw['category'] not in CATEGORIES:
		raise ValueError(f"Invalid category: {raw['category']!r}")

def new_credential(name: str, username: str, password: str, category: str = DEFAULT_CATEGORY,
		url: Optional[str] = None, notes: Optional[str] = None, favorite: bool = False) -> Credential:
	now = now_ms()
	return Credential(new_id(), name, username, password, category, url, notes, now, now, favorite).validate()

@dataclass
class VaultCollection:
	credentials: List[Credential] = field(default_factory=list)
	version: int = VAULT_VERSION

	def copy(self) -> 'VaultCollection':
		return VaultCollection([replace(c) for c in self.credentials], self.version)

def serialize_collection(collection: VaultCollection) -> bytes:
	"""Canonical UTF-8 JSON: sorted keys, compact separators, list order kept.

	Raises ValueError for a credential that could not be read back.
	"""
	if collection.version != VAULT_VERSION:
		raise ValueError(f"Cannot write vault version {collection.version!r}")
	for c in collection.credentials:
		c.validate()
	payload = {
		'credentials': [c.to_dict() for c in collection.credentials],
		'version': collection.version,
	}
	return json.dumps(payload, sort_keys=True, separators=(',', ':'), ensure_ascii=False).encode('utf-8')

def parse_collection(raw: bytes) -> VaultCollection:
	"""Inverse of `serialize_collection`; fails closed on anything unexpected."""
	try:
		payload = json.loads(raw.decode('utf-8'))
	except (UnicodeDecodeError, json.JSONDecodeError) as e:
		raise CorruptContainer(f'Invalid vault payload: {e}') from None
	if not isinstance(payload, dict):
		raise CorruptContainer('Vault payload is not an object')
	version = payload.get('version')
	if not isinstance(version, int) or isinstance(version, bool) or version != VAULT_VERSION:
		raise VersionMismatch(f'Unsupported vault version: {version!r}')
	creds = payload.get('credentials')
	if not isinstance(creds, list) or set(payload) != {'credentials', 'version'}:
		raise CorruptContainer('Vault payload has unexpected structure')
	return VaultCollection([Credential.from_dict(c) for c in creds], version)
