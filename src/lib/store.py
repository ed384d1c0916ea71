"""Slot storage for the verification artifact and the sealed container.

The codec never touches storage; callers inject one of these.
"""
from __future__ import annotations
import json, os, logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional
from .errors import StorageError

log = logging.getLogger(__name__)

class VaultStore:
	"""Named text slots. Subclasses implement `_read` and `_replace`."""

	def get(self, slot: str) -> Optional[str]:
		return self._read().get(slot)

	def set(self, slot: str, value: str) -> None:
		self.set_many({slot: value})

	def delete(self, slot: str) -> None:
		self.delete_many([slot])

	def set_many(self, items: Mapping[str, str]) -> None:
		"""Write every slot in `items` as a single replacement."""
		for slot, value in items.items():
			if not isinstance(value, str):
				raise StorageError(f'Slot {slot!r} value must be text')
		data = self._read()
		data.update(items)
		self._replace(data)

	def delete_many(self, slots: Iterable[str]) -> None:
		data = self._read()
		for slot in slots:
			data.pop(slot, None)
		self._replace(data)

	def _read(self) -> Dict[str, str]:
		raise NotImplementedError

	def _replace(self, data: Dict[str, str]) -> None:
		raise NotImplementedError

class MemoryStore(VaultStore):
	def __init__(self, initial: Optional[Mapping[str, str]] = None):
		self._data: Dict[str, str] = dict(initial or {})

	def _read(self) -> Dict[str, str]:
		return dict(self._data)

	def _replace(self, data: Dict[str, str]) -> None:
		self._data = dict(data)

class FileStore(VaultStore):
	"""All slots in one JSON document, rewritten atomically on every change."""

	def __init__(self, path: Path | str):
		self.path = Path(path)

	def _read(self) -> Dict[str, str]:
		if not self.path.exists():
			return {}
		try:
			data = json.loads(self.path.read_text(encoding='utf-8'))
		except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
			raise StorageError(f'Unreadable vault store {self.path}: {e}') from e
		if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
			raise StorageError(f'Unexpected vault store format in {self.path}')
		return data

	def _replace(self, data: Dict[str, str]) -> None:
		if not data:
			self.path.unlink(missing_ok=True)
			log.info('Vault store removed -> %s', self.path)
			return
		self.path.parent.mkdir(parents=True, exist_ok=True)
		tmp = self.path.with_suffix(self.path.suffix + '.tmp')
		try:
			tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding='utf-8')
			os.replace(tmp, self.path)
		except OSError as e:
			tmp.unlink(missing_ok=True)
			raise StorageError(f'Failed to write vault store: {e}') from e
		log.info('Vault store saved -> %s', self.path)
