"""Vault codec: authenticated encryption of a whole collection.

Container text is base64 of::

	[0, 16)    salt            (fresh per seal)
	[16, 28)   nonce           (fresh per seal)
	[28, end)  ciphertext | 16-byte GCM tag

Every seal draws a new salt and nonce, so a (key, nonce) pair is never
reused even when the same collection is re-sealed with the same password.
"""
from __future__ import annotations
import base64, binascii, logging
from dataclasses import dataclass
from config.settings import SALT_LENGTH, NONCE_LENGTH, AUTH_TAG_LENGTH
from .crypto import CryptoError, decrypt, derive_key, encrypt, generate_nonce, generate_salt
from .errors import AuthenticationFailure, CorruptContainer
from .models import VaultCollection, parse_collection, serialize_collection

log = logging.getLogger(__name__)

HEADER_LENGTH = SALT_LENGTH + NONCE_LENGTH
MIN_CONTAINER_LENGTH = HEADER_LENGTH + AUTH_TAG_LENGTH

@dataclass(frozen=True)
class SealedContainer:
	salt: bytes
	nonce: bytes
	ciphertext: bytes  # includes the trailing tag

	def __repr__(self) -> str:
		return f"SealedContainer(ciphertext_len={len(self.ciphertext)})"

	def to_bytes(self) -> bytes:
		return self.salt + self.nonce + self.ciphertext

	@classmethod
	def from_bytes(cls, raw: bytes) -> 'SealedContainer':
		if len(raw) < MIN_CONTAINER_LENGTH:
			raise CorruptContainer('Container too short')
		return cls(raw[:SALT_LENGTH], raw[SALT_LENGTH:HEADER_LENGTH], raw[HEADER_LENGTH:])

	def encode(self) -> str:
		return base64.b64encode(self.to_bytes()).decode('ascii')

	@classmethod
	def decode(cls, text: str) -> 'SealedContainer':
		if not isinstance(text, str):
			raise CorruptContainer('Container must be text')
		try:
			raw = base64.b64decode(text.encode('ascii'), validate=True)
		except (UnicodeEncodeError, binascii.Error):
			raise CorruptContainer('Container is not valid base64') from None
		return cls.from_bytes(raw)

def seal_bytes(plaintext: bytes, password: str) -> str:
	salt, nonce = generate_salt(), generate_nonce()
	key = derive_key(password, salt)
	return SealedContainer(salt, nonce, encrypt(plaintext, key, nonce)).encode()

def open_bytes(container: str, password: str) -> bytes:
	"""Decrypt container text; raises instead of returning partial plaintext."""
	sealed = SealedContainer.decode(container)
	try:
		key = derive_key(password, sealed.salt)
		return decrypt(sealed.ciphertext, key, sealed.nonce)
	except CryptoError as e:
		raise AuthenticationFailure(str(e)) from None

def seal_vault(collection: VaultCollection, password: str) -> str:
	"""Encrypt the full collection into fresh container text."""
	blob = seal_bytes(serialize_collection(collection), password)
	log.debug('Sealed %d credential(s)', len(collection.credentials))
	return blob

def open_vault(container: str, password: str) -> VaultCollection:
	"""Decrypt and parse container text.

	Raises CorruptContainer, AuthenticationFailure or VersionMismatch.
	"""
	return parse_collection(open_bytes(container, password))
