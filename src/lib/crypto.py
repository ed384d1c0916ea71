"""Cryptographic primitives: PBKDF2 key stretching and AES-256-GCM."""
from __future__ import annotations
import secrets
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from config.settings import (
	DEFAULT_ITERATIONS, MIN_ITERATIONS, SALT_LENGTH, KEY_LENGTH, NONCE_LENGTH, AUTH_TAG_LENGTH,
	VERIFIER_LENGTH, VERIFIER_INFO
)

class CryptoError(Exception):
	pass

def generate_salt() -> bytes:
	return secrets.token_bytes(SALT_LENGTH)

def generate_nonce() -> bytes:
	return secrets.token_bytes(NONCE_LENGTH)

def derive_key(password: str, salt: bytes, iterations: int = DEFAULT_ITERATIONS) -> bytes:
	"""Stretch `password` into a 256-bit AES key with PBKDF2-HMAC-SHA256.

	Deterministic for a given (password, salt, iterations). The salt is always
	explicit so the same password yields a different key per container.
	"""
	if not password:
		raise CryptoError("Password empty")
	if len(salt) < SALT_LENGTH:
		raise CryptoError("Salt too short")
	if iterations < MIN_ITERATIONS:
		raise CryptoError(f"At least {MIN_ITERATIONS} iterations required")
	kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=KEY_LENGTH, salt=salt, iterations=iterations)
	return kdf.derive(password.encode('utf-8'))

def derive_verifier(password: str, salt: bytes, iterations: int = DEFAULT_ITERATIONS) -> bytes:
	"""Password verifier bits for `salt`; never equal to `derive_key(password, salt)`.

	The stretched secret is expanded with HKDF under a verifier-only label, so
	a stored verifier reveals nothing usable as an encryption key.
	"""
	stretched = derive_key(password, salt, iterations)
	hkdf = HKDF(algorithm=hashes.SHA256(), length=VERIFIER_LENGTH, salt=None, info=VERIFIER_INFO)
	return hkdf.derive(stretched)

def encrypt(data: bytes, key: bytes, nonce: bytes) -> bytes:
	"""AES-256-GCM; returns ciphertext with the 16-byte tag appended."""
	if len(key) != KEY_LENGTH: raise CryptoError("Bad key length")
	if len(nonce) != NONCE_LENGTH: raise CryptoError("Bad nonce length")
	enc = Cipher(algorithms.AES(key), modes.GCM(nonce)).encryptor()
	ct = enc.update(data) + enc.finalize()
	return ct + enc.tag

def decrypt(blob: bytes, key: bytes, nonce: bytes) -> bytes:
	"""Inverse of `encrypt`. The tag is checked by the cipher in `finalize`."""
	if len(key) != KEY_LENGTH: raise CryptoError("Bad key length")
	if len(nonce) != NONCE_LENGTH: raise CryptoError("Bad nonce length")
	if len(blob) < AUTH_TAG_LENGTH: raise CryptoError("Ciphertext too short")
	ct, tag = blob[:-AUTH_TAG_LENGTH], blob[-AUTH_TAG_LENGTH:]
	dec = Cipher(algorithms.AES(key), modes.GCM(nonce, tag)).decryptor()
	try:
		return dec.update(ct) + dec.finalize()
	except InvalidTag:
		raise CryptoError("Authentication tag mismatch") from None
