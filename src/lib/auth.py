"""Master password verification artifacts (make & verify)."""
from __future__ import annotations
import base64, hmac, logging
from config.settings import SALT_LENGTH, VERIFIER_LENGTH
from .crypto import CryptoError, derive_verifier, generate_salt

log = logging.getLogger(__name__)

ARTIFACT_LENGTH = SALT_LENGTH + VERIFIER_LENGTH

def make_verification_artifact(password: str) -> str:
	"""Return base64(salt | verifier) for a fresh random salt."""
	salt = generate_salt()
	bits = derive_verifier(password, salt)
	return base64.b64encode(salt + bits).decode('ascii')

def decode_artifact(artifact: str) -> bytes:
	if not isinstance(artifact, str):
		raise TypeError('Artifact must be text')
	raw = base64.b64decode(artifact.encode('ascii'), validate=True)
	if len(raw) != ARTIFACT_LENGTH:
		raise ValueError('Bad artifact length')
	return raw

def verify_password(password: str, artifact: str) -> bool:
	"""Check `password` against a stored artifact.

	Malformed artifacts and wrong passwords both return False. The final
	comparison is constant time in the position of the first differing byte.
	"""
	try:
		raw = decode_artifact(artifact)
		salt, stored = raw[:SALT_LENGTH], raw[SALT_LENGTH:]
		candidate = derive_verifier(password, salt)
	except (ValueError, TypeError, CryptoError) as e:
		log.debug('Verification rejected: %s', type(e).__name__)
		return False
	return hmac.compare_digest(candidate, stored)
