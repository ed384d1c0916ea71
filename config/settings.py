"""Project configuration settings.

Constants shared by the crypto, codec and storage layers. Paths and
log level may be overridden from the environment.
"""

from pathlib import Path
import os

# Key derivation
DEFAULT_ITERATIONS = 100_000
MIN_ITERATIONS = 100_000
SALT_LENGTH = 16
KEY_LENGTH = 32  # AES-256
VERIFIER_LENGTH = 32
VERIFIER_INFO = b"vaultkeep master-password verifier v1"

# Container layout: salt | nonce | ciphertext + tag
NONCE_LENGTH = 12  # 96-bit GCM nonce
AUTH_TAG_LENGTH = 16  # GCM tag length

# Vault format
VAULT_VERSION = 1
MASTER_HASH_KEY = "master_hash"
VAULT_STORAGE_KEY = "encrypted_vault"

# Credential categories
CATEGORIES = {
	"social": "Social",
	"finance": "Finance",
	"work": "Work",
	"shopping": "Shopping",
	"entertainment": "Entertainment",
	"other": "Other",
}
DEFAULT_CATEGORY = "other"

# Store
DEFAULT_VAULT_PATH = Path(os.environ.get("VAULT_PATH", "vault_data/vault.json"))

# Logging
LOG_LEVEL = os.environ.get("VAULT_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

__all__ = [
	'DEFAULT_ITERATIONS','MIN_ITERATIONS','SALT_LENGTH','KEY_LENGTH','VERIFIER_LENGTH','VERIFIER_INFO',
	'NONCE_LENGTH','AUTH_TAG_LENGTH','VAULT_VERSION','MASTER_HASH_KEY','VAULT_STORAGE_KEY',
	'CATEGORIES','DEFAULT_CATEGORY','DEFAULT_VAULT_PATH','LOG_LEVEL','LOG_FORMAT'
]
