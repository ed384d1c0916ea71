"""Configuration package for vaultkeep.

Re-exports the constants defined in `config.settings` so callers can use
`from config import VAULT_VERSION`. Keep the values in `settings.py`.
"""

from config.settings import *  # noqa: F401,F403
from config.settings import __all__  # noqa: F401
