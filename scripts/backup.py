"""Simple backup utility script.

Writes the exported {encrypted, hash, version} record of the current vault
to a timestamped file. Nothing is decrypted.

Usage (from repo root):
  python -m scripts.backup --dest backups/
"""
from __future__ import annotations
import json
from datetime import datetime
from pathlib import Path
import click
from config import settings
from src.lib.store import FileStore
from src.lib.vault import Vault

@click.command()
@click.option('--dest', type=click.Path(file_okay=False, path_type=Path), default=Path('backups'), help='Destination directory for backups.')
@click.option('--vault-path', type=click.Path(dir_okay=False, path_type=Path), default=settings.DEFAULT_VAULT_PATH, show_default=True)
def main(dest: Path, vault_path: Path):
	record = Vault(FileStore(vault_path)).export_vault()
	if record is None:
		click.echo(f"No vault at {vault_path}; nothing to backup.")
		raise SystemExit(1)
	dest.mkdir(parents=True, exist_ok=True)
	stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
	target = dest / f"vault_{stamp}.json"
	target.write_text(json.dumps(record, indent=2), encoding='utf-8')
	click.echo(f"Backup written: {target}")

if __name__ == '__main__':  # pragma: no cover
	main()
