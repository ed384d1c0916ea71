"""CLI commands implemented with click.

Every command that needs the vault prompts for the master password and
opens a session; any unlock failure prints the same message.
"""
from __future__ import annotations
import json, logging, os, click
from pathlib import Path
from config.settings import CATEGORIES, DEFAULT_CATEGORY, DEFAULT_VAULT_PATH, LOG_FORMAT, LOG_LEVEL
from src.lib.errors import StorageError
from src.lib.passwords import check_password_strength, generate_password
from src.lib.session import CredentialNotFound, UnlockError, VaultSession
from src.lib.store import FileStore
from src.lib.vault import Vault

CATEGORY_CHOICE = click.Choice(sorted(CATEGORIES))

def get_vault() -> Vault:
	# Resolve path dynamically to honor environment overrides in tests
	env_path = os.environ.get('VAULT_PATH')
	return Vault(FileStore(Path(env_path) if env_path else DEFAULT_VAULT_PATH))

def open_session(password: str) -> VaultSession:
	try:
		return VaultSession.open(get_vault(), password)
	except (UnlockError, StorageError):
		raise click.ClickException('Invalid master password.')

@click.group()
@click.option('--log-level', default=LOG_LEVEL, show_default=True, help='Logging level.')
def cli(log_level):
	"""vaultkeep: local encrypted credential store"""
	logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

@cli.command()
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
def init(password):
	"""Create a new vault protected by a master password."""
	score, label, _ = check_password_strength(password)
	if label == 'weak':
		click.echo(f'Warning: weak master password ({score}/100).')
	try:
		get_vault().create_vault(password)
	except (StorageError, ValueError) as e:
		raise click.ClickException(str(e))
	click.echo('Vault created.')

@cli.command('list')
@click.option('--password', prompt=True, hide_input=True)
def list_credentials(password):
	s = open_session(password)
	for c in s.credentials:
		star = ' *' if c.favorite else ''
		click.echo(f"{c.id}: {c.name} <{c.username}> [{c.category}]{star}")
	s.lock()

@cli.command('show')
@click.argument('credential_id')
@click.option('--password', prompt=True, hide_input=True)
def show(credential_id, password):
	"""Show one credential including its password."""
	s = open_session(password)
	try:
		c = s.get(credential_id)
	except CredentialNotFound:
		raise click.ClickException('Not found')
	click.echo(f"Name: {c.name}\nUsername: {c.username}\nPassword: {c.password}\nURL: {c.url or '-'}\nCategory: {CATEGORIES[c.category]}\nNotes: {c.notes or '-'}")
	s.lock()

@cli.command('add')
@click.option('--password', prompt=True, hide_input=True)
@click.option('--name', prompt=True)
@click.option('--username', prompt=True)
@click.option('--secret', prompt=True, hide_input=True, help='Credential password.')
@click.option('--url', default=None)
@click.option('--notes', default=None)
@click.option('--category', type=CATEGORY_CHOICE, default=DEFAULT_CATEGORY, show_default=True)
@click.option('--favorite', is_flag=True)
def add(password, name, username, secret, url, notes, category, favorite):
	s = open_session(password)
	try:
		c = s.add(name, username, secret, category=category, url=url, notes=notes, favorite=favorite)
	except (StorageError, ValueError) as e:
		raise click.ClickException(str(e))
	finally:
		s.lock()
	click.echo(f'Added {c.id}.')

@cli.command('edit')
@click.argument('credential_id')
@click.option('--password', prompt=True, hide_input=True)
@click.option('--name', default=None)
@click.option('--username', default=None)
@click.option('--secret', default=None, help='New credential password.')
@click.option('--url', default=None)
@click.option('--notes', default=None)
@click.option('--clear-url', is_flag=True, help='Remove the URL.')
@click.option('--clear-notes', is_flag=True, help='Remove the notes.')
@click.option('--category', type=CATEGORY_CHOICE, default=None)
@click.option('--favorite/--no-favorite', default=None)
def edit(credential_id, password, secret, clear_url, clear_notes, **fields):
	changes = {k: v for k, v in fields.items() if v is not None}
	if secret is not None:
		changes['password'] = secret
	if clear_url:
		changes['url'] = None
	if clear_notes:
		changes['notes'] = None
	if not changes:
		click.echo('Nothing to change.')
		return
	s = open_session(password)
	try:
		s.update(credential_id, **changes)
	except CredentialNotFound:
		raise click.ClickException('Not found')
	except (StorageError, ValueError) as e:
		raise click.ClickException(str(e))
	finally:
		s.lock()
	click.echo(f'Updated {credential_id}.')

@cli.command('remove')
@click.argument('credential_id')
@click.option('--password', prompt=True, hide_input=True)
def remove(credential_id, password):
	s = open_session(password)
	try:
		s.remove(credential_id)
	except CredentialNotFound:
		raise click.ClickException('Not found')
	except StorageError as e:
		raise click.ClickException(str(e))
	finally:
		s.lock()
	click.echo(f'Removed {credential_id}.')

@cli.command('export')
@click.argument('dest', type=click.Path(dir_okay=False, path_type=Path))
def export_cmd(dest):
	"""Write the encrypted vault and verifier to DEST for offline backup."""
	try:
		record = get_vault().export_vault()
	except StorageError as e:
		raise click.ClickException(str(e))
	if record is None:
		raise click.ClickException('No vault to export')
	dest.write_text(json.dumps(record, indent=2), encoding='utf-8')
	click.echo(f'Exported to {dest}.')

@cli.command('import')
@click.argument('src', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--force', is_flag=True, help='Replace an existing vault.')
def import_cmd(src, force):
	vault = get_vault()
	try:
		if vault.vault_exists() and not force:
			raise click.ClickException('Vault exists (use --force to replace)')
		vault.import_vault(src.read_text(encoding='utf-8'))
	except StorageError as e:
		raise click.ClickException(str(e))
	click.echo('Vault imported.')

@cli.command('reset')
@click.confirmation_option(prompt='Delete the vault permanently? There is no recovery.')
def reset():
	try:
		get_vault().delete_vault()
	except StorageError as e:
		raise click.ClickException(str(e))
	click.echo('Vault deleted.')

@cli.command('generate')
@click.option('--length', default=16, show_default=True, type=click.IntRange(min=1))
@click.option('--no-upper', is_flag=True)
@click.option('--no-lower', is_flag=True)
@click.option('--no-numbers', is_flag=True)
@click.option('--no-symbols', is_flag=True)
def generate(length, no_upper, no_lower, no_numbers, no_symbols):
	click.echo(generate_password(length, not no_upper, not no_lower, not no_numbers, not no_symbols))

@cli.command('pw-strength')
@click.argument('password')
def pw_strength_cmd(password):
	score, label, suggestions = check_password_strength(password)
	text = f"Score: {score} -> {label}"
	if suggestions:
		text += ' - ' + ', '.join(suggestions)
	click.echo(text)
