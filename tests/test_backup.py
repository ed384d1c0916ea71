import json
from click.testing import CliRunner
from scripts.backup import main
from src.lib.store import FileStore
from src.lib.vault import Vault

def test_backup_writes_export_record(tmp_path):
    vault_path = tmp_path / 'vault.json'
    Vault(FileStore(vault_path)).create_vault('pw')
    dest = tmp_path / 'backups'
    r = CliRunner().invoke(main, ['--dest', str(dest), '--vault-path', str(vault_path)])
    assert r.exit_code == 0, r.output
    files = list(dest.glob('vault_*.json'))
    assert len(files) == 1
    record = json.loads(files[0].read_text())
    restored = Vault(FileStore(tmp_path / 'restored.json'))
    restored.import_vault(record)
    assert restored.unlock_vault('pw') == []

def test_backup_without_vault(tmp_path):
    r = CliRunner().invoke(main, ['--dest', str(tmp_path / 'b'), '--vault-path', str(tmp_path / 'none.json')])
    assert r.exit_code == 1
    assert 'nothing to backup' in r.output
