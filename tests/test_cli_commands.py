import json
from click.testing import CliRunner
from src.cli.commands import cli
from src.lib.errors import StorageError
from src.lib.store import FileStore

def init_vault(runner, pw='correct-horse-battery'):
    return runner.invoke(cli, ['init'], input=f'{pw}\n{pw}\n')

def add_example(runner, pw='correct-horse-battery'):
    r = runner.invoke(cli, ['add', '--category', 'work'], input=f'{pw}\nExample\nuser@example.com\np@ssW0rd!\n')
    assert r.exit_code == 0, r.output
    return r.output.strip().split()[-1].rstrip('.')

def test_cli_init_and_list(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    r = init_vault(runner)
    assert r.exit_code == 0
    assert 'Vault created' in r.output
    again = init_vault(runner)
    assert again.exit_code == 1
    lst = runner.invoke(cli, ['list'], input='correct-horse-battery\n')
    assert lst.exit_code == 0

def test_cli_add_show_edit_remove(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    init_vault(runner)
    cid = add_example(runner)
    lst = runner.invoke(cli, ['list'], input='correct-horse-battery\n')
    assert f'{cid}: Example <user@example.com> [work]' in lst.output
    show = runner.invoke(cli, ['show', cid], input='correct-horse-battery\n')
    assert 'Password: p@ssW0rd!' in show.output
    ed = runner.invoke(cli, ['edit', cid, '--name', 'Renamed', '--favorite'], input='correct-horse-battery\n')
    assert ed.exit_code == 0, ed.output
    lst = runner.invoke(cli, ['list'], input='correct-horse-battery\n')
    assert 'Renamed' in lst.output and ' *' in lst.output
    rm = runner.invoke(cli, ['remove', cid], input='correct-horse-battery\n')
    assert rm.exit_code == 0
    missing = runner.invoke(cli, ['show', cid], input='correct-horse-battery\n')
    assert missing.exit_code == 1 and 'Not found' in missing.output

def test_cli_wrong_password(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    init_vault(runner)
    r = runner.invoke(cli, ['list'], input='wrong\n')
    assert r.exit_code == 1
    assert 'Invalid master password.' in r.output

def test_cli_list_without_vault(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    r = CliRunner().invoke(cli, ['list'], input='pw\n')
    assert r.exit_code == 1
    assert 'Invalid master password.' in r.output

def test_cli_export_reset_import(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    init_vault(runner)
    add_example(runner)
    backup = tmp_path / 'backup.json'
    assert runner.invoke(cli, ['export', str(backup)]).exit_code == 0
    assert set(json.loads(backup.read_text())) == {'encrypted', 'hash', 'version'}
    assert runner.invoke(cli, ['reset', '--yes']).exit_code == 0
    assert not (tmp_path / 'vault.json').exists()
    imp = runner.invoke(cli, ['import', str(backup)])
    assert imp.exit_code == 0, imp.output
    lst = runner.invoke(cli, ['list'], input='correct-horse-battery\n')
    assert 'Example' in lst.output
    refused = runner.invoke(cli, ['import', str(backup)])
    assert refused.exit_code == 1

def test_cli_import_partial_record(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    partial = tmp_path / 'partial.json'
    partial.write_text(json.dumps({'hash': 'x', 'version': 1}))
    r = CliRunner().invoke(cli, ['import', str(partial)])
    assert r.exit_code == 1
    assert not (tmp_path / 'vault.json').exists()

def test_cli_edit_clear_and_noop(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    init_vault(runner)
    r = runner.invoke(cli, ['add', '--url', 'https://example.com', '--notes', 'hi'],
                      input='correct-horse-battery\nExample\nuser@example.com\np@ssW0rd!\n')
    cid = r.output.strip().split()[-1].rstrip('.')
    before = (tmp_path / 'vault.json').read_text()
    noop = runner.invoke(cli, ['edit', cid], input='correct-horse-battery\n')
    assert noop.exit_code == 0 and 'Nothing to change.' in noop.output
    assert (tmp_path / 'vault.json').read_text() == before
    ed = runner.invoke(cli, ['edit', cid, '--clear-url', '--clear-notes'], input='correct-horse-battery\n')
    assert ed.exit_code == 0, ed.output
    show = runner.invoke(cli, ['show', cid], input='correct-horse-battery\n')
    assert 'URL: -' in show.output and 'Notes: -' in show.output

def test_cli_corrupt_store_reports_error(monkeypatch, tmp_path):
    path = tmp_path / 'vault.json'
    monkeypatch.setenv('VAULT_PATH', str(path))
    path.write_text('{not json')
    runner = CliRunner()
    backup = tmp_path / 'backup.json'
    backup.write_text('{}')
    for args in (['export', str(tmp_path / 'out.json')], ['import', str(backup)], ['reset', '--yes']):
        r = runner.invoke(cli, args)
        assert r.exit_code == 1, args
        assert 'Unreadable vault store' in r.output
        assert not isinstance(r.exception, StorageError)

def test_cli_write_failure_reports_error(monkeypatch, tmp_path):
    monkeypatch.setenv('VAULT_PATH', str(tmp_path / 'vault.json'))
    runner = CliRunner()
    init_vault(runner)
    def fail(self, data):
        raise StorageError('Failed to write vault store: disk full')
    monkeypatch.setattr(FileStore, '_replace', fail)
    r = runner.invoke(cli, ['add'], input='correct-horse-battery\nExample\nuser@example.com\np@ssW0rd!\n')
    assert r.exit_code == 1
    assert 'disk full' in r.output
