import pytest
from src.lib.errors import StorageError
from src.lib.store import FileStore, MemoryStore

def test_memory_store_slots():
    s = MemoryStore()
    assert s.get('a') is None
    s.set('a', '1'); s.set_many({'b': '2', 'c': '3'})
    assert (s.get('a'), s.get('b'), s.get('c')) == ('1', '2', '3')
    s.delete_many(['a', 'b'])
    assert s.get('a') is None and s.get('c') == '3'

def test_store_rejects_non_text():
    with pytest.raises(StorageError):
        MemoryStore().set('a', b'bytes')

def test_file_store_persists(tmp_path):
    path = tmp_path / 'nested' / 'vault.json'
    FileStore(path).set_many({'master_hash': 'h', 'encrypted_vault': 'e'})
    s = FileStore(path)
    assert s.get('master_hash') == 'h' and s.get('encrypted_vault') == 'e'
    assert not path.with_suffix('.json.tmp').exists()
    s.delete('encrypted_vault')
    assert FileStore(path).get('encrypted_vault') is None
    s.delete('master_hash')
    assert not path.exists()

@pytest.mark.parametrize('content', ['not json', '[1, 2]', '{"a": 1}'])
def test_file_store_unreadable(tmp_path, content):
    path = tmp_path / 'vault.json'
    path.write_text(content)
    with pytest.raises(StorageError):
        FileStore(path).get('master_hash')
