# tests/conftest.py

import shutil
import subprocess
import pytest

from devconfigs.parser import default_config, merge_config, resolve_config


class FakeStore:
    """In-memory credential store."""

    def __init__(self, passphrase=None):
        self.items = {}
        self.get_calls = 0
        if passphrase is not None:
            self.items[("manage_configs", "gpg_password")] = passphrase

    def get(self, service, account):
        self.get_calls += 1
        return self.items.get((service, account))

    def set(self, service, account, passphrase):
        self.items[(service, account)] = passphrase


def fake_encrypt_file(file_to_encrypt, out_file, passphrase):
    out_file.write_bytes(passphrase.encode() + b"\n" + file_to_encrypt.read_bytes())


def fake_decrypt_file(ciphertext, out_file, passphrase):
    if not ciphertext.is_file():
        raise FileNotFoundError(f"Encrypted archive does not exist at {ciphertext}")
    header, _, body = ciphertext.read_bytes().partition(b"\n")
    if header != passphrase.encode():
        raise subprocess.CalledProcessError(2, ["gpg", "--decrypt"])
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_bytes(body)


requires_tar = pytest.mark.skipif(shutil.which("tar") is None, reason="tar is not installed")


@pytest.fixture
def config(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    return resolve_config(merge_config(default_config(), {"home_dir": str(home)}))


@pytest.fixture
def fake_crypto(monkeypatch):
    monkeypatch.setattr("devconfigs.archive.coordinator.encrypt_file", fake_encrypt_file)
    monkeypatch.setattr("devconfigs.archive.coordinator.decrypt_file", fake_decrypt_file)
