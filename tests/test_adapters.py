# tests/test_adapters.py

import subprocess
import pytest

from unittest.mock import patch, call
from devconfigs.archive.adapters import SshKeysAdapter, GpgKeyringAdapter, MacosDefaultsAdapter, PlistAdapter


def test_ssh_gather_copies_files_only(tmp_path):
    ssh_dir = tmp_path / ".ssh"
    ssh_dir.mkdir()
    (ssh_dir / "id_rsa").write_bytes(b"private")
    (ssh_dir / "config").write_bytes(b"Host *\n")
    (ssh_dir / "sockets").mkdir()
    staging = tmp_path / "staging"
    staging.mkdir()

    SshKeysAdapter().gather(ssh_dir, staging)

    assert sorted(p.name for p in staging.iterdir()) == ["config", "id_rsa"]
    assert (staging / "id_rsa").read_bytes() == b"private"


def test_ssh_gather_without_ssh_directory_stages_nothing(tmp_path):
    staging = tmp_path / "staging"
    staging.mkdir()

    SshKeysAdapter().gather(tmp_path / "missing", staging)

    assert list(staging.iterdir()) == []


@patch("devconfigs.archive.adapters.run_cmd")
def test_gpg_gather_exports_both_keyrings(mock_run, tmp_path):
    GpgKeyringAdapter().gather(tmp_path, tmp_path)

    commands = [c.args[0] for c in mock_run.call_args_list]
    assert commands == [["gpg", "--export"], ["gpg", "--export-secret-keys"]]
    assert (tmp_path / "public_keys.gpg").exists()
    assert (tmp_path / "secret_keys.gpg").exists()


@patch("devconfigs.archive.adapters.run_cmd")
def test_gpg_scatter_imports_both_keyrings(mock_run, tmp_path):
    GpgKeyringAdapter().scatter(tmp_path)

    assert mock_run.call_args_list == [
        call(["gpg", "--import", str(tmp_path / "public_keys.gpg")]),
        call(["gpg", "--import", str(tmp_path / "secret_keys.gpg")]),
    ]


@patch("devconfigs.archive.adapters.run_cmd")
def test_defaults_gather_exports_each_domain(mock_run, tmp_path):
    mock_run.side_effect = [
        subprocess.CompletedProcess(["defaults", "domains"], 0, stdout="com.apple.dock, com.apple.finder\n"),
        None,
        None,
    ]

    MacosDefaultsAdapter().gather(tmp_path, tmp_path)

    assert mock_run.call_args_list[1:] == [
        call(["defaults", "export", "com.apple.dock", str(tmp_path / "com.apple.dock.plist")]),
        call(["defaults", "export", "com.apple.finder", str(tmp_path / "com.apple.finder.plist")]),
    ]


@patch("devconfigs.archive.adapters.run_cmd")
def test_defaults_scatter_imports_under_domain_name(mock_run, tmp_path):
    (tmp_path / "com.apple.dock.plist").write_text("dock")
    (tmp_path / "notes.txt").write_text("ignored")

    MacosDefaultsAdapter().scatter(tmp_path)

    mock_run.assert_called_once_with(["defaults", "import", "com.apple.dock", str(tmp_path / "com.apple.dock.plist")])


def test_plist_gather_fails_on_missing_file(tmp_path):
    preferences = tmp_path / "Preferences"
    preferences.mkdir()
    staging = tmp_path / "staging"
    staging.mkdir()

    adapter = PlistAdapter(preferences, ["com.apple.dock.plist"])

    with pytest.raises(FileNotFoundError):
        adapter.gather(staging, staging)
