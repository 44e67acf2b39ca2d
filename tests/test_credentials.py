# tests/test_credentials.py

import subprocess

from unittest.mock import patch
from conftest import FakeStore
from devconfigs.security.credentials import KeychainStore, resolve_passphrase


def test_stored_passphrase_is_used_without_prompt():
    store = FakeStore("from-keychain")

    def prompt(_):
        raise AssertionError("must not prompt")

    assert resolve_passphrase(store, "manage_configs", "gpg_password", prompt) == "from-keychain"


def test_new_passphrase_is_prompted_and_cached():
    store = FakeStore()
    answers = iter(["", "typed"])

    passphrase = resolve_passphrase(store, "manage_configs", "gpg_password", lambda _: next(answers))

    assert passphrase == "typed"
    assert store.get("manage_configs", "gpg_password") == "typed"


def test_failing_store_does_not_lose_passphrase():
    class ReadOnlyStore(FakeStore):
        def set(self, service, account, passphrase):
            raise subprocess.CalledProcessError(1, ["security", "-i"])

    assert resolve_passphrase(ReadOnlyStore(), "svc", "acct", lambda _: "typed") == "typed"


@patch("devconfigs.security.credentials.subprocess.run")
def test_keychain_get_returns_password(mock_run):
    mock_run.return_value = subprocess.CompletedProcess([], 0, stdout="s3cret\n", stderr="")

    assert KeychainStore().get("manage_configs", "gpg_password") == "s3cret"
    assert mock_run.call_args.args[0] == [
        "security", "find-generic-password", "-a", "gpg_password", "-s", "manage_configs", "-w"
    ]


@patch("devconfigs.security.credentials.subprocess.run")
def test_keychain_get_missing_item(mock_run):
    mock_run.return_value = subprocess.CompletedProcess([], 44, stdout="", stderr="not found")

    assert KeychainStore().get("manage_configs", "gpg_password") is None


@patch("devconfigs.security.credentials.subprocess.run", side_effect=FileNotFoundError("security"))
def test_keychain_get_without_security_tool(mock_run):
    assert KeychainStore().get("manage_configs", "gpg_password") is None


@patch("devconfigs.security.credentials.subprocess.run")
def test_keychain_set_keeps_password_out_of_argv(mock_run):
    KeychainStore().set("manage_configs", "gpg_password", "pa\"ss")

    args, kwargs = mock_run.call_args
    assert args[0] == ["security", "-i"]
    assert "pa" not in " ".join(args[0])
    assert kwargs["input"] == 'add-generic-password -U -a "gpg_password" -s "manage_configs" -w "pa\\"ss"\n'
    assert kwargs["check"] is True
