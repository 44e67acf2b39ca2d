# tests/test_commands.py

from unittest.mock import patch
from conftest import FakeStore, requires_tar
from devconfigs.commands import (
    COMMANDS, RESTORE_ALL_STEPS, Context, run_command, run_sequence, backup_all, restore_all, backup_and_sync
)


def test_every_archive_target_is_registered():
    for name in ("ssh", "gpg", "macos-defaults", "sync-plists"):
        assert COMMANDS[name].operations == ("backup", "restore")


def test_unknown_subcommand(config, capsys):
    ctx = Context(config, FakeStore("pw"))

    assert run_command(ctx, "does-not-exist", None) == 1
    assert "Subcommands:" in capsys.readouterr().out


@patch("devconfigs.commands.check_system_dependencies", return_value=False)
def test_missing_binaries_abort_command(mock_check, config):
    ctx = Context(config, FakeStore("pw"))

    assert run_command(ctx, "brewfile", "check") == 1


def test_sequence_continues_after_failure(config):
    ctx = Context(config, FakeStore("pw"))
    calls = []

    def fake_run_command(ctx, name, operation):
        calls.append(name)
        return 1 if name == "gpg" else 0

    with patch("devconfigs.commands.run_command", side_effect=fake_run_command):
        status = run_sequence(ctx, [("ssh", "backup"), ("gpg", "backup"), ("brewfile", "backup")])

    assert status == 1
    assert calls == ["ssh", "gpg", "brewfile"]


def test_backup_all_resolves_passphrase_once(config):
    store = FakeStore()
    prompts = []
    ctx = Context(config, store, prompt=lambda text: prompts.append(text) or "typed")

    with patch("devconfigs.commands.run_command", return_value=0) as mock_run:
        assert backup_all(ctx) == 0
        ctx.passphrase()

    assert len(prompts) == 1
    assert store.get("manage_configs", "gpg_password") == "typed"
    assert mock_run.call_count == 9


@requires_tar
@patch("devconfigs.commands.check_system_dependencies", return_value=True)
def test_ssh_subcommand_backs_up_keys(mock_check, config, fake_crypto):
    config["ssh_dir"].mkdir()
    (config["ssh_dir"] / "id_rsa").write_text("key")
    ctx = Context(config, FakeStore("pw"))

    assert run_command(ctx, "ssh", "backup") == 0
    assert (config["config_dir"] / "ssh_keys.tar.gz.gpg").is_file()
    assert not (config["tmp_dir"] / "ssh_keys").exists()


@patch("devconfigs.commands.check_system_dependencies", return_value=True)
def test_restore_all_pulls_before_restoring(mock_check, config):
    ctx = Context(config, FakeStore("pw"))
    calls = []

    with patch("devconfigs.commands.sync_from_git", side_effect=lambda config: calls.append("pull") or 0), \
            patch("devconfigs.commands.run_command", side_effect=lambda ctx, name, op: calls.append((name, op)) or 0):
        assert restore_all(ctx) == 0

    assert calls[0] == "pull"
    assert calls[1:] == RESTORE_ALL_STEPS
    assert ("link-dotfiles", None) in calls


@patch("devconfigs.commands.check_system_dependencies", return_value=True)
def test_restore_all_fails_when_pull_fails(mock_check, config):
    ctx = Context(config, FakeStore("pw"))

    with patch("devconfigs.commands.sync_from_git", return_value=1), \
            patch("devconfigs.commands.run_command", return_value=0) as mock_run:
        assert restore_all(ctx) == 1

    assert mock_run.call_count == len(RESTORE_ALL_STEPS)


@patch("devconfigs.commands.check_system_dependencies", return_value=False)
def test_restore_all_without_git_fails(mock_check, config):
    ctx = Context(config, FakeStore("pw"))

    with patch("devconfigs.commands.sync_from_git") as mock_pull, \
            patch("devconfigs.commands.run_command", return_value=0):
        assert restore_all(ctx) == 1

    mock_pull.assert_not_called()


def test_all_backs_up_then_syncs(config):
    ctx = Context(config, FakeStore("pw"))
    calls = []

    with patch("devconfigs.commands.backup_all", side_effect=lambda ctx: calls.append("backup-all") or 0), \
            patch("devconfigs.commands.run_command", side_effect=lambda ctx, name, op: calls.append(name) or 0):
        assert backup_and_sync(ctx) == 0

    assert calls == ["backup-all", "sync"]


def test_all_fails_when_backup_fails(config):
    ctx = Context(config, FakeStore("pw"))

    with patch("devconfigs.commands.backup_all", return_value=1), \
            patch("devconfigs.commands.run_command", return_value=0) as mock_run:
        assert backup_and_sync(ctx) == 1

    mock_run.assert_called_once_with(ctx, "sync", None)
