import subprocess

from devconfigs.log import logger
from devconfigs.utils import copy_file, run_cmd, run_step

EXTENSIONS_FILE = "extensions.txt"


def cursor_backup_dir(config):
    return config["config_dir"] / "cursor"


def sync_cursor_to(config):
    user_dir = config["cursor"]["user_dir"]
    backup_dir = cursor_backup_dir(config)
    backup_dir.mkdir(parents=True, exist_ok=True)

    for name in config["cursor"]["files"]:
        copy_file(user_dir / name, backup_dir / name)

    result = run_cmd(["cursor", "--list-extensions"], stdout=subprocess.PIPE, text=True)
    (backup_dir / EXTENSIONS_FILE).write_text(result.stdout)


def sync_cursor_from(config):
    user_dir = config["cursor"]["user_dir"]
    backup_dir = cursor_backup_dir(config)

    for name in config["cursor"]["files"]:
        copy_file(backup_dir / name, user_dir / name)

    extensions = (backup_dir / EXTENSIONS_FILE).read_text().split()
    for extension in extensions:
        run_cmd(["cursor", "--install-extension", extension])


def manage_cursor(config, operation) -> int:
    """
    Syncs Cursor settings, keybindings and extensions to or from the config directory.
    """
    if operation == "sync-to":
        logger.info("Syncing local Cursor config to the config directory...")
        status = run_step("Cursor sync", sync_cursor_to, config)
    elif operation == "sync-from":
        logger.info("Syncing the config directory back to local Cursor config...")
        status = run_step("Cursor sync", sync_cursor_from, config)
    else:
        raise ValueError(f"Unsupported Cursor operation: {operation}")

    if status == 0:
        logger.info("✅ Cursor sync completed.")
    return status
