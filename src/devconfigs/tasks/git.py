from datetime import datetime
from devconfigs.log import logger
from devconfigs.utils import run_cmd, run_step


def secrets_check(config, operation=None) -> int:
    """
    Scans the config directory for leaked secrets with git-secrets and gitleaks.
    """
    config_dir = config["config_dir"]
    logger.info("Performing secrets check with git-secrets...")

    status = run_step("git-secrets", run_cmd, ["git", "secrets", "--scan"], cwd=config_dir)
    if status != 0:
        return status

    status = run_step("gitleaks", run_cmd, ["gitleaks", "git", ".", "-v"], cwd=config_dir)
    if status != 0:
        return status

    logger.info("Secrets check completed.")
    return 0


def commit_message(now=None) -> str:
    now = now or datetime.now()
    return f"Backup configurations on {now.strftime('%a %b %d %H:%M:%S %Y')}"


def sync_to_git(config, operation=None) -> int:
    """
    Commits and pushes the config directory. Nothing is committed if the secrets check fails.
    """
    status = secrets_check(config)
    if status != 0:
        logger.error("Secrets check failed. Configurations were not synced.")
        return status

    config_dir = config["config_dir"]
    logger.info("Syncing configurations to Git repository...")

    for cmd in (["git", "add", "."], ["git", "commit", "-m", commit_message()], ["git", "push"]):
        status = run_step("Git sync", run_cmd, cmd, cwd=config_dir)
        if status != 0:
            return status

    logger.info("✅ Configurations synced to Git.")
    return 0


def sync_from_git(config, operation=None) -> int:
    """Pulls the latest configurations into the config directory."""
    logger.info("Syncing configurations from Git repository...")
    status = run_step("Git pull", run_cmd, ["git", "pull"], cwd=config["config_dir"])
    if status == 0:
        logger.info("✅ Configurations synced from Git.")
    return status
