from devconfigs.log import logger
from devconfigs.utils import run_cmd, run_step


def brewfile_path(config):
    return config["config_dir"] / "Brewfile"


def manage_brewfile(config, operation) -> int:
    """
    Dumps, installs or checks the Homebrew packages listed in the Brewfile.
    """
    brewfile = brewfile_path(config)

    if operation == "backup":
        logger.info(f"Backing up Homebrew packages to {brewfile}...")
        brewfile.parent.mkdir(parents=True, exist_ok=True)
        cmd = ["brew", "bundle", "dump", f"--file={brewfile}", "--force"]
    elif operation == "restore":
        logger.info(f"Restoring Homebrew packages from {brewfile}...")
        cmd = ["brew", "bundle", f"--file={brewfile}"]
    elif operation == "check":
        logger.info("Checking for missing or outdated Homebrew packages...")
        cmd = ["brew", "bundle", "check", f"--file={brewfile}"]
    else:
        raise ValueError(f"Unsupported Brewfile operation: {operation}")

    status = run_step("Brewfile", run_cmd, cmd)
    if status == 0 and operation != "check":
        logger.info(f"✅ Brewfile {operation} completed.")
    return status
