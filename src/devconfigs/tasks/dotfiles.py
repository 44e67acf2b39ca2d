import glob

from pathlib import Path
from devconfigs.log import logger
from devconfigs.utils import force_symlink


def expand_dotfiles(config_dir: Path, patterns: list[str]) -> list[Path]:
    """
    Expands the dotfile patterns relative to the config directory.

    Plain names are returned even if they do not exist so the caller can report them.
    Patterns with wildcards (e.g. ".vim/*") expand to the matching entries.
    """
    entries = []
    for pattern in patterns:
        if glob.has_magic(pattern):
            matches = sorted(config_dir.glob(pattern))
            if not matches:
                logger.warning(f"No dotfiles match {pattern}.")
            entries.extend(match.relative_to(config_dir) for match in matches)
        else:
            entries.append(Path(pattern))
    return entries


def link_dotfiles(config, operation=None) -> int:
    """
    Links the configured dotfiles from the config directory into the home directory.

    Returns:
        int: 0 if all dotfiles were linked, 1 otherwise.
    """
    config_dir = config["config_dir"]
    home = config["home_dir"]
    logger.info(f"Linking dotfiles from {config_dir}...")

    num_errors = 0
    for relative in expand_dotfiles(config_dir, config["dotfiles"]):
        source = config_dir / relative
        if not source.exists():
            logger.warning(f"Dotfile {source} does not exist. Skipped.")
            continue

        try:
            force_symlink(source, home / relative)
        except OSError as e:
            logger.error(f"Failed to link {relative}: {e}")
            num_errors += 1
            continue

        logger.info(f"Linked: {relative}")

    if num_errors:
        return 1

    logger.info("✅ Dotfiles linked successfully.")
    return 0
