import os
import shutil
import stat
import subprocess

from abc import ABC, abstractmethod
from pathlib import Path
from devconfigs.log import logger
from devconfigs.utils import run_cmd, copy_file

KEY_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR
KEY_DIR_MODE = stat.S_IRWXU


class TargetAdapter(ABC):
    """
    Gathers one category of state into a staging directory on backup and
    redistributes the extracted files on restore.
    """

    @abstractmethod
    def gather(self, source_dir: Path, staging_dir: Path):
        """Populates `staging_dir` with the files to back up."""

    @abstractmethod
    def scatter(self, restored_dir: Path):
        """Moves the files extracted into `restored_dir` to their final locations."""


class SshKeysAdapter(TargetAdapter):
    """Copies the SSH directory and restores strict permissions."""

    def gather(self, source_dir: Path, staging_dir: Path):
        if not source_dir.is_dir():
            logger.warning(f"SSH directory {source_dir} does not exist. The archive will be empty.")
            return

        for entry in sorted(source_dir.iterdir()):
            if entry.is_file():
                shutil.copy2(entry, staging_dir / entry.name)
                logger.debug(f"Staged {entry.name}")

    def scatter(self, restored_dir: Path):
        for entry in restored_dir.iterdir():
            if entry.is_file() and not entry.is_symlink():
                os.chmod(entry, KEY_FILE_MODE)
        os.chmod(restored_dir, KEY_DIR_MODE)


class GpgKeyringAdapter(TargetAdapter):
    """Exports and imports the public and secret GPG keyrings."""

    PUBLIC_KEYS = "public_keys.gpg"
    SECRET_KEYS = "secret_keys.gpg"

    def gather(self, source_dir: Path, staging_dir: Path):
        with open(staging_dir / self.PUBLIC_KEYS, "wb") as f:
            run_cmd(["gpg", "--export"], stdout=f)
        with open(staging_dir / self.SECRET_KEYS, "wb") as f:
            run_cmd(["gpg", "--export-secret-keys"], stdout=f)

    def scatter(self, restored_dir: Path):
        run_cmd(["gpg", "--import", str(restored_dir / self.PUBLIC_KEYS)])
        run_cmd(["gpg", "--import", str(restored_dir / self.SECRET_KEYS)])


class MacosDefaultsAdapter(TargetAdapter):
    """Exports every preference domain with `defaults` and imports them back."""

    def list_domains(self) -> list[str]:
        result = run_cmd(["defaults", "domains"], stdout=subprocess.PIPE, text=True)
        return [domain.strip() for domain in result.stdout.split(",") if domain.strip()]

    def gather(self, source_dir: Path, staging_dir: Path):
        domains = self.list_domains()
        logger.debug(f"Exporting {len(domains)} preference domains.")
        for domain in domains:
            run_cmd(["defaults", "export", domain, str(staging_dir / f"{domain}.plist")])

    def scatter(self, restored_dir: Path):
        for plist in sorted(restored_dir.glob("*.plist")):
            run_cmd(["defaults", "import", plist.stem, str(plist)])


class PlistAdapter(TargetAdapter):
    """Copies a fixed list of application plist files to and from the preferences directory."""

    def __init__(self, preferences_dir: Path, plists: list[str]):
        self.preferences_dir = preferences_dir
        self.plists = list(plists)

    def gather(self, source_dir: Path, staging_dir: Path):
        for plist in self.plists:
            copy_file(self.preferences_dir / plist, staging_dir / plist)
            logger.info(f"Backed up: {plist}")

    def scatter(self, restored_dir: Path):
        for plist in self.plists:
            copy_file(restored_dir / plist, self.preferences_dir / plist)
            logger.info(f"Restored: {plist}")
