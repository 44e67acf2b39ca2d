import os
import subprocess

from pathlib import Path
from devconfigs.archive.job import ArchiveJob, Operation
from devconfigs.globals import Globals
from devconfigs.log import logger
from devconfigs.security.decryption import decrypt_file, extract_archive
from devconfigs.security.encryption import create_archive, encrypt_file, publish_file
from devconfigs.utils import remove_path


class ArchiveCoordinator:
    """
    Runs encrypted archive jobs.

    Every job owns a staging directory `<tmp_dir>/<archive_name>` and a plaintext
    archive `<tmp_dir>/<archive_name>.tar.gz`. Both are removed when the job ends,
    whether it succeeded or not. Encrypted archives live in the config directory as
    `<encrypted_name>.tar.gz.gpg`.
    """

    def __init__(self, config_dir: Path, tmp_dir: Path):
        self.config_dir = Path(config_dir)
        self.tmp_dir = Path(tmp_dir)

    def staging_dir(self, job: ArchiveJob) -> Path:
        return self.tmp_dir / job.archive_name

    def archive_file(self, job: ArchiveJob) -> Path:
        return self.tmp_dir / f"{job.archive_name}{Globals.ARCHIVE_ENDING}"

    def ciphertext_file(self, job: ArchiveJob) -> Path:
        return self.tmp_dir / f"{job.archive_name}{Globals.ARCHIVE_ENDING}{Globals.CIPHERTEXT_ENDING}"

    def encrypted_file(self, job: ArchiveJob) -> Path:
        return self.config_dir / f"{job.encrypted_name}{Globals.ARCHIVE_ENDING}{Globals.CIPHERTEXT_ENDING}"

    def run(self, job: ArchiveJob) -> int:
        """
        Executes a backup or restore job. Any failing step aborts the job.

        Returns:
            int: 0 on success, the exit code of the failing tool, or 1 on file system errors.
        """
        if job.operation == Operation.BACKUP:
            step = self._backup
        elif job.operation == Operation.RESTORE:
            step = self._restore
        else:
            logger.error("Invalid operation. Use --backup or --restore.")
            return 1

        logger.debug(job.describe())

        try:
            step(job)
        except subprocess.CalledProcessError as e:
            logger.error(f"{job.archive_name}: \"{e.cmd[0]}\" failed with exit code {e.returncode}.")
            return e.returncode
        except OSError as e:
            logger.error(f"{job.archive_name}: {e}")
            return 1
        finally:
            self._clean_up(job)

        return 0

    def _backup(self, job: ArchiveJob):
        logger.info(f"Backing up {job.archive_name}...")
        staging_dir = self.staging_dir(job)
        archive_file = self.archive_file(job)
        ciphertext = self.ciphertext_file(job)
        encrypted_file = self.encrypted_file(job)

        self._prepare_tmp_dir()
        # Never reuse plaintext from a previous job
        remove_path(staging_dir)
        staging_dir.mkdir(mode=0o700, parents=True)

        job.adapter.gather(job.source_path, staging_dir)
        create_archive(staging_dir, archive_file)
        encrypt_file(archive_file, ciphertext, job.passphrase)
        publish_file(ciphertext, encrypted_file)

        logger.info(f"✅ {job.archive_name} backup encrypted and saved to {encrypted_file}.")

    def _restore(self, job: ArchiveJob):
        logger.info(f"Restoring {job.archive_name}...")
        archive_file = self.archive_file(job)

        self._prepare_tmp_dir()
        remove_path(self.staging_dir(job))

        decrypt_file(self.encrypted_file(job), archive_file, job.passphrase)
        job.source_path.mkdir(parents=True, exist_ok=True)
        extract_archive(archive_file, job.source_path)
        job.adapter.scatter(job.source_path)

        logger.info(f"✅ {job.archive_name} restored successfully.")

    def _prepare_tmp_dir(self):
        # Plaintext archives live here, only the owner may enter
        self.tmp_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        os.chmod(self.tmp_dir, 0o700)

    def _clean_up(self, job: ArchiveJob):
        for path in (self.archive_file(job), self.ciphertext_file(job), self.staging_dir(job)):
            try:
                remove_path(path)
            except OSError as e:
                logger.warning(f"Failed to remove {path}: {e}")
