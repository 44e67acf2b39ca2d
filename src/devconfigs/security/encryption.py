import shutil

from pathlib import Path
from devconfigs.globals import Globals
from devconfigs.log import logger
from devconfigs.security.gpg import symmetric_encrypt_cmd, passphrase_input
from devconfigs.utils import run_cmd


def create_archive(input_dir: Path, archive_path: Path):
    """
    Packs the contents of `input_dir` (not the directory itself) into a gzip-compressed tar archive.

    Raises:
        subprocess.CalledProcessError: If tar fails.
    """
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    tar_cmd = ["tar", "-czf", str(archive_path), "-C", str(input_dir), "."]
    run_cmd(tar_cmd, umask=Globals.PRIVATE_UMASK)
    logger.debug(f"Archive created: {archive_path}")


def encrypt_file(file_to_encrypt: Path, out_file: Path, passphrase: str):
    """
    Encrypts a file symmetrically with GPG.

    Parameters:
        file_to_encrypt (Path): Plaintext input file.
        out_file (Path): Path of the ciphertext. An existing file is overwritten.
        passphrase (str): Passphrase passed to gpg on stdin.

    Raises:
        subprocess.CalledProcessError: If gpg fails.
        FileNotFoundError: If gpg reports success but no ciphertext was written.
    """
    if out_file.exists():
        out_file.unlink()
        logger.debug(f"Old ciphertext removed: {out_file}")

    run_cmd(symmetric_encrypt_cmd(file_to_encrypt, out_file), input=passphrase_input(passphrase), text=True)

    if not out_file.exists():
        raise FileNotFoundError(f"Encryption completed but file not found: {out_file}")


def publish_file(ciphertext: Path, destination: Path):
    """
    Moves a ciphertext to its permanent location, replacing any previous version.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(ciphertext), str(destination))
    logger.debug(f"Ciphertext moved to {destination}")
