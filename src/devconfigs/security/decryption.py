from pathlib import Path
from devconfigs.globals import Globals
from devconfigs.log import logger
from devconfigs.security.gpg import decrypt_cmd, passphrase_input
from devconfigs.utils import run_cmd


def decrypt_file(ciphertext: Path, out_file: Path, passphrase: str):
    """
    Decrypts a symmetrically encrypted GPG file. The ciphertext itself is never modified.

    Raises:
        FileNotFoundError: If the ciphertext does not exist.
        subprocess.CalledProcessError: If gpg fails (e.g. wrong passphrase).
    """
    if not ciphertext.is_file():
        raise FileNotFoundError(f"Encrypted archive does not exist at {ciphertext}")

    out_file.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(decrypt_cmd(ciphertext, out_file), input=passphrase_input(passphrase), text=True, umask=Globals.PRIVATE_UMASK)
    logger.debug(f"Successfully decrypted: {ciphertext}")


def extract_archive(archive_path: Path, target_dir: Path):
    """
    Extracts a gzip-compressed tar archive into `target_dir`.

    Raises:
        subprocess.CalledProcessError: If tar fails.
    """
    tar_cmd = ["tar", "-xzf", str(archive_path), "-C", str(target_dir)]
    run_cmd(tar_cmd)
    logger.debug(f"Successfully extracted {archive_path} into {target_dir}")
