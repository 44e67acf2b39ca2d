from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from devconfigs.archive.adapters import TargetAdapter


class Operation(Enum):
    BACKUP = "backup"
    RESTORE = "restore"


@dataclass
class ArchiveJob:
    """
    Represents one backup or restore of one named target.

    Attributes:
        operation (Operation): Backup or restore.
        source_path (Path): Directory the target is gathered from or extracted into.
        archive_name (str): Name of the staging directory and the plaintext archive.
        encrypted_name (str): Base name of the encrypted archive in the config directory.
        passphrase (str): Passphrase for symmetric encryption and decryption.
        adapter (TargetAdapter): Gathers and scatters the target's files.
    """
    operation: Operation
    source_path: Path
    archive_name: str
    encrypted_name: str
    passphrase: str = field(repr=False)
    adapter: TargetAdapter

    def describe(self) -> str:
        if self.operation == Operation.BACKUP:
            return f"{self.source_path} ---(encrypt)--> {self.encrypted_name}"
        return f"{self.encrypted_name} ---(decrypt)--> {self.source_path}"
