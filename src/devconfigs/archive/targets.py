from dataclasses import dataclass
from typing import Callable, Optional

from devconfigs.archive.adapters import (
    TargetAdapter, SshKeysAdapter, GpgKeyringAdapter, MacosDefaultsAdapter, PlistAdapter
)
from devconfigs.archive.job import ArchiveJob, Operation


@dataclass(frozen=True)
class Target:
    """
    An encrypted backup target: the archive name and how to build its adapter.

    `source_key` names the config entry holding the source directory. Targets without
    one gather directly into their staging directory.
    """
    archive_name: str
    build_adapter: Callable[[dict], TargetAdapter]
    source_key: Optional[str] = None

    def source_path(self, config: dict):
        if self.source_key is not None:
            return config[self.source_key]
        return config["tmp_dir"] / self.archive_name


TARGETS = {
    "ssh": Target("ssh_keys", lambda config: SshKeysAdapter(), source_key="ssh_dir"),
    "gpg": Target("gpg_keys", lambda config: GpgKeyringAdapter()),
    "macos-defaults": Target("macos_defaults", lambda config: MacosDefaultsAdapter()),
    "sync-plists": Target("plists", lambda config: PlistAdapter(config["preferences_dir"], config["plists"])),
}


def build_archive_job(name: str, operation: Operation, passphrase: str, config: dict) -> ArchiveJob:
    """
    Creates the archive job for the target registered under `name`.

    Raises:
        KeyError: If no target with this name exists.
    """
    target = TARGETS[name]
    return ArchiveJob(
        operation=operation,
        source_path=target.source_path(config),
        archive_name=target.archive_name,
        encrypted_name=target.archive_name,
        passphrase=passphrase,
        adapter=target.build_adapter(config),
    )
