import getpass

from dataclasses import dataclass, field
from typing import Callable, Optional

from devconfigs.log import logger
from devconfigs.globals import Globals
from devconfigs.archive.coordinator import ArchiveCoordinator
from devconfigs.archive.job import Operation
from devconfigs.archive.targets import build_archive_job
from devconfigs.security.credentials import resolve_passphrase
from devconfigs.utils import check_system_dependencies, run_step
from devconfigs.tasks.brew import manage_brewfile
from devconfigs.tasks.completions import write_completions
from devconfigs.tasks.configs import manage_git_config, manage_kube_config, manage_docker, manage_custom_scripts
from devconfigs.tasks.cursor import manage_cursor
from devconfigs.tasks.dotfiles import link_dotfiles
from devconfigs.tasks.git import secrets_check, sync_to_git, sync_from_git
from devconfigs.tasks.system import manage_firewall, manage_network


@dataclass
class Context:
	"""
	Everything a command needs: the configuration and the credential store used to
	resolve the archive passphrase. The passphrase is resolved at most once.
	"""
	config: dict
	store: object
	prompt: Callable = getpass.getpass
	_passphrase: Optional[str] = field(default=None, repr=False)

	def passphrase(self) -> str:
		if self._passphrase is None:
			keychain = self.config["keychain"]
			self._passphrase = resolve_passphrase(self.store, keychain["service"], keychain["account"], self.prompt)
		return self._passphrase

	def coordinator(self) -> ArchiveCoordinator:
		return ArchiveCoordinator(self.config["config_dir"], self.config["tmp_dir"])


@dataclass(frozen=True)
class Command:
	"""
	A subcommand of the dispatcher.

	Attributes:
		handler: Called with (context, operation), returns an exit status.
		description: Shown in the usage text and in shell completions.
		operations: Accepted operation flags. Empty if the command takes none.
		requires: System binaries that must be installed.
	"""
	handler: Callable
	description: str
	operations: tuple = ()
	requires: tuple = ()

	def usage(self, name: str) -> str:
		flags = "|".join(f"--{op}" for op in self.operations)
		return f"Usage: devconfigs {name} [{flags}]"


def archive_command(name):
	def handler(ctx, operation):
		job = build_archive_job(name, Operation(operation), ctx.passphrase(), ctx.config)
		return ctx.coordinator().run(job)
	return handler


def config_command(task):
	def handler(ctx, operation):
		return task(ctx.config, operation)
	return handler


def run_sequence(ctx, steps):
	"""
	Runs a fixed sequence of commands. A failing step does not stop the remaining ones.

	Returns:
		int: 0 if all steps succeeded, 1 otherwise.
	"""
	num_errors = 0
	for name, operation in steps:
		if run_command(ctx, name, operation) != 0:
			logger.error(f"Step \"{name}\" failed.")
			num_errors += 1

	if num_errors:
		logger.error(f"{num_errors} of {len(steps)} steps failed.")
		return 1
	return 0


BACKUP_ALL_STEPS = [
	("ssh", "backup"),
	("gpg", "backup"),
	("macos-defaults", "backup"),
	("sync-plists", "backup"),
	("brewfile", "backup"),
	("git-config", "backup"),
	("kube-config", "backup"),
	("custom-scripts", "backup"),
	("secrets-check", None),
]

RESTORE_ALL_STEPS = [
	("ssh", "restore"),
	("gpg", "restore"),
	("macos-defaults", "restore"),
	("sync-plists", "restore"),
	("brewfile", "restore"),
	("git-config", "restore"),
	("kube-config", "restore"),
	("custom-scripts", "restore"),
	("link-dotfiles", None),
]


def backup_all(ctx, operation=None):
	logger.info("Starting full backup of all configurations...")
	ctx.passphrase()
	status = run_sequence(ctx, BACKUP_ALL_STEPS)
	if status == 0:
		logger.info("✅ Full backup completed.")
	return status


def restore_all(ctx, operation=None):
	"""Pulls the config directory and restores every configuration from it."""
	pull_status = sync_from_git(ctx.config) if check_system_dependencies(("git",)) else 1
	logger.info("Starting full restore of all configurations...")
	ctx.passphrase()
	status = run_sequence(ctx, RESTORE_ALL_STEPS)
	if status == 0 and pull_status == 0:
		logger.info("✅ Full restore completed.")
		return 0
	return 1


def backup_and_sync(ctx, operation=None):
	backup_status = backup_all(ctx)
	sync_status = run_command(ctx, "sync", None)
	return 0 if backup_status == 0 and sync_status == 0 else 1


def add_completions(ctx, operation=None):
	logger.info("Setting up Zsh autocompletions...")
	subcommands = {name: command.description for name, command in COMMANDS.items()}
	return run_step("Zsh completions", write_completions, ctx.config["home_dir"], subcommands)


ARCHIVE_BINS = tuple(Globals.REQUIRED_SYSTEM_BINS)

COMMANDS = {
	"cursor": Command(config_command(manage_cursor), "Manage Cursor configurations", ("sync-to", "sync-from"), ("cursor",)),
	"ssh": Command(archive_command("ssh"), "Manage SSH keys and config", ("backup", "restore"), ARCHIVE_BINS),
	"gpg": Command(archive_command("gpg"), "Manage GPG keys", ("backup", "restore"), ARCHIVE_BINS),
	"macos-defaults": Command(archive_command("macos-defaults"), "Manage macOS system preferences", ("backup", "restore"), ARCHIVE_BINS + ("defaults",)),
	"sync-plists": Command(archive_command("sync-plists"), "Sync application plist files", ("backup", "restore"), ARCHIVE_BINS),
	"brewfile": Command(config_command(manage_brewfile), "Manage Homebrew packages", ("backup", "restore", "check"), ("brew",)),
	"git-config": Command(config_command(manage_git_config), "Manage Git configuration", ("backup", "restore")),
	"kube-config": Command(config_command(manage_kube_config), "Manage Kubernetes configuration", ("backup", "restore")),
	"docker": Command(config_command(manage_docker), "Manage Docker configuration", ("backup", "restore")),
	"custom-scripts": Command(config_command(manage_custom_scripts), "Manage custom scripts in ~/bin", ("backup", "restore")),
	"firewall": Command(config_command(manage_firewall), "Manage firewall settings", requires=("sudo",)),
	"network": Command(config_command(manage_network), "Manage network settings", requires=("networksetup",)),
	"link-dotfiles": Command(config_command(link_dotfiles), "Link dotfiles from the config directory to the home directory"),
	"backup-all": Command(backup_all, "Backup all configurations"),
	"restore-all": Command(restore_all, "Pull from Git and restore all configurations"),
	"all": Command(backup_and_sync, "Backup all configurations and sync them to Git"),
	"sync": Command(config_command(sync_to_git), "Sync configurations to Git repository", requires=("git", "gitleaks")),
	"secrets-check": Command(config_command(secrets_check), "Check for secrets in the repository", requires=("git", "gitleaks")),
	"add-completions": Command(add_completions, "Add Zsh autocompletions for this script"),
}


def usage_text() -> str:
	lines = ["Usage: devconfigs [--config FILE] [--verbose] <subcommand> [options]", "", "Subcommands:"]
	for name, command in COMMANDS.items():
		lines.append(f"  {name:<16}{command.description}")
		if command.operations:
			options = ", ".join(f"--{op}" for op in command.operations)
			lines.append(f"  {'':<16}Options: {options}")
	return "\n".join(lines)


def print_usage():
	print(usage_text())


def run_command(ctx, name, operation):
	"""
	Resolves a subcommand and runs it with the given operation.

	Returns:
		int: Exit status. 1 for unknown subcommands, invalid operations or missing binaries.
	"""
	command = COMMANDS.get(name)
	if command is None:
		print_usage()
		return 1

	if command.operations and operation not in command.operations:
		print(command.usage(name))
		return 1

	if not command.operations and operation is not None:
		logger.warning(f"Ignoring --{operation}: \"{name}\" takes no options.")
		operation = None

	if not check_system_dependencies(command.requires):
		return 1

	logger.debug(f"Running \"{name}\" (operation: {operation})")
	return command.handler(ctx, operation)
