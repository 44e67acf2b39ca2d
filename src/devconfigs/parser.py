import argparse
import os
import sys
import yaml

from pathlib import Path
from devconfigs.log import logger
from devconfigs.globals import Globals

# Keys holding paths, resolved relative to the user's home directory
PATH_KEYS = ["home_dir", "config_dir", "tmp_dir", "ssh_dir", "preferences_dir"]


class CliParser(argparse.ArgumentParser):
	"""ArgumentParser that exits with status 1 on invalid arguments."""

	def error(self, message):
		self.print_usage(sys.stderr)
		self.exit(1, f"{self.prog}: error: {message}\n")


def default_config():
	"""
	Returns the built-in configuration. Paths set to None are derived from
	the home directory (or the config directory) by `resolve_config`.
	"""
	return {
		"home_dir": "~",
		"config_dir": None,
		"tmp_dir": None,
		"ssh_dir": None,
		"preferences_dir": None,
		"plists": list(Globals.DEFAULT_PLISTS),
		"dotfiles": list(Globals.DEFAULT_DOTFILES),
		"keychain": {
			"service": Globals.KEYCHAIN_SERVICE,
			"account": Globals.KEYCHAIN_ACCOUNT,
		},
		"cursor": {
			"user_dir": None,
			"files": ["settings.json", "keybindings.json"],
		},
	}


def find_config_file(path_to_config=None):
	"""
	Locates the configuration file.

	An explicitly given file must exist. Otherwise `Globals.DEFAULT_CONFIG_FILE`
	is searched in `Globals.DEFAULT_CONFIG_DIRS`.

	Returns:
		str | None: Path to the configuration file, "" if no file was found and the
					built-in defaults apply, or None if the given file does not exist.
	"""
	if path_to_config is not None:
		if not os.path.isfile(path_to_config):
			logger.error(f"Configuration file \"{path_to_config}\" not found.")
			return None
		return path_to_config

	for config_dir in Globals.DEFAULT_CONFIG_DIRS:
		candidate = os.path.join(os.path.expanduser(config_dir), Globals.DEFAULT_CONFIG_FILE)
		if os.path.isfile(candidate):
			return candidate

	logger.debug("No configuration file found. Using built-in defaults.")
	return ""


def merge_config(base: dict, override: dict) -> dict:
	"""Recursively merges `override` into a copy of `base`."""
	merged = dict(base)
	for key, value in override.items():
		if isinstance(value, dict) and isinstance(merged.get(key), dict):
			merged[key] = merge_config(merged[key], value)
		else:
			merged[key] = value
	return merged


def resolve_config(config: dict) -> dict:
	"""
	Expands user paths and derives the paths that were left unset.

	Returns:
		dict: The configuration with all path entries converted to `Path` objects.
	"""
	home = Path(os.path.expanduser(str(config["home_dir"])))

	def expand(value, fallback):
		if value is None:
			return fallback
		raw = str(value)
		if raw.startswith("~"):
			raw = str(home) + raw[1:]
		return Path(raw)

	config["home_dir"] = home
	config["config_dir"] = expand(config["config_dir"], home / "dev_configs")
	config["tmp_dir"] = expand(config["tmp_dir"], config["config_dir"] / ".tmp")
	config["ssh_dir"] = expand(config["ssh_dir"], home / ".ssh")
	config["preferences_dir"] = expand(config["preferences_dir"], home / "Library" / "Preferences")
	config["cursor"]["user_dir"] = expand(
		config["cursor"]["user_dir"], home / "Library" / "Application Support" / "Cursor" / "User")

	return config


def _is_str_list(value):
	return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_config(config: dict) -> list:
	"""
	Checks the shape of a merged configuration before paths are resolved.

	Returns:
		list: Descriptions of all invalid keys. Empty if the configuration is valid.
	"""
	errors = []

	for key in PATH_KEYS:
		if not isinstance(config[key], str) and (key == "home_dir" or config[key] is not None):
			errors.append(f"\"{key}\" must be a path.")

	for key in ("plists", "dotfiles"):
		if not _is_str_list(config[key]):
			errors.append(f"\"{key}\" must be a list of strings.")

	keychain = config["keychain"]
	if not isinstance(keychain, dict):
		errors.append("\"keychain\" must be a mapping with \"service\" and \"account\".")
	else:
		for key in ("service", "account"):
			if not isinstance(keychain.get(key), str):
				errors.append(f"\"keychain.{key}\" must be a string.")

	cursor = config["cursor"]
	if not isinstance(cursor, dict):
		errors.append("\"cursor\" must be a mapping with \"user_dir\" and \"files\".")
	else:
		if cursor.get("user_dir") is not None and not isinstance(cursor["user_dir"], str):
			errors.append("\"cursor.user_dir\" must be a path.")
		if not _is_str_list(cursor.get("files")):
			errors.append("\"cursor.files\" must be a list of strings.")

	return errors


def parse_config(path_to_config):
	"""
	Parses the YAML configuration file and merges it over the built-in defaults.

	Parameters:
		path_to_config (str): Path returned by `find_config_file`. An empty string
							  selects the built-in defaults.

	Returns:
		dict: The resolved configuration, or None if the file is invalid.
	"""
	config = default_config()

	if path_to_config:
		try:
			with open(path_to_config) as f:
				user_config = yaml.safe_load(f)
		except FileNotFoundError:
			logger.error(f"Configuration file \"{path_to_config}\" not found.")
			return None
		except yaml.YAMLError as e:
			logger.error(f"Configuration file \"{path_to_config}\" is not valid YAML: {e}")
			return None

		if user_config is None:
			user_config = {}

		if not isinstance(user_config, dict):
			logger.error(f"Configuration file \"{path_to_config}\" must contain a mapping.")
			return None

		config = merge_config(config, user_config)

		errors = validate_config(config)
		if errors:
			for error in errors:
				logger.error(f"Configuration file \"{path_to_config}\": {error}")
			return None

		logger.debug(f"Configuration loaded from {path_to_config}.")

	return resolve_config(config)


def get_arguments(argv=None):
	"""
	Parses the command-line arguments of devconfigs.

	Returns:
		dict: A dictionary with the subcommand, the selected operation and global options.
	"""
	parser = CliParser(
		prog="devconfigs",
		description="Backs up and restores personal configuration into a version-controlled directory.",
		add_help=False)
	parser.add_argument("-h", "--help", action="store_true", help="Show usage and exit.")
	parser.add_argument("--config", type=str, help="Path to the configuration YAML file")
	parser.add_argument("-v", "--verbose", action="store_true", help="Print debug output.")
	parser.add_argument("subcommand", nargs="?", help="Subcommand to run (e.g., ssh, brewfile, backup-all)")

	operations = parser.add_mutually_exclusive_group()
	operations.add_argument("--backup", dest="operation", action="store_const", const="backup", help="Backup configurations")
	operations.add_argument("--restore", dest="operation", action="store_const", const="restore", help="Restore configurations")
	operations.add_argument("--check", dest="operation", action="store_const", const="check", help="Check for missing or outdated packages")
	operations.add_argument("--sync-to", dest="operation", action="store_const", const="sync-to", help="Sync to the config directory")
	operations.add_argument("--sync-from", dest="operation", action="store_const", const="sync-from", help="Sync from the config directory")

	args = parser.parse_args(argv)

	return {
		"subcommand": args.subcommand,
		"operation": args.operation,
		"config_file": args.config,
		"verbose": args.verbose,
		"help": args.help,
	}
