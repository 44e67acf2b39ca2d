import os
import shutil
import subprocess

from pathlib import Path
from devconfigs.log import logger, set_verbose
from devconfigs.parser import find_config_file, parse_config, get_arguments


def check_system_dependencies(required_bins):
	"""
	Checks whether all required system binaries are available in the system's PATH.

	Returns:
		bool: True if all required binaries are found, False otherwise.
	"""
	for current_bin in required_bins:
		path = shutil.which(current_bin)
		if path is None:
			logger.error(f"devconfigs requires {current_bin}. Please install it on your system.")
			return False
	return True


def init(argv=None):
	"""
	Initializes devconfigs by parsing CLI arguments and the configuration.

	Returns:
		tuple: (config, args) if successful, otherwise (None, args) or (None, None)
	"""
	args = get_arguments(argv)
	set_verbose(args["verbose"])

	config_file = find_config_file(args["config_file"])
	if config_file is None:
		return None, args

	config = parse_config(config_file)
	return config, args


def run_cmd(cmd, **kwargs):
	"""
	Runs an external command and raises `subprocess.CalledProcessError` if it fails.
	"""
	logger.debug(cmd)
	return subprocess.run(cmd, check=True, **kwargs)


def run_step(description, step, *args, **kwargs):
	"""
	Runs a single collaborator step and converts failures into an exit status.

	Returns:
		int: 0 on success, the exit code of the failing command otherwise.
	"""
	try:
		step(*args, **kwargs)
	except subprocess.CalledProcessError as e:
		logger.error(f"{description} failed: \"{e.cmd[0]}\" exited with code {e.returncode}.")
		return e.returncode
	except OSError as e:
		logger.error(f"{description} failed: {e}")
		return 1
	return 0


def remove_path(path: Path):
	"""Removes a file or directory tree. Missing paths are ignored."""
	if path.is_dir() and not path.is_symlink():
		shutil.rmtree(path)
		logger.debug(f"Directory {path} removed.")
	elif path.exists() or path.is_symlink():
		path.unlink()
		logger.debug(f"File {path} removed.")


def copy_file(src: Path, dst: Path):
	"""Copies a single file, creating the destination directory if necessary."""
	if dst.is_dir():
		dst = dst / src.name
	dst.parent.mkdir(parents=True, exist_ok=True)
	shutil.copy2(src, dst)
	logger.debug(f"Copied {src} to {dst}.")
	return dst


def copy_tree(src: Path, dst: Path):
	"""Copies the contents of `src` into `dst`, merging with existing files."""
	if not src.is_dir():
		raise FileNotFoundError(f"Directory does not exist: {src}")
	shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
	logger.debug(f"Copied {src} to {dst}.")


def clean_up(config):
	"""
	Remove the temporary directory used for archive operations if it is empty.

	Staging directories and archives are removed by each job; this only removes
	the parent directory so that nothing is left inside the config directory.
	"""
	tmp_dir = config.get("tmp_dir")
	if tmp_dir and os.path.isdir(tmp_dir):
		try:
			os.rmdir(tmp_dir)
			logger.debug(f"Temporary directory {tmp_dir} removed.")
		except OSError as e:
			logger.warning(f"Failed to remove temporary directory {tmp_dir}: {e}")


def force_symlink(target: Path, link: Path):
	"""
	Creates `link` pointing to `target`, replacing an existing file or link (like `ln -sf`).

	Raises:
		IsADirectoryError: If `link` is a real directory.
	"""
	if link.is_dir() and not link.is_symlink():
		raise IsADirectoryError(f"Refusing to replace directory {link} with a link.")
	if link.exists() or link.is_symlink():
		link.unlink()
	link.parent.mkdir(parents=True, exist_ok=True)
	os.symlink(target, link)
	logger.debug(f"Linked {link} -> {target}")
