#!/usr/bin/env python3

"""
main.py

Backs up and restores personal configuration (SSH keys, GPG keyring, macOS preferences,
package manifests, kube/docker configs) into a version-controlled directory. Sensitive
state is archived with tar and encrypted with gpg before it is stored.
"""

import sys

from devconfigs.commands import COMMANDS, Context, print_usage, run_command
from devconfigs.security.credentials import KeychainStore
from devconfigs.utils import init, clean_up


def main(argv=None):

	# 1. Init devconfigs
	config, args = init(argv)

	if args["help"]:
		print_usage()
		return 0

	if args["subcommand"] not in COMMANDS:
		print_usage()
		return 1

	if config is None:
		return 1

	# 2. Run the selected subcommand
	ctx = Context(config, KeychainStore())
	try:
		status = run_command(ctx, args["subcommand"], args["operation"])
	except (KeyboardInterrupt, EOFError):
		print("\nAborted.")
		status = 1

	# 3. Clean up
	clean_up(config)
	return status


if __name__ == "__main__":
	sys.exit(main())
