import getpass
import subprocess

from devconfigs.log import logger

# Exit code of `security find-generic-password` when no item matches
ITEM_NOT_FOUND = 44


class KeychainStore:
    """
    Stores passphrases as generic passwords in the macOS Keychain via the `security` tool.
    """

    def __init__(self, security_bin: str = "security"):
        self.security_bin = security_bin

    def get(self, service: str, account: str):
        """
        Returns the stored passphrase, or None if the Keychain holds no matching item.
        """
        cmd = [self.security_bin, "find-generic-password", "-a", account, "-s", service, "-w"]
        logger.debug(cmd)

        try:
            result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except FileNotFoundError:
            logger.warning(f"\"{self.security_bin}\" not found. Keychain lookup skipped.")
            return None

        if result.returncode == ITEM_NOT_FOUND:
            return None

        if result.returncode != 0:
            logger.warning(f"Keychain lookup failed: {result.stderr.strip()}")
            return None

        passphrase = result.stdout.rstrip("\n")
        return passphrase or None

    def set(self, service: str, account: str, passphrase: str):
        """
        Adds or updates a generic password.

        The command is fed to `security -i` on stdin so the passphrase is not visible
        in the process list.

        Raises:
            subprocess.CalledProcessError: If `security` fails.
        """
        command = " ".join([
            "add-generic-password", "-U",
            "-a", _quote(account),
            "-s", _quote(service),
            "-w", _quote(passphrase),
        ])
        logger.debug(f"Storing passphrase for {service}/{account} in the Keychain.")
        subprocess.run(
            [self.security_bin, "-i"],
            input=command + "\n",
            stdout=subprocess.DEVNULL,
            text=True,
            check=True,
        )


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("\"", "\\\"")
    return f"\"{escaped}\""


def resolve_passphrase(store, service: str, account: str, prompt=getpass.getpass):
    """
    Returns the passphrase from the credential store, or prompts for a new one.

    A newly entered passphrase is cached in the store. Empty input is rejected and
    the user is asked again, so the caller never proceeds without a passphrase.

    Parameters:
        store: Object providing `get(service, account)` and `set(service, account, passphrase)`.
        service (str): Credential store service name.
        account (str): Credential store account name.
        prompt (callable): Reads a line without echo.
    """
    passphrase = store.get(service, account)
    if passphrase:
        logger.debug("Passphrase found in credential store.")
        return passphrase

    print("No password found in Keychain. Please enter a new password:")
    while True:
        passphrase = prompt("Password: ")
        if passphrase:
            break
        print("The password must not be empty.")

    try:
        store.set(service, account, passphrase)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning(f"Could not store the password in the Keychain: {e}")

    return passphrase
