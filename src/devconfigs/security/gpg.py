from devconfigs.globals import Globals

# The passphrase is read from stdin (fd 0) so it never shows up in the process list.
GPG_PASSPHRASE_CMD = [
    "gpg", "--batch", "--yes",
    "--pinentry-mode", "loopback",
    "--no-symkey-cache",
    "--passphrase-fd", "0",
]


def passphrase_input(passphrase: str) -> str:
    return f"{passphrase}\n"


def symmetric_encrypt_cmd(in_file, out_file) -> list[str]:
    return GPG_PASSPHRASE_CMD + [
        "--symmetric",
        "--cipher-algo", Globals.CIPHER_ALGO,
        "--output", str(out_file),
        str(in_file),
    ]


def decrypt_cmd(in_file, out_file) -> list[str]:
    return GPG_PASSPHRASE_CMD + [
        "--decrypt",
        "--output", str(out_file),
        str(in_file),
    ]
