class Globals:
    ARCHIVE_ENDING = ".tar.gz"
    CIPHERTEXT_ENDING = ".gpg"
    CIPHER_ALGO = "AES256"
    PRIVATE_UMASK = 0o077
    DEFAULT_CONFIG_FILE = "config.yaml"
    DEFAULT_CONFIG_DIRS = [".", "~/.config/devconfigs"]
    REQUIRED_SYSTEM_BINS = ["tar", "gpg"]
    KEYCHAIN_SERVICE = "manage_configs"
    KEYCHAIN_ACCOUNT = "gpg_password"
    DEFAULT_PLISTS = [
        "com.apple.finder.plist",
        "com.apple.dock.plist",
        "com.googlecode.iterm2.plist",
        "com.apple.Terminal.plist",
        "com.microsoft.VSCode.plist",
    ]
    DEFAULT_DOTFILES = [
        ".bash_aliases",
        ".bash_alias",
        ".zsh_aliases",
        ".zsh_alias",
        ".bashrc",
        ".bashrc.mac",
        ".bashrc.linux",
        ".bash_profile",
        ".bash_profile.mac",
        ".bash_profile.linux",
        ".eslintrc",
        ".zshrc",
        ".direnvrc",
        ".vim/*",
        ".bin/*",
        ".p10k.zsh",
        ".ideavimrc",
        ".Rprofile",
    ]
