from devconfigs.log import logger
from devconfigs.utils import copy_file, copy_tree, force_symlink, run_step


def _finish(name, operation, status):
    if status == 0:
        logger.info(f"✅ {name} {operation} completed.")
    return status


def manage_git_config(config, operation) -> int:
    """Copies ~/.gitconfig to or from the config directory."""
    home = config["home_dir"]
    backup = config["config_dir"] / "gitconfig"

    def restore():
        copy_file(backup, home / ".gitconfig")
        force_symlink(config["config_dir"] / ".gitignore_global", home / ".gitignore")

    if operation == "backup":
        logger.info("Backing up Git config...")
        status = run_step("Git config backup", copy_file, home / ".gitconfig", backup)
    else:
        logger.info("Restoring Git config...")
        status = run_step("Git config restore", restore)
    return _finish("Git config", operation, status)


def manage_kube_config(config, operation) -> int:
    """Copies ~/.kube/config to or from the config directory."""
    kube_config = config["home_dir"] / ".kube" / "config"
    backup = config["config_dir"] / "kube" / "config"

    if operation == "backup":
        logger.info("Backing up Kubernetes config...")
        status = run_step("Kubernetes config backup", copy_file, kube_config, backup)
    else:
        logger.info("Restoring Kubernetes config...")
        status = run_step("Kubernetes config restore", copy_file, backup, kube_config)
    return _finish("Kubernetes config", operation, status)


def manage_docker(config, operation) -> int:
    """Copies the ~/.docker directory to or from the config directory."""
    docker_dir = config["home_dir"] / ".docker"
    backup = config["config_dir"] / "docker" / "config"

    if operation == "backup":
        logger.info("Backing up Docker configurations...")
        status = run_step("Docker backup", copy_tree, docker_dir, backup)
    else:
        logger.info("Restoring Docker configurations...")
        status = run_step("Docker restore", copy_tree, backup, docker_dir)
    return _finish("Docker configurations", operation, status)


def manage_custom_scripts(config, operation) -> int:
    """Copies the contents of ~/bin to or from the config directory."""
    scripts_dir = config["home_dir"] / "bin"
    backup = config["config_dir"] / "scripts"

    if operation == "backup":
        logger.info("Backing up custom scripts...")
        status = run_step("Custom scripts backup", copy_tree, scripts_dir, backup)
    else:
        logger.info("Restoring custom scripts...")
        status = run_step("Custom scripts restore", copy_tree, backup, scripts_dir)
    return _finish("Custom scripts", operation, status)
