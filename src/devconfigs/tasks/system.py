from devconfigs.log import logger
from devconfigs.utils import run_cmd, run_step

SOCKETFILTERFW = "/usr/libexec/ApplicationFirewall/socketfilterfw"


def manage_firewall(config, operation=None) -> int:
    """Enables the macOS application firewall."""
    logger.info("Managing firewall settings...")
    status = run_step("Firewall", run_cmd, ["sudo", SOCKETFILTERFW, "--setglobalstate", "on"])
    if status == 0:
        logger.info("✅ Firewall enabled.")
    return status


def manage_network(config, operation=None) -> int:
    """Lists all network services."""
    logger.info("Managing network settings...")
    status = run_step("Network", run_cmd, ["networksetup", "-listallnetworkservices"])
    if status == 0:
        logger.info("✅ Network services listed.")
    return status
