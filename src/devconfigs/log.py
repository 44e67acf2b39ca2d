import logging

logger = logging.getLogger("devconfigs")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_verbose(verbose: bool):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
