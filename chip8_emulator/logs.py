import logging

logger = logging.getLogger("chip8_emulator")
logger.addHandler(logging.NullHandler())

#make it true if you want the logs
logsOn = False


def set_logging(enabled):
    global logsOn
    logsOn = bool(enabled)
    if logsOn and not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(name)s: %(message)s")
    logger.setLevel(logging.DEBUG if logsOn else logging.WARNING)


def logs_enabled():
    return logsOn


def log(*args):
    if logsOn:
        logger.debug(" ".join(str(a) for a in args))
