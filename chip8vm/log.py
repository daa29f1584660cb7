# Trace logging, off unless switched on (F1 in the window, --log on the command line).
import logging

logger = logging.getLogger("chip8vm")

logsOn = False


def log(*args):
    if logsOn:
        logger.debug(" ".join(str(a) for a in args))


def set_logs(enabled):
    global logsOn
    logsOn = bool(enabled)
    if logsOn and logger.getEffectiveLevel() > logging.DEBUG:
        logger.setLevel(logging.DEBUG)


def toggle_logs():
    set_logs(not logsOn)
    logger.info("logsOn: %s", logsOn)
    return logsOn
