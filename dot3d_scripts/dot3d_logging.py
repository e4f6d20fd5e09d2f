import logging

# every module grabs its own logger with logging.getLogger(__name__),
# this just makes sure something is printed when the app hasn't set logging up itself
def setup_default_logging(level="INFO"):
    if (isinstance(level, str)):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if (root.handlers):
        # logging is already set up, leave it alone
        return False

    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return True
