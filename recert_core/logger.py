import logging, json, sys, time, os

LOGGER_PREFIX = "Recert"


def _json_formatter():
    formatter = logging.Formatter(
        fmt=json.dumps({
            "ts": "%(asctime)s",
            "level": "%(levelname)s",
            "name": "%(name)s",
            "msg": "%(message)s"
        }),
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    formatter.converter = time.gmtime  # Use UTC timestamps
    return formatter


def _add_file_handler(logger, to_file):
    target = os.path.abspath(to_file)
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return
    # Ensure the directory exists before writing
    os.makedirs(os.path.dirname(target), exist_ok=True)
    file_handler = logging.FileHandler(target)
    file_handler.setFormatter(_json_formatter())
    logger.addHandler(file_handler)


def get_logger(name=LOGGER_PREFIX, level=None, to_file=None):
    """Structured JSON logger for recert components.

    ``level`` may be a name or number; it defaults to RECERT_LOG_LEVEL (INFO).
    """
    logger = logging.getLogger(name)
    level = level or os.getenv("RECERT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_json_formatter())
        logger.addHandler(handler)

    if to_file:
        _add_file_handler(logger, to_file)

    return logger


def setup_logging(config):
    """Apply ``log_level`` / ``log_file`` from config to every Recert.* logger created so far."""
    names = [
        n for n, obj in logging.root.manager.loggerDict.items()
        if isinstance(obj, logging.Logger) and (n == LOGGER_PREFIX or n.startswith(LOGGER_PREFIX + "."))
    ]
    for name in names:
        get_logger(name, config.get("log_level"), config.get("log_file"))
    return names
