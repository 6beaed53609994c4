import logging

from ..settings import LoggingSettings


def setup_logger(config: LoggingSettings) -> logging.Logger:
    """
    Sets up the root logger based on the provided logging settings.
    """
    level = (config.level or "INFO").upper()
    log_format = config.format

    logging.basicConfig(level=level, format=log_format)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

    return logging.getLogger("CompressionWorker")
