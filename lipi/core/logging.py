import logging
import sys


def configure_logging(level: int = logging.INFO):
    logger = logging.getLogger()
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.setLevel(level)
    logger.addHandler(handler)
    # uvicorn/httpx chatter drowns out transliteration events at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
