import logging
import os


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Reduce default noise from the driver unless DEBUG_MONGO=1
    if os.getenv("DEBUG_MONGO", "0") != "1":
        logging.getLogger("pymongo").setLevel(logging.WARNING)
