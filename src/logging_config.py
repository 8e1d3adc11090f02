import logging

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'

def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger once with a single stream handler"""
    formatter = logging.Formatter(LOG_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.hasHandlers():
        root.addHandler(handler)

    return root
