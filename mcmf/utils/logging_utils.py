import logging
import os
import sys


def setup_main_logger(log_dir: str, instance_name: str, verbose: bool = False) -> logging.Logger:
    """
    Configures the root logger to write to `<log_dir>/<instance_name>.log` and to stdout.
    Clears any existing handlers so that each instance gets its own log file.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_filepath = os.path.join(log_dir, f"{instance_name}.log")

    # File handler
    file_handler = logging.FileHandler(log_filepath, mode='w')
    file_handler.setFormatter(logging.Formatter('%(message)s'))

    # Console handler (stdout)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter('%(message)s'))

    root = logging.getLogger()
    close_handlers(root)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(file_handler)
    root.addHandler(stream_handler)

    return root


def close_handlers(logger: logging.Logger):
    """Detaches every handler of `logger`, closing the ones that own a log file."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
