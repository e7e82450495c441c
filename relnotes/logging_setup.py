"""Console logging for the relnotes CLI."""

import logging
import sys


NOISY_LOGGERS = ("urllib3", "requests", "xhtml2pdf", "reportlab", "PIL")


class OperatorFormatter(logging.Formatter):
    """Prefix errors and warnings so they stand out from progress messages."""

    PREFIXES = {
        logging.CRITICAL: "error: ",
        logging.ERROR: "error: ",
        logging.WARNING: "warning: ",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return self.PREFIXES.get(record.levelno, "") + message


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger once, early in the CLI."""
    if debug:
        fmt = "%(asctime)s - %(name)s - %(message)s"
    else:
        fmt = "%(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(OperatorFormatter(fmt))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
