import logging
from typing import Iterable, Optional

DEFAULT_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"

# plotting libraries log font and backend probing at DEBUG
NOISY_LOGGERS = ("matplotlib", "PIL")

_configured = False


def setup_logging(
    *,
    level: int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Configure root logging once. Only entry points (the CLI, diagnostics
    mains) call this; library modules just use `logging.getLogger(__name__)`.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setLevel(level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug("logging initialised (level=%s)", logging.getLevelName(level))
