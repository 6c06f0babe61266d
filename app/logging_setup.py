import logging
import sys
from pathlib import Path


def setup_logging(level: str = "INFO", error_log_path: str | Path = "error.log") -> None:
    """
    Configure the root logger with:
    - Console handler: everything at `level` and above
    - File handler: ERROR and above, appended to `error_log_path`

    Call this once at startup (the FastAPI lifespan does it).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Remove any pre-existing handlers to avoid duplicates on reload.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    error_log_path = Path(error_log_path)
    error_log_path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(str(error_log_path), encoding="utf-8")
    fh.setLevel(logging.ERROR)
    fh.setFormatter(fmt)
    root.addHandler(fh)
