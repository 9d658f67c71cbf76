import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from tt.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAME = "timetap"

# Attaches the handler built by `factory` under `handler_name`, unless the logger already carries one by that name.
# Returns True when a new handler was actually added.
def _attach(logger: logging.Logger, handler_name, factory, level) -> bool:
    if any(h.get_name() == handler_name for h in logger.handlers):
        return False
    handler = factory()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT))
    handler.set_name(handler_name)
    logger.addHandler(handler)
    return True

# Keeps only the newest `keep` per-run debug logs.
def _prune_runs(debug_dir: Path, name, keep):
    runs = sorted(debug_dir.glob(f"{name}_*.log"),key=lambda p: p.stat().st_mtime,reverse=True)
    for run in runs[keep:]:
        try: run.unlink()
        except OSError: pass

def get_logger(
        name = LOGGER_NAME,
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 5 * 1024 * 1024,
        backup_count = 5,
        console = False,
        historical_debugs: int = 10
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)

    # Rolling log across runs
    _attach(logger, f"{name}:persistent", lambda: RotatingFileHandler(
        filename=log_dir / f"{name}.log",
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    ), level)

    # Just this run, overwritten every launch
    _attach(logger, f"{name}:latest", lambda: logging.FileHandler(
        filename=log_dir / "latest.log",
        mode="w",
        encoding="utf-8",
    ), level)

    # Full DEBUG trace of this run in its own file
    if historical_debugs > 0:
        debug_dir = log_dir / "debug"
        debug_dir.mkdir(parents=True,exist_ok=True)
        run_path = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        if _attach(logger, f"{name}:historical_debug",
                   lambda: logging.FileHandler(filename=run_path, encoding="utf-8"), logging.DEBUG):
            _prune_runs(debug_dir, name, historical_debugs)

    if console:
        enable_console(logger, level)

    return logger

# Mirrors the log to stderr. Safe to call repeatedly.
def enable_console(logger: logging.Logger | None = None, level = logging.INFO):
    logger = logger or logging.getLogger(LOGGER_NAME)
    _attach(logger, f"{logger.name}:console", logging.StreamHandler, level)

log = get_logger(level=logging.DEBUG,console=False,historical_debugs=10)
log.info("=== INITIALIZED NEW SESSION ===")
