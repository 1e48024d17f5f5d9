import inspect
import logging.handlers
import os
from pathlib import Path

PACKAGE_DIR = "rlstats"
LOG_DIR = os.getenv("RLSTATS_LOG_DIR")
LOG_LEVEL = os.getenv("RLSTATS_LOG_LEVEL")
LOG_CONSOLE = os.getenv("RLSTATS_LOG_CONSOLE", "").lower() in ("1", "true", "yes")


class ClassNameFilter(logging.Filter):
    def filter(self, record):
        rel_path = os.path.relpath(os.path.abspath(record.pathname), os.getcwd())
        pkg_index = rel_path.rfind(PACKAGE_DIR + os.sep)
        if pkg_index != -1:
            rel_path = rel_path[pkg_index:]
        if rel_path.endswith(".py"):
            rel_path = rel_path[:-3]
        record.relpath = rel_path.replace(os.sep, ".").replace("\\", ".")  # For Windows paths
        record.classname = ""
        frame = inspect.currentframe()
        while frame:
            code = frame.f_code
            if code.co_name == record.funcName:
                self_obj = frame.f_locals.get("self")
                if self_obj is not None:
                    record.classname = self_obj.__class__.__name__
                    break
            frame = frame.f_back
        return True


class SmartClassFormatter(logging.Formatter):
    def format(self, record):
        if not getattr(record, "classname", ""):
            # module level function
            record.classname = "<module>"
        return super().format(record)


fmt = "%(asctime)s - [%(levelname)s] - %(relpath)s.%(classname)s.%(funcName)s(): %(message)s {%(lineno)d}"
formatter = SmartClassFormatter(fmt)

console = logging.StreamHandler()
console.setFormatter(formatter)

# records propagate to the embedding application until a handler is enabled here
logger = logging.getLogger("RLStats")
logger.addFilter(ClassNameFilter())
if LOG_LEVEL:
    logger.setLevel(LOG_LEVEL.upper())


def enable_console_logging(level: str | int | None = None) -> logging.Handler:
    if console not in logger.handlers:
        logger.addHandler(console)
    logger.propagate = False
    if level is not None:
        logger.setLevel(level)
    return console


def enable_file_logging(log_dir: str | Path) -> logging.Handler:
    log_file = Path(log_dir) / "rlstats.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        log_file, when="midnight", interval=1, backupCount=5, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return handler


if LOG_CONSOLE:
    enable_console_logging()
if LOG_DIR:
    enable_file_logging(LOG_DIR)
