import logging
from pathlib import Path
import json

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class MiscUtil:

    @staticmethod
    def setupLogger(name: str, logDir: str | None, level: int = logging.INFO) -> logging.Logger:
        """Return the named logger, attaching a handler the first time it is requested.

        Logs go to `<logDir>/<name>.log`, or to stderr when no directory is given.
        """
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        logger.setLevel(level)
        logger.propagate = False  # keep per-frame logs out of the root logger

        if logDir:
            folder = Path(logDir).expanduser().resolve()
            folder.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(folder / f"{name}.log")
        else:
            handler = logging.StreamHandler()

        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        return logger

    @staticmethod
    def closeLogger(logger: logging.Logger) -> None:
        """Detach and close every handler so the log file is released."""
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    @staticmethod
    def loadConfig(path: str | Path) -> dict:
        path = Path(path)
        with path.open("r") as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return config
