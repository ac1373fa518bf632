# app/core/logging.py
import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(settings) -> None:
    """Configura el logger raíz y los de uvicorn una sola vez"""
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_wms_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wms_handler = True
        root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(level)
