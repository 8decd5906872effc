from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.request

import certifi

from .exceptions import ModelLoadError


logger = logging.getLogger(__name__)

HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)


def ssl_context() -> ssl.SSLContext:
    # python.org macOS builds can ship without root certificates.
    return ssl.create_default_context(cafile=certifi.where())


def _remove_partial(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _download_with_curl(model_path: str, url: str) -> bool:
    try:
        proc = subprocess.run(
            ["curl", "-L", "-o", model_path, url],
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        logger.warning("curl is not available: %s", e)
        return False
    if proc.returncode != 0:
        logger.warning("curl download failed: %s", proc.stderr.strip())
        return False
    return os.path.exists(model_path) and os.path.getsize(model_path) > 0


def ensure_hand_landmarker_task(model_path: str, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30) -> str:
    """
    Make sure the MediaPipe Tasks `hand_landmarker.task` model exists at `model_path`.

    Downloads it from the MediaPipe model bucket when missing, first with urllib and
    then with `curl` (which often works when Python's certificate store is broken).

    Raises:
        ModelLoadError: if the file is missing and both downloads fail
    """
    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("Downloading hand landmarker model to %s", model_path)

    try:
        with urllib.request.urlopen(url, context=ssl_context(), timeout=timeout_s) as r, open(model_path, "wb") as f:
            f.write(r.read())
        return model_path
    except OSError as e:
        logger.warning("Model download failed (%s), retrying with curl", e)
        _remove_partial(model_path)
        url_error = e

    if _download_with_curl(model_path, url):
        return model_path
    _remove_partial(model_path)

    raise ModelLoadError(
        "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n'
    ) from url_error
