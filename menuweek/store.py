"""Write JSON documents to disk only when their content changed."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

TIMESTAMP_KEY = "generatedAt"


def serialize_document(document: Any) -> str:
    """Pretty-printed JSON with a trailing newline.

    Key order is the insertion order of the mappings, so equal documents
    built the same way serialize to the same bytes.
    """
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def read_document(path: Path) -> Optional[Dict[str, Any]]:
    """Load a previously written document, ``None`` if missing or unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable document %s: %s", path, exc)
        return None


def keep_stored_timestamp(path: Path, document: Dict[str, Any]) -> Dict[str, Any]:
    """Reuse the stored ``generatedAt`` if nothing else in the document changed.

    Otherwise ``document`` is returned as is.
    """
    stored = read_document(path)
    if not isinstance(stored, dict) or TIMESTAMP_KEY not in stored:
        return document
    current = {k: v for k, v in document.items() if k != TIMESTAMP_KEY}
    previous = {k: v for k, v in stored.items() if k != TIMESTAMP_KEY}
    if current != previous:
        return document
    return {
        k: (stored[TIMESTAMP_KEY] if k == TIMESTAMP_KEY else v)
        for k, v in document.items()
    }


def _default_file_mode() -> int:
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write(path: Path, text: str) -> None:
    # write to a temp file in the same directory, then os.replace() it over
    # the target so readers never see a half-written file
    fd, tmp_path = tempfile.mkstemp(prefix="tmp_menu_", dir=str(path.parent), text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tf:
            tf.write(text)
            tf.flush()
            os.fsync(tf.fileno())
        # mkstemp creates 0600 files, published menus follow the umask
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def write_if_changed(path: Path, document: Any) -> bool:
    """Write ``document`` to ``path`` unless the stored bytes are identical.

    Parent directories are created as needed.

    Returns:
        ``True`` if the file was written, ``False`` if it was left alone.
    """
    path = Path(path)
    text = serialize_document(document)
    try:
        existing = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = None
    if existing == text:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write(path, text)
    return True
