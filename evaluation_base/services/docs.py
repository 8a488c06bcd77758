"""Documentation Artifacts — fixed files returned base64-encoded."""

import base64
from pathlib import Path


def read_encoded(path: Path) -> str:
    """Read path as bytes and return its base64 text."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")
