"""Local object store for product logo uploads."""

import re
from pathlib import Path


class LogoStore:
    """Store uploaded files under a base directory and hand out public URLs."""

    def __init__(self, base_dir: str, public_base_url: str = "/logos"):
        self.base_dir = Path(base_dir)
        self.public_base_url = public_base_url.rstrip("/")

    def upload(self, logical_path: str, data: bytes) -> str:
        """Save *data* under *logical_path* (overwriting) and return its URL."""
        parts = [_safe_part(p) for p in logical_path.split("/") if p not in ("", ".", "..")]
        if not parts:
            raise ValueError("Empty upload path")
        target = self.base_dir.joinpath(*parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return f"{self.public_base_url}/{'/'.join(parts)}"


def _safe_part(part: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]", "_", part)
