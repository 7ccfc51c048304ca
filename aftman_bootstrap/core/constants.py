"""
Fixed identities — the manager, its release feed, and the managed tool.

The manager and the feed are not configurable: installing the manager
from any other source is deliberately unsupported. The managed tool
defaults live here too, but ``aftman-bootstrap.yml`` may override them.
"""

from __future__ import annotations

from pathlib import Path

# ── Manager ─────────────────────────────────────────────────────

MANAGER_NAME = "aftman"
MANAGER_CONFIG_FILE = f"{MANAGER_NAME}.toml"

# Release naming example: "aftman-v0.2.2-windows-x86_64.zip"
RELEASE_FEED_URL = "https://latest-github-release.eryn.io/lpghatguy/aftman"


def manager_bin_dir(home: Path) -> Path:
    """Directory ``aftman self-install`` places its shims in."""
    return home / f".{MANAGER_NAME}" / "bin"


# ── Managed tool defaults ───────────────────────────────────────

DEFAULT_TOOL_NAME = "rojo"
DEFAULT_TOOL_REPO = "rojo-rbx/rojo"

# ── Limits ──────────────────────────────────────────────────────

DEFAULT_HTTP_TIMEOUT = 60
DEFAULT_PROCESS_TIMEOUT = 300
DOWNLOAD_CHUNK_SIZE = 8192
