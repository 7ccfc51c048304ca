"""
Release models — a snapshot of the latest published manager release.

Parsed from the release feed's JSON. Only ``assets[].name`` and
``assets[].browser_download_url`` drive behaviour; the remaining
standard release fields are carried for reporting. Unknown fields are
ignored so feed additions never break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Asset(BaseModel):
    """One downloadable file attached to a release.

    Names follow ``<tool>-<version>-<platform>-<arch>.zip``; the
    platform and arch are inferred from that convention, not from
    any structured field.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    browser_download_url: str
    content_type: str = ""
    size: int = 0

    # ── Standard GitHub asset fields ────────────────────────────
    id: int | None = None
    url: str = ""
    label: str | None = None
    state: str = ""
    download_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None


class ReleaseMetadata(BaseModel):
    """Immutable view of a published release. Never persisted."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    tag_name: str = ""
    assets: tuple[Asset, ...] = ()

    # ── Standard GitHub release fields ──────────────────────────
    id: int | None = None
    url: str = ""
    html_url: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: str | None = None
    published_at: str | None = None
    tarball_url: str | None = None
    zipball_url: str | None = None
    body: str | None = None

    @property
    def label(self) -> str:
        """Human-readable release identifier."""
        return self.name or self.tag_name or "<unnamed release>"
