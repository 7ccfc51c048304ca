"""
Test helpers — archive and release-document builders, truncated HTTP bodies.
"""

import http.client
import io
import zipfile

from aftman_bootstrap.adapters.base import HttpClient, HttpResponse

LINUX_ASSET_URL = "https://example.invalid/aftman-v0.2.7-linux-x86_64.zip"


def make_zip(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def release_payload(*names: str) -> dict:
    """A latest-release document with one asset per name."""
    return {
        "name": "v0.2.7",
        "tag_name": "v0.2.7",
        "draft": False,
        "prerelease": False,
        "assets": [
            {
                "name": name,
                "browser_download_url": f"https://example.invalid/{name}",
                "content_type": "application/zip",
                "size": 1024,
            }
            for name in names
        ],
    }


def make_encrypted_zip(name: str, data: bytes) -> bytes:
    """A zip whose single entry is flagged as password-protected."""
    buf = io.BytesIO()
    info = zipfile.ZipInfo(name)
    info.flag_bits |= 0x1
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(info, data)
    return buf.getvalue()


class TruncatedBody(io.RawIOBase):
    """A response body whose connection drops before the declared length."""

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        raise http.client.IncompleteRead(b"partial", 512)


class TruncatingHttpClient(HttpClient):
    """Answers every GET with 200 and a body that cannot be read to the end."""

    def __init__(self):
        self.calls: list[str] = []

    def get(self, url: str) -> HttpResponse:
        self.calls.append(url)
        return HttpResponse(200, "OK", TruncatedBody())
