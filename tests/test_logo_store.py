"""
Unit tests for the logo asset store.
"""
import pytest

from remotetrail.core.errors import AssetWriteError
from remotetrail.services.logo_store import LogoStore, sanitize_filename


@pytest.fixture
def fixed_logos(tmp_path):
    return LogoStore(tmp_path / "uploads", clock=lambda: 1700000000.5)


def test_put_writes_bytes_and_returns_public_path(tmp_path, fixed_logos):
    path = fixed_logos.put(b"\x89PNG data", "acme logo.png")

    assert path == "/uploads/1700000000500_acme_logo.png"
    assert (tmp_path / "uploads" / "1700000000500_acme_logo.png").read_bytes() == b"\x89PNG data"


def test_put_creates_directory(tmp_path, fixed_logos):
    assert not (tmp_path / "uploads").exists()
    fixed_logos.put(b"x", "logo.png")
    assert (tmp_path / "uploads").is_dir()


def test_put_failure_raises_asset_write_error(tmp_path):
    blocker = tmp_path / "uploads"
    blocker.write_text("not a directory", encoding="utf-8")
    logos = LogoStore(blocker)

    with pytest.raises(AssetWriteError):
        logos.put(b"x", "logo.png")


@pytest.mark.parametrize("original, expected", [
    ("acme logo.png", "acme_logo.png"),
    ("tab\there.png", "tab_here.png"),
    ("../../etc/passwd", "passwd"),
    ("C:\\Users\\me\\My Logo.png", "My_Logo.png"),
    ("", "logo"),
    (None, "logo"),
    ("..", "logo"),
])
def test_sanitize_filename(original, expected):
    assert sanitize_filename(original) == expected


def test_exists(fixed_logos):
    path = fixed_logos.put(b"x", "logo.png")

    assert fixed_logos.exists(path)
    assert not fixed_logos.exists("/uploads/1_missing.png")
    assert not fixed_logos.exists("/static/logo.png")
    assert not fixed_logos.exists("/uploads/../jobs.json")
    assert not fixed_logos.exists(None)


def test_custom_url_prefix(tmp_path):
    logos = LogoStore(tmp_path, url_prefix="media/logos/", clock=lambda: 1.0)
    path = logos.put(b"x", "a.png")
    assert path == "/media/logos/1000_a.png"
    assert logos.exists(path)
