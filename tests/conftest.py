"""Shared fixtures for LocalNetViewer tests."""

from __future__ import annotations

from pathlib import Path

import fitz
import pytest
from PIL import Image

from localnetviewer import config


# ── File helpers ──────────────────────────────────────────────


def create_test_image(path: Path, width: int = 64, height: int = 64, mode: str = "RGB") -> Path:
    """Create a minimal valid image at *path* (format from the suffix)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    color = (128, 64, 32, 200) if mode == "RGBA" else (128, 64, 32)
    Image.new(mode, (width, height), color=color).save(path)
    return path


def create_test_pdf(path: Path, pages: int = 3) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"page {i + 1}")
    doc.save(str(path))
    doc.close()
    return path


# ── Config isolation ──────────────────────────────────────────


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Point config.json and the access logs at a temp dir."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    config_path = workdir / "config.json"
    monkeypatch.setattr(config, "CONFIG_PATH", str(config_path))
    return config_path


def set_roots(*roots: Path) -> None:
    settings = config.get_settings()
    settings["roots"] = [str(r) for r in roots]
    config.save_settings(settings)


# ── Directory tree ────────────────────────────────────────────


@pytest.fixture()
def drive(tmp_path: Path) -> Path:
    """A fake drive, configured as the only root.

    drive/
      alpha/          1-1
        sub/          1-1-1
        a.png         1-1-2
        b.txt         1-1-3
        c.jpg         1-1-4
      beta/           1-2
      doc.pdf         1-3
      notes.txt       1-4
      photo.png       1-5
    """
    root = tmp_path / "drive"
    alpha = root / "alpha"
    (alpha / "sub").mkdir(parents=True)
    create_test_image(alpha / "a.png")
    (alpha / "b.txt").write_text("b")
    create_test_image(alpha / "c.jpg")
    (root / "beta").mkdir()
    create_test_pdf(root / "doc.pdf")
    (root / "notes.txt").write_text("hello")
    create_test_image(root / "photo.png", width=400, height=100)
    set_roots(root)
    return root
