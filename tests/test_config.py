"""Tests for config.json handling, settings_manager and file classification."""

from __future__ import annotations

import json
import threading

import pytest

from localnetviewer import config
from localnetviewer.core import settings_manager
from localnetviewer.core.file_type import FileType, get_mime_type, to_file_type
from localnetviewer.core.models import ImagePageMode


class TestConfig:
    def test_defaults_are_written(self, isolated_config):
        settings = config.get_settings()
        assert settings == config.DEFAULTS
        assert json.loads(isolated_config.read_text()) == config.DEFAULTS

    def test_file_values_override_defaults(self, isolated_config):
        isolated_config.write_text(json.dumps({"port": 9000, "extra": "kept"}))
        settings = config.get_settings()
        assert settings["port"] == 9000
        assert settings["extra"] == "kept"
        assert settings["host"] == config.DEFAULTS["host"]

    def test_unreadable_file_falls_back(self, isolated_config, capsys):
        isolated_config.write_text("{not json")
        assert config.get_settings() == config.DEFAULTS
        assert "using defaults" in capsys.readouterr().out

    def test_non_object_falls_back(self, isolated_config):
        isolated_config.write_text("[1, 2]")
        assert config.get_settings() == config.DEFAULTS

    def test_unreadable_file_is_not_overwritten(self, isolated_config):
        isolated_config.write_text('{"access_password": "secret",')
        config.get_settings()
        assert isolated_config.read_text() == '{"access_password": "secret",'

    def test_update_settings_keeps_other_keys(self, isolated_config):
        isolated_config.write_text(json.dumps({"access_password": "secret"}))
        config.update_settings(position="2-1")
        stored = json.loads(isolated_config.read_text())
        assert stored["position"] == "2-1"
        assert stored["access_password"] == "secret"

    def test_no_temp_files_left_behind(self, isolated_config):
        config.get_settings()
        config.update_settings(port=9001)
        assert [p.name for p in isolated_config.parent.iterdir()] == ["config.json"]

    def test_concurrent_reads_keep_stored_values(self, isolated_config):
        isolated_config.write_text(json.dumps({
            "access_password": "secret",
            "allowed_ips": ["10.0.0.5"],
            "position": "1-2",
        }))
        errors = []

        def worker():
            try:
                for _ in range(200):
                    settings = config.get_settings()
                    assert settings["access_password"] == "secret"
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        stored = json.loads(isolated_config.read_text())
        assert stored["access_password"] == "secret"
        assert stored["allowed_ips"] == ["10.0.0.5"]
        assert stored["position"] == "1-2"

    def test_concurrent_updates_are_not_lost(self, isolated_config):
        def worker(key):
            for i in range(50):
                config.update_settings(**{key: i})
                config.get_settings()

        threads = [threading.Thread(target=worker, args=(f"k{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = json.loads(isolated_config.read_text())
        assert all(stored[f"k{n}"] == 49 for n in range(4))


class TestSettingsManager:
    def test_position(self):
        assert settings_manager.get_position() == ""
        settings_manager.set_position("3-1")
        assert settings_manager.get_position() == "3-1"

    def test_image_page_mode(self):
        assert settings_manager.get_image_page_mode() is ImagePageMode.SCROLL
        settings_manager.set_image_page_mode(ImagePageMode.PAGE)
        assert settings_manager.get_image_page_mode() is ImagePageMode.PAGE

    def test_setters_keep_other_keys(self, isolated_config):
        isolated_config.write_text(json.dumps({"port": 9000}))
        settings_manager.set_position("1")
        assert json.loads(isolated_config.read_text())["port"] == 9000


class TestFileType:
    @pytest.mark.parametrize("ext", [".png", ".JPG", ".jpeg", ".bmp", ".gif", ".webp", ".tiff"])
    def test_images(self, ext):
        assert to_file_type(ext) == FileType.IMAGE

    @pytest.mark.parametrize("ext", [".mp4", ".webm", ".MOV", ".avi", ".mkv", ".wmv", ".m4v"])
    def test_videos(self, ext):
        assert to_file_type(ext) == FileType.VIDEO

    def test_pdf(self):
        assert to_file_type(".PDF") == FileType.PDF

    @pytest.mark.parametrize("ext", ["", ".txt", ".tif", ".docx"])
    def test_other(self, ext):
        assert to_file_type(ext) == FileType.OTHER

    def test_mime_types(self):
        assert get_mime_type("/x/movie.MKV") == "video/x-matroska"
        assert get_mime_type("/x/clip.mp4") == "video/mp4"
        assert get_mime_type("/x/blob.unknownext") == "application/octet-stream"


class TestAccessLog:
    def test_config_failure_does_not_raise(self, monkeypatch, capsys):
        from localnetviewer.core import logger

        def broken():
            raise OSError("disk full")

        monkeypatch.setattr(logger, "get_settings", broken)
        logger.log_access("10.0.0.1", "LIST", "1")
        assert "Failed to write access log" in capsys.readouterr().out
