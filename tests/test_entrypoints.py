"""
tests/test_entrypoints.py

Tests for the root app.py deploy entry.
"""

from __future__ import annotations

from unittest.mock import patch

import app


def run_main():
    with patch.object(app, "serve_traffic_map") as serve:
        app.main()
    return serve.call_args.args[0]


class TestDeployEntry:

    def test_binds_all_interfaces_without_host(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        settings = run_main()
        assert settings.host == "0.0.0.0"
        assert settings.show_progress is False

    def test_progress_off_even_with_host(self, monkeypatch):
        monkeypatch.setenv("HOST", "127.0.0.1")
        settings = run_main()
        assert settings.host == "127.0.0.1"
        assert settings.show_progress is False
