"""Shared fixtures."""

import logging
import os

import pytest

from setsight.core.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Each test starts from default config with no SETSIGHT_* overrides and the same root log level."""
    for name in list(os.environ):
        if name.startswith("SETSIGHT_"):
            monkeypatch.delenv(name)
    # keep config files in the developer's cwd from leaking in
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    root = logging.getLogger()
    root_level = root.level
    reset_config()
    yield
    reset_config()
    root.setLevel(root_level)
