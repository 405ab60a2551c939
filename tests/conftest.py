# 19.10.26

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from Presence.diagnostics import DiagnosticsClient
from Presence.settings import SettingsService


@pytest.fixture
def diagnostics():
    return DiagnosticsClient()


@pytest.fixture
def service(tmp_path, diagnostics):
    return SettingsService(diagnostics, folder=tmp_path)


@pytest.fixture(scope="session")
def qapp():
    from PyQt5 import QtWidgets
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
