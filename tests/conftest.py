"""Configuração do pytest para o github-webhook-filter."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Adiciona src/ (imports absolutos) e a raiz (tests.fakes) ao PYTHONPATH
root_path = Path(__file__).parent.parent
for path in (root_path, root_path / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config.settings import RelaySettings  # noqa: E402
from tests.fakes.github_delivery import TEST_RELAY_URL, TEST_SECRET  # noqa: E402


@pytest.fixture
def relay_settings() -> RelaySettings:
    return RelaySettings(webhook_secret=TEST_SECRET, relay_url=TEST_RELAY_URL)
