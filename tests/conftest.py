from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from cloudterm.config import AppConfig
from cloudterm.shell import Dispatcher, SessionContext

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc)


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)


@pytest.fixture
def context() -> SessionContext:
    return SessionContext.from_config(AppConfig(seed=7), clock=lambda: FIXED_NOW)


@pytest.fixture
def dispatcher(context: SessionContext) -> Dispatcher:
    return Dispatcher(context)
