"""
──────────────────────────────────────────────────────────────────────────────
mollys_lodge.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures for code built on the container.

Exports:
    - container                → yields a fresh Container, disposed afterwards
    - default_container_reset  → drops the process-wide container around a test
    - log_messages             → captures loguru output as a list of strings

Usage in your test:
    from mollys_lodge.testing.fixtures import container

    def test_mailer(container):
        container.register(Mailer, lambda c: FakeMailer())
        assert container.resolve(Mailer).sent == []
──────────────────────────────────────────────────────────────────────────────
"""

import pytest
from loguru import logger

from mollys_lodge.config.base_settings import ContainerSettings
from mollys_lodge.di.registry import Container, reset_default_container


# ──────────────────────────────────────────────────────────────
# Container Fixture (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def container():
    """Fresh Container with default settings; disposed after the test."""
    c = Container(settings=ContainerSettings())
    yield c
    c.dispose()


# ──────────────────────────────────────────────────────────────
# Module-level default container
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def default_container_reset():
    """Isolate tests that use the module-level register()/resolve() helpers."""
    reset_default_container()
    yield
    reset_default_container()


# ──────────────────────────────────────────────────────────────
# Log capture (loguru does not feed caplog)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def log_messages():
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(sink_id)
