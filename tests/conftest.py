"""Pytest fixtures for multivm tests."""

import os

import pytest
import structlog

from multivm.config import Settings
from multivm.models import ProvisioningRequest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep MULTIVM_* variables and any local .env out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("MULTIVM_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Create test settings with no pacing delays."""
    return Settings(
        namespace="vms-test",
        client_binary="oc",
        storage_class="standard",
        image_url="http://images.example.com/fedora.qcow2",
        ssh_secret_name="test-key",
        root_password="secret",
        startup_delay_seconds=0,
        submit_delay_seconds=0,
    )


@pytest.fixture
def request_three() -> ProvisioningRequest:
    """Create a request for test-1 .. test-3."""
    return ProvisioningRequest(
        prefix="test",
        start=1,
        end=3,
        cores=2,
        sockets=2,
        threads=1,
        memory="12Gi",
        storage_class="standard",
        image_url="http://images.example.com/fedora.qcow2",
    )
