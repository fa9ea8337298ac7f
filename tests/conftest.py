"""Pytest configuration and shared fixtures for kconf tests."""

import logging

import pytest

from kconf.logging_setup import JsonlHandler
from kconf.models import ClusterInfo
from kconf.models import ContextInfo
from kconf.models import KubeConfig
from kconf.models import NamedCluster
from kconf.models import NamedContext
from kconf.models import NamedUser
from kconf.models import UserInfo


def make_kubeconfig(name: str, current_context: bool = True) -> KubeConfig:
    """Build a kubeconfig with one <name>-cluster, <name>-context and <name>-user."""
    return KubeConfig(
        clusters=[
            NamedCluster(
                name=f"{name}-cluster",
                cluster=ClusterInfo(
                    server=f"https://{name}.example.com:6443",
                    certificate_authority_data="dGVzdC1jYS1kYXRh",
                ),
            )
        ],
        contexts=[
            NamedContext(
                name=f"{name}-context",
                context=ContextInfo(cluster=f"{name}-cluster", user=f"{name}-user"),
            )
        ],
        users=[
            NamedUser(
                name=f"{name}-user",
                user=UserInfo(
                    client_certificate_data="dGVzdC1jZXJ0LWRhdGE=",
                    client_key_data="dGVzdC1rZXktZGF0YQ==",
                ),
            )
        ],
        current_context=f"{name}-context" if current_context else None,
        preferences={},
    )


@pytest.fixture
def kubeconfig_factory():
    """Factory for single-entry kubeconfigs."""
    return make_kubeconfig


@pytest.fixture(autouse=True)
def _detach_jsonl_handlers():
    """Keep JSONL handlers installed by one test from writing into another's tmp dir."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point HOME at a temp directory so settings and logs stay isolated."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("KCONF_LOG_PATH", raising=False)
    monkeypatch.delenv("KCONF_LOG_LEVEL", raising=False)
    return home_dir
