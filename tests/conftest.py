"""Shared test fixtures."""

import json
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

# Add project root to path for package and fixture imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"

KUBECONFIG_PATH = "/home/tester/.kube/config"
ALL_PODS_CMD = ("kubectl", "get", "pods", "-o", "json", "--all-namespaces")


def pods_cmd(namespace: str) -> tuple:
    """kubectl command key for listing pods in one namespace."""
    return ("kubectl", "get", "pods", "-o", "json", "-n", namespace)


class MockContext:
    """Mock Context for testing without kubectl or a real kubeconfig."""

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, str | Exception] | None = None,
        file_contents: dict[str, str | Exception] | None = None,
        env: dict[str, str] | None = None,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.file_contents = file_contents or {}
        self.env = env if env is not None else {"HOME": "/home/tester"}
        self.commands_run: list[list[str]] = []
        self.timeouts: list[int | None] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        timeout: int | None = 60,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        self.timeouts.append(timeout)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output

        # Allow passing CompletedProcess directly for non-zero returncodes
        if isinstance(output, subprocess.CompletedProcess):
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        content = self.file_contents[path]
        if isinstance(content, Exception):
            raise content
        return content

    def file_exists(self, path: str) -> bool:
        """Check if path is in mocked files."""
        return path in self.file_contents

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Return mocked environment variable."""
        return self.env.get(key, default)

    def home_dir(self) -> str:
        """Return mocked home directory."""
        return self.env.get("HOME", "/root")


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


def load_json_fixture(category: str, name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    return json.loads(load_fixture(category, name))


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def kubeconfig_yaml() -> str:
    """Kubeconfig whose current context sets namespace 'team-a'."""
    return load_fixture("k8s", "kubeconfig.yaml")


@pytest.fixture
def pods_json() -> str:
    """kubectl pod list with mixed QoS containers."""
    return load_fixture("k8s", "pods.json")


def read_log_entries(log_path: Path) -> list[dict[str, Any]]:
    """Parse a JSONL run log into entries."""
    return [json.loads(line) for line in log_path.read_text().splitlines() if line.strip()]
