"""Pod listing through kubectl."""

import json
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podqos.core.context import Context


class ClusterError(Exception):
    """kubectl is unavailable or the pod listing failed."""

    pass


def build_list_command(namespace: str) -> list[str]:
    """kubectl command listing pods in namespace, or everywhere for ""."""
    cmd = ["kubectl", "get", "pods", "-o", "json"]
    if namespace:
        cmd.extend(["-n", namespace])
    else:
        cmd.append("--all-namespaces")
    return cmd


def list_pods(context: "Context", namespace: str, timeout: int = 60) -> list[dict]:
    """
    List pods in API order.

    Args:
        context: Execution context
        namespace: Namespace name, or "" for all namespaces
        timeout: Seconds before kubectl is abandoned

    Returns:
        Pod items from the list response

    Raises:
        ClusterError: If kubectl is missing, fails, times out or returns non-JSON
    """
    if not context.check_tool("kubectl"):
        raise ClusterError("kubectl not found in PATH")

    cmd = build_list_command(namespace)
    try:
        result = context.run(cmd, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ClusterError(f"kubectl timed out after {timeout}s") from e
    except OSError as e:
        raise ClusterError(f"failed to run kubectl: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip() or f"exit code {result.returncode}"
        raise ClusterError(f"kubectl failed: {stderr}")

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ClusterError(f"invalid kubectl output: {e}") from e

    if not isinstance(data, dict):
        raise ClusterError("invalid kubectl output: expected a JSON object")
    return data.get("items") or []
