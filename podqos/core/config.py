"""Run configuration, kubeconfig loading and namespace resolution."""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from podqos.core.context import Context


DEFAULT_NAMESPACE = "default"
ALL_NAMESPACES = ""


class KubeconfigError(Exception):
    """Kubeconfig could not be loaded or has no usable current context."""

    pass


@dataclass(frozen=True)
class Config:
    """Immutable settings for one run, built once after argument parsing."""

    namespace: str = ""
    all_namespaces: bool = False
    output_format: str = "plain"
    timeout: int = 60
    log_dir: Path | None = None

    @classmethod
    def from_args(cls, args: argparse.Namespace, context: "Context") -> "Config":
        """Build config from parsed arguments, falling back to PODQOS_LOG_DIR."""
        log_dir = args.log_dir or context.get_env("PODQOS_LOG_DIR")
        return cls(
            namespace=args.namespace or "",
            all_namespaces=bool(args.all_namespaces),
            output_format=args.format,
            timeout=args.timeout,
            log_dir=Path(log_dir) if log_dir else None,
        )


def kubeconfig_paths(context: "Context") -> list[str]:
    """
    Kubeconfig files in load order.

    KUBECONFIG is a path list; when unset or empty, ~/.kube/config.
    """
    env = context.get_env("KUBECONFIG")
    if env:
        return [p for p in env.split(os.pathsep) if p]

    home = context.get_env("HOME") or context.home_dir()
    return [str(Path(home) / ".kube" / "config")]


def load_config_file(path: str, context: "Context") -> dict[str, Any]:
    """
    Load one kubeconfig YAML file.

    Returns:
        Parsed mapping, empty for an empty file

    Raises:
        KubeconfigError: If the file is unreadable or not a YAML mapping
    """
    try:
        data = yaml.safe_load(context.read_file(path))
    except (OSError, UnicodeDecodeError) as e:
        raise KubeconfigError(f"cannot read kubeconfig {path}: {e}") from e
    except yaml.YAMLError as e:
        raise KubeconfigError(f"invalid kubeconfig {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise KubeconfigError(f"invalid kubeconfig {path}: expected a mapping")
    return data


def load_kubeconfig(context: "Context") -> dict[str, Any]:
    """
    Load and merge kubeconfig files.

    The first file setting current-context wins, as does the first
    definition of each named context.

    Returns:
        {"current-context": str, "contexts": {name: context_dict}}

    Raises:
        KubeconfigError: If no kubeconfig file exists or one fails to parse
    """
    paths = kubeconfig_paths(context)
    existing = [p for p in paths if context.file_exists(p)]
    if not existing:
        raise KubeconfigError(f"no kubeconfig found (searched: {', '.join(paths)})")

    current_context = ""
    contexts: dict[str, dict] = {}
    for path in existing:
        data = load_config_file(path, context)
        if not current_context:
            current_context = data.get("current-context") or ""
        for entry in data.get("contexts") or []:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            if not name or name in contexts:
                continue
            settings = entry.get("context") or {}
            if not isinstance(settings, dict):
                raise KubeconfigError(
                    f"invalid kubeconfig {path}: context {name!r} is not a mapping"
                )
            contexts[name] = settings

    return {"current-context": current_context, "contexts": contexts}


def context_namespace(kubeconfig: dict[str, Any]) -> str:
    """
    Namespace of the kubeconfig's current context.

    Returns:
        Namespace, or "" if the context sets none

    Raises:
        KubeconfigError: If current-context is unset or not defined
    """
    current = kubeconfig.get("current-context")
    if not current:
        raise KubeconfigError("current-context is not set in kubeconfig")

    contexts = kubeconfig.get("contexts") or {}
    if current not in contexts:
        raise KubeconfigError(f"context {current!r} not found in kubeconfig")

    namespace = contexts[current].get("namespace") or ""
    if not isinstance(namespace, str):
        raise KubeconfigError(f"context {current!r} has a non-string namespace")
    return namespace


def resolve_namespace(flag_namespace: str, kube_namespace: str, all_namespaces: bool) -> str:
    """
    Pick the namespace selector for the pod listing.

    -A wins over everything and selects all namespaces (""); otherwise an
    explicit flag wins over the context namespace, then "default".
    """
    if all_namespaces:
        return ALL_NAMESPACES
    if flag_namespace:
        return flag_namespace
    if kube_namespace:
        return kube_namespace
    return DEFAULT_NAMESPACE
