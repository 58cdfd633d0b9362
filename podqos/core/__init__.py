"""Core podqos functionality."""

from podqos.core.config import Config, KubeconfigError, load_kubeconfig, resolve_namespace
from podqos.core.context import Context
from podqos.core.output import Output
from podqos.core.pods import ClusterError, list_pods
from podqos.core.qos import QoSClass, classify
from podqos.core.quantity import Quantity, QuantityError, parse_quantity
from podqos.core.report import (
    ContainerResourceSpec,
    PodResourceReport,
    ReportRow,
    assemble_rows,
    pod_from_item,
)

__all__ = [
    "ClusterError",
    "Config",
    "ContainerResourceSpec",
    "Context",
    "KubeconfigError",
    "Output",
    "PodResourceReport",
    "QoSClass",
    "Quantity",
    "QuantityError",
    "ReportRow",
    "assemble_rows",
    "classify",
    "list_pods",
    "load_kubeconfig",
    "parse_quantity",
    "pod_from_item",
    "resolve_namespace",
]
