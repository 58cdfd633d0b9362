"""Pod resource data model and report row assembly."""

from dataclasses import dataclass
from typing import Any, Iterable

from podqos.core.pods import ClusterError
from podqos.core.qos import QoSClass, classify
from podqos.core.quantity import ZERO, Quantity, parse_quantity


@dataclass(frozen=True)
class ResourceData:
    """CPU and memory quantities of one resource list."""

    cpu: Quantity = ZERO
    memory: Quantity = ZERO


@dataclass(frozen=True)
class ContainerResourceSpec:
    """Limits and requests of a single container."""

    name: str
    limits: ResourceData
    requests: ResourceData

    @property
    def qos_class(self) -> QoSClass:
        """QoS class from the CPU limit and request."""
        return classify(self.limits.cpu, self.requests.cpu)


@dataclass(frozen=True)
class PodResourceReport:
    """A pod and its containers in declaration order."""

    name: str
    namespace: str
    containers: tuple[ContainerResourceSpec, ...] = ()


@dataclass(frozen=True)
class ReportRow:
    """One output row per (pod, container)."""

    namespace: str
    pod: str
    container: str
    cpu_limit: str
    cpu_request: str
    qos_class: QoSClass

    def cells(self) -> list[str]:
        """Row values in table column order."""
        return [
            self.namespace,
            self.pod,
            self.container,
            self.cpu_limit,
            self.cpu_request,
            self.qos_class.value,
        ]

    def to_dict(self) -> dict[str, str]:
        """Row as a JSON-ready dict."""
        return {
            "namespace": self.namespace,
            "pod": self.pod,
            "container": self.container,
            "cpu_limit": self.cpu_limit,
            "cpu_request": self.cpu_request,
            "qos_class": self.qos_class.value,
        }


def _mapping(value: Any, what: str) -> dict:
    """Return value as a mapping, treating unset as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ClusterError(f"invalid pod data: {what} is not a mapping")
    return value


def _resource_data(resource_list: Any, what: str) -> ResourceData:
    """Build ResourceData from a limits/requests mapping; unset values are zero."""
    resource_list = _mapping(resource_list, what)
    cpu = resource_list.get("cpu")
    memory = resource_list.get("memory")
    return ResourceData(
        cpu=parse_quantity(cpu) if cpu is not None else ZERO,
        memory=parse_quantity(memory) if memory is not None else ZERO,
    )


def container_from_spec(container: dict[str, Any]) -> ContainerResourceSpec:
    """
    Extract a container's resources from a pod spec entry.

    Raises:
        QuantityError: If a CPU or memory quantity is malformed
        ClusterError: If the container entry is not shaped like pod JSON
    """
    container = _mapping(container, "container")
    name = container.get("name", "")
    resources = _mapping(container.get("resources"), f"{name}: resources")
    return ContainerResourceSpec(
        name=name,
        limits=_resource_data(resources.get("limits"), f"{name}: resources.limits"),
        requests=_resource_data(resources.get("requests"), f"{name}: resources.requests"),
    )


def pod_from_item(pod: dict[str, Any]) -> PodResourceReport:
    """
    Build a PodResourceReport from a pod list item.

    Raises:
        ClusterError: If the item is not shaped like pod JSON
        QuantityError: If a quantity is malformed
    """
    pod = _mapping(pod, "pod item")
    metadata = _mapping(pod.get("metadata"), "metadata")
    spec = _mapping(pod.get("spec"), "spec")
    containers = spec.get("containers") or []
    if not isinstance(containers, list):
        raise ClusterError("invalid pod data: spec.containers is not a list")

    return PodResourceReport(
        name=metadata.get("name", ""),
        namespace=metadata.get("namespace", ""),
        containers=tuple(container_from_spec(c) for c in containers),
    )


def assemble_rows(pods: Iterable[PodResourceReport]) -> list[ReportRow]:
    """
    Flatten pods into report rows.

    Input order of pods and containers is kept; pods without containers
    produce no rows.
    """
    rows = []
    for pod in pods:
        for container in pod.containers:
            rows.append(
                ReportRow(
                    namespace=pod.namespace,
                    pod=pod.name,
                    container=container.name,
                    cpu_limit=str(container.limits.cpu),
                    cpu_request=str(container.requests.cpu),
                    qos_class=container.qos_class,
                )
            )
    return rows
