"""Container QoS classification from CPU limits and requests.

QoS Classes:
    Guaranteed - CPU request equals CPU limit
    Burstable  - CPU request below CPU limit
    BestEffort - No CPU request or limit set

Only the CPU dimension is considered. The control plane's own rule also
compares memory across every container in the pod, so a pod's reported
status.qosClass can differ from what is shown here.
"""

from enum import Enum

from podqos.core.quantity import Quantity


class QoSClass(str, Enum):
    """QoS class of a container."""

    BEST_EFFORT = "BestEffort"
    BURSTABLE = "Burstable"
    GUARANTEED = "Guaranteed"

    def __str__(self) -> str:
        return self.value


def _millis(value: Quantity | int) -> int:
    if isinstance(value, Quantity):
        return value.milli_value()
    return int(value)


def classify(limit_cpu: Quantity | int, request_cpu: Quantity | int) -> QoSClass:
    """
    Classify a container by its CPU limit and request.

    Args:
        limit_cpu: CPU limit as a Quantity or integer millicores (0 when unset)
        request_cpu: CPU request as a Quantity or integer millicores (0 when unset)

    Returns:
        QoSClass, never raises
    """
    limit = _millis(limit_cpu)
    request = _millis(request_cpu)

    if limit == 0 and request == 0:
        return QoSClass.BEST_EFFORT
    if limit == request:
        return QoSClass.GUARANTEED
    if request < limit:
        return QoSClass.BURSTABLE
    # request above limit is rejected by admission; still answer
    return QoSClass.BEST_EFFORT
