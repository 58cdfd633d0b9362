"""Command-line interface for podqos."""

import argparse
import sys

from podqos import __version__
from podqos.core.config import (
    Config,
    KubeconfigError,
    context_namespace,
    load_kubeconfig,
    resolve_namespace,
)
from podqos.core.context import Context
from podqos.core.logging import RunLogger, get_log_path
from podqos.core.output import Output
from podqos.core.pods import ClusterError, build_list_command, list_pods
from podqos.core.quantity import QuantityError
from podqos.core.report import assemble_rows, pod_from_item

PROG = "kubectl-podqos"

FATAL_ERRORS = (KubeconfigError, ClusterError, QuantityError)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Show the QoS class of every container with its CPU limit and request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                    # Pods in the current context's namespace
  %(prog)s -n production      # Pods in a specific namespace
  %(prog)s -A                 # Pods in all namespaces
  %(prog)s -A --format json   # JSON output for automation

Exit codes:
  0 - Report printed
  2 - Kubeconfig, kubectl or API error
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{PROG} {__version__}",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        default="",
        help="Namespace for the api request (default: kubeconfig context namespace)",
    )
    parser.add_argument(
        "-A",
        dest="all_namespaces",
        action="store_true",
        help="Query all namespaces",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=60,
        help="Timeout in seconds for kubectl (default: 60)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write JSONL run logs under this directory (default: $PODQOS_LOG_DIR, else off)",
    )
    return parser


def build_report(config: Config, context: Context, output: Output, logger: RunLogger) -> None:
    """
    Resolve the namespace, list pods and store report rows in output.

    Raises:
        KubeconfigError: If the kubeconfig cannot be loaded
        ClusterError: If listing pods fails or pod data is malformed
        QuantityError: If a pod carries a malformed quantity
    """
    kubeconfig = load_kubeconfig(context)
    namespace = resolve_namespace(
        config.namespace,
        context_namespace(kubeconfig),
        config.all_namespaces,
    )
    logger.bind(namespace=namespace or "*")
    logger.info("namespace resolved", current_context=kubeconfig["current-context"])

    pods = list_pods(context, namespace, timeout=config.timeout)
    logger.debug("pods listed", command=build_list_command(namespace), pods=len(pods))

    rows = assemble_rows(pod_from_item(pod) for pod in pods)
    output.emit(rows, namespace)
    logger.info("report assembled", pods=len(pods), rows=len(rows))


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if context is None:
        context = Context()
    config = Config.from_args(args, context)

    log_path = get_log_path(PROG, config.log_dir) if config.log_dir else None
    output = Output()

    with RunLogger(PROG, log_path) as logger:
        logger.bind(output_format=config.output_format)
        try:
            build_report(config, context, output, logger)
        except FATAL_ERRORS as e:
            output.error(str(e))
            logger.exception(output.summary, e)
            print(f"Error: {e}", file=sys.stderr)
            return 2

        output.render(config.output_format)
        logger.info("done", summary=output.summary)

    return 0


if __name__ == "__main__":
    sys.exit(main())
