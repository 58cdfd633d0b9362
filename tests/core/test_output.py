"""Tests for podqos.core.output module."""

import json

from podqos.core.output import HEADER, Output, align_columns
from podqos.core.qos import QoSClass
from podqos.core.report import ReportRow


def make_row(pod: str, container: str, limit: str, request: str, qos: QoSClass) -> ReportRow:
    return ReportRow(
        namespace="team-a",
        pod=pod,
        container=container,
        cpu_limit=limit,
        cpu_request=request,
        qos_class=qos,
    )


class TestAlignColumns:
    """Tests for align_columns."""

    def test_pads_to_widest_plus_two(self):
        """Cells pad to column width plus two spaces."""
        text = align_columns([["a", "bb", "c"], ["ccc", "d", "e"]])

        assert text.split("\n") == [
            "a    bb  c",
            "ccc  d   e",
        ]

    def test_last_cell_not_padded(self):
        """The last cell of a line has no trailing padding."""
        text = align_columns([["x", "short"], ["y", "a-much-longer-cell"]])

        assert text.split("\n") == ["x  short", "y  a-much-longer-cell"]

    def test_empty_cells_keep_columns(self):
        """Empty cells still occupy their column."""
        text = align_columns([["", "b"], ["a", "c"]])

        assert text.split("\n") == ["   b", "a  c"]

    def test_custom_padding(self):
        """Padding is configurable."""
        assert align_columns([["a", "b"]], padding=4) == "a    b"

    def test_single_column(self):
        """A single column needs no alignment."""
        assert align_columns([["one"], ["three"]]) == "one\nthree"


class TestOutput:
    """Tests for Output."""

    def test_plain_header_only(self):
        """No rows still prints the header."""
        output = Output()

        assert output.to_plain() == "  ".join(HEADER)

    def test_plain_table(self):
        """Rows align under the fixed header."""
        output = Output()
        output.emit(
            [
                make_row("web", "nginx", "500m", "500m", QoSClass.GUARANTEED),
                make_row("debug-shell", "shell", "0", "0", QoSClass.BEST_EFFORT),
            ],
            "team-a",
        )

        assert output.to_plain().split("\n") == [
            "NAMESPACE  POD NAME     CONTAINER  CPUl  CPUr  CLASS",
            "team-a     web          nginx      500m  500m  Guaranteed",
            "team-a     debug-shell  shell      0     0     BestEffort",
        ]

    def test_json(self):
        """JSON carries the namespace and rows."""
        output = Output()
        output.emit([make_row("web", "nginx", "1", "250m", QoSClass.BURSTABLE)], "team-a")

        data = json.loads(output.to_json())

        assert data["namespace"] == "team-a"
        assert data["rows"] == [
            {
                "namespace": "team-a",
                "pod": "web",
                "container": "nginx",
                "cpu_limit": "1",
                "cpu_request": "250m",
                "qos_class": "Burstable",
            }
        ]

    def test_json_all_namespaces_is_null(self):
        """All-namespaces selector renders as null."""
        output = Output()
        output.emit([], "")

        assert json.loads(output.to_json()) == {"namespace": None, "rows": []}

    def test_render_plain(self, capsys):
        """render prints the table."""
        output = Output()
        output.render("plain")

        captured = capsys.readouterr()
        assert captured.out.startswith("NAMESPACE")

    def test_render_json(self, capsys):
        """render prints JSON."""
        output = Output()
        output.emit([], "default")
        output.render("json")

        captured = capsys.readouterr()
        assert json.loads(captured.out)["namespace"] == "default"

    def test_render_once(self, capsys):
        """Repeated render prints nothing more."""
        output = Output()
        output.render()
        output.render()

        captured = capsys.readouterr()
        assert captured.out.count("NAMESPACE") == 1

    def test_summary(self):
        """Summary reports rows or the first error."""
        output = Output()
        output.emit([make_row("web", "nginx", "1", "1", QoSClass.GUARANTEED)])
        assert output.summary == "rows=1"

        output.error("kubectl failed")
        assert output.summary == "Error: kubectl failed"
