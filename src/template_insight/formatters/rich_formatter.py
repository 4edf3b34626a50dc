"""Rich terminal formatter for Template Insight."""

import io
from typing import Any, Optional

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..report.models import Report, ReportSection
from .base import BaseFormatter

console = Console()

BAR_WIDTH = 30

_STATUS_STYLES = {
    "exceptional": "green bold",
    "good": "green",
    "fair": "yellow",
    "poor": "red",
    "critical": "red bold",
}

_GRADE_STYLES = {"A": "green bold", "B": "green", "C": "yellow", "D": "red"}


def _status_label(status: str) -> str:
    style = _STATUS_STYLES.get(status, "dim")
    return f"[{style}]{status}[/{style}]"


def _bar(value: float, maximum: float, width: int = BAR_WIDTH) -> str:
    if maximum <= 0:
        return ""
    filled = int(round(min(1.0, max(0.0, value / maximum)) * width))
    return "█" * filled + "░" * (width - filled)


def _value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _label(key: str) -> str:
    return key.replace("_", " ")


class RichFormatter(BaseFormatter):
    """Panels for dimension headers, tables, key-value grids and bar charts."""

    def __init__(self, target: Optional[Console] = None):
        self.console = target or console

    def render(self, report: Report) -> None:
        self._print(self.console, report)

    def format(self, report: Report) -> str:
        buffer = Console(file=io.StringIO(), width=120, color_system=None, record=True)
        self._print(buffer, report)
        return buffer.export_text()

    def _print(self, out: Console, report: Report) -> None:
        out.print(Panel(Text(report.title, style="bold"), expand=False, border_style="cyan"))
        for section in report.sections:
            renderable = self.render_section(section)
            if renderable is not None:
                out.print(renderable)
                out.print()

    def render_section(self, section: ReportSection) -> Optional[RenderableType]:
        handler = getattr(self, f"_render_{section.type}", None)
        if handler is None:
            return self._render_generic(section)
        return handler(section)

    def _render_dimension_header(self, section: ReportSection) -> RenderableType:
        data = section.data
        grade = data.get("grade", "")
        grade_style = _GRADE_STYLES.get(grade, "bold")
        body = (
            f"Score [bold]{data.get('score', 0):.1f}[/bold]/100  "
            f"Grade [{grade_style}]{grade}[/{grade_style}]  "
            f"{_status_label(data.get('status', ''))}"
        )
        weight = data.get("weight")
        if weight:
            body += f"  [dim]weight {weight:.2f}[/dim]"
        return Panel(body, title=f"[bold cyan]{data.get('dimension_name', section.title)}[/bold cyan]", expand=False)

    def _render_keyvalue(self, section: ReportSection) -> RenderableType:
        table = Table(title=section.title, show_header=False, title_justify="left", box=None, padding=(0, 2))
        table.add_column("Metric", style="dim")
        table.add_column("Value", justify="right")
        for key, value in section.data.get("pairs", {}).items():
            table.add_row(_label(str(key)), _value(value))
        return table

    def _render_table(self, section: ReportSection) -> RenderableType:
        table = Table(title=section.title, title_justify="left", header_style="bold")
        for header in section.data.get("headers", []):
            table.add_column(str(header))
        rows = section.data.get("rows", [])
        for row in rows:
            table.add_row(*(_value(cell) for cell in row))
        if not rows:
            return Group(Text(section.title, style="italic"), Text("  none", style="dim"))
        return table

    def _render_list(self, section: ReportSection) -> RenderableType:
        numbered = section.data.get("list_type") == "numbered"
        lines = [Text(section.title, style="bold")]
        for i, item in enumerate(section.data.get("items", []), start=1):
            marker = f"{i}." if numbered else "•"
            lines.append(Text(f"  {marker} {item}"))
        return Group(*lines)

    def _render_text(self, section: ReportSection) -> RenderableType:
        return Group(Text(section.title, style="bold"), Text(section.data.get("content", "")))

    def _render_chart(self, section: ReportSection) -> RenderableType:
        points = section.data.get("chart_data", [])
        maximum = section.metadata.get("max") or max((p.get("value", 0) for p in points), default=0)
        table = Table(title=section.title, show_header=False, title_justify="left", box=None, padding=(0, 1))
        table.add_column("Label")
        table.add_column("Bar")
        table.add_column("Value", justify="right")
        table.add_column("Note", style="dim")
        for point in points:
            value = point.get("value", 0)
            note = point.get("mini") or point.get("grade") or ""
            if "percentage" in point:
                note = f"{point['percentage']:.1f}%"
            table.add_row(str(point.get("label", "")), _bar(value, maximum), _value(value), note)
        return table

    def _render_generic(self, section: ReportSection) -> RenderableType:
        lines = [Text(section.title, style="bold")]
        for key, value in section.data.items():
            lines.append(Text(f"  {_label(str(key))}: {_value(value)}"))
        return Group(*lines)
