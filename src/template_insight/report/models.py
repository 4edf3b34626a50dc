"""Report document: a titled list of typed sections handed to formatters."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence


@dataclass
class ReportSection:
    """A titled section. ``type`` tells formatters how to read ``data``."""

    title: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    subsections: List["ReportSection"] = field(default_factory=list)

    def add_subsection(self, section: "ReportSection") -> None:
        self.subsections.append(section)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "type": self.type, "data": self.data}
        if self.metadata:
            out["metadata"] = self.metadata
        if self.subsections:
            out["subsections"] = [s.to_dict() for s in self.subsections]
        return out


class TextSection(ReportSection):
    def __init__(self, title: str, content: str):
        super().__init__(title, "text", {"content": content})

    @property
    def content(self) -> str:
        return self.data["content"]


class TableSection(ReportSection):
    def __init__(
        self,
        title: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        options: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(
            title, "table", {"headers": list(headers), "rows": [list(r) for r in rows]}, dict(options or {})
        )

    @property
    def headers(self) -> List[str]:
        return self.data["headers"]

    @property
    def rows(self) -> List[List[Any]]:
        return self.data["rows"]


class ListSection(ReportSection):
    def __init__(self, title: str, items: Sequence[str], list_type: str = "bullet"):
        super().__init__(title, "list", {"items": list(items), "list_type": list_type})

    @property
    def items(self) -> List[str]:
        return self.data["items"]

    @property
    def list_type(self) -> str:
        return self.data["list_type"]


class ChartSection(ReportSection):
    """Chart data is a list of ``{"label", "value", ...}`` points."""

    def __init__(
        self,
        title: str,
        chart_type: str,
        points: Sequence[Mapping[str, Any]],
        options: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(
            title,
            "chart",
            {"chart_type": chart_type, "chart_data": [dict(p) for p in points]},
            dict(options or {}),
        )

    @property
    def chart_type(self) -> str:
        return self.data["chart_type"]

    @property
    def chart_data(self) -> List[Dict[str, Any]]:
        return self.data["chart_data"]


class KeyValueSection(ReportSection):
    def __init__(self, title: str, pairs: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None):
        super().__init__(title, "keyvalue", {"pairs": dict(pairs)}, dict(options or {}))

    @property
    def pairs(self) -> Dict[str, Any]:
        return self.data["pairs"]


@dataclass
class Report:
    title: str
    sections: List[ReportSection] = field(default_factory=list)

    def add_section(self, section: ReportSection) -> None:
        self.sections.append(section)

    def sections_of_type(self, section_type: str) -> List[ReportSection]:
        return [s for s in self.sections if s.type == section_type]

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "sections": [s.to_dict() for s in self.sections]}
