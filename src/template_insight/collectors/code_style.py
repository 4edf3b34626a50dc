"""Line-level formatting signals read from the raw template text."""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from jinja2 import nodes

from ..config import MetricsConfig

BLOCK_NAME_RE = re.compile(r"{%-?\s*block\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*-?%}")
VARIABLE_NAME_RE = re.compile(r"\{\{-?\s*([a-zA-Z_][a-zA-Z0-9_.]*)\s*[|}-]")
LEADING_WS_RE = re.compile(r"^\s+")

SNAKE_CASE = ("snake_case", re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$"))
CAMEL_CASE = ("camelCase", re.compile(r"^[a-z][a-zA-Z0-9]*$"))
KEBAB_CASE = ("kebab-case", re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"))

BLOCK_CONVENTIONS = (SNAKE_CASE, CAMEL_CASE, KEBAB_CASE)
VARIABLE_CONVENTIONS = (SNAKE_CASE, CAMEL_CASE)


def naming_consistency(
    names: Sequence[str], conventions: Sequence[Tuple[str, "re.Pattern[str]"]]
) -> Tuple[float, str]:
    """
    Share of names following the most common convention.

    Each name is credited to the first convention it matches, or "other".

    Returns:
        (consistency percentage, dominant convention); (100.0, "none") when
        there are no names
    """
    if not names:
        return 100.0, "none"

    counts = {label: 0 for label, _ in conventions}
    counts["other"] = 0
    for name in names:
        for label, pattern in conventions:
            if pattern.match(name):
                counts[label] += 1
                break
        else:
            counts["other"] += 1

    dominant = max(counts, key=counts.get)
    return round(counts[dominant] / len(names) * 100, 1), dominant


def formatting_score(
    mixed_lines: int,
    trailing_lines: int,
    max_length: int,
    comment_density: float,
    total_lines: int,
    long_line_limit: int = 120,
) -> float:
    """
    100 minus penalties for mixed indentation (max 15), trailing
    whitespace (max 10), overlong lines (max 10) and a comment density
    outside 5-50%; floored at 0.
    """
    lines = max(1, total_lines)
    score = 100.0
    if mixed_lines > 0:
        score -= min(mixed_lines / lines * 30, 15)
    if trailing_lines > 0:
        score -= min(trailing_lines / lines * 20, 10)
    if max_length > long_line_limit:
        score -= min((max_length - long_line_limit) / 10, 10)
    if comment_density < 5 or comment_density > 50:
        score -= 5
    return max(round(score, 1), 0.0)


class CodeStyleCollector:
    """Indentation, line length, comments and naming conventions.

    Works on source text only; the tree callbacks are no-ops. Comment lines
    are lines starting with ``{#``.
    """

    name = "code_style"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.reset()

    def reset(self) -> None:
        self._data = self.measure("")

    def enter_node(self, node: nodes.Node) -> None:
        pass

    def leave_node(self, node: nodes.Node) -> None:
        pass

    def collect_source(self, source: str) -> None:
        self._data = self.measure(source)

    def get_data(self) -> Dict[str, Any]:
        return dict(self._data)

    def measure(self, source: str) -> Dict[str, Any]:
        lines = source.splitlines()
        total_lines = len(lines)

        total_length = 0
        max_length = 0
        blank = comments = trailing = 0
        spaces = tabs = mixed = 0
        block_names: List[str] = []
        variable_names: List[str] = []

        for line in lines:
            length = len(line)
            total_length += length
            max_length = max(max_length, length)
            stripped = line.strip()

            if not stripped:
                blank += 1
            if stripped.startswith("{#"):
                comments += 1
            if length > 0 and line[-1].isspace():
                trailing += 1

            leading = LEADING_WS_RE.match(line)
            if leading:
                indent = leading.group(0)
                has_spaces = " " in indent
                has_tabs = "\t" in indent
                if has_spaces and has_tabs:
                    mixed += 1
                elif has_tabs:
                    tabs += 1
                else:
                    spaces += 1

            block_names.extend(BLOCK_NAME_RE.findall(line))
            variable_names.extend(
                name for name in VARIABLE_NAME_RE.findall(line) if "." not in name
            )

        denominator = max(1, total_lines)
        comment_density = comments / denominator * 100
        block_consistency, block_pattern = naming_consistency(block_names, BLOCK_CONVENTIONS)
        variable_consistency, variable_pattern = naming_consistency(
            variable_names, VARIABLE_CONVENTIONS
        )

        data: Dict[str, Any] = {
            "lines": total_lines,
            "blank_lines": blank,
            "comment_lines": comments,
            "total_line_length": total_length,
            "avg_line_length": round(total_length / denominator, 2),
            "max_line_length": max_length,
            "trailing_spaces": trailing,
            "indentation_spaces": spaces,
            "indentation_tabs": tabs,
            "mixed_indentation_lines": mixed,
            "comment_density": comment_density,
            "block_names_found": block_names,
            "variable_names_found": variable_names,
            "unique_block_names": len(set(block_names)),
            "unique_variable_names": len(set(variable_names)),
            "block_naming_consistency": block_consistency,
            "block_naming_pattern": block_pattern,
            "variable_naming_consistency": variable_consistency,
            "variable_naming_pattern": variable_pattern,
        }
        data["formatting_consistency_score"] = formatting_score(
            mixed, trailing, max_length, comment_density, total_lines, self.config.long_line_limit
        )
        return data
