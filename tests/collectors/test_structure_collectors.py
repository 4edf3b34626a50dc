"""Tests for the inheritance, control flow and relationship collectors."""

from template_insight.analysis import AstTraverser
from template_insight.collectors import (
    ControlFlowCollector,
    InheritanceCollector,
    RelationshipCollector,
)
from template_insight.scanning.parser import TemplateParser


def collect(collector, source):
    AstTraverser().traverse(TemplateParser().parse(source), [collector])
    return collector.get_data()


CHILD = (
    '{% extends "base.html" %}'
    "{% block content %}"
    '{% include "partials/nav.html" %}'
    "{% endblock %}"
)


class TestInheritanceCollector:
    """Extends, include and import bookkeeping."""

    def test_child_template(self):
        data = collect(InheritanceCollector(), CHILD)
        assert data["extends"] == 1
        assert data["extends_from"] == ["base.html"]
        assert data["includes_templates"] == {"partials/nav.html": 1}
        assert data["blocks_detail"] == ["content"]

    def test_include_list_and_dynamic_names(self):
        data = collect(
            InheritanceCollector(),
            '{% include ["a.html", "b.html"] %}{% include name %}',
        )
        assert data["includes"] == 2
        assert data["includes_templates"] == {"a.html": 1, "b.html": 1}

    def test_imports(self):
        data = collect(
            InheritanceCollector(),
            '{% import "m.html" as m %}{% from "m.html" import field %}',
        )
        assert data["imports"] == 2
        assert data["imported_templates"] == {"m.html": 2}


class TestControlFlowCollector:
    """Branching statement counts."""

    def test_if_chain_is_one_complex_condition(self):
        data = collect(ControlFlowCollector(), "{% if a %}{% elif b %}{% else %}{% endif %}")
        assert data["ifs"] == 1
        assert data["complex_conditions"] == 1
        assert data["has_complex_conditions"] is True

    def test_nested_loops(self):
        data = collect(
            ControlFlowCollector(),
            "{% for a in x %}{% for b in a %}{% endfor %}{% endfor %}{% for c in y %}{% endfor %}",
        )
        assert data["fors"] == 3
        assert data["nested_loops"] == 1
        assert data["has_nested_loops"] is True

    def test_names_and_assignments(self):
        data = collect(
            ControlFlowCollector(),
            "{% set a = 1 %}{% set b %}x{% endset %}"
            "{% block main %}{% endblock %}{% macro m() %}{% endmacro %}",
        )
        assert data["variables_set"] == 2
        assert data["block_names"] == ["main"]
        assert data["macro_names"] == ["m"]


class TestRelationshipCollector:
    """Dependencies and the block contract."""

    def test_child_template(self):
        data = collect(RelationshipCollector(), CHILD)
        assert data["dependencies"] == [
            {"template": "base.html", "type": "extends"},
            {"template": "partials/nav.html", "type": "includes"},
        ]
        assert data["dependency_types"] == {"extends": 1, "includes": 1}
        assert data["provided_blocks"] == ["content"]
        assert data["used_blocks"] == []
        assert data["inheritance_depth"] == 1
        assert data["coupling_score"] == 2 * 2 + 0 + 3
        assert data["reusability_score"] == 100 - 10 - 10 + 5

    def test_standalone_blocks_are_used_in_place(self):
        data = collect(RelationshipCollector(), "{% block a %}{% endblock %}{{ self.a() }}")
        assert data["provided_blocks"] == ["a"]
        assert data["used_blocks"] == ["a", "a"]
        assert data["inheritance_depth"] == 0

    def test_resolver_walks_the_chain(self):
        parents = {"child.html": "mid.html", "mid.html": "base.html"}
        collector = RelationshipCollector(resolver=parents.get)
        collector.set_current_template("leaf.html")
        data = collect(collector, '{% extends "child.html" %}')
        assert data["inheritance_depth"] == 3

    def test_resolver_stops_at_cycles(self):
        parents = {"a.html": "b.html", "b.html": "a.html"}
        collector = RelationshipCollector(resolver=parents.get)
        collector.set_current_template("a.html")
        data = collect(collector, '{% extends "b.html" %}')
        assert data["inheritance_depth"] == 1
