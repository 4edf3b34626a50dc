"""Shared test fixtures for Template Insight tests."""

import pytest

from template_insight.analysis import AnalysisResult, BatchAnalyzer, TemplateAnalyzer


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_result():
    """Factory for AnalysisResult with hand-picked metrics."""

    def _make(relative_path="page.html", **metrics):
        return AnalysisResult(relative_path=relative_path, metrics=metrics)

    return _make


@pytest.fixture
def analyze():
    """Analyze template source with the default collectors."""
    analyzer = TemplateAnalyzer()

    def _analyze(source, relative_path="page.html"):
        return analyzer.analyze_source(relative_path, source)

    return _analyze


@pytest.fixture
def corpus_sources():
    """A small template tree: a layout, two pages, a component and a macro library."""
    return {
        "layouts/base.html": (
            "{# Site layout #}\n"
            "<html>\n"
            "<head>{% block head %}<title>{% block title %}{% endblock %}</title>{% endblock %}</head>\n"
            "<body>\n"
            "{% include \"components/nav.html\" %}\n"
            "{% block content %}{% endblock %}\n"
            "</body>\n"
            "</html>\n"
        ),
        "pages/home.html": (
            "{% extends \"layouts/base.html\" %}\n"
            "{% import \"macros/forms.html\" as forms %}\n"
            "{% block title %}Home{% endblock %}\n"
            "{% block content %}\n"
            "{% for item in items %}\n"
            "  {% if item.visible and item.published %}\n"
            "    {{ forms.field(item.name) }}\n"
            "  {% elif item.draft %}\n"
            "    <em>{{ item.name|title }}</em>\n"
            "  {% endif %}\n"
            "{% endfor %}\n"
            "{% endblock %}\n"
        ),
        "pages/about.html": (
            "{% extends \"pages/home.html\" %}\n"
            "{% block title %}About{% endblock %}\n"
        ),
        "components/nav.html": (
            "{# Navigation #}\n"
            "<nav>\n"
            "{% for link in links %}\n"
            "  <a href=\"{{ link.url }}\">{{ link.label|e }}</a>\n"
            "{% endfor %}\n"
            "</nav>\n"
        ),
        "macros/forms.html": (
            "{% macro field(name, value='') %}\n"
            "  <input name=\"{{ name }}\" value=\"{{ value|e }}\">\n"
            "{% endmacro %}\n"
        ),
    }


@pytest.fixture
def corpus_batch(corpus_sources):
    """The template tree analyzed as one batch."""
    return BatchAnalyzer().analyze_sources(corpus_sources)


@pytest.fixture
def corpus_results(corpus_batch):
    return corpus_batch.results


@pytest.fixture
def template_tree(tmp_path, corpus_sources):
    """The template tree written to disk."""
    for relative, source in corpus_sources.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
    return tmp_path


@pytest.fixture
def normal_values():
    """Known values for statistics tests."""
    return [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]


@pytest.fixture
def constant_values():
    """Constant values (zero variance)."""
    return [5.0, 5.0, 5.0, 5.0, 5.0]
