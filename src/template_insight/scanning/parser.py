"""Jinja2 front end: source text in, syntax tree out."""

from typing import Optional, Sequence

from jinja2 import Environment, TemplateSyntaxError, nodes

from ..exceptions import TemplateParseError

DEFAULT_EXTENSIONS = (
    "jinja2.ext.do",
    "jinja2.ext.loopcontrols",
    "jinja2.ext.debug",
)


class TemplateParser:
    """Parses template source into a ``jinja2.nodes.Template`` tree.

    Parsing never renders or loads other templates, so references to
    missing parents, includes or imports are fine.
    """

    def __init__(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS):
        self.environment = Environment(extensions=list(extensions), autoescape=False)

    def parse(self, source: str, name: Optional[str] = None) -> nodes.Template:
        """
        Parse template source.

        Args:
            source: Template text
            name: Template name used in error messages

        Raises:
            TemplateParseError: On any syntax error
        """
        try:
            return self.environment.parse(source, name=name, filename=name)
        except TemplateSyntaxError as e:
            raise TemplateParseError(name or "<string>", e.message or str(e), e.lineno) from e
