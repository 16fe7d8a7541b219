"""Template parser front end.

The transpile pipeline only needs a function from template source to
generated Python source plus the ordered client component references the
template declares.  :class:`Parser` is that seam; :class:`TemplateParser`
is the default implementation, backed by kida.

Templates declare client components ("islands") with a comment tag::

    {# island: Counter ./components/counter.tsx #}

The tag renders to nothing; it only feeds the client manifest.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Protocol

from kida import Environment
from kida.environment.exceptions import TemplateSyntaxError

from trill.build.types import ComponentRef
from trill.errors import TemplateParseError

# Regex to extract {# island: Name path #} from templates
_ISLAND_RE = re.compile(r"\{#\s*island:\s*([A-Za-z_][\w.-]*)\s+(\S+?)\s*#\}")

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

_MODULE_TEMPLATE = '''# Generated by trill from {filename!r}. Do not edit.

from kida import Environment

SOURCE = {source!r}

_env = Environment(autoescape=True)
template = _env.from_string(SOURCE)


def render(context=None, /, **kwargs):
    data = dict(context or {{}})
    data.update(kwargs)
    return template.render(data)
'''


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Generated module source and the component references it declares."""

    code: str
    components: tuple[ComponentRef, ...] = ()


class Parser(Protocol):
    """Source text in, generated code and component references out."""

    def parse(self, source: str, *, filename: str) -> ParseResult: ...


def component_id(filename: str, ordinal: int, name: str) -> str:
    """Derive a build-unique component id.

    Two files declaring the same component get different ids, so
    duplicate references survive side by side in the manifest.
    """
    slug = _NON_SLUG_RE.sub("-", _CAMEL_RE.sub("-", name).lower()).strip("-") or "island"
    digest = hashlib.sha1(f"{filename}:{ordinal}:{name}".encode()).hexdigest()
    return f"{slug}-{digest[:8]}"


def find_islands(source: str, filename: str) -> tuple[ComponentRef, ...]:
    """Collect ``{# island: Name path #}`` declarations in source order."""
    return tuple(
        ComponentRef(
            id=component_id(filename, ordinal, match.group(1)),
            name=match.group(1),
            path=match.group(2),
        )
        for ordinal, match in enumerate(_ISLAND_RE.finditer(source))
    )


class TemplateParser:
    """Default parser: kida-checked templates compiled into render modules.

    The template is compiled once here so syntax errors surface at build
    time with a line number instead of at first import.
    """

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or Environment(autoescape=True)

    def parse(self, source: str, *, filename: str) -> ParseResult:
        try:
            self._env.from_string(source)
        except TemplateSyntaxError as exc:
            detail = getattr(exc, "message", None) or str(exc)
            raise TemplateParseError(filename, detail, getattr(exc, "lineno", None)) from exc

        code = _MODULE_TEMPLATE.format(filename=filename, source=source)
        return ParseResult(code=code, components=find_islands(source, filename))
