"""Path template compilation.

Templates use the colon syntax understood by Express-style routers::

    /photos                 static
    /photos/:photo          required parameter
    /photos/:photo?/:op?    optional parameters (the leading "/" goes too)
    /photos/:photo.:format? optional format suffix

Each template compiles to one anchored, case-insensitive regex with a
named group per parameter. A trailing slash on the request is tolerated.
"""

import re
from dataclasses import dataclass

from perch.errors import ConfigurationError
from perch.routing.route import PathParam

_PARAM_RE = re.compile(r"(/)?(\.)?:(\w+)(\?)?")

# Capture patterns: a dotted parameter stops at the next dot
_SEGMENT = r"[^/]+?"
_DOTTED_SEGMENT = r"[^/.]+?"


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A path template with its compiled regex and parameter list."""

    template: str
    regex: re.Pattern[str]
    params: tuple[PathParam, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured parameters, or ``None`` when *path* does not match.

        Optional parameters absent from *path* are left out of the result.
        """
        m = self.regex.match(path)
        if m is None:
            return None
        return {key: value for key, value in m.groupdict().items() if value is not None}


def parse_path(template: str) -> list[PathParam]:
    """List the parameters declared in a path template, in order.

    Examples::

        "/photos"                 -> []
        "/photos/:photo.:format?" -> [PathParam("photo"),
                                      PathParam("format", optional=True, dotted=True)]
    """
    return [
        PathParam(name=name, optional=bool(optional), dotted=bool(dot))
        for _slash, dot, name, optional in _PARAM_RE.findall(template)
    ]


def compile_path(template: str) -> CompiledPath:
    """Compile a path template into a :class:`CompiledPath`.

    Raises ``ConfigurationError`` if a parameter name is declared twice,
    or if the template uses ``{param}`` placeholders instead of ``:param``.
    """
    if "{" in template or "}" in template:
        msg = (
            f"Route path {template!r} uses {{param}} placeholders. "
            "Perch templates use :param (and :param? for optional segments)."
        )
        raise ConfigurationError(msg)

    params: list[PathParam] = []
    seen: set[str] = set()
    pieces: list[str] = []
    pos = 0

    for m in _PARAM_RE.finditer(template):
        slash, dot, name, optional = m.groups()
        if name in seen:
            msg = f"Route path {template!r} declares parameter {name!r} twice."
            raise ConfigurationError(msg)
        seen.add(name)
        params.append(PathParam(name=name, optional=bool(optional), dotted=bool(dot)))

        pieces.append(re.escape(template[pos : m.start()]))
        slash_re = re.escape(slash or "")
        dot_re = re.escape(dot or "")
        capture = f"(?P<{name}>{_DOTTED_SEGMENT if dot else _SEGMENT})"
        if optional:
            pieces.append(f"(?:{slash_re}{dot_re}{capture})?")
        else:
            pieces.append(f"{slash_re}(?:{dot_re}{capture})")
        pos = m.end()

    pieces.append(re.escape(template[pos:]))
    pattern = "^" + "".join(pieces) + "/?$"
    return CompiledPath(
        template=template,
        regex=re.compile(pattern, re.IGNORECASE),
        params=tuple(params),
    )
