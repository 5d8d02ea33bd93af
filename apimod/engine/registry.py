"""Route registry patching without a TypeScript parser.

The registry file (``src/routes/api/index.ts``) holds a block of import
statements and exactly one collection literal::

    import { usersRoute } from "./users";
    import { ordersRoute } from "./orders";

    export const apiRoutes = [
      usersRoute,
      ordersRoute,
    ];

Patching reads the text into a ``RouteRegistry`` model using two anchored
patterns (one per import line, one for the collection declaration), mutates
the model, and renders it back deterministically. Anything the patterns do
not recognise is carried through verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from apimod.config import FsOptions
from apimod.errors import InvalidRegistryFormatError, MissingRegistryError

DEFAULT_REGISTRY_NAME = "apiRoutes"

_IDENTIFIER = r"[A-Za-z_$][A-Za-z0-9_$]*"
_IDENTIFIER_RE = re.compile(_IDENTIFIER)
_IMPORT_RE = re.compile(
    rf"""^import\s*\{{\s*(?P<identifier>{_IDENTIFIER})\s*\}}\s*from\s*["'](?P<source>[^"']+)["']\s*;?$"""
)


class RegisterResult(str, Enum):
    """Outcome of ``register_route``."""

    REGISTERED = "registered"
    ALREADY_REGISTERED = "already registered"
    WOULD_REGISTER = "would register"


@dataclass
class RouteImport:
    """One ``import { identifier } from "source";`` line."""

    identifier: str
    source: str

    def render(self) -> str:
        return f'import {{ {self.identifier} }} from "{self.source}";'


@dataclass
class RouteRegistry:
    """Structured view of a registry file.

    ``head`` holds the lines before the collection declaration, line endings
    included, and ``tail`` everything after it. Both are carried through
    verbatim; new import lines are spliced into ``head`` right after the last
    recognised import. The declaration keeps its original text until an entry
    is added.
    """

    name: str = DEFAULT_REGISTRY_NAME
    imports: list[RouteImport] = field(default_factory=list)
    entries: list[str] = field(default_factory=list)
    head: list[str] = field(default_factory=list)
    declaration: str = ""
    tail: str = "\n"
    import_end: int = 0

    @classmethod
    def parse(cls, text: str, name: str = DEFAULT_REGISTRY_NAME) -> "RouteRegistry":
        """Parse registry *text*.

        Raises:
            ValueError: The ``export const <name> = [...]`` declaration is
                missing or appears more than once.
        """
        decl_re = re.compile(
            rf"^export\s+const\s+{re.escape(name)}\s*=\s*\[(?P<body>[^\]]*)\][ \t]*;?[ \t]*$",
            re.MULTILINE,
        )
        matches = list(decl_re.finditer(text))
        if len(matches) != 1:
            raise ValueError(
                f"expected exactly one '{name}' declaration, found {len(matches)}"
            )
        decl = matches[0]

        head = text[: decl.start()].splitlines(keepends=True)
        imports: list[RouteImport] = []
        import_end = 0
        for i, line in enumerate(head):
            m = _IMPORT_RE.match(line.strip())
            if m:
                imports.append(RouteImport(m.group("identifier"), m.group("source")))
                import_end = i + 1

        entries = [
            token.strip()
            for token in decl.group("body").split(",")
            if token.strip()
        ]

        return cls(
            name=name,
            imports=imports,
            entries=entries,
            head=head,
            declaration=decl.group(0),
            tail=text[decl.end():],
            import_end=import_end,
        )

    def add(self, identifier: str, source: str) -> None:
        """Add one import line and append one collection entry."""
        line = RouteImport(identifier, source).render() + "\n"
        if self.imports:
            self.head.insert(self.import_end, line)
            self.import_end += 1
        else:
            # First import goes right above the declaration, set off by blank lines.
            block = [line, "\n"]
            if self.head and self.head[-1].strip():
                block.insert(0, "\n")
            self.import_end = len(self.head) + block.index(line) + 1
            self.head.extend(block)

        self.imports.append(RouteImport(identifier, source))
        self.entries.append(identifier)
        self.declaration = ""

    def render(self) -> str:
        return "".join(self.head) + (self.declaration or self._render_collection()) + self.tail

    def _render_collection(self) -> str:
        if not self.entries:
            return f"export const {self.name} = [];"
        body = "".join(f"  {entry},\n" for entry in self.entries)
        return f"export const {self.name} = [\n{body}];"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def import_source(route_file: str) -> str:
    """Relative import specifier for a route file (``users.ts`` -> ``./users``)."""
    source = route_file.removesuffix(".ts")
    if source.startswith("."):
        return source
    return f"./{source}"


def is_registered(text: str, identifier: str) -> bool:
    """Whether *identifier* already appears as a whole word in *text*."""
    pattern = rf"(?<![A-Za-z0-9_$]){re.escape(identifier)}(?![A-Za-z0-9_$])"
    return re.search(pattern, text) is not None


def patch_registry_text(
    text: str,
    route_file: str,
    identifier: str,
    name: str = DEFAULT_REGISTRY_NAME,
) -> str | None:
    """Return *text* with *identifier* registered, or ``None`` if already present.

    Raises:
        ValueError: *identifier* is not a valid identifier, or the collection
            declaration cannot be located.
    """
    _check_identifier(identifier)
    if is_registered(text, identifier):
        return None

    registry = RouteRegistry.parse(text, name)
    registry.add(identifier, import_source(route_file))
    return registry.render()


def register_route(
    registry_path: str | Path,
    route_file: str,
    identifier: str,
    options: FsOptions,
    name: str = DEFAULT_REGISTRY_NAME,
) -> RegisterResult:
    """Register a route module in the registry at *registry_path*.

    Registering an identifier that is already present is a no-op, regardless
    of ``force``. Existing imports and entries are never dropped or
    reordered; the new entry always goes last.

    Raises:
        MissingRegistryError: The registry file does not exist.
        InvalidRegistryFormatError: The collection declaration is missing.
    """
    _check_identifier(identifier)
    path = Path(registry_path)
    if not path.exists():
        raise MissingRegistryError(path)

    text = path.read_text(encoding="utf-8")
    if is_registered(text, identifier):
        return RegisterResult.ALREADY_REGISTERED

    try:
        registry = RouteRegistry.parse(text, name)
    except ValueError as exc:
        raise InvalidRegistryFormatError(path, name) from exc
    registry.add(identifier, import_source(route_file))

    if options.dry_run:
        return RegisterResult.WOULD_REGISTER

    path.write_text(registry.render(), encoding="utf-8")
    return RegisterResult.REGISTERED


def _check_identifier(identifier: str) -> None:
    if not _IDENTIFIER_RE.fullmatch(identifier):
        raise ValueError(f"Not a valid route identifier: {identifier!r}")
