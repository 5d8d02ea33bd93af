"""Name derivation for generated modules.

Turns a slash-separated module path such as ``admin/user`` into the names the
templates need: the singular name, its plural (the route segment), the route
file base name and the exported route identifier.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, computed_field

from apimod.errors import InvalidModulePathError

_SEGMENT_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_ROUTE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_/-]*$")


class ModuleNames(BaseModel):
    """Every derived name for one module."""

    module_path: str
    name: str
    type_name: str
    plural: str
    route: str
    route_file: str
    route_identifier: str
    error_prefix: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_code(self) -> str:
        return f"{self.error_prefix}_NOT_FOUND"


def pluralize(word: str) -> str:
    """Small deterministic English pluraliser for REST resource names.

    E.g. ``'category'`` -> ``'categories'``, ``'box'`` -> ``'boxes'``,
    ``'day'`` -> ``'days'``, ``'user'`` -> ``'users'``.
    """
    if word.endswith("y") and not re.search(r"[aeiou]y$", word, re.IGNORECASE):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def to_pascal(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_/\s]+", name)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def to_camel(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = to_pascal(name)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def derive_names(module_path: str, route: str | None = None) -> ModuleNames:
    """Derive template names for *module_path*.

    Args:
        module_path: Slash-separated path; the last segment is the singular
            module name.
        route: Optional route segment overriding the pluralised name. May
            itself contain slashes (``admin/users``).

    Raises:
        InvalidModulePathError: A segment is empty or not identifier-like.
    """
    cleaned = module_path.strip().strip("/")
    if not cleaned:
        raise InvalidModulePathError(module_path, "path is empty")
    segments = cleaned.split("/")
    for segment in segments:
        if not _SEGMENT_RE.match(segment):
            raise InvalidModulePathError(
                module_path, f"segment '{segment}' must start with a letter"
            )

    name = segments[-1]
    if route is not None:
        plural = route.strip().strip("/")
        if not _ROUTE_RE.match(plural):
            raise InvalidModulePathError(module_path, f"invalid route '{route}'")
    else:
        plural = pluralize(name)

    route_file = plural.replace("/", "-")
    return ModuleNames(
        module_path="/".join(segments),
        name=name,
        type_name=to_pascal(name),
        plural=plural,
        route=f"/{plural}",
        route_file=route_file,
        route_identifier=f"{to_camel(route_file)}Route",
        error_prefix=re.sub(r"[^A-Za-z0-9]+", "_", name).upper(),
    )
