"""
Tool registry — pairs every advertised tool with exactly one handler.

The registry is assembled once at startup.  A tool advertised without a
handler, a handler registered for an unadvertised tool, or a duplicate id is
a :class:`RegistryError` raised immediately, never a call-time surprise.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping

Handler = Callable[..., Any]


class RegistryError(Exception):
    """Raised when tool descriptors and handlers do not line up."""


@dataclass(frozen=True)
class ToolDescriptor:
    id: str
    description: str
    input_schema: dict = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_dict(self) -> dict:
        """Return the advertised form (a copy, so callers cannot mutate the catalog)."""
        return {
            "name": self.id,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


class HandlerTable(Mapping[str, Handler]):
    """Tool id -> handler mapping filled by the :meth:`register` decorator."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, tool_id: str) -> Callable[[Handler], Handler]:
        def decorator(func: Handler) -> Handler:
            if tool_id in self._handlers:
                raise RegistryError(f"Duplicate handler for tool: {tool_id}")
            self._handlers[tool_id] = func
            return func
        return decorator

    def __getitem__(self, tool_id: str) -> Handler:
        return self._handlers[tool_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


class ToolRegistry:
    """Ordered catalog of tool descriptors with their handlers."""

    def __init__(self, descriptors: list[ToolDescriptor], handlers: Mapping[str, Handler]) -> None:
        seen: set[str] = set()
        for descriptor in descriptors:
            if descriptor.id in seen:
                raise RegistryError(f"Duplicate tool id: {descriptor.id}")
            seen.add(descriptor.id)

        missing = [d.id for d in descriptors if d.id not in handlers]
        if missing:
            raise RegistryError(f"Tools without a handler: {', '.join(missing)}")

        orphans = sorted(set(handlers) - seen)
        if orphans:
            raise RegistryError(f"Handlers without a tool descriptor: {', '.join(orphans)}")

        self._descriptors = tuple(descriptors)
        self._by_id = {d.id: d for d in descriptors}
        self._handlers = {d.id: handlers[d.id] for d in descriptors}

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._by_id

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def tool_ids(self) -> list[str]:
        return [d.id for d in self._descriptors]

    def descriptor(self, tool_id: str) -> ToolDescriptor | None:
        return self._by_id.get(tool_id)

    def handler(self, tool_id: str) -> Handler | None:
        return self._handlers.get(tool_id)

    def list_capabilities(self) -> list[dict]:
        """The full descriptor sequence in advertisement order."""
        return [d.to_dict() for d in self._descriptors]


def build_descriptors(descriptions: Mapping[str, str], schemas: Mapping[str, dict]) -> list[ToolDescriptor]:
    """Pair each described tool with its schema, in description order."""
    unknown = sorted(set(schemas) - set(descriptions))
    if unknown:
        raise RegistryError(f"Schemas without a tool description: {', '.join(unknown)}")

    return [
        ToolDescriptor(
            id=tool_id,
            description=description,
            input_schema=copy.deepcopy(schemas.get(tool_id, {"type": "object", "properties": {}})),
        )
        for tool_id, description in descriptions.items()
    ]


def build_registry() -> ToolRegistry:
    """Build the registry of every OCI tool."""
    from ocimcp.handlers import HANDLERS
    from ocimcp.schemas import TOOL_DESCRIPTIONS, TOOL_SCHEMAS

    return ToolRegistry(build_descriptors(TOOL_DESCRIPTIONS, TOOL_SCHEMAS), HANDLERS)
