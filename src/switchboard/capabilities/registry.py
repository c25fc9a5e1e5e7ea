"""CapabilityRegistry — the immutable table of tools, resources and prompts.

Built once at process start and shared by every transport.  Lookups by name
(or URI) raise the matching not-found error, which the dispatcher reports as
``-32603``.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from switchboard.capabilities.prompts import Prompt, builtin_prompts
from switchboard.capabilities.resources import Resource, builtin_resources
from switchboard.capabilities.tools import Tool, builtin_tools
from switchboard.protocol.errors import (
    PromptNotFoundError,
    ResourceNotFoundError,
    ToolNotFoundError,
)

if TYPE_CHECKING:
    from switchboard.capabilities.arguments import Arguments
    from switchboard.config.models import ServerSettings
    from switchboard.protocol.models import (
        PromptDescriptor,
        PromptResult,
        ResourceContents,
        ResourceDescriptor,
        TextContent,
        ToolDescriptor,
    )

_T = TypeVar("_T")


class DuplicateCapabilityError(ValueError):
    """Two capabilities of the same kind share a name or URI."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"Duplicate {kind}: {key}")


def _index(kind: str, items: Iterable[_T], key_of: str) -> Mapping[str, _T]:
    table: dict[str, _T] = {}
    for item in items:
        key: str = getattr(item, key_of)
        if key in table:
            raise DuplicateCapabilityError(kind, key)
        table[key] = item
    return MappingProxyType(table)


class CapabilityRegistry:
    """Read-only registry of tools, resources and prompts.

    Usage::

        registry = CapabilityRegistry.default(settings)
        registry.list_tools()
        registry.call_tool("echo", Arguments({"text": "hi"}))
    """

    def __init__(
        self,
        tools: Iterable[Tool] = (),
        resources: Iterable[Resource] = (),
        prompts: Iterable[Prompt] = (),
    ) -> None:
        self._tools = _index("tool", tools, "name")
        self._resources = _index("resource", resources, "uri")
        self._prompts = _index("prompt", prompts, "name")

    @classmethod
    def default(
        cls,
        settings: ServerSettings,
        *,
        rng: random.Random | None = None,
    ) -> CapabilityRegistry:
        """Build the built-in registry.

        *rng* feeds the simulated weather tool; when omitted it is seeded from
        ``settings.weather_seed``.
        """
        if rng is None:
            rng = random.Random(settings.weather_seed)
        tools = builtin_tools(rng)
        return cls(
            tools=tools,
            resources=builtin_resources(settings, [t.name for t in tools]),
            prompts=builtin_prompts(),
        )

    # -- tools ---------------------------------------------------------------

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def call_tool(self, name: str, arguments: Arguments) -> list[TextContent]:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool.run(arguments)

    # -- resources -----------------------------------------------------------

    def list_resources(self) -> list[ResourceDescriptor]:
        return [resource.descriptor for resource in self._resources.values()]

    def read_resource(self, uri: str) -> list[ResourceContents]:
        resource = self._resources.get(uri)
        if resource is None:
            raise ResourceNotFoundError(uri)
        return resource.read()

    # -- prompts -------------------------------------------------------------

    def list_prompts(self) -> list[PromptDescriptor]:
        return [prompt.descriptor for prompt in self._prompts.values()]

    def get_prompt(self, name: str, arguments: Arguments) -> PromptResult:
        prompt = self._prompts.get(name)
        if prompt is None:
            raise PromptNotFoundError(name)
        return prompt.render(arguments)
