"""Build pipeline integration.

Storybook lets a project chain async functions that receive the current build
configuration and return it (``viteFinal``). :func:`storybook_hook` produces
such a step: it regenerates stories as a side effect and hands the host
configuration back untouched.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from .config import GeneratorConfig
from .diagnostics import DiagnosticSink
from .orchestrator import Orchestrator

HostConfig = TypeVar("HostConfig")


def storybook_hook(
    pattern: str | None = None,
    *,
    config: GeneratorConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> Callable[[HostConfig], Awaitable[HostConfig]]:
    """Return an async step that writes stories and passes ``host_config`` through."""
    orchestrator = Orchestrator(config, sink=sink)

    async def hook(host_config: HostConfig) -> HostConfig:
        await orchestrator.run_async(pattern)
        return host_config

    return hook


__all__ = ["storybook_hook"]
