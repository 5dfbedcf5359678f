"""Provider domain: per-tool configuration setup."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ai_dotfiles.providers.base import BaseProvider, ProviderResult
from ai_dotfiles.providers.claude import ClaudeProvider
from ai_dotfiles.providers.cursor import CursorProvider
from ai_dotfiles.providers.gemini import GeminiProvider
from ai_dotfiles.providers.simple import KiloProvider, RooProvider

if TYPE_CHECKING:
    from pathlib import Path

PROVIDERS: dict[str, type[BaseProvider]] = {
    "claude": ClaudeProvider,
    "gemini": GeminiProvider,
    "cursor": CursorProvider,
    "kilo": KiloProvider,
    "roo": RooProvider,
}


def create_provider(
    tool_name: str,
    project_root: Path,
    templates_dir: Path,
    **options: Any,
) -> BaseProvider:
    """Instantiate the provider for *tool_name*; unknown names raise ``ValueError``."""
    try:
        provider_cls = PROVIDERS[tool_name]
    except KeyError:
        raise ValueError(f"Unknown tool: {tool_name}") from None
    return provider_cls(project_root, templates_dir, **options)  # type: ignore[call-arg]


def setup_tool(
    tool_name: str,
    project_root: Path,
    templates_dir: Path,
    **options: Any,
) -> ProviderResult:
    return create_provider(tool_name, project_root, templates_dir, **options).setup()


__all__ = [
    "PROVIDERS",
    "BaseProvider",
    "ClaudeProvider",
    "CursorProvider",
    "GeminiProvider",
    "KiloProvider",
    "ProviderResult",
    "RooProvider",
    "create_provider",
    "setup_tool",
]
