"""Code-fence language tags for file extensions.

Used when embedding file bodies or selected snippets in Markdown-style
fences. Unknown extensions fall back to ``text``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True, slots=True)
class FenceLanguage:
    """Fence tag and the extensions (including dot) that map to it."""

    tag: str
    extensions: frozenset[str]


ALL_FENCE_LANGUAGES: tuple[FenceLanguage, ...] = (
    FenceLanguage("javascript", frozenset({".js", ".jsx", ".mjs", ".cjs"})),
    FenceLanguage("typescript", frozenset({".ts", ".tsx", ".mts", ".cts"})),
    FenceLanguage("python", frozenset({".py", ".pyi"})),
    FenceLanguage("ruby", frozenset({".rb"})),
    FenceLanguage("go", frozenset({".go"})),
    FenceLanguage("rust", frozenset({".rs"})),
    FenceLanguage("java", frozenset({".java"})),
    FenceLanguage("cpp", frozenset({".cpp", ".cc", ".cxx", ".hpp"})),
    FenceLanguage("c", frozenset({".c", ".h"})),
    FenceLanguage("csharp", frozenset({".cs"})),
    FenceLanguage("php", frozenset({".php"})),
    FenceLanguage("bash", frozenset({".sh", ".bash"})),
    FenceLanguage("yaml", frozenset({".yml", ".yaml"})),
    FenceLanguage("json", frozenset({".json"})),
    FenceLanguage("xml", frozenset({".xml"})),
    FenceLanguage("html", frozenset({".html", ".htm"})),
    FenceLanguage("css", frozenset({".css"})),
    FenceLanguage("scss", frozenset({".scss"})),
    FenceLanguage("markdown", frozenset({".md", ".markdown"})),
)

EXTENSION_TO_FENCE: dict[str, str] = {
    ext: lang.tag for lang in ALL_FENCE_LANGUAGES for ext in lang.extensions
}

DEFAULT_FENCE = "text"


def fence_language(path: str) -> str:
    """Return the fence tag for ``path`` (case-insensitive extension match)."""
    return EXTENSION_TO_FENCE.get(PurePath(path).suffix.lower(), DEFAULT_FENCE)
