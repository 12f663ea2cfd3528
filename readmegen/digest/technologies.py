"""Technology detector: substring matching over paths and digest text."""

from __future__ import annotations

from collections.abc import Iterable

from readmegen.digest.models import TechnologySummary

# (extensions, language)
_LANGUAGE_EXTENSIONS: list[tuple[tuple[str, ...], str]] = [
    ((".js", ".jsx"), "JavaScript"),
    ((".ts", ".tsx"), "TypeScript"),
    ((".py",), "Python"),
    ((".java",), "Java"),
    ((".go",), "Go"),
    ((".rs",), "Rust"),
    ((".php",), "PHP"),
    ((".rb",), "Ruby"),
]

# Case-sensitive tokens looked up in the aggregated content.
_FRAMEWORK_TOKENS: list[tuple[str, str]] = [
    ("react", "React"),
    ("vue", "Vue.js"),
    ("angular", "Angular"),
    ("express", "Express.js"),
    ("django", "Django"),
    ("flask", "Flask"),
    ("spring", "Spring Boot"),
    ("laravel", "Laravel"),
]

# Exact (lower-cased) paths that identify a tool.
_TOOL_FILES: list[tuple[str, str]] = [
    ("package.json", "npm/Node.js"),
    ("yarn.lock", "Yarn"),
    ("dockerfile", "Docker"),
    ("docker-compose.yml", "Docker Compose"),
]

# Substrings anywhere in a (lower-cased) path that identify a tool.
_TOOL_FRAGMENTS: list[tuple[str, str]] = [
    ("webpack", "Webpack"),
    ("vite", "Vite"),
]


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def detect_technologies(paths: Iterable[str], aggregated_content: str) -> TechnologySummary:
    """Classify languages, frameworks and tools.

    Languages come from file extensions in ``paths``; frameworks from
    case-sensitive token presence in ``aggregated_content``; tools from
    well-known file names. Each list keeps lexicon order.
    """
    names = [p.lower() for p in paths]
    name_set = set(names)

    languages = [
        lang
        for exts, lang in _LANGUAGE_EXTENSIONS
        if any(n.endswith(exts) for n in names)
    ]
    frameworks = [
        label for token, label in _FRAMEWORK_TOKENS if token in aggregated_content
    ]
    tools = [label for fname, label in _TOOL_FILES if fname in name_set]
    tools += [
        label for frag, label in _TOOL_FRAGMENTS if any(frag in n for n in names)
    ]
    if "tailwind.config.js" in name_set:
        tools.append("Tailwind CSS")

    return TechnologySummary(
        languages=_dedupe(languages),
        frameworks=_dedupe(frameworks),
        tools=_dedupe(tools),
    )
