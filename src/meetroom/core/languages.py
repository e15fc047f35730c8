"""Language registry for the in-call code runner.

Maps the user-facing language key to the runtime name and version the
remote execution service understands.

// [LAW:one-source-of-truth] LANGUAGES is the only language table.
// [LAW:dataflow-not-control-flow] Unknown keys resolve to the default entry.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageOption:
    key: str
    label: str
    runtime_id: str
    runtime_version: str
    editor_language: str | None = None


@dataclass(frozen=True)
class RuntimeSpec:
    """What the execution service needs to run one source file."""

    runtime_id: str
    runtime_version: str
    file_extension: str


DEFAULT_LANGUAGE = "javascript"

# Versions are the ones published by the Piston public instance.
LANGUAGES: tuple[LanguageOption, ...] = (
    LanguageOption("javascript", "JavaScript", "node", "18.15.0", "javascript"),
    LanguageOption("typescript", "TypeScript", "node", "18.15.0", "javascript"),
    LanguageOption("python", "Python", "python", "3.10.0", "python"),
    LanguageOption("java", "Java", "java", "15.0.2", "java"),
    LanguageOption("cpp", "C++", "cpp", "10.2.0", None),
    LanguageOption("html", "HTML", "html", "", "html"),
    LanguageOption("css", "CSS", "css", "", "css"),
)

LANGUAGE_KEYS: tuple[str, ...] = tuple(option.key for option in LANGUAGES)

_BY_KEY: dict[str, LanguageOption] = {option.key: option for option in LANGUAGES}

# Not a full extension table: anything missing here is submitted as a script.
_EXTENSION_OVERRIDES = {
    "cpp": "cpp",
    "java": "java",
    "python": "py",
}
_SCRIPT_EXTENSION = "js"


def is_known(language_key: str) -> bool:
    return language_key in _BY_KEY


def get_option(language_key: str) -> LanguageOption:
    """Return the registry entry for *language_key*, or the default entry."""
    return _BY_KEY.get(language_key, _BY_KEY[DEFAULT_LANGUAGE])


def file_extension(runtime_id: str) -> str:
    return _EXTENSION_OVERRIDES.get(runtime_id, _SCRIPT_EXTENSION)


def resolve(language_key: str) -> RuntimeSpec:
    """Resolve a language key to the runtime used for execution.

    Never fails: unrecognized keys fall back to JavaScript on Node.
    """
    option = get_option(language_key)
    return RuntimeSpec(
        runtime_id=option.runtime_id,
        runtime_version=option.runtime_version,
        file_extension=file_extension(option.runtime_id),
    )
