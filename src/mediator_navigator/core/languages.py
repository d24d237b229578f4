_LANGUAGE_ALIASES = {
    "c#": "csharp",
    "csharp": "csharp",
    "cs": "csharp",
}

_LANGUAGE_DEFAULT_EXTENSIONS = {
    "csharp": ".cs",
}

_SUPPORTED_LANGUAGES = set(_LANGUAGE_DEFAULT_EXTENSIONS)

CSHARP = "csharp"


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def is_source_file(name: str, extension: str = _LANGUAGE_DEFAULT_EXTENSIONS[CSHARP]) -> bool:
    """Case-insensitive suffix check on an item name (``Foo.CS`` counts)."""
    return name.lower().endswith(extension.lower())
