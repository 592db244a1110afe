"""File classification for workspace analysis.

Decides, from the path string alone, whether a file is sensitive (never
recorded, never sampled) and whether its content may be sampled.
Sensitivity always wins over sample eligibility.
"""

import posixpath

# Extensions whose content is sampled
SAMPLE_EXTENSIONS: frozenset[str] = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".py", ".cs", ".java", ".go", ".rs",
    ".md", ".json", ".yml", ".yaml", ".toml", ".xml", ".html", ".css",
    ".scss", ".less", ".sql", ".sh", ".bash", ".ps1", ".bat", ".cmd",
    ".cpp", ".c", ".h", ".hpp", ".cc", ".cxx", ".m", ".mm", ".swift",
    ".php", ".rb", ".pl", ".lua", ".r", ".scala", ".kt", ".dart",
    ".vue", ".svelte",
})

# Extension -> editor language tag
LANGUAGE_IDS: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".py": "python",
    ".cs": "csharp",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".md": "markdown",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".sql": "sql",
    ".sh": "shellscript",
    ".bash": "shellscript",
    ".ps1": "powershell",
    ".bat": "bat",
    ".cmd": "bat",
    ".cpp": "cpp",
    ".c": "c",
    ".h": "c",
    ".hpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".m": "objective-c",
    ".mm": "objective-cpp",
    ".swift": "swift",
    ".php": "php",
    ".rb": "ruby",
    ".pl": "perl",
    ".lua": "lua",
    ".r": "r",
    ".scala": "scala",
    ".kt": "kotlin",
    ".dart": "dart",
    ".vue": "vue",
    ".svelte": "svelte",
}

_SENSITIVE_SUFFIXES: tuple[str, ...] = (".pfx", ".pem", ".key", ".p12")
_SENSITIVE_WORDS: tuple[str, ...] = ("secrets", "credentials")


def normalize_path(path: str) -> str:
    """Lowercase and convert backslashes to forward slashes."""
    return path.replace("\\", "/").lower()


def extension_of(path: str) -> str:
    """Lowercase extension including the dot, or '' if there is none."""
    return posixpath.splitext(normalize_path(path))[1]


def is_sensitive_dir(name: str) -> bool:
    """Whether a single directory component marks everything below it sensitive."""
    lowered = name.lower()
    return any(word in lowered for word in _SENSITIVE_WORDS)


def is_sensitive(path: str) -> bool:
    """Check whether a path names a file that must never leave the machine.

    Args:
        path: Relative or absolute path, either separator style.

    Returns:
        True for env files, private keys and certificates, and anything whose
        name or parent directories mention secrets or credentials.
    """
    normalized = normalize_path(path)
    name = posixpath.basename(normalized)
    parent = posixpath.dirname(normalized)

    if name == ".env" or name.startswith(".env."):
        return True
    if name.startswith("id_rsa"):
        return True
    if name.endswith(_SENSITIVE_SUFFIXES):
        return True
    if any(word in name for word in _SENSITIVE_WORDS):
        return True
    return any(is_sensitive_dir(part) for part in parent.split("/") if part)


def is_sample_eligible(path: str) -> bool:
    """Check whether a file's content may be sampled."""
    if is_sensitive(path):
        return False
    return extension_of(path) in SAMPLE_EXTENSIONS


def language_id_for(path: str) -> str | None:
    """Language tag for a path, or None when the extension is unknown."""
    return LANGUAGE_IDS.get(extension_of(path))
