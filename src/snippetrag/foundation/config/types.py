"""Configuration type definitions - single source of truth for defaults."""


from dataclasses import dataclass, field, fields

from snippetrag.foundation.errors import config_error


def _require_positive_ints(section: str, obj: object) -> None:
    for f in fields(obj):  # type: ignore[arg-type]
        value = getattr(obj, f.name)
        if f.type not in (int, "int"):
            continue
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise config_error(
                f"{section}.{f.name}",
                f"expected a positive integer, got {value!r}",
            )


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Where the retrieval backend lives and how long to wait for it."""

    server_url: str = "http://localhost:8000"
    """Base URL of the retrieval backend (``/health`` and ``/query`` are appended)."""

    request_timeout_ms: int = 20000
    """Hard wall-clock limit for a single backend call."""

    def __post_init__(self) -> None:
        if not isinstance(self.server_url, str) or not self.server_url.strip():
            raise config_error("backend.server_url", "must be a non-empty URL")
        _require_positive_ints("backend", self)


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Limits applied while analyzing a project root."""

    max_files: int = 5000
    """Ceiling on the number of candidate files considered."""

    max_bytes_per_file: int = 40000
    """Ceiling on sample length (characters kept from the start of a file)."""

    sample_ceiling_multiplier: int = 10
    """Files larger than ``max_bytes_per_file * sample_ceiling_multiplier`` bytes are not read."""

    def __post_init__(self) -> None:
        _require_positive_ints("analysis", self)

    @property
    def sample_ceiling_bytes(self) -> int:
        return self.max_bytes_per_file * self.sample_ceiling_multiplier


@dataclass(frozen=True, slots=True)
class SnippetRagConfig:
    """Root configuration for SnippetRAG."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    """Retrieval backend connection settings."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    """Workspace analysis limits."""

    debug: bool = False
    """Enable DEBUG logging by default."""
