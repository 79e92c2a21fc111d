"""Agent persona prompts.

The persona lives in plain text so it can be tuned without code changes.
A ``prompts/<name>.txt`` under the working directory shadows the copy
shipped with the package.
"""

from functools import lru_cache
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent


def search_path() -> tuple[Path, ...]:
    """Directories consulted by load_prompt, first match wins."""
    return (Path.cwd() / "prompts", PACKAGE_DIR)


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Read ``<name>.txt`` from the first directory on the search path.

    Raises:
        FileNotFoundError: No directory has the file
    """
    candidates = [directory / f"{name}.txt" for directory in search_path()]
    for candidate in candidates:
        if candidate.is_file():
            return candidate.read_text(encoding="utf-8").strip()

    tried = "\n".join(f"  - {candidate}" for candidate in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found. Tried:\n{tried}")


def get_system_prompt(path: str | Path | None = None) -> str:
    """The persona from an explicit file, or the 'system' prompt."""
    if path is None:
        return load_prompt("system")
    return Path(path).expanduser().read_text(encoding="utf-8").strip()


def clear_cache() -> None:
    load_prompt.cache_clear()


__all__ = ["clear_cache", "get_system_prompt", "load_prompt", "search_path"]
