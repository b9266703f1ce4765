"""Prompt management module.

Hides where the assistant's behavioural instruction comes from. The packaged
text can be replaced without touching the code, either through a directory
named by COLLOQUY_PROMPTS_DIR or a ./prompts directory in the working
directory. Whatever is found first is read once and reused for the rest of
the process.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

PROMPTS_DIR_ENV = "COLLOQUY_PROMPTS_DIR"

_PACKAGE_DIR = Path(__file__).parent

logger = logging.getLogger(__name__)


def _search_path(filename: str) -> list[Path]:
    candidates = []
    override = os.getenv(PROMPTS_DIR_ENV)
    if override:
        candidates.append(Path(override).expanduser() / filename)
    candidates.append(Path.cwd() / "prompts" / filename)
    candidates.append(_PACKAGE_DIR / filename)
    return candidates


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Read prompt ``name`` (without .txt) from the first location that has it.

    Search order: $COLLOQUY_PROMPTS_DIR, ./prompts, the packaged prompts.
    Blank files are skipped.

    Raises:
        FileNotFoundError: If no location has a non-blank file
    """
    candidates = _search_path(f"{name}.txt")
    for path in candidates:
        if not path.is_file():
            continue
        text = path.read_text(encoding="utf-8").strip()
        if text:
            return text
        logger.warning("Ignoring empty prompt file %s", path)

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found or empty. Searched:\n{searched}")


def get_behavior_instruction() -> str:
    """The instruction sent with every generation request."""
    return load_prompt("behavior")


def clear_cache() -> None:
    """Forget loaded prompts so edited files are picked up."""
    load_prompt.cache_clear()


__all__ = [
    "PROMPTS_DIR_ENV",
    "clear_cache",
    "get_behavior_instruction",
    "load_prompt",
]
