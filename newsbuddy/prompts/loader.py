"""Prompt templates for the language-model tasks.

Templates live next to this module as ``templates/<name>.txt`` and use
``string.Template`` placeholders (``$headline``), so literal JSON examples
in a prompt need no escaping.
"""

from functools import lru_cache
from pathlib import Path
from string import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=32)
def _template(name: str) -> Template:
    path = TEMPLATES_DIR / f"{name}.txt"
    if not path.is_file():
        raise FileNotFoundError(f"Prompt template not found: {path}")
    return Template(path.read_text(encoding="utf-8"))


def template_names() -> list[str]:
    """Names of the bundled templates, sorted."""
    return sorted(p.stem for p in TEMPLATES_DIR.glob("*.txt"))


def render(name: str, **values: str) -> str:
    """
    Render a bundled prompt.

    Raises:
        FileNotFoundError: no template with that name
        KeyError: a placeholder was left without a value
    """
    return _template(name).substitute(**values)
