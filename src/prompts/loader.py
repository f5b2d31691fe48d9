"""Loads markdown prompt templates with optional YAML frontmatter and renders them with jinja2."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from jinja2 import BaseLoader, Environment, StrictUndefined

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent

_environment = Environment(loader=BaseLoader(), undefined=StrictUndefined, keep_trailing_newline=False)


class PromptTemplate:
    def __init__(self, prompt_id: str, content: str, metadata: Dict[str, Any]):
        self.id = prompt_id
        self.content = content
        self.version = str(metadata.get("version", "v1"))
        self.description = metadata.get("description", "")
        self.requires: List[str] = list(metadata.get("requires", []))

    def render(self, **kwargs) -> str:
        return _environment.from_string(self.content).render(**kwargs)


def get_prompt_path(prompt_id: str) -> Path:
    return PROMPTS_DIR / f"{prompt_id}.md"


def _split_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    if not content.startswith("---"):
        return {}, content.strip()

    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}, content.strip()

    try:
        metadata = yaml.safe_load(parts[1]) or {}
    except yaml.YAMLError:
        logger.warning("Ignoring malformed prompt frontmatter")
        metadata = {}
    return metadata, parts[2].strip()


@lru_cache(maxsize=16)
def _load_prompt_file(prompt_id: str) -> PromptTemplate:
    path = get_prompt_path(prompt_id)
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")

    metadata, body = _split_frontmatter(path.read_text(encoding="utf-8"))
    return PromptTemplate(prompt_id, body, metadata)


def load_prompt(prompt_id: str, **kwargs) -> str:
    template = _load_prompt_file(prompt_id)
    missing = [name for name in template.requires if name not in kwargs]
    if missing:
        raise ValueError(f"Prompt '{prompt_id}' requires variables: {missing}")
    return template.render(**kwargs)


def reload_prompts() -> None:
    _load_prompt_file.cache_clear()
