"""Presenter voice catalogue loaded from YAML."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from .models import Voice

logger = logging.getLogger(__name__)


def load_voices(path: Path) -> list[Voice]:
    """
    Load enabled voices from a YAML file.

    Args:
        path: Path to voices.yaml

    Returns:
        Voices in file order; disabled entries are skipped.
    """
    if not path.exists():
        logger.warning("[VOICES] Voice file not found: %s", path)
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    voices = []
    for vid, vdata in (data.get("voices") or {}).items():
        # Skip disabled voices
        if vdata.get("enabled") is False:
            continue
        voices.append(
            Voice(
                id=vid,
                name=vdata.get("name", vid),
                description=vdata.get("description", ""),
                provider_voice_id=vdata["provider_voice_id"],
                style=vdata.get("style", "professional"),
            )
        )
    return voices


def find_voice(voices: list[Voice], voice_id: str) -> Optional[Voice]:
    return next((v for v in voices if v.id == voice_id), None)
