"""Preset catalog loaded from YAML once per process."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from makeyourtext.models.presets import (
    AudienceLevel,
    PurposeType,
    Relationship,
    ToneCategory,
    TonePreset,
    VoicePreset,
)

logger = logging.getLogger(__name__)

PRESETS_PATH = Path(__file__).parent / "data" / "presets.yaml"


def _index(items: list) -> Mapping[str, object]:
    index: dict[str, object] = {}
    for item in items:
        if item.id in index:
            raise ValueError(f"Duplicate preset id: {item.id}")
        index[item.id] = item
    return MappingProxyType(index)


@dataclass(frozen=True)
class PresetCatalog:
    """Read-only lookup tables keyed by preset id."""

    tones: Mapping[str, TonePreset]
    audiences: Mapping[str, AudienceLevel]
    purposes: Mapping[str, PurposeType]
    relationships: Mapping[str, Relationship]
    voices: Mapping[str, VoicePreset] = field(default_factory=lambda: MappingProxyType({}))
    purpose_tones: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_dict(cls, raw: dict) -> "PresetCatalog":
        return cls(
            tones=_index([TonePreset(**t) for t in raw.get("tones", [])]),
            audiences=_index([AudienceLevel(**a) for a in raw.get("audiences", [])]),
            purposes=_index([PurposeType(**p) for p in raw.get("purposes", [])]),
            relationships=_index([Relationship(**r) for r in raw.get("relationships", [])]),
            voices=_index([VoicePreset(**v) for v in raw.get("voices", [])]),
            purpose_tones=MappingProxyType({
                k: tuple(v) for k, v in (raw.get("purpose_tones") or {}).items()
            }),
        )

    def tone(self, tone_id: str) -> TonePreset | None:
        return self.tones.get(tone_id)

    def audience(self, audience_id: str) -> AudienceLevel | None:
        return self.audiences.get(audience_id)

    def purpose(self, purpose_id: str) -> PurposeType | None:
        return self.purposes.get(purpose_id)

    def relationship(self, relationship_id: str | None) -> Relationship | None:
        if not relationship_id:
            return None
        return self.relationships.get(relationship_id)

    @property
    def strong_tone_ids(self) -> frozenset[str]:
        return frozenset(
            t.id for t in self.tones.values() if t.category == ToneCategory.STRONG
        )


def load_catalog_file(path: str | Path) -> PresetCatalog:
    """Load a catalog from a YAML file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Preset catalog not found: {p}")
    with open(p, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    catalog = PresetCatalog.from_dict(raw)
    logger.debug(
        "Loaded preset catalog %s: %d tones, %d audiences, %d purposes",
        p.name, len(catalog.tones), len(catalog.audiences), len(catalog.purposes),
    )
    return catalog


@lru_cache(maxsize=None)
def load_catalog(path: str | None = None) -> PresetCatalog:
    """Return the process-wide catalog (bundled presets unless ``path`` is set)."""
    return load_catalog_file(path or PRESETS_PATH)
