"""Batch templates: fixed combinations of purpose, audience, channel and tone."""

from __future__ import annotations

from functools import lru_cache
from itertools import product

from makeyourtext.models.presets import Template
from makeyourtext.models.request import FormatOption
from makeyourtext.presets.catalog import PresetCatalog, load_catalog

MAX_TEMPLATES = 30

_CHANNEL_LABELS = {FormatOption.MESSAGE: "문자", FormatOption.EMAIL: "이메일"}


def generate_templates(
    catalog: PresetCatalog, limit: int = MAX_TEMPLATES
) -> list[Template]:
    """Build up to ``limit`` templates spread evenly across purposes.

    Each purpose gets an equal share, picked at even intervals from the
    purpose's audience x channel x relationship x tone combinations so that
    every purpose is represented with varied audiences and channels.
    """
    purposes = list(catalog.purposes.values())
    if not purposes or limit <= 0:
        return []
    per_purpose = max(1, limit // len(purposes))
    relationships = [None, *catalog.relationships.values()]

    templates: list[Template] = []
    for purpose in purposes:
        tone_ids = [
            t for t in catalog.purpose_tones.get(purpose.id, ("cultured",))
            if t in catalog.tones
        ]
        combos = list(product(
            catalog.audiences.values(),
            _CHANNEL_LABELS,
            relationships,
            tone_ids,
        ))
        if not combos:
            continue
        picks = min(per_purpose, len(combos))
        for k in range(picks):
            audience, channel, relationship, tone_id = combos[k * len(combos) // picks]
            channel_label = _CHANNEL_LABELS[channel]
            tags = [audience.group, channel_label]
            name = f"{purpose.label} - {audience.label} - {channel_label}"
            if relationship is not None:
                tags.append(relationship.label)
                name += f" - {relationship.label}"
            templates.append(Template(
                id=f"template-{len(templates) + 1}",
                name=name,
                purpose_id=purpose.id,
                audience_id=audience.id,
                format=channel.value,
                tone_id=tone_id,
                relationship_id=relationship.id if relationship else None,
                tags=tags,
                group=purpose.label,
            ))
    return templates[:limit]


@lru_cache(maxsize=1)
def default_templates() -> tuple[Template, ...]:
    return tuple(generate_templates(load_catalog()))


def find_template(template_id: str, templates=None) -> Template | None:
    for t in templates if templates is not None else default_templates():
        if t.id == template_id:
            return t
    return None
