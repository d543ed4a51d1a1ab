"""Tests for batch template generation."""

from collections import Counter

from makeyourtext.presets.templates import (
    MAX_TEMPLATES,
    default_templates,
    find_template,
    generate_templates,
)


class TestGenerateTemplates:
    def test_default_count(self, catalog):
        templates = generate_templates(catalog)
        assert len(templates) == MAX_TEMPLATES

    def test_evenly_spread_across_purposes(self, catalog):
        templates = generate_templates(catalog)
        counts = Counter(t.purpose_id for t in templates)
        assert set(counts) == set(catalog.purposes)
        assert len(set(counts.values())) == 1

    def test_unique_ids(self, catalog):
        templates = generate_templates(catalog)
        assert len({t.id for t in templates}) == len(templates)
        assert templates[0].id == "template-1"

    def test_tones_fit_purpose(self, catalog):
        for t in generate_templates(catalog):
            assert t.tone_id in catalog.purpose_tones[t.purpose_id]

    def test_references_known_presets(self, catalog):
        for t in generate_templates(catalog):
            assert t.audience_id in catalog.audiences
            assert t.format in ("message", "email")
            assert t.relationship_id is None or t.relationship_id in catalog.relationships

    def test_name_and_tags(self, catalog):
        t = generate_templates(catalog)[0]
        purpose = catalog.purpose(t.purpose_id)
        audience = catalog.audience(t.audience_id)
        assert t.name.startswith(f"{purpose.label} - {audience.label}")
        assert t.group == purpose.label
        assert audience.group in t.tags

    def test_limit(self, catalog):
        assert len(generate_templates(catalog, limit=3)) == 3
        assert generate_templates(catalog, limit=0) == []


class TestFindTemplate:
    def test_found(self):
        assert find_template("template-1") is default_templates()[0]

    def test_missing(self):
        assert find_template("template-999") is None

    def test_explicit_list(self, catalog):
        templates = generate_templates(catalog, limit=5)
        assert find_template("template-5", templates).id == "template-5"
        assert find_template("template-6", templates) is None
