"""Collect brand corpus documents into semantic index records.

Reads philosophy documents, platform fingerprints, anchor definitions, platform
identities, the translation table and reference entries from the brand
directory. Missing or malformed sources are logged and skipped; the records are
returned without embeddings.
"""

import json
import logging
import re
import textwrap
from pathlib import Path
from typing import Any

from design_navigator.config import Config
from design_navigator.models import ComponentRecord, SemanticIndexRecord

logger = logging.getLogger(__name__)


NAVIGATION_LEITMOTIF = """
AI sees meaning and language as a geometry that you must navigate through.
When you prompt, you don't open a register or access a database; you're
navigating multi-dimensional space with topology, clustering, and vectors.
Navigation is what users must learn to do with AI. Navigation is what
Thoughtform teaches. Navigation is the literal operation happening inside the
models. The brand leitmotif and the underlying technology are the same thing.
"""

PHILOSOPHY_DOCUMENTS = {
    "principles": ("Design Principles", "philosophy/PRINCIPLES.md"),
    "generative": ("Generative Patterns", "philosophy/GENERATIVE-PATTERNS.md"),
}


def _read_text(root: Path, relative_path: str) -> str | None:
    path = root / relative_path
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"{relative_path} not found in {root}")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def _read_json(root: Path, relative_path: str) -> Any | None:
    text = _read_text(root, relative_path)
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in {root / relative_path}: {e}")
        return None


def _content(text: str) -> str:
    return textwrap.dedent(text).strip()


def collect_philosophy(root: Path) -> list[SemanticIndexRecord]:
    """Collect the navigation leitmotif and the philosophy documents."""
    records = [
        SemanticIndexRecord(
            category="philosophy",
            source_id="navigation-core",
            title="Navigation Leitmotif",
            content=_content(NAVIGATION_LEITMOTIF),
            metadata={"type": "semantic-core", "priority": "highest"},
        )
    ]
    for source_id, (title, relative_path) in PHILOSOPHY_DOCUMENTS.items():
        text = _read_text(root, relative_path)
        if text:
            records.append(
                SemanticIndexRecord(
                    category="philosophy",
                    source_id=source_id,
                    source_path=relative_path,
                    title=title,
                    content=text.strip(),
                )
            )
    return records


def collect_fingerprints(
    root: Path, platforms: list[str] | None = None
) -> list[SemanticIndexRecord]:
    """Collect one fingerprint record per platform fingerprint file."""
    records = []
    for platform in platforms or Config.FINGERPRINT_PLATFORMS:
        relative_path = f"semantic/fingerprints/{platform}.json"
        fingerprint = _read_json(root, relative_path)
        if not isinstance(fingerprint, dict):
            continue
        identity = fingerprint.get("identity") or {}
        content = fingerprint.get("embedding_text") or (
            f"{identity.get('short', '')} {identity.get('extended', '')}"
        )
        records.append(
            SemanticIndexRecord(
                category="fingerprint",
                source_id=platform,
                source_path=relative_path,
                title=f"{platform} Platform Fingerprint",
                content=content.strip(),
                platforms=[platform],
                metadata={
                    "version": fingerprint.get("version"),
                    "identity": identity,
                    "anchor_weights": fingerprint.get("anchor_weights") or {},
                    "keywords": fingerprint.get("keywords") or [],
                },
            )
        )
    return records


def collect_anchors(root: Path) -> list[SemanticIndexRecord]:
    """Collect one record per anchor definition."""
    relative_path = "tokens/anchors/definitions.json"
    data = _read_json(root, relative_path)
    anchors = data.get("anchors") if isinstance(data, dict) else None
    if not anchors:
        logger.warning("No anchor definitions found")
        return []

    records = []
    for name, anchor in anchors.items():
        resonates_with = anchor.get("resonatesWith") or []
        expressions = anchor.get("expressions") or []
        content = "\n".join(
            [
                f"{name}: {anchor.get('meaning', '')}",
                f"Resonates with: {', '.join(resonates_with)}",
                f"Expressions: {', '.join(expressions)}",
                anchor.get("note") or "",
            ]
        )
        records.append(
            SemanticIndexRecord(
                category="anchor",
                source_id=name,
                source_path=relative_path,
                title=f"{name} Anchor",
                content=content.strip(),
                metadata={
                    "color_affinity": anchor.get("colorAffinity"),
                    "meaning": anchor.get("meaning"),
                    "keywords": [*resonates_with, *expressions],
                },
            )
        )
    return records


def collect_platform_identities(
    root: Path, platforms: list[str] | None = None
) -> list[SemanticIndexRecord]:
    """Collect the character description of each platform token file."""
    records = []
    for platform in platforms or Config.FINGERPRINT_PLATFORMS:
        relative_path = f"tokens/platforms/{platform}.json"
        data = _read_json(root, relative_path)
        if not isinstance(data, dict) or not data.get("character"):
            continue
        character = data["character"]
        references = (data.get("resonatesWith") or {}).get("strong") or []
        content = "\n".join(
            [
                f"{data.get('name', platform)}: {data.get('description', '')}",
                f"Character: {character.get('short', '')}",
                character.get("extended", ""),
                f"Mood: {character.get('mood', '')}",
                f"References: {', '.join(references)}",
            ]
        )
        records.append(
            SemanticIndexRecord(
                category="platform_identity",
                source_id=platform,
                source_path=relative_path,
                title=f"{data.get('name', platform)} Identity",
                content=content.strip(),
                platforms=[platform],
                metadata={"mode": data.get("mode")},
            )
        )
    return records


def collect_patterns(root: Path) -> list[SemanticIndexRecord]:
    """Collect one record per physical pattern of the translation table."""
    relative_path = "semantic/translations/translation-table.json"
    table = _read_json(root, relative_path)
    anchors = table.get("anchors") if isinstance(table, dict) else None
    if not anchors:
        logger.warning("No translation table found")
        return []

    records: dict[str, SemanticIndexRecord] = {}
    for anchor_name, anchor_data in anchors.items():
        patterns = anchor_data.get("physicalPatterns") or {}
        for pattern_name, pattern in patterns.items():
            dialects = pattern.get("dialects") or []
            content = "\n".join(
                [
                    f"{pattern_name} pattern for {anchor_name} anchor.",
                    f"Component: {pattern.get('component') or 'N/A'}",
                    f"Elements: {', '.join(pattern.get('elements') or []) or 'N/A'}",
                    f"Dialects: {', '.join(dialects) or 'shared'}",
                ]
            )
            slug = re.sub(r"\s+", "-", pattern_name.lower())
            source_id = f"{anchor_name.lower()}-{slug}"
            # Later patterns with the same slug replace earlier ones
            records[source_id] = SemanticIndexRecord(
                category="pattern",
                source_id=source_id,
                source_path=relative_path,
                title=f"{pattern_name} Pattern",
                content=content,
                platforms=dialects or ["shared"],
                metadata={
                    "anchor": anchor_name,
                    "component": pattern.get("component"),
                },
            )
    return list(records.values())


def collect_references(root: Path) -> list[SemanticIndexRecord]:
    """Collect every markdown reference entry."""
    directory = root / "references" / "entries"
    if not directory.is_dir():
        logger.warning("No references directory found")
        return []

    records = []
    for path in sorted(directory.glob("*.md")):
        relative_path = f"references/entries/{path.name}"
        text = _read_text(root, relative_path)
        if text is None:
            continue
        records.append(
            SemanticIndexRecord(
                category="reference",
                source_id=path.stem,
                source_path=relative_path,
                title=path.stem.replace("-", " "),
                content=text.strip(),
            )
        )
    return records


def component_index_records(
    components: list[ComponentRecord],
) -> list[SemanticIndexRecord]:
    """Mirror component records into the semantic index."""
    return [
        SemanticIndexRecord(
            category="component",
            source_id=component.id,
            source_path=component.path,
            title=component.name,
            content=component.embedding_text,
            embedding=component.embedding,
            platforms=[component.platform],
            metadata={
                "repo": component.repo,
                "platform": component.platform,
                "tokens": component.tokens,
                "patterns": component.patterns,
                "semantic_position": component.semantic_position.model_dump(),
            },
        )
        for component in components
    ]


def collect_corpus(root: Path) -> list[SemanticIndexRecord]:
    """Collect every brand corpus record below root.

    Args:
        root: Brand directory.

    Returns:
        Records without embeddings, grouped by category.
    """
    collectors = [
        ("philosophy", collect_philosophy),
        ("fingerprint", collect_fingerprints),
        ("anchor", collect_anchors),
        ("platform_identity", collect_platform_identities),
        ("pattern", collect_patterns),
        ("reference", collect_references),
    ]
    records = []
    for category, collector in collectors:
        collected = collector(root)
        logger.info(f"Collected {len(collected)} {category} records")
        records.extend(collected)
    return records
