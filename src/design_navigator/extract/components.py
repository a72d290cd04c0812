"""Heuristic extraction of design components from source repositories.

Walks the component directories of each configured repository and turns every
recognized file into a ComponentRecord: tokens, visual patterns, imports, the
documentation header, the owning platform and a heuristic semantic position.
Extraction is regex-based over raw text; nothing is parsed syntactically.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from design_navigator.config import Config
from design_navigator.extract.signals import SignalContext, semantic_position
from design_navigator.models import ComponentRecord, SemanticPosition

logger = logging.getLogger(__name__)


SUPPORTED_FILE_TYPES = ("tsx", "html", "md", "css")
SKIPPED_DIRECTORIES = {"node_modules", ".next", "dist", ".git", "__pycache__"}
SKIPPED_FILE_NAMES = {"index.ts", "index.tsx"}

BRAND_COLORS = ("void", "dawn", "gold", "verde", "signal", "paper", "ink", "teal")

TYPOGRAPHY_TOKENS = {
    "font-mono": r"font-mono",
    "PT Mono": r"PT Mono",
    "IBM Plex": r"IBM Plex",
    "Mondwest": r"Mondwest",
    "NeueBit": r"NeueBit",
    "font-sans": r"font-sans",
    "font-serif": r"font-serif",
}

SPACING_TOKENS = {
    "GRID=3": r"GRID\s*=\s*3",
}

VISUAL_PATTERNS = {
    "cornerBrackets": re.compile(
        r"corner.*bracket|bracket.*corner|-top-px.*-left-px|-bottom-px.*-right-px",
        re.IGNORECASE,
    ),
    "glassmorphism": re.compile(r"backdrop-filter|blur\(|glass|frosted", re.IGNORECASE),
    "scanlines": re.compile(r"scanline|repeating-linear-gradient.*0deg", re.IGNORECASE),
    "particleSystem": re.compile(
        r"particle|canvas|animate|requestAnimationFrame", re.IGNORECASE
    ),
    "threatGradient": re.compile(
        r"threat.*level|threat.*color|benign|cautious|volatile|existential",
        re.IGNORECASE,
    ),
    "breathing": re.compile(
        r"breathing|pulse|animate.*pulse|scale\[1\.\d", re.IGNORECASE
    ),
    "gridSnapping": re.compile(
        r"GRID\s*=\s*3|Math\.floor.*/\s*3|pixel.*snap", re.IGNORECASE
    ),
}

PATTERN_DESCRIPTIONS = {
    "cornerBrackets": "corner bracket accents",
    "glassmorphism": "glassmorphism overlay",
    "scanlines": "scanline effects",
    "particleSystem": "particle animation",
    "threatGradient": "threat level gradient",
    "breathing": "breathing/pulsing animation",
    "gridSnapping": "GRID=3 pixel snapping",
}
DEFAULT_VISUAL_CHARACTERISTIC = "standard component styling"

PLATFORM_INDICATORS = {
    "atlas": re.compile(
        r"entity|denizen|specimen|bestiary|threat|creature|cosmic|alien", re.IGNORECASE
    ),
    "ledger": re.compile(
        r"terminal|invoice|stat|metric|epoch|financial|dashboard", re.IGNORECASE
    ),
    "astrolabe": re.compile(
        r"navigation|cockpit|instrument|canon|article|compass", re.IGNORECASE
    ),
    "marketing": re.compile(r"hero|feature|cta|landing|thoughtform\.co", re.IGNORECASE),
}
PATH_PLATFORMS = ("atlas", "ledger", "astrolabe")
MARKETING_PATH_MARKERS = ("thoughtform-co", "marketing")

IMPORT_PATTERN = re.compile(
    r"import\s+(?:\{[^}]+\}|\*\s+as\s+\w+|\w+)\s+from\s+['\"]([^'\"]+)['\"]"
)
HEADER_PATTERN = re.compile(r"/\*[\s\S]*?\*/")
DESCRIPTION_PATTERN = re.compile(r"\*\s*([A-Z][\w\s-]+(?:\.|$))")
ANCHORS_PATTERN = re.compile(r"SEMANTIC ANCHORS?:\s*([^\n*]+)", re.IGNORECASE)
RULES_PATTERN = re.compile(
    r"DESIGN RULES?:([\s\S]*?)(?:\*/|\n\s*\*\s*[A-Z])", re.IGNORECASE
)
RULE_LINE_PATTERN = re.compile(r"\*\s*-\s*([^\n]+)")


@dataclass
class RepositorySource:
    """A repository to extract components from."""

    name: str
    """Repository name, used as the id prefix of its components."""

    root: Path
    """Repository root directory."""

    component_dirs: list[str] = field(
        default_factory=lambda: list(Config.DEFAULT_COMPONENT_DIRECTORIES)
    )
    """Directories below root that hold components."""


@dataclass
class HeaderComment:
    """Explicit metadata from a file's leading documentation comment."""

    description: str = ""
    anchors: list[str] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)


# --- Content analysis ---


def extract_tokens(content: str) -> list[str]:
    """Return design tokens referenced in the content, in first-seen order."""
    tokens: dict[str, None] = {}
    for match in re.finditer(r"var\((--[\w-]+)\)", content):
        tokens[match.group(1)] = None
    for match in re.finditer(r"--\w[\w-]*", content):
        tokens[match.group(0)] = None
    for color in BRAND_COLORS:
        if re.search(rf"\b{color}\b", content, re.IGNORECASE):
            tokens[f"--{color}"] = None
    for token, regex in {**TYPOGRAPHY_TOKENS, **SPACING_TOKENS}.items():
        if re.search(regex, content):
            tokens[token] = None
    return list(tokens)


def extract_patterns(content: str) -> list[str]:
    """Return the visual patterns detected in the content."""
    return [name for name, regex in VISUAL_PATTERNS.items() if regex.search(content)]


def extract_imports(content: str) -> list[str]:
    """Return the module paths of ES import statements."""
    return IMPORT_PATTERN.findall(content)


def parse_header_comment(content: str) -> HeaderComment:
    """Parse the description, anchors and design rules from a leading comment."""
    header_match = HEADER_PATTERN.match(content)
    if not header_match:
        return HeaderComment()
    header = header_match.group(0)
    result = HeaderComment()

    description_match = DESCRIPTION_PATTERN.search(header)
    if description_match:
        result.description = description_match.group(1).strip()

    anchors_match = ANCHORS_PATTERN.search(header)
    if anchors_match:
        result.anchors = [
            anchor.strip()
            for anchor in re.split(r",\s*", anchors_match.group(1))
            if anchor.strip()
        ]

    rules_match = RULES_PATTERN.search(header)
    if rules_match:
        result.rules = [
            rule.strip() for rule in RULE_LINE_PATTERN.findall(rules_match.group(1))
        ]

    return result


def detect_platform(content: str, path_segments: list[str]) -> str:
    """Resolve the platform from path segments, then from keyword hits.

    Args:
        content: Raw file content.
        path_segments: Repository name followed by the file's directories.

    Returns:
        Platform id, or 'shared' when no keyword matches.
    """
    for platform in PATH_PLATFORMS:
        if platform in path_segments:
            return platform
    joined_path = "/".join(path_segments)
    if any(marker in joined_path for marker in MARKETING_PATH_MARKERS):
        return "marketing"

    scores = {
        platform: len(regex.findall(content))
        for platform, regex in PLATFORM_INDICATORS.items()
    }
    best_score = max(scores.values())
    if best_score == 0:
        return "shared"
    return next(platform for platform, score in scores.items() if score == best_score)


def describe_patterns(patterns: list[str]) -> list[str]:
    """Translate pattern ids into human-readable visual characteristics."""
    phrases = [PATTERN_DESCRIPTIONS[p] for p in PATTERN_DESCRIPTIONS if p in patterns]
    return phrases or [DEFAULT_VISUAL_CHARACTERISTIC]


def style_phrases(position: SemanticPosition) -> list[str]:
    """Phrases for the axes where a position sits beyond the neutral band."""
    phrases = []
    if position.terminal_organic < -0.3:
        phrases.append("terminal aesthetic")
    if position.terminal_organic > 0.3:
        phrases.append("organic aesthetic")
    if position.cool_warm < -0.3:
        phrases.append("cool colors")
    if position.cool_warm > 0.3:
        phrases.append("warm colors")
    if position.static_animated > 0.3:
        phrases.append("animated")
    return phrases


def build_embedding_text(record: ComponentRecord) -> str:
    """Synthesize the natural-language summary that gets embedded."""
    parts = [f"Component: {record.name}", f"Platform: {record.platform}"]
    if record.description:
        parts.append(f"Description: {record.description}")
    if record.visual_characteristics:
        parts.append(
            f"Visual characteristics: {', '.join(record.visual_characteristics)}"
        )
    if record.tokens:
        parts.append(f"Uses tokens: {', '.join(record.tokens)}")
    if record.patterns:
        parts.append(f"Implements patterns: {', '.join(record.patterns)}")
    if record.implementation:
        parts.append(f"Implementation notes: {record.implementation}")
    style = style_phrases(record.semantic_position)
    if style:
        parts.append(f"Style: {', '.join(style)}")
    return ". ".join(parts)


# --- File processing ---


def is_component_file(file_name: str) -> bool:
    """Return True if the file name is a supported, non-test component file."""
    if file_name.startswith("."):
        return False
    if ".test." in file_name or ".spec." in file_name:
        return False
    if file_name in SKIPPED_FILE_NAMES:
        return False
    return PurePosixPath(file_name).suffix.lstrip(".") in SUPPORTED_FILE_TYPES


def build_component_record(
    content: str,
    relative_path: PurePosixPath,
    repo: str,
    last_modified: str | None = None,
) -> ComponentRecord:
    """Build a ComponentRecord from raw content.

    Args:
        content: Raw file content.
        relative_path: Path of the file relative to the repository root.
        repo: Repository name.
        last_modified: ISO-8601 modification time, if known.

    Returns:
        The extracted record, without related components or embedding.
    """
    name = relative_path.stem
    file_type = relative_path.suffix.lstrip(".")
    tokens = extract_tokens(content)
    patterns = extract_patterns(content)
    platform = detect_platform(content, [repo, *relative_path.parent.parts])
    header = parse_header_comment(content)
    position = semantic_position(
        SignalContext(
            content=content, tokens=tokens, patterns=patterns, platform=platform
        )
    )

    record = ComponentRecord(
        id=f"{repo}:{name}",
        name=name,
        path=relative_path.as_posix(),
        repo=repo,
        platform=platform,
        description=header.description or f"{name} component for {platform}",
        visual_characteristics=describe_patterns(patterns),
        implementation="; ".join(header.rules),
        imports=extract_imports(content),
        tokens=tokens,
        patterns=patterns,
        anchors=header.anchors,
        semantic_position=position,
        file_type=file_type,
        line_count=len(content.split("\n")),
        last_modified=last_modified,
    )
    record.embedding_text = build_embedding_text(record)
    return record


def process_component_file(
    file_path: Path, repo: str, repo_root: Path
) -> ComponentRecord | None:
    """Extract one file, returning None if it is skipped or unreadable."""
    if not is_component_file(file_path.name):
        logger.debug(f"Skipping unsupported file {file_path}")
        return None

    try:
        content = file_path.read_text(encoding="utf-8")
        modified = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping unreadable file {file_path}: {e}")
        return None

    relative_path = PurePosixPath(file_path.relative_to(repo_root).as_posix())
    return build_component_record(
        content, relative_path, repo, last_modified=modified.isoformat()
    )


def scan_directory(
    directory: Path, repo: str, repo_root: Path
) -> list[ComponentRecord]:
    """Recursively extract every component file below a directory."""
    records = []
    for current, dir_names, file_names in os.walk(directory):
        dir_names[:] = sorted(d for d in dir_names if d not in SKIPPED_DIRECTORIES)
        for file_name in sorted(file_names):
            record = process_component_file(Path(current) / file_name, repo, repo_root)
            if record:
                records.append(record)
    return records


def extract_components(sources: list[RepositorySource]) -> list[ComponentRecord]:
    """Extract components from every configured repository.

    Missing repositories and directories are logged and skipped. When two files
    yield the same component id, the first one wins.

    Args:
        sources: Repositories to scan.

    Returns:
        Extracted records in scan order.
    """
    records: dict[str, ComponentRecord] = {}
    for source in sources:
        if not source.root.is_dir():
            logger.warning(f"Repository {source.name} not found at {source.root}")
            continue

        logger.info(f"Scanning {source.name}...")
        repo_count = 0
        for component_dir in source.component_dirs:
            directory = source.root / component_dir
            if not directory.is_dir():
                logger.debug(f"No {component_dir} directory in {source.name}")
                continue
            for record in scan_directory(directory, source.name, source.root):
                if record.id in records:
                    logger.warning(
                        f"Duplicate component id {record.id} from {record.path}, "
                        "keeping the first"
                    )
                    continue
                records[record.id] = record
                repo_count += 1
        logger.info(f"Found {repo_count} components in {source.name}")

    return list(records.values())
