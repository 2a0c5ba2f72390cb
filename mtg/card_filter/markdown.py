"""
Markdown Export - Render matched cards as Markdown notes.

Each card becomes one file with YAML frontmatter (title + tags) followed by
sections driven by SECTION_MAP. An index.md groups the cards by set and
adds collection statistics.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

import yaml

from .errors import OutputError
from .models import CardRecord
from .naming import sanitize_filename

logger = logging.getLogger(__name__)

STOP_WORDS = {"the", "a", "an", "of", "and", "or"}

COLOR_NAMES = {
    "W": "white",
    "U": "blue",
    "B": "black",
    "R": "red",
    "G": "green",
}

MANA_SYMBOLS = [
    ("{W}", "⚪"),
    ("{U}", "\U0001f535"),
    ("{B}", "⚫"),
    ("{R}", "\U0001f534"),
    ("{G}", "\U0001f7e2"),
    ("{C}", "◇"),
    ("{X}", "(X)"),
    ("{T}", "⤵️"),  # tap
    ("{Q}", "⤴️"),  # untap
]


def format_mana_symbols(mana_cost: str) -> str:
    """Replace {W}/{U}/... symbols with emoji and {N} with (N)."""
    text = re.sub(r"\{(\d+)\}", r"(\1)", mana_cost)
    for symbol, replacement in MANA_SYMBOLS:
        text = text.replace(symbol, replacement)
    return text


def format_oracle_text(text: str) -> str:
    """Double line breaks for Markdown paragraphs and render mana symbols."""
    return format_mana_symbols(text.replace("\n", "\n\n"))


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _price(key: str, template: str) -> Callable[[dict], Optional[str]]:
    def getter(card: dict) -> Optional[str]:
        value = (card.get("prices") or {}).get(key)
        return template.format(value) if value else None
    return getter


def _joined(key: str) -> Callable[[dict], Optional[str]]:
    def getter(card: dict) -> Optional[str]:
        values = card.get(key) or []
        return ", ".join(values) if values else None
    return getter


@dataclass
class MarkdownField:
    """One line in a section: a payload key or a callable on the payload."""
    label: str
    source: Union[str, Callable[[dict], Any]]
    formatter: Optional[Callable[[Any], str]] = None


@dataclass
class MarkdownSection:
    title: str
    fields: list[MarkdownField] = field(default_factory=list)


SECTION_MAP = [
    MarkdownSection("Card Details", [
        MarkdownField("Mana Cost", "mana_cost", format_mana_symbols),
        MarkdownField("Type", "type_line"),
        MarkdownField("Set", lambda c: f"{c.get('set_name', '')} ({str(c.get('set', '')).upper()})"),
        MarkdownField("Rarity", "rarity", capitalize),
        MarkdownField(
            "Power/Toughness",
            lambda c: f"{c['power']}/{c['toughness']}" if c.get("power") and c.get("toughness") else None,
        ),
        MarkdownField("Loyalty", "loyalty"),
    ]),
    MarkdownSection("Oracle Text", [
        MarkdownField("", "oracle_text", format_oracle_text),
    ]),
    MarkdownSection("Flavor Text", [
        MarkdownField("", "flavor_text", lambda text: f"*{text}*"),
    ]),
    MarkdownSection("Additional Information", [
        MarkdownField("Converted Mana Cost", "cmc"),
        MarkdownField("Colors", _joined("colors")),
        MarkdownField("Color Identity", _joined("color_identity")),
        MarkdownField("Released", "released_at"),
        MarkdownField("Artist", "artist"),
        MarkdownField("Collector Number", "collector_number"),
    ]),
    MarkdownSection("Pricing", [
        MarkdownField("USD", _price("usd", "${}")),
        MarkdownField("USD Foil", _price("usd_foil", "${}")),
        MarkdownField("EUR", _price("eur", "€{}")),
        MarkdownField("MTGO", _price("tix", "{} tix")),
    ]),
    MarkdownSection("Links", [
        MarkdownField("Scryfall", lambda c: f"[View on Scryfall]({c['scryfall_uri']})" if c.get("scryfall_uri") else None),
        MarkdownField(
            "Gatherer",
            lambda c: f"[View on Gatherer]({(c.get('related_uris') or {})['gatherer']})"
            if (c.get("related_uris") or {}).get("gatherer") else None,
        ),
    ]),
]


class MarkdownGenerator:
    """Generates Markdown text for cards and card collections."""

    def __init__(self, sections: Optional[list[MarkdownSection]] = None):
        self.sections = sections if sections is not None else SECTION_MAP

    def generate_card_markdown(self, card: CardRecord) -> str:
        """Generate the Markdown note for a single card."""
        data = card.payload
        parts = [self.generate_frontmatter(card), "", f"# {card.name}", ""]

        for section in self.sections:
            content = self._render_section(data, section)
            if content:
                parts.append(f"## {section.title}")
                parts.append("")
                parts.extend(content)
                parts.append("")

        parts.append("---")
        parts.append("")
        return "\n".join(parts)

    def _render_section(self, data: dict, section: MarkdownSection) -> list[str]:
        content = []
        for f in section.fields:
            if callable(f.source):
                value = f.source(data)
            else:
                value = data.get(f.source)

            # Missing values skip the line; a section with no lines is dropped
            if value is None or value == "":
                continue
            if f.formatter:
                value = f.formatter(value)

            content.append(f"**{f.label}:** {value}" if f.label else str(value))
        return content

    def generate_frontmatter(self, card: CardRecord) -> str:
        """YAML frontmatter with the title and sorted, unique tags."""
        data = {"title": card.name, "tags": self.extract_tags(card)}
        body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
        return f"---\n{body}---"

    def extract_tags(self, card: CardRecord) -> list[str]:
        """Tags from the type line, colors and keywords."""
        data = card.payload
        tags = set(_type_line_tags(card.type_line))
        tags.update(_color_tags(data.get("colors")))
        for keyword in data.get("keywords") or []:
            tag = re.sub(r"\s+", "-", str(keyword).strip().lower())
            if tag:
                tags.add(tag)
        return sorted(tags)

    def generate_index_markdown(self, cards: list[CardRecord]) -> str:
        """Generate the collection index with per-set listing and statistics."""
        lines = [
            "# MTG Card Collection",
            "",
            f"This collection contains {len(cards)} cards.",
            "",
            "## Cards by Set",
            "",
        ]

        by_set = group_cards_by_set(zip(cards, card_filenames(cards)))
        for set_code, entries in by_set.items():
            set_name = entries[0][0].set_name or "Unknown Set"
            lines.append(f"### {set_name} ({set_code.upper()})")
            lines.append("")
            for card, filename in entries:
                lines.append(f"- [{card.name}](./{filename}) - {card.type_line}")
            lines.append("")

        lines.append("## Collection Statistics")
        lines.append("")
        lines.append(f"**Total Sets:** {len(by_set)}")
        lines.append(f"**Total Cards:** {len(cards)}")

        lines.append("")
        lines.append("**By Rarity:**")
        for rarity, count in count_by_rarity(cards).items():
            lines.append(f"- {capitalize(rarity)}: {count}")

        lines.append("")
        lines.append("**By Color Identity:**")
        for colors, count in count_by_color_identity(cards).items():
            lines.append(f"- {colors}: {count}")

        return "\n".join(lines)


def _type_line_tags(type_line: str) -> list[str]:
    if not type_line:
        return []
    text = re.sub(r"[—–-]", " ", type_line.lower())
    text = re.sub(r"[^\w\s]", "", text)
    return [w for w in text.split() if w not in STOP_WORDS]


def _color_tags(colors: Optional[list]) -> list[str]:
    if colors is None:
        return ["undefined-color"]
    if not colors:
        return ["colorless"]
    return [COLOR_NAMES.get(c, str(c).lower()) for c in colors]


def card_filenames(cards: Iterable[CardRecord]) -> list[str]:
    """
    Assign one unique Markdown file name per card, in input order.

    The slug of the card name is used when it is free. An empty or taken
    slug gets the record identity appended, then a counter if needed.
    "index" is reserved for the collection index.
    """
    used = {"index"}
    names = []
    for card in cards:
        stem = sanitize_filename(card.name)
        if not stem or stem in used:
            stem = sanitize_filename(f"{card.name} {card.identity}") or "card"
        base, n = stem, 2
        while stem in used:
            stem = f"{base}-{n}"
            n += 1
        used.add(stem)
        names.append(f"{stem}.md")
    return names


def group_cards_by_set(
    entries: Iterable[tuple[CardRecord, str]],
) -> dict[str, list[tuple[CardRecord, str]]]:
    """Group (card, filename) pairs by set code, keeping first-seen order."""
    grouped: dict[str, list[tuple[CardRecord, str]]] = {}
    for card, filename in entries:
        grouped.setdefault(card.set_code, []).append((card, filename))
    return grouped


def count_by_rarity(cards: Iterable[CardRecord]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for card in cards:
        rarity = card.rarity or "unknown"
        counts[rarity] = counts.get(rarity, 0) + 1
    return counts


def count_by_color_identity(cards: Iterable[CardRecord]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for card in cards:
        identity = list(card.payload.get("color_identity") or [])
        key = "Colorless" if not identity else "".join(sorted(identity))
        counts[key] = counts.get(key, 0) + 1
    return counts


def write_markdown(
    cards: list[CardRecord],
    output_dir: str | Path,
    generator: Optional[MarkdownGenerator] = None,
) -> list[Path]:
    """
    Write each card to its own Markdown file plus an index.md.

    Args:
        cards: Cards to export
        output_dir: Target directory (created if missing)
        generator: Optional generator with custom sections

    Returns:
        Paths written, index.md last

    Raises:
        OutputError: If a file cannot be written
    """
    generator = generator or MarkdownGenerator()
    directory = Path(output_dir)
    written = []

    try:
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created directory: {directory}")

        for card, filename in zip(cards, card_filenames(cards)):
            path = directory / filename
            path.write_text(generator.generate_card_markdown(card), encoding="utf-8")
            written.append(path)
        logger.info(f"Wrote {len(cards)} individual card files")

        index_path = directory / "index.md"
        index_path.write_text(generator.generate_index_markdown(cards), encoding="utf-8")
        written.append(index_path)
    except OSError as e:
        raise OutputError(f"Failed to write markdown to {directory}: {e}") from e

    logger.info(f"Successfully exported {len(cards)} cards to {directory}")
    return written
