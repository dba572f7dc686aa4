"""
Blog body renderer

Turns the line-based markup used by blog posts into a flat list of
blocks for the template: `## ` and `### ` headings, `-`/`*` bullet
lists, `1.` ordered lists, `**bold**` lines, `---` separators and
paragraphs separated by blank lines.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

_ORDERED_ITEM = re.compile(r"^\d+\.\s+")
_BOLD = re.compile(r"\*\*(.*?)\*\*")


class BlockType(str, Enum):
    HEADING_2 = "h2"
    HEADING_3 = "h3"
    PARAGRAPH = "p"
    BOLD = "bold"
    BULLET_LIST = "ul"
    ORDERED_LIST = "ol"
    SEPARATOR = "hr"


@dataclass
class ContentBlock:
    type: BlockType
    text: str = ""
    items: list[str] = field(default_factory=list)


class _Builder:
    def __init__(self):
        self.blocks: list[ContentBlock] = []
        self.paragraph: list[str] = []
        self.list_items: list[str] = []
        self.list_type: Optional[BlockType] = None

    def flush_paragraph(self) -> None:
        if self.paragraph:
            self.blocks.append(ContentBlock(BlockType.PARAGRAPH, " ".join(self.paragraph)))
            self.paragraph = []

    def flush_list(self) -> None:
        if self.list_items:
            self.blocks.append(ContentBlock(self.list_type, items=self.list_items))
        self.list_items = []
        self.list_type = None

    def add_block(self, block: ContentBlock) -> None:
        self.flush_paragraph()
        self.flush_list()
        self.blocks.append(block)

    def add_item(self, list_type: BlockType, text: str) -> None:
        self.flush_paragraph()
        if self.list_type is not list_type:
            self.flush_list()
            self.list_type = list_type
        self.list_items.append(text)

    def add_line(self, text: str) -> None:
        self.flush_list()
        self.paragraph.append(text)


def parse_content(content: Optional[str]) -> list[ContentBlock]:
    """Parse a blog body into renderable blocks"""
    builder = _Builder()

    for line in (content or "").split("\n"):
        line = line.strip()

        if not line:
            builder.flush_paragraph()
            builder.flush_list()
            continue

        if line.startswith("## "):
            builder.add_block(ContentBlock(BlockType.HEADING_2, line[3:]))
        elif line.startswith("### "):
            builder.add_block(ContentBlock(BlockType.HEADING_3, line[4:]))
        elif line.startswith("- ") or line.startswith("* "):
            builder.add_item(BlockType.BULLET_LIST, line[2:])
        elif _ORDERED_ITEM.match(line):
            builder.add_item(BlockType.ORDERED_LIST, _ORDERED_ITEM.sub("", line, count=1))
        elif _BOLD.search(line):
            builder.add_block(ContentBlock(BlockType.BOLD, _BOLD.sub(r"\1", line)))
        elif line == "---":
            builder.add_block(ContentBlock(BlockType.SEPARATOR))
        else:
            builder.add_line(line)

    builder.flush_paragraph()
    builder.flush_list()
    return builder.blocks
