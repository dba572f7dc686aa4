"""Unit tests for the blog body renderer"""

from storefront.services.content import BlockType, parse_content


def types(blocks):
    return [block.type for block in blocks]


class TestParseContent:

    def test_empty_content(self):
        assert parse_content("") == []
        assert parse_content(None) == []

    def test_headings(self):
        blocks = parse_content("## Why bitumen\n### Grades")

        assert types(blocks) == [BlockType.HEADING_2, BlockType.HEADING_3]
        assert blocks[0].text == "Why bitumen"
        assert blocks[1].text == "Grades"

    def test_paragraph_lines_are_joined(self):
        blocks = parse_content("First line\nsecond line\n\nNext paragraph")

        assert types(blocks) == [BlockType.PARAGRAPH, BlockType.PARAGRAPH]
        assert blocks[0].text == "First line second line"
        assert blocks[1].text == "Next paragraph"

    def test_bullet_list(self):
        blocks = parse_content("- CRMB\n* PMB\n- VG")

        assert types(blocks) == [BlockType.BULLET_LIST]
        assert blocks[0].items == ["CRMB", "PMB", "VG"]

    def test_ordered_list(self):
        blocks = parse_content("1. Clean the surface\n2. Apply primer\n10. Cure")

        assert types(blocks) == [BlockType.ORDERED_LIST]
        assert blocks[0].items == ["Clean the surface", "Apply primer", "Cure"]

    def test_switching_list_type_starts_new_list(self):
        blocks = parse_content("- one\n1. first")

        assert types(blocks) == [BlockType.BULLET_LIST, BlockType.ORDERED_LIST]

    def test_bold_line(self):
        blocks = parse_content("**Key takeaway:** use PMB")

        assert types(blocks) == [BlockType.BOLD]
        assert blocks[0].text == "Key takeaway: use PMB"

    def test_separator(self):
        blocks = parse_content("Intro\n---\nOutro")

        assert types(blocks) == [BlockType.PARAGRAPH, BlockType.SEPARATOR, BlockType.PARAGRAPH]

    def test_blocks_stay_in_source_order(self):
        content = "Opening text\n## Heading\n- item\nClosing text"

        blocks = parse_content(content)

        assert types(blocks) == [
            BlockType.PARAGRAPH,
            BlockType.HEADING_2,
            BlockType.BULLET_LIST,
            BlockType.PARAGRAPH,
        ]
        assert blocks[0].text == "Opening text"
        assert blocks[3].text == "Closing text"

    def test_surrounding_whitespace_is_ignored(self):
        blocks = parse_content("   ## Spaced   \n\n\n   body   ")

        assert blocks[0].text == "Spaced"
        assert blocks[1].text == "body"
