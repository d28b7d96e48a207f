"""Tests for OutlineBuilder: admission, ids, nesting and result assembly.

Malformed-input cases mirror real content authored in block editors:
headings without attrs, empty content, text runs without text, and
non-text inline children.
"""

import logging

import pytest

from prosetoc import OutlineBuilder, OutlineConfig, OutlineResult, build_outline


def heading(level, *texts):  # type: ignore[no-untyped-def]
    return {
        "type": "heading",
        "attrs": {"level": level},
        "content": [{"type": "text", "text": t} for t in texts],
    }


def levels(result: OutlineResult) -> list:
    """Render the outline shape as nested [level, [children...]] lists."""

    def shape(entry):  # type: ignore[no-untyped-def]
        return [entry.level, [shape(c) for c in entry.children]]

    return [shape(e) for e in result.entries]


class TestMalformedContent:
    """Malformed nodes are skipped without raising."""

    def test_missing_attrs(self) -> None:
        tree = [{"type": "heading", "content": [{"type": "text", "text": "Test Heading"}]}]
        result = OutlineBuilder().build(tree)
        assert result.total_results == 0
        assert result.entries == ()

    def test_missing_content(self) -> None:
        tree = [{"type": "heading", "attrs": {"level": 2}}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_empty_content(self) -> None:
        tree = [{"type": "heading", "attrs": {"level": 2}, "content": []}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_text_item_without_text(self) -> None:
        tree = [{"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text"}]}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_content_item_without_type(self) -> None:
        tree = [{"type": "heading", "attrs": {"level": 2}, "content": [{"text": "Test Heading"}]}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_non_text_content_type(self) -> None:
        tree = [
            {
                "type": "heading",
                "attrs": {"level": 2},
                "content": [{"type": "image", "text": "Test Heading"}],
            }
        ]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_attrs_without_level(self) -> None:
        tree = [{"type": "heading", "attrs": {}, "content": [{"type": "text", "text": "X"}]}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_non_integer_level(self) -> None:
        tree = [
            {"type": "heading", "attrs": {"level": "2"}, "content": [{"type": "text", "text": "X"}]},
            {"type": "heading", "attrs": {"level": 2.0}, "content": [{"type": "text", "text": "Y"}]},
            {"type": "heading", "attrs": {"level": True}, "content": [{"type": "text", "text": "Z"}]},
        ]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_attrs_not_a_mapping(self) -> None:
        tree = [{"type": "heading", "attrs": [2], "content": [{"type": "text", "text": "X"}]}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_content_is_a_string(self) -> None:
        tree = [{"type": "heading", "attrs": {"level": 1}, "content": "Heading"}]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_non_string_text(self) -> None:
        tree = [
            {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": 42}]}
        ]
        assert OutlineBuilder().build(tree).total_results == 0

    def test_empty_text_skips_heading(self) -> None:
        assert OutlineBuilder().build([heading(1, "")]).total_results == 0

    def test_mixed_valid_and_invalid(self) -> None:
        tree = [
            heading(1, "Valid Heading"),
            {"type": "heading", "content": [{"type": "text", "text": "Invalid Heading"}]},
            heading(2, "Another Valid Heading"),
        ]
        result = OutlineBuilder().build(tree)
        assert result.total_results == 2
        assert result.entries[0].title == "Valid Heading"
        assert result.entries[0].children[0].title == "Another Valid Heading"

    @pytest.mark.parametrize(
        "tree",
        [
            None,
            "",
            "<h1>Heading</h1>",
            b"heading",
            42,
            3.5,
            {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "X"}]},
            [],
            (),
            [None, 1, "x", [], {}],
            [{"type": "paragraph", "content": [{"type": "text", "text": "Body"}]}],
            iter([heading(1, "Generator")]),
        ],
    )
    def test_unusable_input_returns_empty_result(self, tree) -> None:  # type: ignore[no-untyped-def]
        """Anything that is not a sequence of heading nodes yields an empty outline."""
        result = OutlineBuilder().build(tree)
        assert result == OutlineResult(entries=(), total_results=0)


class TestTitleCollection:
    """Title is built from text runs only."""

    def test_multiple_text_runs_concatenate(self) -> None:
        result = OutlineBuilder().build([heading(1, "Hello ", "World")])
        assert result.entries[0].title == "Hello World"

    def test_invalid_children_skipped_individually(self) -> None:
        tree = [
            {
                "type": "heading",
                "attrs": {"level": 1},
                "content": [
                    {"type": "text", "text": "Getting "},
                    {"type": "image", "attrs": {"src": "x.png"}},
                    {"type": "text"},
                    "stray string",
                    None,
                    {"type": "text", "text": "Started", "marks": [{"type": "bold"}]},
                ],
            }
        ]
        result = OutlineBuilder().build(tree)
        assert result.total_results == 1
        assert result.entries[0].title == "Getting Started"

    def test_extra_fields_ignored(self) -> None:
        node = heading(3, "Extras")
        node["attrs"]["textAlign"] = "left"
        node["id"] = "ignored"
        result = OutlineBuilder().build([node])
        assert result.entries[0].level == 3

    def test_tuple_content_accepted(self) -> None:
        node = {"type": "heading", "attrs": {"level": 1}, "content": ({"type": "text", "text": "T"},)}
        assert OutlineBuilder().build((node,)).total_results == 1


class TestIds:
    """Ids are slugs of the title."""

    def test_slug_id(self) -> None:
        result = OutlineBuilder().build([heading(1, "Hello, World! (v2)")])
        assert result.entries[0].id == "hello-world-v2"

    def test_duplicates_kept_by_default(self) -> None:
        result = OutlineBuilder().build([heading(1, "Intro"), heading(1, "Intro")])
        assert [e.id for e in result.entries] == ["intro", "intro"]

    def test_unique_ids_opt_in(self) -> None:
        tree = [heading(1, "Intro"), heading(2, "Intro"), heading(1, "Intro"), heading(1, "Intro 1")]
        result = OutlineBuilder(OutlineConfig(unique_ids=True)).build(tree)
        assert [e.id for e in result.walk()] == ["intro", "intro-1", "intro-2", "intro-1-1"]

    def test_custom_slugify(self) -> None:
        config = OutlineConfig(slugify=lambda title: f"toc-{len(title)}")
        result = OutlineBuilder(config).build([heading(1, "abc")])
        assert result.entries[0].id == "toc-3"

    def test_custom_separator(self) -> None:
        result = OutlineBuilder(OutlineConfig(separator="_")).build([heading(1, "Hello World")])
        assert result.entries[0].id == "hello_world"

    def test_multi_character_separator(self) -> None:
        result = OutlineBuilder(OutlineConfig(separator="ab")).build([heading(1, "Alpha Beta")])
        assert result.entries[0].id == "alphaabbeta"

    def test_entities_in_title_are_literal(self) -> None:
        """Ids follow the stored title; entity text is not decoded first."""
        result = OutlineBuilder().build([heading(1, "A &lt;b&gt; Caf&eacute;")])
        entry = result.entries[0]
        assert entry.title == "A &lt;b&gt; Caf&eacute;"
        assert entry.id == "a-lt-b-gt-caf-eacute"

    def test_distinct_titles_keep_distinct_ids(self) -> None:
        result = OutlineBuilder().build([heading(1, "Q&amp;A"), heading(1, "Q&A")])
        assert [e.id for e in result.entries] == ["q-amp-a", "q-a"]

    def test_failing_custom_slugify_falls_back(self) -> None:
        config = OutlineConfig(slugify=lambda title: 1 / 0)  # type: ignore[arg-type, return-value]
        result = OutlineBuilder(config).build([heading(1, "Hello World")])
        assert result.total_results == 1
        assert result.entries[0].id == "hello-world"

    def test_non_string_custom_slug_falls_back(self) -> None:
        config = OutlineConfig(slugify=lambda title: None)  # type: ignore[arg-type, return-value]
        result = OutlineBuilder(config).build([heading(1, "Hello World")])
        assert result.entries[0].id == "hello-world"


class TestNesting:
    """Level-based nesting through the builder."""

    def test_sibling_then_child(self) -> None:
        result = OutlineBuilder().build([heading(1, "A"), heading(1, "B"), heading(2, "C")])
        assert levels(result) == [[1, []], [1, [[2, []]]]]
        assert result.total_results == 3

    def test_chain_then_top_level(self) -> None:
        tree = [heading(1, "A"), heading(2, "B"), heading(3, "C"), heading(1, "D")]
        result = OutlineBuilder().build(tree)
        assert levels(result) == [[1, [[2, [[3, []]]]]], [1, []]]
        assert result.total_results == 4

    def test_skipped_level_nests_under_nearest_ancestor(self) -> None:
        result = OutlineBuilder().build([heading(1, "A"), heading(3, "C"), heading(2, "B")])
        assert levels(result) == [[1, [[3, []], [2, []]]]]

    def test_out_of_range_levels_pass_through(self) -> None:
        result = OutlineBuilder().build([heading(0, "Zero"), heading(9, "Nine"), heading(-1, "Neg")])
        assert levels(result) == [[0, [[9, []]]], [-1, []]]

    def test_flat(self) -> None:
        tree = [heading(1, "A"), heading(2, "B"), heading(3, "C")]
        result = OutlineBuilder(OutlineConfig(flat=True)).build(tree)
        assert levels(result) == [[1, []], [2, []], [3, []]]
        assert result.total_results == 3


class TestLevelBounds:
    """min_level / max_level filter before nesting."""

    def test_max_level(self) -> None:
        tree = [heading(1, "A"), heading(2, "B"), heading(4, "D"), heading(3, "C")]
        result = OutlineBuilder(OutlineConfig(max_level=3)).build(tree)
        assert [e.title for e in result.walk()] == ["A", "B", "C"]
        assert result.total_results == 3

    def test_min_level(self) -> None:
        tree = [heading(1, "Title"), heading(2, "A"), heading(3, "A1"), heading(2, "B")]
        result = OutlineBuilder(OutlineConfig(min_level=2)).build(tree)
        assert levels(result) == [[2, [[3, []]]], [2, []]]

    def test_everything_filtered(self) -> None:
        result = OutlineBuilder(OutlineConfig(min_level=5)).build([heading(1, "A")])
        assert result == OutlineResult()


class TestBuildOutline:
    """Module-level build_outline helper."""

    def test_matches_builder(self) -> None:
        tree = [heading(1, "A"), heading(2, "B")]
        assert build_outline(tree) == OutlineBuilder().build(tree)

    def test_idempotent(self) -> None:
        tree = [heading(1, "A"), heading(2, "B"), {"type": "heading"}]
        snapshot = repr(tree)
        builder = OutlineBuilder()
        assert builder.build(tree) == builder.build(tree)
        assert repr(tree) == snapshot


class TestLogging:
    """Skipped headings are reported at DEBUG, never raised."""

    def test_malformed_heading_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="prosetoc"):
            OutlineBuilder().build([heading(1, "Ok"), {"type": "heading", "attrs": {"level": 2}}])
        messages = [r.getMessage() for r in caplog.records]
        assert "Skipping malformed heading node at index 1" in messages
        assert any(m.startswith("Built outline: 1 headings") for m in messages)

    def test_non_heading_nodes_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="prosetoc"):
            OutlineBuilder().build([{"type": "paragraph"}])
        assert not any("Skipping" in r.getMessage() for r in caplog.records)
