"""Build a table of contents from a block-editor document tree."""

from prosetoc import OutlineBuilder, OutlineConfig

tree = [
    {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Guide"}]},
    {"type": "paragraph", "content": [{"type": "text", "text": "Welcome."}]},
    {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Install"}]},
    {"type": "heading", "attrs": {"level": 3}, "content": [
        {"type": "text", "text": "From "},
        {"type": "text", "text": "PyPI", "marks": [{"type": "code"}]},
    ]},
    # Missing attrs: skipped
    {"type": "heading", "content": [{"type": "text", "text": "Broken"}]},
    {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Usage"}]},
]


def show(entries, depth=0) -> None:  # type: ignore[no-untyped-def]
    for entry in entries:
        print(f"{'  ' * depth}- {entry.title} (#{entry.id})")
        show(entry.children, depth + 1)


result = OutlineBuilder().build(tree)
print(f"{result.total_results} headings")
show(result.entries)

print()
print("Depth 2 only:")
show(OutlineBuilder(OutlineConfig(max_level=2)).build(tree).entries)
