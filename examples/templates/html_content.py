"""Outline for HTML content, exposed to a template with a `when` gate."""

from prosetoc import OutlineBuilder, OutlineTag, nodes_from_html

page = {
    "content": "<h1>Heading 1</h1><p>Intro</p><h2>Heading 2</h2>",
    "show_toc": True,
}

tag = OutlineTag(OutlineBuilder())
items = tag.render(nodes_from_html(page["content"]), when=page["show_toc"])


def render(items) -> str:  # type: ignore[no-untyped-def]
    parts = ["<ol>"]
    for item in items:
        parts.append(f'<li><a href="#{item["toc_id"]}">{item["toc_title"]}</a>')
        if item["children"]:
            parts.append(render(item["children"]))
        parts.append("</li>")
    parts.append("</ol>")
    return "".join(parts)


print(render(items))
