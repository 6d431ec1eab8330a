"""Python-Markdown extension adding file titles to fenced code blocks.

A fence written as ````` ```js:title=server.js ````` renders a
``<div class="code-title">server.js</div>`` right before the highlighted
block, and the fence itself continues as a plain ```` ```js ```` block.
"""
import html
import re

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})[ ]*(?P<rest>.*)$")
TITLE_RE = re.compile(r"^(?P<lang>[\w#.+-]*):title=(?P<title>\S+)\s*$")


class CodeTitlePreprocessor(Preprocessor):
    def __init__(self, md, class_name):
        super().__init__(md)
        self.class_name = class_name

    def run(self, lines):
        out = []
        open_fence = None
        for line in lines:
            m = FENCE_RE.match(line)
            if not m:
                out.append(line)
                continue

            fence = m.group("fence")
            if open_fence is not None:
                # closing fence must use the same character and be at least as long
                if fence[0] == open_fence[0] and len(fence) >= len(open_fence) and not m.group("rest").strip():
                    open_fence = None
                out.append(line)
                continue

            open_fence = fence
            t = TITLE_RE.match(m.group("rest"))
            if not t:
                out.append(line)
                continue

            title_html = f'<div class="{self.class_name}">{html.escape(t.group("title"))}</div>'
            placeholder = self.md.htmlStash.store(title_html)
            out.extend(["", placeholder, "", fence + t.group("lang")])
        return out


class CodeTitleExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            "class_name": ["code-title", "CSS class of the title element"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # ahead of fenced_code (25) so the rewritten fence is what it sees
        md.preprocessors.register(
            CodeTitlePreprocessor(md, self.getConfig("class_name")), "code_title", 28
        )


def makeExtension(**kwargs):
    return CodeTitleExtension(**kwargs)
