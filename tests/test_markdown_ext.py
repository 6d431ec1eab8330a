from markdown import markdown

from lanwen_blog.markdown_ext import CodeTitleExtension


def render(text, **config):
    return markdown(text, extensions=[CodeTitleExtension(**config), "fenced_code"])


def test_title_rendered_before_block():
    out = render("```js:title=server.js\nlet a = 1;\n```\n")
    assert '<div class="code-title">server.js</div>' in out
    assert '<code class="language-js">' in out


def test_plain_fence_untouched():
    out = render("```js\nlet a = 1;\n```\n")
    assert "code-title" not in out


def test_title_only_inside_fence_opener():
    text = "````md\n```js:title=inner.js\n```\n````\n"
    out = render(text)
    assert "code-title" not in out
    assert "inner.js" in out


def test_title_is_escaped_and_class_configurable():
    out = render("~~~sh:title=<run>.sh\necho\n~~~\n", class_name="file")
    assert '<div class="file">&lt;run&gt;.sh</div>' in out
