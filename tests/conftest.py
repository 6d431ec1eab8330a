import textwrap

import pytest


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    """A small blog: two flat posts, one bundle post with an image, one draft."""
    write(tmp_path / "config.yaml", """
        site:
          title: Test Blog
          description: Notes for testing
          author: tester
          site_url: https://blog.example.com/
        cname: blog.example.com
    """)
    write(tmp_path / "content/posts/2019-01-05_first-post.md", """
        ---
        title: First post
        tags: [java, ci]
        ---

        Hello from the first post.
    """)
    write(tmp_path / "content/posts/2019-03-10_second-post.md", """
        ---
        title: Second post
        tags: java
        ---

        ## Setup

        Some text.
    """)
    bundle = tmp_path / "content/posts/2020-07-01_bundled"
    write(bundle / "index.md", """
        ---
        title: Bundled <post>
        tags: [Go Lang]
        ---

        ![diagram](diagram.png)

        ```python:title=app.py
        print("hi")
        ```
    """)
    (bundle / "diagram.png").write_bytes(b"\x89PNG")
    write(tmp_path / "content/posts/2021-01-01_unfinished.md", """
        ---
        title: Not ready
        draft: true
        ---

        Work in progress.
    """)
    return tmp_path
