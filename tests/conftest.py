from pathlib import Path

import pytest

VIEWS_POST = """---
layout: post
title: "Class based views in Django"
date: 2015-05-01 10:30:00 +0200
categories: django python
author: Jan
---
Function views are fine until they are not.

```python
from django.views.generic import ListView

class PostList(ListView):
    model = Post
```

---

That horizontal rule above is part of the body.
"""

SIGNALS_POST = """---
layout: post
title: Django signals
categories: [django]
---
Signals decouple senders from receivers.

{% highlight python %}
post_save.connect(handler, sender=Post)
{% endhighlight %}
"""

ABOUT_PAGE = """---
layout: page
title: About
permalink: /about/
---
Hi, I write about Django.
"""


def create_site(root: Path) -> Path:
    site = root / "blog"
    (site / "_posts").mkdir(parents=True)
    (site / "_drafts").mkdir()
    (site / "_layouts").mkdir()
    (site / "_layouts" / "post.html").write_text("{{ content }}", encoding="utf-8")
    (site / "_posts" / "2015-05-01-class-based-views.md").write_text(
        VIEWS_POST, encoding="utf-8"
    )
    (site / "_posts" / "2015-06-12-django-signals.markdown").write_text(
        SIGNALS_POST, encoding="utf-8"
    )
    (site / "_drafts" / "orm-tricks.md").write_text(
        "---\ntitle: ORM tricks\n---\nWork in progress.\n", encoding="utf-8"
    )
    (site / "about.md").write_text(ABOUT_PAGE, encoding="utf-8")
    (site / "README.md").write_text("# My blog\n", encoding="utf-8")
    (site / "style.css").write_text("body {}", encoding="utf-8")
    return site


@pytest.fixture
def site(tmp_path) -> Path:
    return create_site(tmp_path)


@pytest.fixture
def write(tmp_path):
    """Write a source file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
