from pathlib import Path

import pytest

SCALA_101 = """---
layout: ../../layouts/post.astro
title: Scala 101
description: Learn the very basics of Scala 3
pubDate: 2024-02-18
imgSrc: /assets/images/articles/scala-101-1.png
imgAlt: Scala 101 cover
---

## Why Scala?

Scala blends **functional** and object-oriented programming.

```scala
@main def hello(): Unit = println("Hello")
```
"""

PYTHON_DECORATORS = """---
layout: ../../layouts/post.astro
title: Python Decorators
description: Wrap functions without touching them
pubDate: 2023-11-02
imgSrc: /assets/images/articles/decorators.png
imgAlt: Decorators cover
---

import Callout from '../../components/Callout.astro'

## The idea

A decorator takes a function and returns a function.
"""

SITE_YAML = """title: The Data Lead
description: Data engineering, functional programming and Scala
url: https://thedatalead.dev
author: Jean-Loic
logo:
  name: The Data Lead
  icon: /assets/images/avatar.png
navigation:
  github: https://github.com/thedatalead
  twitter: https://twitter.com/thedatalead
hero:
  title: Hi there, I'm <span class="intro-name">Jean-Loic</span>
  description: I share tutorials on <span class="highlight">Scala</span>.
  avatar: /assets/images/avatar.png
  avatar_alt: Avatar image
  social:
    - name: Twitter
      icon: /assets/images/twitter-icon.png
      href: https://twitter.com/thedatalead
    - name: Facebook
      icon: /assets/images/facebook-icon.png
      href: https://facebook.com/thedatalead
    - name: LinkedIn
      icon: /assets/images/linkedin-icon.png
      href: https://linkedin.com/in/thedatalead
"""

IMAGES = (
    "avatar.png",
    "twitter-icon.png",
    "facebook-icon.png",
    "linkedin-icon.png",
    "articles/scala-101-1.png",
    "articles/decorators.png",
)


def create_project(root: Path) -> Path:
    posts = root / "content" / "posts"
    posts.mkdir(parents=True)
    (root / "data").mkdir()
    images = root / "public" / "assets" / "images"
    for name in IMAGES:
        target = images / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"png")

    (root / "datalead.yaml").write_text(
        "output_dir: output\nlatest_count: 6\n", encoding="utf-8"
    )
    (root / "data" / "site.yaml").write_text(SITE_YAML, encoding="utf-8")
    (posts / "scala-101.md").write_text(SCALA_101, encoding="utf-8")
    (posts / "python-decorators.mdx").write_text(PYTHON_DECORATORS, encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path):
    return create_project(tmp_path)
