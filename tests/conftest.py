"""Root test configuration: post fixtures on disk and isolated settings"""

import pytest

from mdblog.config import Settings


FEATURE_POST = """\
---
title: Feature Showcase
date: 2024-03-01
tags: [python, markdown]
summary: Every enhancement in one post.
---

# Feature Showcase

Intro paragraph with a [link](https://example.com).

## Setup

```python
def greet(name):
    return f"Hello, {name}"
```

### Install

![diagram](/images/arch.png)

## Diagrams

```mermaid
graph TD
    A --> B
```

## Setup

Watch this: [asciinema:abc123]
"""

SHORT_POST = """\
---
title: Short Note
date: 2024-01-15
tags: []
---

Just a few words.
"""


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep MDBLOG_* env vars and any config.yaml out of the tests."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDBLOG_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    root = tmp_path / "content"
    (root / "blog").mkdir(parents=True)
    (root / "til").mkdir(parents=True)
    (root / "blog" / "feature-showcase.md").write_text(FEATURE_POST, encoding="utf-8")
    (root / "blog" / "short-note.md").write_text(SHORT_POST, encoding="utf-8")
    return root


@pytest.fixture(name="settings")
def settings_fixture(content_dir):
    return Settings(content_dir=str(content_dir))
