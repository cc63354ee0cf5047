"""Shared fixtures for core unit tests"""

import pytest

from ghostpub.core.parse import parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph."""

SAMPLE_FM_MD = """\
---
title: "Test: Doc"
slug: test-doc
tags: [a, b]
featured: false
---

# Title

Body content.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return parse_markdown(SAMPLE_MD)
