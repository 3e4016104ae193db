"""Shared fixtures for core unit tests"""

import pytest

from semmark.core.parse import parse_content


MIXED_MARKUP = """\
Intro line.
[!thread-only]side note[!end-thread-only]
[!wiki-primary]Primary text.[!end-wiki-primary]
[!debate-active: Rollout]Should we ship?[!end-debate]
[!consensus:80%]Agreed approach.[!end-consensus]
[!synthesis from: alice, bob]Combined view.[!end-synthesis]
"""

SAMPLE_DOC = """\
---
title: Forum Doc
---

Opening remarks.

# Proposal

[!consensus:72%]Adopt the plan.[!end-consensus]

## Tangent

[!thread-only]Anyone up for lunch?[!end-thread-only]

```text
# not a heading
```
"""


@pytest.fixture(name="mixed")
def mixed_fixture():
    return parse_content(MIXED_MARKUP)


@pytest.fixture(name="mixed_text")
def mixed_text_fixture():
    return MIXED_MARKUP


@pytest.fixture(name="sample_doc_text")
def sample_doc_text_fixture():
    return SAMPLE_DOC
