"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
title: "Launching our SaaS"
slug: "launching-our-saas"
description: "What we learned"
keywords: ["saas", "startup"]
coverImage: "https://example.com/cover.jpg"
status: "PUBLISHED"
publishedAt: "2025-01-01"
---

# Launch

Body content.
"""

LEGACY_POST = "Just plain text, no block."


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="legacy_post")
def legacy_post_fixture():
    return LEGACY_POST
