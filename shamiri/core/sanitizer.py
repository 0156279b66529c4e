"""
Allowlist sanitiser for assistant replies.

The model is asked to answer in a small HTML vocabulary, but its output is
untrusted and is rendered as markup by the client, so every reply goes
through here before it leaves the service.
"""

import nh3

ALLOWED_TAGS = {
    "p", "br", "em", "i", "strong", "b",
    "ol", "ul", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
}

# Dropped together with everything inside them
_CLEAN_CONTENT_TAGS = {"script", "style", "iframe", "object", "embed", "template"}


def sanitize_markup(text: str) -> str:
    """Strip every tag outside ALLOWED_TAGS and every attribute."""
    return nh3.clean(
        text,
        tags=ALLOWED_TAGS,
        clean_content_tags=_CLEAN_CONTENT_TAGS,
        attributes={},
        link_rel=None,
        strip_comments=True,
    ).strip()
