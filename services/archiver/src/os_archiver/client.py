"""OpenSearch client construction."""

from __future__ import annotations

import logging

from opensearchpy import OpenSearch

logger = logging.getLogger(__name__)


def connect_opensearch(url: str) -> OpenSearch:
    """Return an OpenSearch client for ``url``.

    No request is sent here; connectivity problems surface on first use.
    """
    logger.debug("Connecting to OpenSearch at %s", url, extra={"url": url})
    return OpenSearch(hosts=[url])
