"""
Row actions: copy a value, open a hash in a block explorer.
Both return the Notice the screen should show; neither raises.
"""

from typing import Any, Optional

import structlog

from receipt_engine.facilities.base import Clipboard, LinkOpener
from receipt_engine.pipeline.formatters import resolve_explorer_url
from receipt_engine.schemas.receipt import CanonicalRow
from receipt_engine.schemas.share import Notice

logger = structlog.get_logger(__name__)


def copy_row(clipboard: Clipboard, row: CanonicalRow) -> Optional[Notice]:
    """Put the row's full value on the clipboard. None for non-copyable rows."""
    if not row.copyable:
        return None
    try:
        clipboard.set_text(row.copyable)
    except Exception as e:
        logger.warning("clipboard_copy_failed", label=row.label, error=str(e))
        return Notice(title="Copy failed", message=f"Unable to copy {row.label.lower()}")
    return Notice(title="Copied!", message=f"{row.label} copied to clipboard")


async def open_explorer(opener: LinkOpener, network: Any, tx_hash: Any) -> Optional[Notice]:
    """
    Open the explorer page for a hash on a network.
    Returns None when the page opened, otherwise the notice to show.
    """
    url = resolve_explorer_url(network, tx_hash)
    if url is None:
        return Notice(
            title="No Explorer Available",
            message=f'No blockchain explorer available for network: "{network}".',
        )
    return await _open(opener, url)


async def open_row_link(opener: LinkOpener, row: CanonicalRow) -> Optional[Notice]:
    """Open a row's explorer link. Returns None when the page opened."""
    if not row.external_link:
        return Notice(
            title="No Explorer Available",
            message="No blockchain explorer available for this transaction.",
        )
    return await _open(opener, row.external_link)


async def _open(opener: LinkOpener, url: str) -> Optional[Notice]:
    try:
        if not await opener.can_open(url):
            return Notice(title="Cannot Open", message="Unable to open blockchain explorer")
        await opener.open(url)
    except Exception as e:
        logger.error("explorer_open_failed", url=url, error=str(e))
        return Notice(title="Error", message="Failed to open blockchain explorer")
    logger.info("explorer_opened", url=url)
    return None
