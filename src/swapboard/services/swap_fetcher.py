from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional

import structlog

from swapboard.core.dto import SwapRecord
from swapboard.core.errors import InvalidTokenAddress
from swapboard.ports.swap_source_port import SwapSourcePort


log = structlog.get_logger(__name__)

_TOKEN_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")

DEFAULT_PAGE_SIZE = 1000
DEFAULT_TARGET_SWAPS = 2000

ProgressFn = Callable[[str, dict], None]


def validate_token_address(token_address: str) -> str:
    """
    Return the lowercase form of a 0x-prefixed, 40-hex-digit address.
    """
    if not isinstance(token_address, str) or len(token_address) != 42:
        raise InvalidTokenAddress(str(token_address))
    if not _TOKEN_ADDRESS.match(token_address):
        raise InvalidTokenAddress(token_address)
    return token_address.lower()


class SwapFetcher:
    """
    Pulls the most recent swaps for a token page by page.

    - Paging: newest first, `skip` advances by `page_size`, one page at a time
    - Stops on: empty page, `target_swaps` reached, or a short page
    - All or nothing: any page failure propagates and nothing is returned
    """

    def __init__(
        self,
        source: SwapSourcePort,
        page_size: int = DEFAULT_PAGE_SIZE,
        target_swaps: int = DEFAULT_TARGET_SWAPS,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be > 0")
        if target_swaps <= 0:
            raise ValueError("target_swaps must be > 0")
        self.source = source
        self.page_size = page_size
        self.target_swaps = target_swaps

    def fetch_page(self, token_address: str, skip: int, first: int) -> List[SwapRecord]:
        token = validate_token_address(token_address)
        return list(self.source.fetch_swaps(token, skip, first))

    def fetch_all(self, token_address: str, on_progress: Optional[ProgressFn] = None) -> List[SwapRecord]:
        token = validate_token_address(token_address)
        notify = on_progress or (lambda event, data: None)

        all_swaps: List[SwapRecord] = []
        skip = 0

        log.info("fetch_started", token=token, target=self.target_swaps, page_size=self.page_size)

        while True:
            notify("fetch", {"skip": skip, "first": self.page_size})
            page = list(self.source.fetch_swaps(token, skip, self.page_size))

            if not page:
                if not all_swaps:
                    log.warning("no_swaps_found", token=token)
                break

            all_swaps.extend(page)
            log.debug("page_fetched", skip=skip, count=len(page), total=len(all_swaps))
            notify("fetch_done", {"count": len(page), "total": len(all_swaps)})

            # target reached, or a short page means the source ran dry
            if len(all_swaps) >= self.target_swaps or len(page) < self.page_size:
                break

            skip += self.page_size

        log.info("fetch_finished", token=token, total=len(all_swaps))
        return all_swaps


def filter_by_block_range(
    swaps: Iterable[SwapRecord],
    start_block: Optional[int] = None,
    end_block: Optional[int] = None,
) -> List[SwapRecord]:
    """
    Keep swaps inside [start_block, end_block]. Swaps without a block number
    are kept.
    """
    kept: List[SwapRecord] = []
    for s in swaps:
        if s.block_number is None:
            kept.append(s)
            continue
        if start_block is not None and s.block_number < start_block:
            continue
        if end_block is not None and s.block_number > end_block:
            continue
        kept.append(s)
    return kept
