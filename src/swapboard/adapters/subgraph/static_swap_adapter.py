from typing import List, Optional, Tuple

from swapboard.core.dto import SwapRecord
from swapboard.ports.swap_source_port import SwapSourcePort


class StaticSwapAdapter(SwapSourcePort):
    def __init__(self, swaps: Optional[List[SwapRecord]] = None):
        self._swaps = sorted(swaps or [], key=lambda s: s.timestamp, reverse=True)
        self.calls: List[Tuple[str, int, int]] = []

    def fetch_swaps(self, token_address, skip, first):
        self.calls.append((token_address, skip, first))
        token = token_address.lower()
        items = [
            s for s in self._swaps
            if s.pool.token0.id.lower() == token or s.pool.token1.id.lower() == token
        ]
        return items[skip:skip + first]
