from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from swapboard.core.dto import SwapRecord


class SwapSourcePort(ABC):
    """
    Abstract source of swap records for a token, newest first.
    """

    @abstractmethod
    def fetch_swaps(self, token_address: str, skip: int, first: int) -> List[SwapRecord]:
        """
        Return at most `first` swaps touching `token_address`, ordered by
        timestamp descending, after skipping the newest `skip`.
        """
        raise NotImplementedError
