"""Queue of rewards owed to round winners.

The simulation only ever calls :meth:`PayoutQueue.enqueue`. Draining is done
by a separate periodic task that hands one request at a time to a
*disburser*: an async callable returning ``True`` once the reward was sent.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
import logging
import time
from typing import Awaitable, Callable, Deque, List, Optional

from . import constants, utils

logger = logging.getLogger(__name__)


@dataclass
class PayoutRequest:
    wallet: str
    amount: float
    player: str
    round: int
    timestamp: int
    retries: int = 0

    @classmethod
    def create(cls, wallet: str, amount: float, player: str, round_num: int) -> "PayoutRequest":
        return cls(
            wallet=wallet,
            amount=amount,
            player=player,
            round=round_num,
            timestamp=int(time.time() * 1000),
        )

    def to_dict(self) -> dict:
        return asdict(self)


Disburser = Callable[[PayoutRequest], Awaitable[bool]]


async def unconfigured_disburser(request: PayoutRequest) -> bool:
    """Disburser used when no payout wallet is set up; never succeeds."""

    logger.info("[PAYOUT] No payout wallet configured - skipping %s", utils.mask_wallet(request.wallet))
    return False


class PayoutQueue:
    """FIFO of pending payout requests with bounded retries."""

    def __init__(self, max_retries: int = constants.MAX_PAYOUT_RETRIES) -> None:
        self.max_retries = max_retries
        self._queue: Deque[PayoutRequest] = deque()
        self._processing = False

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def processing(self) -> bool:
        return self._processing

    def enqueue(self, request: PayoutRequest) -> None:
        self._queue.append(request)
        logger.info(
            "[PAYOUT QUEUED] %s %s to %s",
            request.amount,
            constants.PRIZE_CURRENCY,
            utils.mask_wallet(request.wallet),
        )

    def pending(self) -> List[PayoutRequest]:
        return list(self._queue)

    def total(self) -> float:
        return sum(request.amount for request in self._queue)

    def clear(self) -> int:
        cleared = len(self._queue)
        self._queue.clear()
        return cleared

    async def process_next(self, disburser: Disburser) -> Optional[bool]:
        """Attempt the oldest request.

        Returns ``None`` when there was nothing to do (queue empty or an
        attempt already in flight), otherwise whether the attempt succeeded.
        Failed requests go to the back of the queue until ``max_retries``
        attempts have failed, after which they are dropped.
        """

        if self._processing or not self._queue:
            return None
        self._processing = True
        request = self._queue.popleft()
        try:
            try:
                success = bool(await disburser(request))
            except Exception:
                logger.exception("[PAYOUT ERROR] Disbursing to %s failed", utils.mask_wallet(request.wallet))
                success = False
            if success:
                logger.info(
                    "[PAYOUT SUCCESS] %s %s to %s",
                    request.amount,
                    constants.PRIZE_CURRENCY,
                    utils.mask_wallet(request.wallet),
                )
                return True
            request.retries += 1
            if request.retries < self.max_retries:
                self._queue.append(request)
            else:
                logger.warning(
                    "[PAYOUT] Giving up on payout to %s after %d retries",
                    utils.mask_wallet(request.wallet),
                    request.retries,
                )
            return False
        finally:
            self._processing = False
