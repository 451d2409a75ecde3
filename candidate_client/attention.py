"""
Attention policy for a running interview.

Keeps the page in fullscreen for the whole session and warns the candidate
about tab switches and keyboard use. Fullscreen upkeep is one state machine
fed by a short poll and by fullscreen-change events:

    FULLSCREEN -> RESTORING -> FULLSCREEN        (restored)
    FULLSCREEN -> RESTORING -> IDLE              (gave up after max attempts)
    FULLSCREEN -> EXITING -> EXITED_BY_USER      (exit affordance)

Enforcement is best-effort UI policy; the page can always be left.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TAB_SWITCH_WARNING = "Warning: Tab switching is not allowed!"
KEYBOARD_WARNING = "Warning: Keyboard usage is not allowed!"

POLL_INTERVAL_SECONDS = 0.1
MAX_RESTORE_ATTEMPTS = 5
RESTORE_BACKOFF_SECONDS = 1.0

Notifier = Callable[[str], None]


class FullscreenError(Exception):
    """Raised by a page adapter when a fullscreen transition is refused."""


class PageAdapter(ABC):
    """Browser page surface used by the policy."""

    @abstractmethod
    def is_fullscreen_supported(self) -> bool:
        """Whether the page can enter fullscreen at all."""

    @abstractmethod
    def is_fullscreen(self) -> bool:
        """Whether the page is currently fullscreen."""

    @abstractmethod
    async def request_fullscreen(self) -> None:
        """Enter fullscreen. Raises FullscreenError when refused."""

    @abstractmethod
    async def exit_fullscreen(self) -> None:
        """Leave fullscreen. Raises FullscreenError when refused."""


class FullscreenState(str, Enum):
    """Fullscreen upkeep states."""

    IDLE = "idle"
    FULLSCREEN = "fullscreen"
    RESTORING = "restoring"
    EXITING = "exiting"
    EXITED_BY_USER = "exited_by_user"


class AttentionPolicy:
    """
    Fullscreen, visibility and keyboard policy for one session.

    ``start`` must be called from a running event loop. Event callbacks
    (``on_visibility_change``, ``on_key_down``, ``on_fullscreen_change``)
    are ignored unless the policy is active.
    """

    def __init__(
        self,
        page: PageAdapter,
        notify: Notifier,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        max_attempts: int = MAX_RESTORE_ATTEMPTS,
        backoff: float = RESTORE_BACKOFF_SECONDS,
    ):
        self.page = page
        self.notify = notify
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.backoff = backoff

        self.state = FullscreenState.IDLE
        self._active = False
        self._unsupported_reported = False
        self._poll_task: Optional[asyncio.Task] = None
        self._restore_task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def restoring(self) -> bool:
        return self._restore_task is not None and not self._restore_task.done()

    def start(self) -> None:
        """Begin enforcing the policy."""
        if self._active:
            return

        self._active = True
        self.state = FullscreenState.FULLSCREEN
        self._poll_task = asyncio.get_running_loop().create_task(self._poll())
        logger.debug("Attention policy started")

    async def stop(self) -> None:
        """Stop polling, cancel any restoration and ignore further events."""
        self._active = False
        self.state = FullscreenState.IDLE

        tasks = [task for task in (self._poll_task, self._restore_task) if task is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._poll_task = None
        self._restore_task = None
        logger.debug("Attention policy stopped")

    def on_visibility_change(self, hidden: bool) -> None:
        if self._active and hidden:
            logger.info(TAB_SWITCH_WARNING)
            self.notify(TAB_SWITCH_WARNING)

    def on_key_down(self, key: Optional[str] = None) -> bool:
        """
        Handle a key press.

        Returns:
            True when the key's default action must be suppressed
        """
        if not self._active:
            return False

        logger.info(KEYBOARD_WARNING)
        self.notify(KEYBOARD_WARNING)
        return True

    def on_fullscreen_change(self, is_fullscreen: bool) -> None:
        if not self._active:
            return

        if is_fullscreen:
            if self.state == FullscreenState.IDLE:
                self.state = FullscreenState.FULLSCREEN
            return

        self._ensure_fullscreen()

    async def exit_fullscreen(self) -> None:
        """Leave fullscreen on the candidate's request; upkeep stops for good."""
        if not self._active or self.state == FullscreenState.EXITED_BY_USER:
            return

        if self._restore_task is not None:
            self._restore_task.cancel()
        self.state = FullscreenState.EXITING

        if self.page.is_fullscreen():
            try:
                await self.page.exit_fullscreen()
            except FullscreenError as e:
                logger.warning(f"Error exiting fullscreen: {e}")
                self.state = FullscreenState.FULLSCREEN
                return

        self.state = FullscreenState.EXITED_BY_USER

    def _ensure_fullscreen(self) -> None:
        if self.state != FullscreenState.FULLSCREEN or self.page.is_fullscreen():
            return

        if not self.page.is_fullscreen_supported():
            if not self._unsupported_reported:
                logger.info("Fullscreen is not supported by this page")
                self._unsupported_reported = True
            return

        self.state = FullscreenState.RESTORING
        self._restore_task = asyncio.get_running_loop().create_task(self._restore())

    async def _poll(self) -> None:
        while self._active:
            self._ensure_fullscreen()
            await asyncio.sleep(self.poll_interval)

    async def _restore(self) -> None:
        try:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    await self.page.request_fullscreen()
                except FullscreenError as e:
                    logger.warning(f"Error entering fullscreen (attempt {attempt}): {e}")
                    if attempt < self.max_attempts:
                        await asyncio.sleep(self.backoff)
                    continue

                if self.state == FullscreenState.RESTORING:
                    self.state = FullscreenState.FULLSCREEN
                return

            if self.state == FullscreenState.RESTORING:
                self.state = FullscreenState.IDLE
        finally:
            self._restore_task = None
