"""Cross-process screen slot allocation backed by pid lock files.

Every alert process claims the lowest free slot so concurrent alerts stack
instead of overlapping. The lock directory is the only shared state; a slot
whose recorded owner has exited is reclaimed by the next claimant.

Free slots are published by hard-linking a fully written staging file onto
the lock path, so creation is exclusive and a lock file is never observed
half written. Two alerts reclaiming the same abandoned slot at once may
still render on top of each other.
"""

from __future__ import annotations

import logging as py_logging
import os
import time
from collections.abc import Callable, Mapping
from pathlib import Path

logger = py_logging.getLogger(__name__)

SLOT_COUNT = 20
FALLBACK_SLOT = 0
DEFAULT_SLOT_DIR = Path("~/.cache/claude-notify/slots")
SLOT_DIR_ENV = "CLAUDE_NOTIFY_SLOT_DIR"
CLAIM_GRACE_SECONDS = 2.0


def default_slot_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(SLOT_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_SLOT_DIR.expanduser()


def is_owner_alive(pid: int) -> bool:
    """Probe ``pid`` with signal 0 without affecting the process."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, but belongs to another user.
        return True
    except OSError:
        return False
    return True


def slot_offset(slot: int, panel_height: float, gap: float = 8.0) -> float:
    return max(slot, 0) * (panel_height + gap)


class SlotAllocator:
    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        size: int = SLOT_COUNT,
        is_owner_alive: Callable[[int], bool] = is_owner_alive,
        pid: int | None = None,
    ) -> None:
        if size < 1:
            raise ValueError(f"Slot pool must hold at least one slot: {size}")
        self.directory = Path(directory).expanduser() if directory is not None else default_slot_dir()
        self.size = size
        self.pid = os.getpid() if pid is None else pid
        self._is_owner_alive = is_owner_alive

    def lock_path(self, slot: int) -> Path:
        return self.directory / f"{slot}.lock"

    def read_owner(self, slot: int) -> int | None:
        """Return the pid recorded for ``slot``; ``None`` when unreadable."""
        try:
            raw = self.lock_path(slot).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        try:
            return int(raw.strip())
        except ValueError:
            return None

    def _staging_path(self) -> Path:
        return self.directory / f".claim-{self.pid}.tmp"

    def _recently_created(self, slot: int) -> bool:
        # An empty lock file belongs to a writer that has not finished yet.
        try:
            stat = self.lock_path(slot).stat()
        except OSError:
            return False
        return stat.st_size == 0 and time.time() - stat.st_mtime < CLAIM_GRACE_SECONDS

    def claim(self) -> int:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            staged = self._staging_path()
            staged.write_text(str(self.pid), encoding="utf-8")
            try:
                return self._claim_with(staged)
            finally:
                staged.unlink(missing_ok=True)
        except OSError:
            logger.warning("slot claim-failed dir=%s", self.directory, exc_info=True)
            return FALLBACK_SLOT

    def _claim_with(self, staged: Path) -> int:
        for slot in range(self.size):
            path = self.lock_path(slot)
            try:
                os.link(staged, path)
            except FileExistsError:
                pass
            else:
                logger.debug("slot claim slot=%s pid=%s reason=free", slot, self.pid)
                return slot

            owner = self.read_owner(slot)
            if owner is not None and self._is_owner_alive(owner):
                continue
            if owner is None and self._recently_created(slot):
                continue

            os.replace(staged, path)
            logger.debug(
                "slot claim slot=%s pid=%s reason=abandoned previous=%s",
                slot,
                self.pid,
                owner if owner is not None else "-",
            )
            return slot

        logger.warning("slot pool-exhausted size=%s fallback=%s", self.size, FALLBACK_SLOT)
        return FALLBACK_SLOT

    def release(self, slot: int) -> None:
        if slot < 0 or slot >= self.size:
            return
        owner = self.read_owner(slot)
        if owner is not None and owner != self.pid:
            logger.debug("slot release-skipped slot=%s owner=%s pid=%s", slot, owner, self.pid)
            return
        try:
            self.lock_path(slot).unlink()
        except FileNotFoundError:
            return
        except OSError:
            logger.debug("slot release-failed slot=%s", slot, exc_info=True)
            return
        logger.debug("slot release slot=%s pid=%s", slot, self.pid)
