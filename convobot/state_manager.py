#!/usr/bin/env python3
"""
User state tracking for the Convo Bot
Rate limiting, per-action cooldowns and per-command in-flight locks
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from .enums import ActionType


DEFAULT_COOLDOWNS: Dict[ActionType, float] = {
    ActionType.GENERAL: 10.0,
    ActionType.VIDEO_SEARCH: 15.0,
    ActionType.COMMANDS_LIST: 5.0,
    ActionType.SPORTS: 20.0,
}


@dataclass
class RateLimitRecord:
    """Request count inside the current window for one user"""
    count: int
    window_start: float


class UserStateManager:
    """Per-user rate limits, cooldowns and command locks.

    Owns three stores behind one mutex:

    - rate limits, keyed by user id
    - cooldowns, keyed by ``(user_id, ActionType)``
    - locks, keyed by ``(user_id, command_name)``

    Locks are compare-and-set flags, not blocking mutexes: a caller that fails
    to acquire one is expected to drop its request rather than wait.
    """

    def __init__(self, max_requests: int = 5, period_seconds: float = 60.0,
                 cooldowns: Optional[Mapping[ActionType, float]] = None,
                 logger: Optional[logging.Logger] = None):
        self.max_requests = max_requests
        self.period_seconds = period_seconds
        self.cooldowns: Dict[ActionType, float] = dict(DEFAULT_COOLDOWNS)
        if cooldowns:
            self.cooldowns.update(cooldowns)
        self.logger = logger or logging.getLogger('ConvoBot')

        self._mutex = threading.Lock()
        self._rate_limits: Dict[str, RateLimitRecord] = {}
        self._last_fired: Dict[Tuple[str, ActionType], float] = {}
        self._locks: Dict[Tuple[str, str], bool] = {}

        self._cleanup_task: Optional[asyncio.Task] = None
        self._total_checks = 0
        self._total_throttled = 0

    def is_rate_limited(self, user_id: str) -> bool:
        """Count a request against the user's window and report whether it is over the limit.

        The record is updated even when the request ends up rejected, so
        repeated attempts keep counting against the limit.
        """
        now = time.time()
        with self._mutex:
            record = self._rate_limits.get(user_id)
            if record is None or now - record.window_start > self.period_seconds:
                record = RateLimitRecord(count=1, window_start=now)
                self._rate_limits[user_id] = record
            else:
                record.count += 1

            limited = record.count > self.max_requests
            self._total_checks += 1
            if limited:
                self._total_throttled += 1
        return limited

    def get_cooldown_seconds(self, action_type: ActionType) -> float:
        return self.cooldowns.get(action_type, 0.0)

    def check_cooldown(self, user_id: str, action_type: ActionType = ActionType.GENERAL) -> bool:
        """Check whether the user is still on cooldown for an action type"""
        with self._mutex:
            last = self._last_fired.get((user_id, action_type))
        if last is None:
            return False
        return time.time() - last < self.get_cooldown_seconds(action_type)

    def time_until_next(self, user_id: str, action_type: ActionType = ActionType.GENERAL) -> float:
        """Seconds left on the user's cooldown for an action type"""
        with self._mutex:
            last = self._last_fired.get((user_id, action_type))
        if last is None:
            return 0.0
        return max(0.0, self.get_cooldown_seconds(action_type) - (time.time() - last))

    def set_cooldown(self, user_id: str, action_type: ActionType = ActionType.GENERAL) -> None:
        """Record that the user just completed an action of this type"""
        now = time.time()
        key = (user_id, action_type)
        with self._mutex:
            self._last_fired[key] = max(now, self._last_fired.get(key, now))

    def acquire_lock(self, user_id: str, command: str) -> bool:
        """Take the lock for (user, command).

        Returns:
            bool: True if the lock was free and is now held, False if it was
                already held by an in-flight invocation.
        """
        key = (user_id, command)
        with self._mutex:
            if self._locks.get(key, False):
                return False
            self._locks[key] = True
            return True

    def is_locked(self, user_id: str, command: str) -> bool:
        with self._mutex:
            return self._locks.get((user_id, command), False)

    def release_lock(self, user_id: str, command: str) -> None:
        with self._mutex:
            self._locks.pop((user_id, command), None)

    def cleanup(self) -> Tuple[int, int]:
        """Drop stale rate-limit windows and cooldowns that no longer apply.

        Returns:
            Tuple[int, int]: (rate-limit records removed, cooldown records removed)
        """
        now = time.time()
        with self._mutex:
            stale_users = [
                user_id for user_id, record in self._rate_limits.items()
                if now - record.window_start > self.period_seconds
            ]
            for user_id in stale_users:
                del self._rate_limits[user_id]

            expired_cooldowns = [
                key for key, last in self._last_fired.items()
                if now - last >= self.get_cooldown_seconds(key[1])
            ]
            for key in expired_cooldowns:
                del self._last_fired[key]

        if stale_users or expired_cooldowns:
            self.logger.debug(
                f"State cleanup removed {len(stale_users)} rate-limit and "
                f"{len(expired_cooldowns)} cooldown records"
            )
        return len(stale_users), len(expired_cooldowns)

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.period_seconds)
            try:
                self.cleanup()
            except Exception as e:
                self.logger.error(f"Error in state cleanup: {e}")

    def start_cleanup(self) -> asyncio.Task:
        """Start the periodic cleanup task on the running event loop"""
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.get_running_loop().create_task(self._cleanup_loop())
            self.logger.debug(f"State cleanup scheduled every {self.period_seconds}s")
        return self._cleanup_task

    async def stop_cleanup(self) -> None:
        """Cancel the periodic cleanup task and wait for it to finish"""
        task = self._cleanup_task
        self._cleanup_task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def get_stats(self) -> dict:
        """Get state manager statistics"""
        with self._mutex:
            tracked_users = len(self._rate_limits)
            cooldown_records = len(self._last_fired)
            held_locks = sum(1 for held in self._locks.values() if held)
        throttle_rate = self._total_throttled / max(1, self._total_checks)
        return {
            'total_checks': self._total_checks,
            'total_throttled': self._total_throttled,
            'throttle_rate': throttle_rate,
            'tracked_users': tracked_users,
            'cooldown_records': cooldown_records,
            'held_locks': held_locks,
        }
