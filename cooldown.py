# cooldown.py

DEFAULT_INTERVAL_MS = 1000


class CooldownTracker:
    """Per-user minimum gap between accepted messages."""

    def __init__(self, interval_ms=DEFAULT_INTERVAL_MS):
        self.interval_ms = interval_ms
        self.last_accepted = {}

    def admit(self, user_id, now):
        user_id = str(user_id)
        last = self.last_accepted.get(user_id)
        if last is not None and now - last < self.interval_ms:
            return False
        self.last_accepted[user_id] = now
        return True
