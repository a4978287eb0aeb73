"""Shared test helpers for Timertronics."""


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualHandle:
    def __init__(self, interval, repeating, callback):
        self.interval = interval
        self.repeating = repeating
        self.callback = callback
        self.cancelled = False
        self.elapsed = 0.0

    @property
    def active(self):
        return not self.cancelled

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when ``advance`` is called."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def schedule(self, interval, repeating, callback):
        handle = ManualHandle(interval, repeating, callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self):
        return [h for h in self.handles if h.active]

    @property
    def active_repeating(self):
        return [h for h in self.active if h.repeating]

    @property
    def active_one_shot(self):
        return [h for h in self.active if not h.repeating]

    def advance(self, seconds=1):
        """Move time forward one whole second at a time.

        Handles scheduled during a step start counting on the next one.
        """
        for _ in range(int(seconds)):
            for handle in list(self.active):
                if handle.cancelled:
                    continue
                handle.elapsed += 1
                if handle.elapsed >= handle.interval:
                    handle.elapsed = 0.0
                    if not handle.repeating:
                        handle.cancelled = True
                    handle.callback()


class FakeNotifier:
    def __init__(self):
        self.calls: list = []

    def notify(self, duration):
        self.calls.append(duration)


class BrokenNotifier:
    def __init__(self):
        self.attempts = 0

    def notify(self, duration):
        self.attempts += 1
        raise RuntimeError("notification centre unavailable")


class FakeTrayIcon:
    def __init__(self):
        self.messages: list = []

    def showMessage(self, title, body, *args):
        self.messages.append((title, body))


class FakeChime:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1
