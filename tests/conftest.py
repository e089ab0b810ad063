"""Pytest fixtures for container tests."""

from mollys_lodge.testing.fixtures import container, default_container_reset, log_messages  # noqa: F401


class Item1:
    pass


class Item2(Item1):
    pass


class Closeable:
    """Records release calls into a shared journal."""

    def __init__(self, name: str, journal: list, fail: bool = False):
        self.name = name
        self.journal = journal
        self.fail = fail
        self.closed = 0

    def close(self):
        self.closed += 1
        self.journal.append(self.name)
        if self.fail:
            raise RuntimeError(f"{self.name} refused to close")
