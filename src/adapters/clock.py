from datetime import datetime


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given instant; advance() moves it forward."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, instant: datetime) -> None:
        self._instant = instant
