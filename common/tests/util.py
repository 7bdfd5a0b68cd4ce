from datetime import date
from typing import NamedTuple
from typing import Optional

from dateutil.relativedelta import relativedelta

from common.util import today


class DateRange(NamedTuple):
    lower: Optional[date]
    upper: Optional[date]


class Dates:
    deltas = {
        "normal": (relativedelta(), relativedelta(months=+1)),
        "current": (relativedelta(weeks=-4), relativedelta(weeks=+4)),
        "expired": (relativedelta(months=-6), relativedelta(days=-1)),
        "future": (relativedelta(weeks=+10), relativedelta(weeks=+20)),
        "no_start": (None, relativedelta(months=+1)),
    }

    @property
    def now(self) -> date:
        return today()

    def __getattr__(self, name):
        if name in self.deltas:
            start, end = self.deltas[name]
            return DateRange(
                self.now + start if start is not None else None,
                self.now + end if end is not None else None,
            )
        raise AttributeError(name)

    def days_ago(self, days: int) -> date:
        return self.now + relativedelta(days=-days)
