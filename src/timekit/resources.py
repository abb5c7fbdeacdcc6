from dataclasses import asdict
import datetime
from typing import Any

def to_timestamp(value: Any) -> Any:
    """
    date/datetime to the ISO-8601 string Timekit reads by default,
    e.g. 2004-02-12T15:19:21+00:00.  Anything else is passed through, it's
    up to the caller to match a custom Timekit-InputTimestampFormat.
    """
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value

class TimekitResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Timekit wants plain JSON dicts so most of the work is getting the
    dataclass fields into that shape.  Subclasses override fixup() to
    coerce fields and to_base() when asdict() isn't enough.
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed
        for the JSON request body.  Something more complicated can override.
        Also with a common base makes it easy to filter with isinstance.
        Call fixup() first to ensure all fields are in correct format.
        Fields set to None are kept, Timekit reads a null differently to a
        missing key on some endpoints.
        """
        self.fixup()
        return asdict(self)

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
