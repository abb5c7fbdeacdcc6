"""
Request bodies for the endpoints that have a fixed shape.
Everything else (meetings, users) takes a caller supplied dict as the
fields vary too much to be worth a class.
"""
from dataclasses import dataclass, field
import datetime
from typing import List

from .resources import TimekitResourceBase, to_timestamp

@dataclass
class AuthRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/auth
    """
    email: str
    password: str = field(repr=False)

@dataclass
class FindtimeRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/findtime
    filters is sent as null rather than dropped when unset
    """
    emails: List[str]
    future: str = field(default="2 days")
    length: str = field(default="30 minutes")
    filters: dict|None = field(default=None)

    def fixup(self) -> None:
        self.emails = [str(e) for e in self.emails]

@dataclass
class EventRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/events-1
    start/end are in whatever Timekit-InputTimestampFormat is set to,
    date/datetime objects go out as ISO-8601.
    """
    start: str|datetime.datetime
    end: str|datetime.datetime
    what: str
    where: str
    participants: List[str] = field(default_factory=list)
    invite: bool = field(default=False)
    calendar_id: int|str|None = field(default=None)

    def fixup(self) -> None:
        self.start = to_timestamp(self.start)
        self.end = to_timestamp(self.end)

@dataclass
class MeetingAvailabilityRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/meetingsavailability
    """
    suggestion_id: int|str
    available: bool

@dataclass
class BookMeetingRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/meetingsbook
    """
    suggestion_id: int|str

@dataclass
class UserPropertyRequest(TimekitResourceBase):
    """
    http://developers.timekit.io/v2/docs/properties-1
    """
    key: str
    value: object
