"""
A client for the Timekit scheduling API (https://api.timekit.io/v2/).
The goal is to hide the plumbing every call shares: basic auth with the
user's api token, the Timekit-* headers, JSON bodies and the {"data": ...}
wrapper on responses.

Python dataclasses are used for the fixed request bodies and most of the
logic is translating between those and the raw dicts.  Everything goes
through TimekitClient.execute(), failures come out as TimekitError.
"""

from .access import TimekitUser
from .config import RequestConfig
from .exceptions import TimekitError
from .response import TimekitResponse
from .client import TimekitClient, resource_path
