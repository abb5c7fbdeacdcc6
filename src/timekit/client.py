"""
The Timekit API client.  Every endpoint method is a thin wrapper that
funnels through TimekitClient.execute(), which does the URL, header,
auth and JSON handling and turns HTTP errors into TimekitError.
"""
from dataclasses import is_dataclass, asdict
from typing import Any, Self
from urllib.parse import urlencode
import json
import logging
import os

import requests

from .access import TimekitUser
from .config import RequestConfig
from .exceptions import TimekitError
from .resources import TimekitResourceBase, to_timestamp
from .response import TimekitResponse
from .payloads import *

logger = logging.getLogger(__name__)

APP_HEADER = "Timekit-App"
DEFAULT_BASE_URL = "https://api.timekit.io/"
DEFAULT_VERSION = "v2"

def resource_path(resource: str, id: Any = None) -> str:
    """
    'resource/{id}' if there is an id, the bare 'resource' for listing.
    Only None counts as missing, an id of 0 is still an id.
    """
    return f"{resource}/{id}" if id is not None else resource

def _to_body(body: Any) -> Any:
    if isinstance(body, TimekitResourceBase):
        return body.to_base()
    if is_dataclass(body):
        return asdict(body)
    return {} if body is None else body

def _query_value(v: Any) -> Any:
    # Timekit expects 1/0 for flags, urlencode would send True/False
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, (list, tuple)):
        return [_query_value(i) for i in v]
    return to_timestamp(v)

def _query(params: dict) -> dict:
    return {k: _query_value(v) for k,v in params.items()}

class TimekitClient():
    """
    Client for https://api.timekit.io/v2/
    One client per user.  The user, the request config and the transport
    session all belong to the instance and there is no locking, so don't
    share one client across threads that switch users.

    The transport is a requests.Session, pass one in to control pooling,
    retries, timeouts, proxies, etc.  One created here is closed by close().
    """

    def __init__(self, app: str,
                 debug: bool = False,
                 base_url: str = DEFAULT_BASE_URL,
                 version: str = DEFAULT_VERSION,
                 session: requests.Session|None = None,
                 log_file: str|None = None) -> None:
        if not app:
            raise ValueError("TimekitClient requires the Timekit-App identifier")
        self._app = str(app)
        self._base_url = str(base_url).rstrip('/') + '/' + str(version).strip('/') + '/'
        self._debug = debug
        self._user: TimekitUser|None = None
        self._config = RequestConfig()
        self._owns_session = session is None
        self._session = requests.Session() if session is None else session
        self._handler: logging.Handler|None = None
        self._logger = logger
        if debug or log_file:
            # unregistered so the level and handler die with this client,
            # records still propagate to the timekit.client handlers
            self._logger = logging.Logger(f"{__name__}.{self._app}",
                                          logging.DEBUG if debug else logging.WARNING)
            self._logger.parent = logger
        if log_file:
            self._handler = logging.FileHandler(log_file)
            self._handler.setFormatter(logging.Formatter("[%(asctime)s] %(name)s.%(levelname)s: %(message)s"))
            self._logger.addHandler(self._handler)

    def __str__(self) -> str:
        return f"{self._app}@{self._base_url}:{str(self._user) if self._user else 'anonymous'}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    @property
    def debug(self) -> bool:
        return self._debug

    @classmethod
    def from_env(cls, prefix: str = "TIMEKIT_", **kwargs) -> Self:
        """
        Build a client from environment variables:
        {prefix}APP (required), {prefix}EMAIL and {prefix}TOKEN for the user,
        {prefix}TIMEZONE, {prefix}TIMESTAMP_FORMAT, {prefix}BASE_URL, {prefix}DEBUG.
        kwargs go straight to the constructor.
        """
        app = os.getenv(f"{prefix}APP", "")
        if not app:
            raise ValueError(f"{prefix}APP is not set")
        v = os.getenv(f"{prefix}BASE_URL")
        if v:
            kwargs.setdefault('base_url', v)
        v = os.getenv(f"{prefix}DEBUG", "")
        if v:
            kwargs.setdefault('debug', v.lower() in ("1", "true", "yes"))
        client = cls(app, **kwargs)
        email = os.getenv(f"{prefix}EMAIL")
        token = os.getenv(f"{prefix}TOKEN")
        if email and token:
            client.set_user(email, token)
        v = os.getenv(f"{prefix}TIMEZONE")
        if v:
            client.set_timezone(v)
        v = os.getenv(f"{prefix}TIMESTAMP_FORMAT")
        if v:
            client.set_timestamp_format(v)
        return client

    @property
    def app(self) -> str:
        return self._app

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user(self) -> TimekitUser|None:
        return self._user

    @property
    def config(self) -> RequestConfig:
        return self._config

    @property
    def output_timestamp_format(self) -> str:
        """The format timestamps in responses come back in."""
        return self._config.output_timestamp_format

    def set_user(self, email: str, token: str) -> Self:
        """
        Set the user when making authenticated requests.
        You need the email and the api token, see auth() for getting the token.
        """
        self._user = TimekitUser(email, token)
        self._logger.debug("%s", self._user)
        return self

    def auth(self, email: str, password: str) -> TimekitResponse:
        """
        Authenticate a user using email and password and make them the current user.
        The api token is in response.data['api_token'], save it and use set_user()
        next time instead.  A failed auth leaves the current user alone.
        Sent without credentials, the current user's token never goes along
        with someone else's login.
        """
        response = self.execute('post', 'auth', body=AuthRequest(email, password),
                                authenticated=False)
        data = response.data
        token = data.get('api_token', None) if isinstance(data, dict) else None
        if not token:
            self._logger.error("[%s] auth response has no api_token", response.code)
            raise TimekitError(json.dumps(response.body), response.code)
        self.set_user(email, token)
        return response

    def set_header(self, name: str, value: str) -> Self:
        self._config.set_header(name, value)
        return self

    def set_timestamp_format(self, fmt: str) -> Self:
        """
        Change both the input and output timestamp format.
        Default is 2004-02-12T15:19:21+00:00 (PHP date() format Y-m-d\\TH:i:sP)
        """
        self._config.set_timestamp_format(fmt)
        return self

    def set_timestamp_input_format(self, fmt: str) -> Self:
        self._config.set_timestamp_input_format(fmt)
        return self

    def set_timestamp_output_format(self, fmt: str) -> Self:
        self._config.set_timestamp_output_format(fmt)
        return self

    def set_timezone(self, timezone: str) -> Self:
        """If you need a response in a specific timezone set it here.  Default is UTC"""
        self._config.set_timezone(timezone)
        return self

    def execute(self, method: str, path: str,
                params: dict|None = None,
                body: Any = None,
                return_json: bool = True,
                authenticated: bool = True) -> TimekitResponse:
        """
        Make one call to Timekit.  No retries.
        params are urlencoded onto the path, body is JSON encoded and sent
        for every method, GET included, as Timekit has always been sent one.
        With authenticated=False no basic auth is sent even if a user is set.
        Raises TimekitError for 4xx/5xx responses or an unreadable JSON body.
        Connection level failures are left as the requests exception.
        A body json can't encode raises TypeError before anything is sent.
        """
        url = str(path).lstrip('/')
        if params:
            url += '?' + urlencode(_query(params), doseq=True)
        url = self._base_url + url
        verb = str(method).upper()
        payload = _to_body(body)
        shown = ({k: ('***' if k == 'password' else v) for k,v in payload.items()}
                 if isinstance(payload, dict) else payload)
        try:
            data = json.dumps(payload)
        except TypeError:
            self._logger.error("[%s] %s body can't be JSON encoded: %r", verb, url, shown)
            raise
        # snapshot so the user and headers can't change under the request
        user = self._user if authenticated else None
        headers = {'Content-Type': 'application/json'}
        headers.update(self._config.headers())
        headers[APP_HEADER] = self._app

        self._logger.debug("Calling [%s] %s with %s", verb, url, shown)

        try:
            r = self._session.request(verb, url,
                                      data=data,
                                      headers=headers,
                                      auth=user.auth if user is not None else None)
            r.raise_for_status()
        except requests.HTTPError as e:
            code = e.response.status_code if e.response is not None else 0
            message = e.response.text if e.response is not None else ""
            self._logger.error("Current user: %s", user)
            self._logger.error("[%s] %s", code, message)
            raise TimekitError(message, code) from e
        except requests.RequestException as e:
            self._logger.error("[%s] %s failed: %s", verb, url, str(e))
            raise

        code = r.status_code
        if return_json:
            try:
                result = r.json() if r.content else None
            except ValueError as e:
                self._logger.error("Current user: %s", user)
                self._logger.error("[%s] unreadable JSON: %s", code, r.text)
                raise TimekitError(r.text, code) from e
        else:
            result = r.text

        self._logger.debug("[%s] Timekit returned: %s", code, result)
        return TimekitResponse(result, code)

    def findtime(self, emails: list[str],
                 filters: dict|None = None,
                 future: str = "2 days",
                 length: str = "30 minutes") -> TimekitResponse:
        """
        Look for mutual availability for multiple users
        http://developers.timekit.io/v2/docs/findtime
        """
        body = FindtimeRequest(emails=list(emails), future=future, length=length, filters=filters)
        return self.execute('post', 'findtime', body=body)

    def accounts_google_calendars(self) -> TimekitResponse:
        """
        Calendars of the user's google account, only works for users with one.
        http://developers.timekit.io/v2/docs/accountsgooglecalendars
        """
        return self.execute('get', 'accounts/google/calendars')

    def get_accounts(self) -> TimekitResponse:
        return self.execute('get', 'accounts')

    def accounts_google_signup(self) -> TimekitResponse:
        """
        Google signup redirect.  Not JSON so the raw page is in response.body
        http://developers.timekit.io/v2/docs/accountsgooglesignup
        """
        return self.execute('get', 'accounts/google/signup', return_json=False)

    def accounts_sync(self) -> TimekitResponse:
        return self.execute('get', 'accounts/sync')

    def get_calendars(self, id: int|str|None = None, params: dict|None = None) -> TimekitResponse:
        """
        All calendars for the user, or just the one with id.
        http://developers.timekit.io/v2/docs/calendars
        """
        return self.execute('get', resource_path('calendars', id), params)

    def get_contacts(self) -> TimekitResponse:
        return self.execute('get', 'contacts')

    def get_events(self, start: Any, end: Any) -> TimekitResponse:
        """
        All events between start and end, in the current input timestamp format.
        http://developers.timekit.io/v2/docs/events
        """
        return self.execute('get', 'events', {'start': start, 'end': end})

    def events_availability(self, start: Any, end: Any, email: str) -> TimekitResponse:
        """
        Anonymized events for the user with email between start and end.
        http://developers.timekit.io/v2/docs/eventsavailability
        """
        return self.execute('get', 'events/availability', {'start': start, 'end': end, 'email': email})

    def create_event(self, start: Any, end: Any, what: str, where: str,
                     participants: list[str],
                     invite: bool = False,
                     calendar_id: int|str|None = None) -> TimekitResponse:
        body = EventRequest(start=start, end=end, what=what, where=where,
                            participants=list(participants), invite=invite,
                            calendar_id=calendar_id)
        return self.execute('post', 'events', body=body)

    def create_meeting(self, data: dict) -> TimekitResponse:
        """
        http://developers.timekit.io/v2/docs/meetings
        """
        return self.execute('post', 'meetings', body=data)

    def get_meetings(self, token: str|None = None, params: dict|None = None) -> TimekitResponse:
        """
        All meetings for the user, or just the one with token.
        http://developers.timekit.io/v2/docs/meetings-1
        http://developers.timekit.io/v2/docs/meetingstoken
        """
        return self.execute('get', resource_path('meetings', token), params)

    def set_meeting_availability(self, suggestion_id: int|str, available: bool) -> TimekitResponse:
        """
        Say whether the current user can make a meeting suggestion
        http://developers.timekit.io/v2/docs/meetingsavailability
        """
        body = MeetingAvailabilityRequest(suggestion_id, available)
        return self.execute('post', 'meetings/availability', body=body)

    def book_meeting(self, suggestion_id: int|str) -> TimekitResponse:
        """
        Book a meeting by picking one of its suggestions (a set of start & end times)
        http://developers.timekit.io/v2/docs/meetingsbook
        """
        return self.execute('post', 'meetings/book', body=BookMeetingRequest(suggestion_id))

    def edit_meeting(self, token: str, body: dict) -> TimekitResponse:
        return self.execute('put', resource_path('meetings', token), body=body)

    def me(self, params: dict|None = None) -> TimekitResponse:
        """
        The current user, params like {'include': 'calendars'} pull in relations
        http://developers.timekit.io/v2/docs/usersme
        """
        return self.execute('get', 'users/me', params)

    def create_user(self, body: dict) -> TimekitResponse:
        return self.execute('post', 'users', body=body)

    def update_user(self, body: dict) -> TimekitResponse:
        return self.execute('put', 'users/me', body=body)

    def get_user_properties(self, key: str|None = None) -> TimekitResponse:
        """
        All properties of the current user or just the one with key
        http://developers.timekit.io/v2/docs/properties
        """
        return self.execute('get', resource_path('properties', key))

    def set_user_property(self, key: str, value: Any) -> TimekitResponse:
        return self.execute('put', 'properties', body=UserPropertyRequest(key, value))
