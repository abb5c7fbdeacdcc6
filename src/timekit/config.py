"""
Per-client request settings.  Timekit lets the caller pick the timestamp
formats it sends and receives, and the timezone responses are rendered in,
all by request header.  Setters record the value and the header together so
the two can't drift.
"""
from dataclasses import dataclass, field
from typing import Self

from .resources import TimekitResourceBase

INPUT_FORMAT_HEADER = "Timekit-InputTimestampFormat"
OUTPUT_FORMAT_HEADER = "Timekit-OutputTimestampFormat"
TIMEZONE_HEADER = "Timekit-Timezone"

# PHP date() notation, Timekit's default is 2004-02-12T15:19:21+00:00
DEFAULT_TIMESTAMP_FORMAT = "Y-m-d\\TH:i:sP"
DEFAULT_TIMEZONE = "UTC"

@dataclass
class RequestConfig(TimekitResourceBase):
    """
    Nothing is validated here, a bad format string only shows up later as
    odd timestamps coming back from Timekit.
    The defaults are what Timekit does when no header is sent so they are
    not sent until a setter is called.
    """
    input_timestamp_format: str = field(default=DEFAULT_TIMESTAMP_FORMAT)
    output_timestamp_format: str = field(default=DEFAULT_TIMESTAMP_FORMAT)
    timezone: str = field(default=DEFAULT_TIMEZONE)
    extra_headers: dict[str,str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"in:{self.input_timestamp_format} out:{self.output_timestamp_format} tz:{self.timezone}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    def fixup(self) -> None:
        self.extra_headers = {str(k): str(v) for k,v in dict(self.extra_headers).items()}

    def headers(self) -> dict[str,str]:
        """
        Snapshot of the headers to merge into a request.
        A copy so a setter called mid-request can't change what was sent.
        """
        return dict(self.extra_headers)

    def set_header(self, name: str, value: str) -> Self:
        """
        Any custom header.  The Timekit format and timezone headers go
        through their own setters so the stored values follow.
        """
        n = str(name)
        if n == TIMEZONE_HEADER:
            return self.set_timezone(value)
        if n == INPUT_FORMAT_HEADER:
            return self.set_timestamp_input_format(value)
        if n == OUTPUT_FORMAT_HEADER:
            return self.set_timestamp_output_format(value)
        return self._put_header(n, value)

    def _put_header(self, name: str, value: str) -> Self:
        self.extra_headers[str(name)] = str(value)
        return self

    def set_timezone(self, timezone: str) -> Self:
        self.timezone = str(timezone)
        return self._put_header(TIMEZONE_HEADER, self.timezone)

    def set_timestamp_input_format(self, fmt: str) -> Self:
        self.input_timestamp_format = str(fmt)
        return self._put_header(INPUT_FORMAT_HEADER, self.input_timestamp_format)

    def set_timestamp_output_format(self, fmt: str) -> Self:
        self.output_timestamp_format = str(fmt)
        return self._put_header(OUTPUT_FORMAT_HEADER, self.output_timestamp_format)

    def set_timestamp_format(self, fmt: str) -> Self:
        """Same format both directions."""
        self.set_timestamp_output_format(fmt)
        return self.set_timestamp_input_format(fmt)

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for getting it all at once for pushing into a json, toml, ini, etc, file.
        """
        return self.to_base()

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict.
        Goes through the setters so the matching headers are armed too.
        Unknown keys are ignored.
        """
        v = config.get('extra_headers', None)
        if v:
            for name, value in dict(v).items():
                self.set_header(name, value)
        # only arm a header when the value actually moves off the current one
        v = config.get('timezone', None)
        if v is not None and str(v) != self.timezone:
            self.set_timezone(v)
        v = config.get('input_timestamp_format', None)
        if v is not None and str(v) != self.input_timestamp_format:
            self.set_timestamp_input_format(v)
        v = config.get('output_timestamp_format', None)
        if v is not None and str(v) != self.output_timestamp_format:
            self.set_timestamp_output_format(v)
