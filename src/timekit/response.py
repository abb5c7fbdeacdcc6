from typing import Any

class TimekitResponse():
    """
    Result of a successful call.  Timekit wraps every JSON payload in
    {"data": ...} so data hands back what's inside and body keeps the
    whole thing.  The status code is passed through untouched.
    For raw (non JSON) calls body is the response text and data is None.
    """
    def __init__(self, body: Any, code: int) -> None:
        self._body = body
        self._code = code

    def __bool__(self) -> bool:
        return 200 <= self._code < 300

    def __str__(self) -> str:
        return f"[{self._code}] {self._body!s:.200}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def code(self) -> int:
        return self._code

    @property
    def body(self) -> Any:
        return self._body

    @property
    def data(self) -> Any:
        if isinstance(self._body, dict):
            return self._body.get('data', None)
        return None
