from dataclasses import dataclass, field
from typing import Tuple

@dataclass(frozen=True)
class TimekitUser():
    """
    The authenticated identity requests are made as.
    Timekit uses HTTP basic auth with the user's email as the username and
    the api token as the password.  You get the token from an auth request
    (see TimekitClient.auth()) so save it somewhere and use set_user() next time.
    Frozen as swapping the user means swapping the whole object, never one field.
    """
    email: str = field(default="")
    token: str = field(default="", repr=False)

    def __bool__(self) -> bool:
        return bool(self.email) and bool(self.token)

    def __str__(self) -> str:
        # never write a usable token into a log
        masked = f"{self.token[:4]}..." if len(self.token) > 4 else "***"
        return f"User [email: {self.email}, token: {masked}]"

    @property
    def auth(self) -> Tuple[str,str]:
        """Credentials in the (username, password) form requests expects."""
        return (self.email, self.token)
