class TimekitError(RuntimeError):
    """
    Raised for any Timekit call that came back as an HTTP error, or as a
    body that couldn't be read.  The message is the raw response body (often
    Timekit's own JSON error) so it can be logged or parsed as-is.
    The underlying requests exception is chained as __cause__.
    """
    def __init__(self, message: str = "", code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
