from __future__ import annotations


class BootcodeError(Exception):
    pass


class DecodeError(BootcodeError):
    def __init__(self, message: str, *, line: int | None = None, token: str | None = None) -> None:
        self.line = line
        self.token = token
        prefix = ""
        if line is not None:
            prefix = f"line {line}: "
        super().__init__(prefix + str(message))


class NoLoopFound(BootcodeError):
    pass


class NoRepairFound(BootcodeError):
    pass
