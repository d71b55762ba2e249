from __future__ import annotations


class TermsnakeError(Exception):
    pass


class ConfigError(TermsnakeError):
    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(prefix + str(message))


class TerminalInitError(TermsnakeError):
    pass
