import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueFromEnvironment:
    """A default value that can be overridden by an environment variable.

    The environment is consulted every time the value is accessed, so that
    changes made after import (in tests, or by a process manager) are
    honored. An empty variable is treated as unset.
    """

    envvar: str
    default: str

    def __str__(self):
        return self.value

    @property
    def value(self) -> str:
        return os.environ.get(self.envvar) or self.default


DEFAULT_ENCODING = ValueFromEnvironment("BODYDATA_ENCODING", "utf-8")

DEFAULT_ORIGIN = ValueFromEnvironment("BODYDATA_ORIGIN", "http://localhost")
