"""Per-resource fetch state as a tagged union.

Idle --fetch--> Loading --success--> Loaded
                Loading --failure--> Failed
Loaded | Failed --fetch--> Loading

Overlapping fetches are not guarded: each fetch re-enters Loading and the
last completion to arrive overwrites the state, whatever the issue order.
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    label: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Loading:
    label: ClassVar[str] = "loading"


@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T
    label: ClassVar[str] = "loaded"


@dataclass(frozen=True)
class Failed:
    error: Exception
    label: ClassVar[str] = "error"


FetchState = Union[Idle, Loading, Loaded[T], Failed]

IDLE = Idle()
LOADING = Loading()
