from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import PortalError
from .log import get_logger

log = get_logger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class Loading:
    state = 'loading'


@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T
    state = 'loaded'

    @property
    def is_empty(self) -> bool:
        try:
            return len(self.value) == 0  # type: ignore[arg-type]
        except TypeError:
            return self.value is None


@dataclass(frozen=True)
class Failed:
    error: PortalError
    state = 'failed'

    @property
    def message(self) -> str:
        return self.error.message


Resource = Union[Loading, Loaded[T], Failed]


def load(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Resource:
    """Run one page read and fold the outcome into a result for the template."""
    try:
        return Loaded(fn(*args, **kwargs))
    except PortalError as e:
        log.warning('%s failed: %s', getattr(fn, '__name__', fn), e.message)
        return Failed(e)
