# client/hooddeals/screens/state.py

from enum import Enum
from typing import Optional

from hooddeals.core.errors import HoodDealsError


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ScreenState:
    """Idle -> Loading -> Success | Error; Error is left only by a new load."""

    def __init__(self):
        self.state = LoadState.IDLE
        self.error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.state == LoadState.LOADING

    def _begin(self):
        self.state = LoadState.LOADING
        self.error = None

    def _succeed(self):
        self.state = LoadState.SUCCESS
        self.error = None

    def _fail(self, err) -> None:
        self.state = LoadState.ERROR
        self.error = err.message if isinstance(err, HoodDealsError) else str(err)
