"""Error types raised while generating a package"""

from pathlib import Path
from typing import NoReturn, Union


class ContractError(RuntimeError):
    """Raised when the input model breaks an invariant the loader should guarantee.

    These are programming-contract failures, not user errors, and abort the run.
    """


class EmitError(RuntimeError):
    """Raised when an output file cannot be created or written."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def fail(msg: str) -> NoReturn:
    raise ContractError(msg)


def require(cond: bool, msg: str):
    if not cond:
        fail(msg)
