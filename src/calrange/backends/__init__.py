"""DataFrame export backends for calrange."""

from typing import Literal

from calrange.backends.base import Backend
from calrange.backends.pandas import PandasBackend
from calrange.backends.polars import PolarsBackend
from calrange.validation import ValidationError

BackendName = Literal["pandas", "polars"]


def get_backend(name: BackendName) -> Backend:
    """Look up a backend by name."""
    if name == "pandas":
        return PandasBackend()
    elif name == "polars":
        return PolarsBackend()
    raise ValidationError(f"Unknown backend: {name}")


__all__ = ["Backend", "BackendName", "PandasBackend", "PolarsBackend", "get_backend"]
