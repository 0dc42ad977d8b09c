"""Result type for explicit error handling.

Every fallible step of the pipeline returns `Ok(value)` or `Err(error)`
instead of raising, so the orchestration reads top to bottom:

    version = extract_version(manifest)
    if isinstance(version, Err):
        return version

    match build_all(BUILD_MATRIX, ...):
        case Ok(results):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying `value`."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying `error`."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
