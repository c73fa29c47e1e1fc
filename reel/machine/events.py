"""Events accepted by the reducer; the only mutation entry points."""
from __future__ import annotations

from dataclasses import dataclass

from reel.core.enums import InputField


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class OpenSettings:
    pass


@dataclass(frozen=True)
class CloseSettings:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class RunFinished:
    pass


@dataclass(frozen=True)
class ChangeInput:
    field: InputField
    value: str


@dataclass(frozen=True)
class CommitInput:
    field: InputField


Event = Start | Stop | OpenSettings | CloseSettings | Reset | RunFinished | ChangeInput | CommitInput