from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from desktop_bootstrap.pipeline import Step


class FakeMachine:
    """Records calls and tracks which goals are satisfied, like a real host would."""

    def __init__(self) -> None:
        self.installed: set[str] = set()
        self.calls: List[str] = []

    def step(
        self,
        name: str,
        *,
        present: Optional[bool] = None,
        fails: bool = False,
        critical: bool = False,
    ) -> Step:
        if present:
            self.installed.add(name)

        def check() -> bool:
            self.calls.append(f"check:{name}")
            return name in self.installed

        def action() -> None:
            self.calls.append(f"action:{name}")
            if fails:
                raise RuntimeError(f"{name} installer failed")
            self.installed.add(name)

        return Step(name=name, presence_check=check, action=action, critical=critical)


class FakeClock:
    def __init__(self, tick: float = 1.5) -> None:
        self.now = 100.0
        self.tick = tick

    def __call__(self) -> float:
        value = self.now
        self.now += self.tick
        return value


@pytest.fixture
def machine() -> FakeMachine:
    return FakeMachine()


@pytest.fixture
def clock() -> Callable[[], float]:
    return FakeClock()
