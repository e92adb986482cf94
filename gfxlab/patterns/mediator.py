"""The mediator pattern: components coordinated through a mediator."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import IO, Optional, Sequence


class Mediator(ABC):
    """Receives events from components and reacts to them."""

    @abstractmethod
    def notify(self, sender: "BaseComponent", event: str) -> None:
        """Handle ``event`` raised by ``sender``."""


class BaseComponent:
    """A component that reports its events to a mediator."""

    def __init__(self, mediator: Optional[Mediator] = None, out: Optional[IO[str]] = None):
        self.mediator = mediator
        self.out = out

    def _say(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def _notify(self, event: str) -> None:
        if self.mediator is None:
            raise RuntimeError("component has no mediator")
        self.mediator.notify(self, event)


class Component1(BaseComponent):
    def do_a(self) -> None:
        self._say("Component 1 does A.")
        self._notify("A")

    def do_b(self) -> None:
        self._say("Component 1 does B.")
        self._notify("B")


class Component2(BaseComponent):
    def do_c(self) -> None:
        self._say("Component 2 does C.")
        self._notify("C")

    def do_d(self) -> None:
        self._say("Component 2 does D.")
        self._notify("D")


class ConcreteMediator(Mediator):
    """Coordinates one ``Component1`` and one ``Component2``."""

    def __init__(self, component1: Component1, component2: Component2,
                 out: Optional[IO[str]] = None):
        self.component1 = component1
        self.component2 = component2
        self.out = out
        component1.mediator = self
        component2.mediator = self

    def _say(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def notify(self, sender: BaseComponent, event: str) -> None:
        if event == "A":
            self._say("Mediator reacts on A and triggers following operations:")
            self.component2.do_c()
        if event == "D":
            self._say("Mediator reacts on D and triggers following operations:")
            self.component1.do_b()
            self.component2.do_c()


def client_code(out: Optional[IO[str]] = None) -> None:
    """Trigger operations A and D and let the mediator react."""
    stream = out if out is not None else sys.stdout
    c1 = Component1(out=stream)
    c2 = Component2(out=stream)
    ConcreteMediator(c1, c2, out=stream)
    print("Client triggers operation A.", file=stream)
    c1.do_a()
    print("", file=stream)
    print("Client triggers operation D.", file=stream)
    c2.do_d()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration."""
    client_code()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())