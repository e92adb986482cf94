"""The command pattern: an invoker running commands before and after its work."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


class Command(ABC):
    """Something that can be executed."""

    @abstractmethod
    def execute(self) -> None:
        """Carry out the command."""


@dataclass
class SimpleCommand(Command):
    """A command that does its simple job on its own."""

    pay_load: str

    def execute(self) -> None:
        print(f"SimpleCommand: See, I can do simple things like printing ({self.pay_load})")


class Receiver:
    """Holds the business logic that complex commands delegate to."""

    def do_something(self, a: str) -> None:
        print(f"Receiver: Working on ({a}.)")

    def do_something_else(self, b: str) -> None:
        print(f"Receiver: Also working on ({b}.)")


@dataclass
class ComplexCommand(Command):
    """A command that delegates its work to a receiver."""

    receiver: Receiver
    a: str
    b: str

    def execute(self) -> None:
        print("ComplexCommand: Complex stuff should be done by a receiver object.")
        self.receiver.do_something(self.a)
        self.receiver.do_something_else(self.b)


@dataclass
class Invoker:
    """Runs optional commands around its own important work."""

    on_start: Optional[Command] = None
    on_finish: Optional[Command] = None

    def do_something_important(self) -> None:
        print("Invoker: Does anybody want something done before I begin?")
        if self.on_start is not None:
            self.on_start.execute()
        print("Invoker: ...doing something really important...")
        print("Invoker: Does anybody want something done after I finish?")
        if self.on_finish is not None:
            self.on_finish.execute()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration."""
    invoker = Invoker()
    invoker.on_start = SimpleCommand("Say Hi!")
    receiver = Receiver()
    invoker.on_finish = ComplexCommand(receiver, "Send email", "Save report")
    invoker.do_something_important()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())