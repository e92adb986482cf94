"""The strategy pattern: a context delegating to an interchangeable algorithm."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import IO, List, Optional, Sequence


class Strategy(ABC):
    """An algorithm over a list of strings."""

    @abstractmethod
    def do_algorithm(self, data: Sequence[str]) -> str:
        """Run the algorithm on ``data``."""


class ConcreteStrategyA(Strategy):
    """Concatenate and sort the characters ascending."""

    def do_algorithm(self, data: Sequence[str]) -> str:
        return "".join(sorted("".join(data)))


class ConcreteStrategyB(Strategy):
    """Concatenate and sort the characters descending."""

    def do_algorithm(self, data: Sequence[str]) -> str:
        return "".join(sorted("".join(data)))[::-1]


class Context:
    """Runs its business logic through the current strategy."""

    DATA: List[str] = ["a", "e", "c", "b", "d"]

    def __init__(self, strategy: Optional[Strategy] = None, out: Optional[IO[str]] = None):
        self.strategy = strategy
        self.out = out

    def do_some_business_logic(self) -> str:
        """Apply the strategy to the sample data, print and return the result."""
        if self.strategy is None:
            raise RuntimeError("no strategy set")
        stream = self.out if self.out is not None else sys.stdout
        print("Context: Sorting data using the strategy (not sure how it'll do it)",
              file=stream)
        result = self.strategy.do_algorithm(list(self.DATA))
        print(result, file=stream)
        return result


def client_code(out: Optional[IO[str]] = None) -> None:
    """Run the context with a normal and then a reverse sorting strategy."""
    stream = out if out is not None else sys.stdout
    context = Context(ConcreteStrategyA(), out=stream)
    print("Client: Strategy is set to normal sorting.", file=stream)
    context.do_some_business_logic()
    print("", file=stream)
    print("Client: Strategy is set to reverse sorting.", file=stream)
    context.strategy = ConcreteStrategyB()
    context.do_some_business_logic()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration."""
    client_code()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())