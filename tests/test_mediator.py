import io

import pytest

from gfxlab.patterns.mediator import (
    Component1,
    Component2,
    ConcreteMediator,
    Mediator,
    client_code,
    main,
)

EXPECTED = [
    "Client triggers operation A.",
    "Component 1 does A.",
    "Mediator reacts on A and triggers following operations:",
    "Component 2 does C.",
    "",
    "Client triggers operation D.",
    "Component 2 does D.",
    "Mediator reacts on D and triggers following operations:",
    "Component 1 does B.",
    "Component 2 does C.",
]


def test_client_code_output():
    out = io.StringIO()
    client_code(out)
    assert out.getvalue().splitlines() == EXPECTED


def test_main_prints_to_stdout(capsys):
    assert main() == 0
    assert capsys.readouterr().out.splitlines() == EXPECTED


def test_mediator_is_abstract():
    with pytest.raises(TypeError):
        Mediator()


def test_mediator_attaches_itself():
    c1, c2 = Component1(), Component2()
    mediator = ConcreteMediator(c1, c2)
    assert c1.mediator is mediator
    assert c2.mediator is mediator


def test_unhandled_event_only_reports_itself():
    out = io.StringIO()
    c1, c2 = Component1(out=out), Component2(out=out)
    ConcreteMediator(c1, c2, out=out)
    c1.do_b()
    assert out.getvalue().splitlines() == ["Component 1 does B."]


def test_component_without_mediator_raises():
    with pytest.raises(RuntimeError):
        Component1(out=io.StringIO()).do_a()