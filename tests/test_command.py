import pytest

from gfxlab.patterns.command import (
    Command,
    ComplexCommand,
    Invoker,
    Receiver,
    SimpleCommand,
    main,
)


def test_command_is_abstract():
    with pytest.raises(TypeError):
        Command()


def test_simple_command_output(capsys):
    SimpleCommand("Say Hi!").execute()
    assert capsys.readouterr().out == (
        "SimpleCommand: See, I can do simple things like printing (Say Hi!)\n"
    )


def test_complex_command_delegates(capsys):
    ComplexCommand(Receiver(), "Send email", "Save report").execute()
    assert capsys.readouterr().out.splitlines() == [
        "ComplexCommand: Complex stuff should be done by a receiver object.",
        "Receiver: Working on (Send email.)",
        "Receiver: Also working on (Save report.)",
    ]


def test_invoker_without_commands(capsys):
    Invoker().do_something_important()
    assert capsys.readouterr().out.splitlines() == [
        "Invoker: Does anybody want something done before I begin?",
        "Invoker: ...doing something really important...",
        "Invoker: Does anybody want something done after I finish?",
    ]


def test_main_output(capsys):
    assert main() == 0
    assert capsys.readouterr().out.splitlines() == [
        "Invoker: Does anybody want something done before I begin?",
        "SimpleCommand: See, I can do simple things like printing (Say Hi!)",
        "Invoker: ...doing something really important...",
        "Invoker: Does anybody want something done after I finish?",
        "ComplexCommand: Complex stuff should be done by a receiver object.",
        "Receiver: Working on (Send email.)",
        "Receiver: Also working on (Save report.)",
    ]