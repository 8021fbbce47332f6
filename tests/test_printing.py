import pytest

from mstackvm.machine import Machine, VMError
from mstackvm.printing import (
    newline,
    print_value,
    print_workbench,
    println_value,
    println_workbench,
    register,
    space,
)


def test_print_consumes_value(capsys):
    vm = Machine()
    vm.push("Hello")
    print_value(vm)
    assert capsys.readouterr().out == "Hello"
    assert vm.current_stack_len() == 0


def test_println_adds_newline(capsys):
    vm = Machine()
    vm.push("Hello world!")
    println_value(vm)
    assert capsys.readouterr().out == "Hello world!\n"


def test_print_float_text(capsys):
    vm = Machine()
    vm.push(42.0)
    print_value(vm)
    assert capsys.readouterr().out == "42.0"


def test_print_workbench(capsys):
    vm = Machine()
    vm.push("stay")
    vm.push_to_workbench("Hello")
    print_workbench(vm)
    assert capsys.readouterr().out == "Hello"
    assert vm.workbench_len() == 0
    assert vm.pull() == "stay"


def test_println_workbench(capsys):
    vm = Machine()
    vm.push("stay")
    vm.push_to_workbench("Hello")
    println_workbench(vm)
    assert capsys.readouterr().out == "Hello\n"


def test_space_and_newline(capsys):
    vm = Machine()
    space(vm)
    newline(vm)
    assert capsys.readouterr().out == " \n"


def test_print_empty_stack_raises():
    with pytest.raises(VMError):
        print_value(Machine())


def test_print_workbench_empty_raises():
    vm = Machine()
    vm.push("x")
    with pytest.raises(VMError):
        print_workbench(vm)


def test_registered_words(capsys):
    vm = Machine()
    register(vm)
    vm.push("Hello")
    vm.call("println")
    assert capsys.readouterr().out == "Hello\n"
    assert all(vm.is_inline(n) for n in ("print", "print.", "println.", "space", "nl"))