import pytest

from mstackvm.machine import Machine, VMError
from mstackvm.stdlib import init_stdlib, new_vm


def test_vm_new_has_one_stack():
    vm = new_vm()
    assert len(vm) == 1


def test_vm_stdlib_has_print():
    vm = new_vm()
    assert vm.is_inline("print") is True


def test_init_stdlib_registers_words():
    vm = Machine()
    assert vm.is_inline("+") is False
    init_stdlib(vm)
    for name in ("+", "math.abs", "string.upper", "format", "len", "time.now", "clear_stacks"):
        assert vm.is_inline(name)


def test_stacks_start_on_main():
    vm = new_vm()
    assert vm.peek_stacks() == "main"


def test_to_stack_changes_current():
    vm = new_vm()
    vm.to_stack("TEST")
    assert vm.peek_stacks() == "TEST"


def test_drop_stacks_returns_to_previous():
    vm = new_vm()
    vm.to_stack("TEST")
    vm.call("drop_stacks")
    assert vm.peek_stacks() == "main"


def test_clear_stacks_returns_to_main():
    vm = new_vm()
    vm.to_stack("TEST")
    vm.to_stack("OTHER")
    vm.call("clear_stacks")
    assert vm.peek_stacks() == "main"


def test_words_work_together():
    vm = new_vm()
    vm.push([1, 2])
    vm.push([3])
    vm.call("+")
    vm.call("len")
    assert vm.pull() == 3


def test_unknown_word():
    vm = new_vm()
    with pytest.raises(VMError, match="Unknown inline word"):
        vm.call("no.such.word")