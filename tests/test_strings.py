import pytest

from mstackvm import printing, strings
from mstackvm.machine import Machine, TextBuffer, VMError
from mstackvm.strings import (
    Case,
    change_case,
    concat_with_space,
    format_from_stack,
    format_from_workbench,
    render_template,
    template_keys,
    to_case,
)


@pytest.fixture
def vm():
    machine = Machine()
    strings.register(machine)
    printing.register(machine)
    return machine


def test_upper_of_float(vm):
    vm.push(42.0)
    vm.call("string.upper")
    assert vm.pull() == "42.0"


def test_upper_of_string(vm):
    vm.push("Hello World!")
    vm.call("string.upper")
    assert vm.pull() == "HELLO WORLD!"


def test_change_case_direct(vm):
    vm.push("Hello World")
    change_case(vm, Case.LOWER)
    assert vm.pull() == "hello world"


@pytest.mark.parametrize(
    "text,case,expected",
    [
        ("Hello World!", Case.UPPER, "HELLO WORLD!"),
        ("Hello World", Case.LOWER, "hello world"),
        ("helloWorld", Case.SNAKE, "hello_world"),
        ("hello world", Case.CAMEL, "helloWorld"),
        ("hello_world", Case.TITLE, "Hello World"),
        ("HTTPRequest", Case.SNAKE, "http_request"),
        ("some-dashed  text", Case.SNAKE, "some_dashed_text"),
        ("", Case.CAMEL, ""),
    ],
)
def test_to_case(text, case, expected):
    assert to_case(text, case) == expected


def test_change_case_empty_stack(vm):
    with pytest.raises(VMError, match="too shallow"):
        vm.call("string.snake")


def test_concat_with_space(vm):
    vm.push(TextBuffer())
    vm.push("Hello")
    vm.call("concat_with_space")
    vm.push(3.14)
    vm.call("concat_with_space")
    assert str(vm.pull()) == "Hello 3.14"


def test_concat_with_space_then_println(vm, capsys):
    vm.push(TextBuffer())
    vm.push("Hello")
    concat_with_space(vm)
    vm.push(3.14)
    concat_with_space(vm)
    vm.call("println")
    assert capsys.readouterr().out == "Hello 3.14\n"
    assert vm.current_stack_len() == 0


def test_concat_without_buffer(vm):
    vm.push("not a buffer")
    vm.push("Hello")
    with pytest.raises(VMError, match="No textbuffer"):
        vm.call("concat_with_space")


def test_concat_too_shallow(vm):
    vm.push("Hello")
    with pytest.raises(VMError, match="too shallow"):
        vm.call("concat_with_space")


def test_format_one_key(vm):
    vm.push(42)
    vm.push("Answer is {a}")
    vm.call("format")
    assert vm.pull() == "Answer is 42"


def test_format_two_keys(vm):
    vm.push(41)
    vm.push(42)
    vm.push("Answer is {a} not {b}")
    vm.call("format")
    assert vm.pull() == "Answer is 42 not 41"


def test_format_repeated_key(vm):
    vm.push(41)
    vm.push(42)
    vm.push("Answer is {a} not {b}. It is really {a}")
    format_from_stack(vm)
    assert vm.pull() == "Answer is 42 not 41. It is really 42"


def test_format_from_workbench(vm):
    vm.push(41)
    vm.push(42)
    vm.push_to_workbench("Answer is {a} not {b}. It is really {a}")
    vm.call("format.")
    assert vm.pull() == "Answer is 42 not 41. It is really 42"
    assert vm.workbench_len() == 0


def test_format_from_empty_workbench(vm):
    vm.push(42)
    with pytest.raises(VMError, match="format."):
        format_from_workbench(vm)


def test_format_missing_values(vm):
    vm.push("{a} and {b}")
    vm.push(1)
    vm.push("{a} {b}")
    vm.pull()
    vm.pull()
    with pytest.raises(VMError, match="stack is too shallow"):
        vm.call("format")


def test_format_bad_template(vm):
    vm.push("Answer is {a")
    with pytest.raises(VMError, match="parsing template"):
        vm.call("format")


def test_template_keys():
    assert template_keys("{a} {b} {a} { c }") == ["a", "b", "c"]
    assert template_keys("no keys here") == []


def test_render_template_escapes():
    assert render_template("\\{x\\} is {x}", {"x": "1"}) == "{x} is 1"


def test_render_template_missing_key():
    with pytest.raises(VMError, match="missing value"):
        render_template("{a}", {})


@pytest.mark.parametrize("template", ["{a", "a}", "{}", "{a{b}}"])
def test_template_syntax_errors(template):
    with pytest.raises(VMError):
        template_keys(template)