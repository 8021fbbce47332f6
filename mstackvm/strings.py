"""String words: case conversion, text buffer concatenation and templates."""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Any, Iterator, Mapping

from mstackvm.machine import Machine, TextBuffer, VMError, to_text


class Case(Enum):
    UPPER = "upper"
    LOWER = "lower"
    SNAKE = "snake"
    TITLE = "title"
    CAMEL = "camel"


_DELIMITERS = frozenset("_- ")


def _is_boundary(prev: str, cur: str, nxt: str | None) -> bool:
    if prev.islower() and cur.isupper():
        return True
    if prev.isupper() and cur.isdigit():
        return True
    if prev.isdigit() and (cur.isupper() or cur.islower()):
        return True
    if prev.islower() and cur.isdigit():
        return True
    # An acronym ends before the capital that starts a lower-case word.
    return prev.isupper() and cur.isupper() and nxt is not None and nxt.islower()


def _split_chunk(chunk: str) -> Iterator[str]:
    start = 0
    for pos in range(1, len(chunk)):
        nxt = chunk[pos + 1] if pos + 1 < len(chunk) else None
        if _is_boundary(chunk[pos - 1], chunk[pos], nxt):
            yield chunk[start:pos]
            start = pos
    yield chunk[start:]


def _words(text: str) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    for char in text:
        if char in _DELIMITERS:
            chunks.append("".join(current))
            current = []
        else:
            current.append(char)
    chunks.append("".join(current))
    return [word for chunk in chunks if chunk for word in _split_chunk(chunk) if word]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_case(text: str, case: Case) -> str:
    """Split text into words and join them again in the given case."""
    words = _words(text)
    if case is Case.UPPER:
        return " ".join(word.upper() for word in words)
    if case is Case.LOWER:
        return " ".join(word.lower() for word in words)
    if case is Case.SNAKE:
        return "_".join(word.lower() for word in words)
    if case is Case.TITLE:
        return " ".join(_capitalize(word) for word in words)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def change_case(vm: Machine, case: Case) -> None:
    """Replace the top of the stack with its text in the given case."""
    prefix = f"STRING_{case.name}"
    if vm.current_stack_len() < 1:
        raise VMError(f"Stack is too shallow for inline string_{case.value}")
    value = vm.pull()
    if value is None:
        raise VMError(f"{prefix} returns: NO DATA #1")
    try:
        text = to_text(value)
    except VMError as err:
        raise VMError(f"{prefix} return error: {err}") from err
    vm.push(to_case(text, case))


def concat_with_space(vm: Machine) -> None:
    """Append the top value to the text buffer below it, space separated."""
    if vm.current_stack_len() < 2:
        raise VMError("Stack is too shallow for inline concat_with_space")
    value = vm.pull()
    if value is None:
        raise VMError("CONCAT_WITH_SPACE returns: NO DATA #1")
    try:
        text = to_text(value)
    except VMError as err:
        raise VMError(f"CONCAT_WITH_SPACE return error: {err}") from err
    buffer = vm.pull()
    if buffer is None:
        raise VMError("CONCAT_WITH_SPACE returns: NO DATA #2")
    if not isinstance(buffer, TextBuffer):
        raise VMError("No textbuffer was found on stack")
    vm.push(buffer + (text if len(buffer) == 0 else f" {text}"))


def _parse(template: str) -> list[tuple[bool, str]]:
    """Split a template into (is_key, text) parts."""
    parts: list[tuple[bool, str]] = []
    literal: list[str] = []
    chars = iter(template)
    for char in chars:
        if char == "\\":
            escaped = next(chars, None)
            if escaped is None:
                raise VMError("template ends with an unfinished escape")
            literal.append(escaped)
        elif char == "{":
            key: list[str] = []
            for inner in chars:
                if inner == "}":
                    break
                if inner == "{":
                    raise VMError("nested opening brace in template")
                key.append(inner)
            else:
                raise VMError("unclosed key in template")
            name = "".join(key).strip()
            if not name:
                raise VMError("empty key in template")
            if literal:
                parts.append((False, "".join(literal)))
                literal = []
            parts.append((True, name))
        elif char == "}":
            raise VMError("unmatched closing brace in template")
        else:
            literal.append(char)
    if literal:
        parts.append((False, "".join(literal)))
    return parts


def template_keys(template: str) -> list[str]:
    """Return the keys of a template, each once, in order of first use."""
    return list(dict.fromkeys(text for is_key, text in _parse(template) if is_key))


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Fill each key of the template from values."""
    pieces = []
    for is_key, text in _parse(template):
        if is_key:
            if text not in values:
                raise VMError(f"missing value for key {text!r}")
            pieces.append(values[text])
        else:
            pieces.append(text)
    return "".join(pieces)


def _format(vm: Machine, template_value: Any) -> None:
    if not isinstance(template_value, (str, TextBuffer)):
        raise VMError(
            f"FORMAT return error: can not cast {type(template_value).__name__} to string"
        )
    template = str(template_value)
    try:
        keys = template_keys(template)
    except VMError as err:
        raise VMError(f"FORMAT error parsing template: {err}") from err
    values: dict[str, str] = {}
    for key in keys:
        value = vm.pull()
        if value is None:
            raise VMError("FORMAT: stack is too shallow")
        try:
            values[key] = to_text(value)
        except VMError as err:
            raise VMError(f"FORMAT error converting: {err}") from err
    try:
        result = render_template(template, values)
    except VMError as err:
        raise VMError(f"FORMAT error rendering: {err}") from err
    vm.push(result)


def format_from_stack(vm: Machine) -> None:
    """Fill the template on top of the stack with the values below it."""
    if vm.current_stack_len() < 1:
        raise VMError("Stack is too shallow for inline format")
    template = vm.pull()
    if template is None:
        raise VMError("FORMAT returns: NO DATA #1")
    _format(vm, template)


def format_from_workbench(vm: Machine) -> None:
    """Fill the template from the workbench with values from the stack."""
    if vm.workbench_len() < 1:
        raise VMError("Stack is too shallow for inline format.")
    template = vm.pull_from_workbench()
    if template is None:
        raise VMError("FORMAT returns: NO DATA #1")
    _format(vm, template)


def register(vm: Machine) -> None:
    for case in Case:
        vm.register_inline(f"string.{case.value}", partial(change_case, case=case))
    vm.register_inline("concat_with_space", concat_with_space)
    vm.register_inline("format", format_from_stack)
    vm.register_inline("format.", format_from_workbench)