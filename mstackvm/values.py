"""Words that inspect and decorate values: length, attributes, tags, keys, car and cdr."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any

from mstackvm.arith import Source
from mstackvm.machine import Machine, NoData, TextBuffer, VMError


@dataclass
class Tagged:
    """A value carrying a list of attributes and a mapping of string tags."""

    value: Any
    attributes: list[Any] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return _length(self.value)

    def __str__(self) -> str:
        return str(self.value)


def _length(value: Any) -> int:
    if isinstance(value, Tagged):
        return _length(value.value)
    if isinstance(value, NoData):
        return 0
    if isinstance(value, (str, TextBuffer, list, tuple, dict)):
        return len(value)
    return 1


def _as_tagged(value: Any) -> Tagged:
    if isinstance(value, Tagged):
        return Tagged(value.value, list(value.attributes), dict(value.tags))
    return Tagged(value)


def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, Tagged) else value


def _rewrap(original: Any, inner: Any) -> Any:
    if isinstance(original, Tagged):
        return replace(original, value=inner)
    return inner


def _cast_string(value: Any, message: str) -> str:
    inner = _unwrap(value)
    if isinstance(inner, (str, TextBuffer)):
        return str(inner)
    raise VMError(f"{message}: can not cast {type(inner).__name__} to string")


def value_len(vm: Machine) -> None:
    """Push the length of the top value, leaving that value in place."""
    if vm.current_stack_len() < 1:
        raise VMError("Stack is too shallow for inline len")
    value = vm.peek()
    if value is None:
        raise VMError("LEN returns: NO DATA #1")
    vm.push(_length(value))


def attribute(vm: Machine) -> None:
    """Attach the top value as an attribute of the value below it."""
    if vm.current_stack_len() < 2:
        raise VMError("Stack is too shallow for inline attribute")
    attr = vm.pull()
    if attr is None:
        raise VMError("ATTRIBUTE returns: NO DATA #1")
    value = vm.pull()
    if value is None:
        raise VMError("ATTRIBUTE returns: NO DATA #2")
    tagged = _as_tagged(value)
    tagged.attributes.append(attr)
    vm.push(tagged)


def tag(vm: Machine) -> None:
    """Set a string tag (name below, value on top) on the third value."""
    if vm.current_stack_len() < 3:
        raise VMError("Stack is too shallow for inline tag")
    tag_value = vm.pull()
    if tag_value is None:
        raise VMError("TAG returns: NO DATA #1")
    text = _cast_string(tag_value, "TAG value expected to be string")
    tag_name = vm.pull()
    if tag_name is None:
        raise VMError("TAG returns: NO DATA #2")
    name = _cast_string(tag_name, "TAG key expected to be string")
    value = vm.pull()
    if value is None:
        raise VMError("TAG returns: NO DATA #3")
    tagged = _as_tagged(value)
    tagged.tags[name] = text
    vm.push(tagged)


def set_key(vm: Machine) -> None:
    """Store the top value under the key below it in the dictionary below that."""
    if vm.current_stack_len() < 3:
        raise VMError("Stack is too shallow for inline set")
    d_val = vm.pull()
    if d_val is None:
        raise VMError("SET returns: NO DATA #1")
    key_value = vm.pull()
    if key_value is None:
        raise VMError("SET returns: NO DATA #2")
    key = _cast_string(key_value, "SET key expected to be string")
    target = vm.pull()
    if target is None:
        raise VMError("SET returns: NO DATA #3")
    inner = _unwrap(target)
    if not isinstance(inner, dict):
        raise VMError(f"SET returns error: can not set a key in {type(inner).__name__}")
    vm.push(_rewrap(target, {**inner, key: d_val}))


def get_key(vm: Machine) -> None:
    """Replace a dictionary and a key on top of it with the value under that key."""
    if vm.current_stack_len() < 2:
        raise VMError("Stack is too shallow for inline get")
    key_value = vm.pull()
    if key_value is None:
        raise VMError("SET returns: NO DATA #1")
    key = _cast_string(key_value, "GET key expected to be string")
    target = vm.pull()
    if target is None:
        raise VMError("GET returns: NO DATA #2")
    inner = _unwrap(target)
    if not isinstance(inner, dict):
        raise VMError(f"GET returns error: can not get a key from {type(inner).__name__}")
    if key not in inner:
        raise VMError(f"GET returns error: key {key!r} not found")
    vm.push(inner[key])


def _car(value: Any) -> Any:
    inner = _unwrap(value)
    if isinstance(inner, (list, tuple)) and inner:
        return inner[0]
    return None


def _cdr(value: Any) -> Any:
    inner = _unwrap(value)
    if isinstance(inner, tuple) and len(inner) == 2:
        return inner[1]
    if isinstance(inner, (list, tuple)) and inner:
        return list(inner[1:])
    return None


def _carcdr(vm: Machine, source: Source, head: bool, prefix: str) -> None:
    depth = vm.current_stack_len() if source is Source.STACK else vm.workbench_len()
    if depth < 1:
        raise VMError(f"Stack is too shallow for inline {prefix}()")
    value = vm.pull() if source is Source.STACK else vm.pull_from_workbench()
    if value is None:
        raise VMError(f"{prefix} returned: NO DATA has been obtained")
    result = _car(value) if head else _cdr(value)
    if result is None:
        raise VMError(f"{prefix} returned: NO DATA")
    if source is Source.STACK:
        vm.push(result)
    else:
        vm.push_to_workbench(result)


def car(vm: Machine, source: Source) -> None:
    """Replace a sequence with its first element."""
    _carcdr(vm, source, True, "CAR" if source is Source.STACK else "CAR.")


def cdr(vm: Machine, source: Source) -> None:
    """Replace a sequence with everything after its first element."""
    _carcdr(vm, source, False, "CDR" if source is Source.STACK else "CDR.")


def register(vm: Machine) -> None:
    vm.register_inline("len", value_len)
    vm.register_inline("attribute", attribute)
    vm.register_inline("tag", tag)
    vm.register_inline("set", set_key)
    vm.register_inline("get", get_key)
    vm.register_inline("car", partial(car, source=Source.STACK))
    vm.register_inline("car.", partial(car, source=Source.WORKBENCH))
    vm.register_inline("cdr", partial(cdr, source=Source.STACK))
    vm.register_inline("cdr.", partial(cdr, source=Source.WORKBENCH))