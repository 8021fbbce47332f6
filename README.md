# mstackvm

A small multi-stack virtual machine. Values are kept on named stacks (the
default one is `main`) and on a separate *workbench*, a side stack that
holds a value while other words run. Words are Python functions that are
registered by name. When a word is called, it reads from the stacks and
writes back to them.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Quick start

```python
from mstackvm.stdlib import new_vm

vm = new_vm()
vm.push(41.0)
vm.push(1.0)
vm.call("+")
print(vm.pull())          # 42.0
```

`new_vm()` returns a `Machine` with the whole standard library
registered. A bare `Machine()` has no words until you call
`mstackvm.stdlib.init_stdlib(vm)`. You can add your own word with
`Machine.register_inline(name, func)`. The function receives the machine
as its only argument. `Machine.is_inline(name)` tells you whether a word
is registered. Calling an unknown word raises `VMError`.

## Stacks and the workbench

- `push`, `pull` and `peek` work on the current stack. `pull` and `peek`
  return `None` when the stack is empty.
- `push_to_workbench` and `pull_from_workbench` work on the workbench.
- `current_stack_len()` and `workbench_len()` give the number of values on
  the current stack and on the workbench.
- `to_stack(name)` makes the stack `name` current and creates it if it does
  not exist. `peek_stacks()` returns the name of the current stack.
  `pop_stacks()` goes back to the stack that was current before. The
  `main` stack is never left.
- `push_to_stack(name, value)` pushes onto any named stack, whether or
  not it is current.
- `clear_stacks()` forgets the history of current stacks and makes `main`
  current again. The values on the stacks are kept.
- `len(vm)` is the number of stacks that exist.

A word that fails raises `mstackvm.machine.VMError`.

The helpers `to_text`, `to_float` and `to_int` in `mstackvm.machine`
convert values the same way the words do. `NoData` is a marker value, and
`TextBuffer` is text that grows when values are appended to it.

## Standard library words

| Words | Effect |
| --- | --- |
| `+ - * /` | Pull two values and push the result. The top value is the left operand. `+` also joins lists and strings. |
| `+. -. *. /.` | The left operand comes from the workbench and the result goes back to the workbench. |
| `*+ *- ** */` | Fold the stack into one result. The fold stops at a `NoData` marker or when the stack is empty. |
| `*+. *-. **. */.` | The same fold, with the running result kept on the workbench. |
| `math.floor math.ceil math.round math.fract math.abs math.signum math.sqrt math.cbrt math.sin math.cos math.tan math.asin math.acos math.atan math.sinh math.cosh math.tanh` | Replace the top value with the function of that value, computed as a float. |
| `float.Pi float.E float.NaN float.+Inf float.-Inf` | Push a constant. |
| `string.upper string.lower string.snake string.title string.camel` | Replace the top value with its text in the named case. |
| `concat_with_space` | Append the top value to the `TextBuffer` below it. A space is put between entries. |
| `format`, `format.` | Fill a `{name}` template with values from the stack. `format.` takes the template from the workbench. |
| `len` | Push the length of the top value and leave the value in place. |
| `attribute`, `tag` | Wrap a value in `mstackvm.values.Tagged` and add an attribute, or a string tag. |
| `set`, `get` | Store a value under a string key in a dict, or read it back. |
| `car cdr car. cdr.` | Head and tail of a list or pair, taken from the stack or from the workbench. |
| `time.now`, `time.timestamp` | Push a `Timestamp` in nanoseconds since the epoch, either the current time or one made from an integer. |
| `print println print. println. space nl` | Write to standard output. |
| `clear_stacks drop_stacks` | Reset the current stack to `main`, or go back to the previous stack. |

Template example:

```python
vm = new_vm()
vm.push(41)
vm.push(42)
vm.push("Answer is {a} not {b}")
vm.call("format")
print(vm.pull())          # Answer is 42 not 41
```

Each key of the template takes the next value pulled from the stack, in
the order in which the keys first appear. A key that appears more than
once uses the same value each time.

## What the package does not do

The package has no reader for program text and no command-line tool.
Words are called from Python with `Machine.call`. The standard library
has no words for lambdas, aliases, conditionals, loops, building lists,
type conversion or JSON.