#!/usr/bin/env python
#
# Copyright (C) 2022 The Android Open Source Project
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from abc import ABC, abstractmethod
from decimal import Decimal
import enum
import math
import textwrap
from collections.abc import Iterator
from typing import NamedTuple

from ninja_emit.errors import (BuildActionException,
                               EmptyBuildOutputsOrInputsException,
                               EmptyDefaultTargetsException,
                               MissingRequiredFieldException)
from ninja_emit.escaping import escape_path


class LogicalLine(NamedTuple):
    """One statement line, before it is split into physical lines.

    Lines with wrap=False are written as-is after indenting.
    """
    text: str
    indent: int = 0
    wrap: bool = True


class Node(ABC):
    """An abstract class that can be serialized to a ninja file

    All other ninja-serializable classes inherit from this class
    """

    @abstractmethod
    def stream(self) -> Iterator[LogicalLine]:
        pass

    def key(self):
        """The value used for equality and hashing.

        The inheriting class must define this.
        """
        raise NotImplementedError

    def __eq__(self, other):
        """Test for equality."""
        if isinstance(other, self.__class__):
            return self.key() == other.key()
        return NotImplemented

    def __hash__(self):
        """Hash the object."""
        return hash(self.key())


def as_list(list_like) -> tuple:
    """Returns a tuple, after casting the input."""
    if isinstance(list_like, (int, bool)):
        return tuple([str(list_like)])
    # False-ish values that are neither ints nor bools return false-ish.
    if not list_like:
        return ()
    if isinstance(list_like, tuple):
        return list_like
    if isinstance(list_like, list):
        return tuple(list_like)
    # Sets have no stable order; sort them so the output is reproducible.
    if isinstance(list_like, (set, frozenset)):
        return tuple(sorted(list_like))
    if isinstance(list_like, str):
        return tuple([list_like])
    raise TypeError(f"bad type {type(list_like)}")


@enum.unique
class ValueKind(enum.Enum):
    """The kinds of value a ninja variable can be assigned."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    LIST_STR = "list_str"


class VariableValue:
    """The right-hand side of a `key = value` statement."""

    def __init__(self, kind: ValueKind, value):
        self.kind = kind
        self.value = tuple(value) if kind is ValueKind.LIST_STR else value

    @classmethod
    def of_bool(cls, value: bool):
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def of_int(cls, value: int):
        return cls(ValueKind.INT, int(value))

    @classmethod
    def of_float(cls, value: float):
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def of_str(cls, value: str):
        return cls(ValueKind.STR, str(value))

    @classmethod
    def of_list(cls, value):
        return cls(ValueKind.LIST_STR, [str(v) for v in value])

    @classmethod
    def coerce(cls, value):
        """Wrap a plain python value, or return a VariableValue as-is."""
        if isinstance(value, VariableValue):
            return value
        # bool is a subclass of int, so it has to be checked first.
        if isinstance(value, bool):
            return cls.of_bool(value)
        if isinstance(value, int):
            return cls.of_int(value)
        if isinstance(value, float):
            return cls.of_float(value)
        if isinstance(value, str):
            return cls.of_str(value)
        if isinstance(value, (list, tuple)):
            return cls.of_list(value)
        raise TypeError(f"bad type {type(value)} for a ninja variable")

    def key(self):
        return (self.kind, self.value)

    def __eq__(self, other):
        if isinstance(other, VariableValue):
            return self.key() == other.key()
        return NotImplemented

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return f"VariableValue({self.kind.name}, {self.value!r})"


def _render_float(value: float) -> str:
    """Shortest decimal form, never in exponent notation: 1.0 is "1"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


# One rendering per ValueKind. Empty list entries are dropped.
_RENDERERS = {
    ValueKind.BOOL: lambda v: "true" if v else "false",
    ValueKind.INT: str,
    ValueKind.FLOAT: _render_float,
    ValueKind.STR: lambda v: v,
    ValueKind.LIST_STR: lambda v: " ".join(s for s in v if s),
}


class Variable(Node):
    """A ninja variable that can be reused across build actions

    A value of None renders nothing at all.

    https://ninja-build.org/manual.html#_variables
    """

    def __init__(self, name: str, value, indent=0):
        self.name = name
        self.value = None if value is None else VariableValue.coerce(value)
        self.indent = indent

    def key(self):
        """The value used for equality and hashing."""
        return (self.name, self.value, self.indent)

    def rendered(self) -> str:
        text = _RENDERERS[self.value.kind](self.value.value)
        if not text:
            return f"{self.name} ="
        return f"{self.name} = {text}"

    def stream(self) -> Iterator[LogicalLine]:
        if self.value is None:
            return
        yield LogicalLine(self.rendered(), self.indent)


class Rule(Node):
    """A shorthand for a command line that can be reused

    Variables are always written in the same order, starting with command.
    generator and restat are flags, written as "1" when set.

    https://ninja-build.org/manual.html#_rules
    """

    def __init__(self,
                 name: str,
                 command: str,
                 description: str = None,
                 depfile: str = None,
                 generator: bool = False,
                 pool: str = None,
                 restat: bool = False,
                 rspfile: str = None,
                 rspfile_content: str = None,
                 deps: list[str] = ()):
        self.name = name
        self.command = command
        self.description = description
        self.depfile = depfile
        self.generator = generator
        self.pool = pool
        self.restat = restat
        self.rspfile = rspfile
        self.rspfile_content = rspfile_content
        self.deps = as_list(deps)
        self._validate_rule()

    def key(self):
        """The value used for equality and hashing."""
        return (self.name, tuple(self.variables))

    @property
    def variables(self) -> list[Variable]:
        """The variables of this rule, in output order."""
        candidates = [
            ("command", self.command),
            ("description", self.description),
            ("depfile", self.depfile),
            ("generator", 1 if self.generator else None),
            ("pool", self.pool),
            ("restat", 1 if self.restat else None),
            ("rspfile", self.rspfile),
            ("rspfile_content", self.rspfile_content),
            ("deps", list(self.deps) if self.deps else None),
        ]
        return [
            Variable(name=k, value=v, indent=1) for k, v in candidates
            if v is not None
        ]

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine(f"rule {self.name}")
        for var in self.variables:
            yield from var.stream()

    def _validate_rule(self):
        # name and command are required in a ninja rule
        self._assert_field_is_not_empty(field_name="name")
        self._assert_field_is_not_empty(field_name="command")

    def _assert_field_is_not_empty(self, field_name: str):
        if not getattr(self, field_name):
            raise MissingRequiredFieldException(
                f"{field_name} is required in a ninja rule")


class BuildAction(Node):
    """Describes the dependency edge between inputs and output

    Paths are escaped with escape_path. variables maps a name to a list of
    value fragments: an empty list is left out, a single fragment is
    written as a string and several are joined with spaces.

    https://ninja-build.org/manual.html#_build_statements
    """

    def __init__(self,
                 rule: str,
                 outputs: list[str] = None,
                 inputs: list[str] = None,
                 implicits: list[str] = None,
                 order_only: list[str] = None,
                 variables=(),
                 implicit_outputs: list[str] = None,
                 pool: str = None,
                 dyndep: str = None):
        self.outputs = as_list(outputs)
        self.rule = rule
        self.inputs = as_list(inputs)
        self.implicits = as_list(implicits)
        self.order_only = as_list(order_only)
        self.implicit_outputs = as_list(implicit_outputs)
        self.pool = pool
        self.dyndep = dyndep
        self._variables = []
        if isinstance(variables, dict):
            variables = variables.items()
        for k, v in variables or ():
            self.add_variable(k, v)
        self._validate()

    def key(self):
        return (self.outputs, self.rule, self.inputs, self.implicits,
                self.order_only, self.implicit_outputs, self.pool,
                self.dyndep, tuple(self.variables))

    @property
    def variables(self) -> list[Variable]:
        """The variables of this build action, in insertion order."""
        return list(self._variables)

    def add_variable(self, name: str, value):
        """Variables limited to the scope of this build action"""
        fragments = as_list(value)
        if not fragments:
            return
        if len(fragments) == 1:
            value = VariableValue.of_str(fragments[0])
        else:
            value = VariableValue.of_list(fragments)
        self._variables.append(Variable(name=name, value=value, indent=1))

    def stream(self) -> Iterator[LogicalLine]:
        out_outputs = [escape_path(x) for x in self.outputs]
        all_inputs = [escape_path(x) for x in self.inputs]

        if self.implicit_outputs:
            out_outputs.append("|")
            out_outputs.extend(escape_path(x) for x in self.implicit_outputs)
        if self.implicits:
            all_inputs.append("|")
            all_inputs.extend(escape_path(x) for x in self.implicits)
        if self.order_only:
            all_inputs.append("||")
            all_inputs.extend(escape_path(x) for x in self.order_only)

        output = " ".join(out_outputs)
        yield LogicalLine(f"build {output}: " +
                          " ".join([self.rule] + all_inputs))
        if self.pool is not None:
            yield LogicalLine(f"  pool = {self.pool}")
        if self.dyndep is not None:
            yield LogicalLine(f"  dyndep = {self.dyndep}")
        for var in self.variables:
            yield from var.stream()

    def _validate(self):
        if not self.outputs:
            raise EmptyBuildOutputsOrInputsException(
                "Output is required in a ninja build statement")
        if not (self.inputs or self.implicits or self.order_only):
            raise EmptyBuildOutputsOrInputsException(
                "Input is required in a ninja build statement")
        if not self.rule:
            raise BuildActionException(
                "Rule is required in a ninja build statement")


class Pool(Node):
    """https://ninja-build.org/manual.html#ref_pool"""

    def __init__(self, name: str, depth: int):
        self.name = name
        self.depth = Variable(name="depth",
                              value=VariableValue.of_int(depth),
                              indent=1)

    def key(self):
        return (self.name, self.depth)

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine(f"pool {self.name}")
        yield from self.depth.stream()


class Include(Node):
    """Parses another file in the current scope. The path is not escaped."""

    def __init__(self, path: str):
        self.path = path

    def key(self):
        return self.path

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine(f"include {self.path}")


class Subninja(Node):
    """Parses another file in a child scope. The path is not escaped."""

    def __init__(self, subninja: str):
        self.subninja = subninja

    def key(self):
        return self.subninja

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine(f"subninja {self.subninja}")


class Default(Node):
    """https://ninja-build.org/manual.html#_default_target_statements"""

    def __init__(self, paths: list[str]):
        self.paths = as_list(paths)
        if not self.paths:
            raise EmptyDefaultTargetsException(
                "At least one path is required in a ninja default statement")

    def key(self):
        return self.paths

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine("default " + " ".join(self.paths))


class Comment(Node):
    """A comment, word-wrapped to fit in width columns.

    Comments are wrapped as prose, one paragraph per line of text: words
    longer than a line are not broken and "$" has no special meaning. An
    empty paragraph is written as a bare "#".
    """

    def __init__(self, text: str, width: int):
        self.text = text
        self.width = width

    def key(self):
        return (self.text, self.width)

    def stream(self) -> Iterator[LogicalLine]:
        for paragraph in self.text.split("\n"):
            lines = textwrap.wrap(paragraph,
                                  max(self.width - 2, 1),
                                  break_long_words=False,
                                  break_on_hyphens=False)
            for line in lines or [""]:
                yield LogicalLine(f"#{line}", wrap=False)


class Line(Node):
    """Generic single-line node, written verbatim: newlines etc."""

    def __init__(self, value: str):
        self.value = value

    def key(self):
        return self.value

    def stream(self) -> Iterator[LogicalLine]:
        yield LogicalLine(self.value, wrap=False)
