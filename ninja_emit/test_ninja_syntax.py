#!/usr/bin/env python3
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

import unittest

from ninja_emit import ninja_syntax
from ninja_emit.errors import (BuildActionException,
                               EmptyBuildOutputsOrInputsException,
                               EmptyDefaultTargetsException,
                               MissingRequiredFieldException, RuleException)
from ninja_emit.ninja_syntax import (BuildAction, Default, Rule, ValueKind,
                                     Variable, VariableValue)


def texts(node):
    return [line.text for line in node.stream()]


class TestVariableValue(unittest.TestCase):
    def test_coerce(self):
        for value, kind in ((True, ValueKind.BOOL), (3, ValueKind.INT),
                            (1.5, ValueKind.FLOAT), ("s", ValueKind.STR),
                            (["a"], ValueKind.LIST_STR),
                            (("a", "b"), ValueKind.LIST_STR)):
            with self.subTest(value=value):
                self.assertEqual(VariableValue.coerce(value).kind, kind)

    def test_coerce_keeps_value(self):
        value = VariableValue.of_str("x")
        self.assertIs(VariableValue.coerce(value), value)

    def test_coerce_rejects_unknown_types(self):
        self.assertRaises(TypeError, VariableValue.coerce, {"a": 1})

    def test_every_kind_renders(self):
        self.assertEqual(set(ninja_syntax._RENDERERS), set(ValueKind))


class TestVariable(unittest.TestCase):
    def test_scalars(self):
        for value, expected in ((True, "x = true"), (False, "x = false"),
                                (4, "x = 4"), (1.5, "x = 1.5"),
                                (1.0, "x = 1"), (-2.0, "x = -2"),
                                (1e20, "x = 100000000000000000000"),
                                (2.5e-6, "x = 0.0000025"),
                                (float("inf"), "x = inf"),
                                (float("nan"), "x = NaN"),
                                ("abc", "x = abc")):
            with self.subTest(value=value):
                self.assertEqual(texts(Variable("x", value)), [expected])

    def test_list_drops_empty_fragments(self):
        var = Variable("cflags", ["-O2", "", "-Wall"], indent=1)
        self.assertEqual(list(var.stream()),
                         [ninja_syntax.LogicalLine("cflags = -O2 -Wall", 1)])

    def test_empty_list(self):
        self.assertEqual(texts(Variable("cflags", ["", ""])), ["cflags ="])
        self.assertEqual(texts(Variable("cflags", [])), ["cflags ="])

    def test_none(self):
        self.assertEqual(texts(Variable("x", None)), [])


class TestRule(unittest.TestCase):
    def test_command_is_required(self):
        self.assertRaises(MissingRequiredFieldException, Rule, "cc", "")
        self.assertRaises(RuleException, Rule, "cc", None)
        self.assertRaises(RuleException, Rule, "", "gcc")

    def test_minimal(self):
        rule = Rule("cc", "gcc $in")
        self.assertEqual(texts(rule), ["rule cc", "command = gcc $in"])
        self.assertTrue(all(line.indent == 1
                            for line in list(rule.stream())[1:]))

    def test_variable_order(self):
        rule = Rule("cc",
                    "gcc",
                    deps=["gcc"],
                    rspfile_content="$in",
                    rspfile="$out.rsp",
                    restat=True,
                    pool="console",
                    generator=True,
                    depfile="$out.d",
                    description="CC $out")
        self.assertEqual([v.name for v in rule.variables], [
            "command", "description", "depfile", "generator", "pool",
            "restat", "rspfile", "rspfile_content", "deps"
        ])
        self.assertIn("generator = 1", texts(rule))
        self.assertIn("restat = 1", texts(rule))

    def test_flags_off(self):
        rule = Rule("cc", "gcc", generator=False, restat=False, deps=[])
        self.assertEqual(len(rule.variables), 1)

    def test_eq(self):
        self.assertEqual(Rule("cc", "gcc"), Rule("cc", "gcc"))
        self.assertEqual(hash(Rule("cc", "gcc")), hash(Rule("cc", "gcc")))
        self.assertNotEqual(Rule("cc", "gcc"), Rule("cc", "clang"))


class TestBuildAction(unittest.TestCase):
    def test_requires_outputs_and_inputs(self):
        self.assertRaises(EmptyBuildOutputsOrInputsException,
                          BuildAction,
                          rule="cc",
                          outputs=[],
                          inputs=["a"])
        self.assertRaises(EmptyBuildOutputsOrInputsException,
                          BuildAction,
                          rule="cc",
                          outputs=["a"])
        self.assertRaises(BuildActionException,
                          BuildAction,
                          rule="",
                          outputs=["a"],
                          inputs=["b"])

    def test_order_only_without_inputs(self):
        action = BuildAction(rule="touch",
                             outputs=["stamp"],
                             inputs=[],
                             order_only=["dir"])
        self.assertEqual(texts(action), ["build stamp: touch || dir"])

    def test_paths_are_escaped(self):
        action = BuildAction(rule="cc",
                             outputs=["out dir/a:b"],
                             inputs=["in put"],
                             implicits=["c d"],
                             order_only=["e:f"],
                             implicit_outputs=["g h"])
        self.assertEqual(
            texts(action),
            ["build out$ dir/a$:b | g$ h: cc in$ put | c$ d || e$:f"])

    def test_single_strings(self):
        action = BuildAction(rule="phony", outputs="all", inputs="a b")
        self.assertEqual(texts(action), ["build all: phony a$ b"])

    def test_sets_are_sorted(self):
        action = BuildAction(rule="phony", outputs="all", inputs={"c", "a", "b"})
        self.assertEqual(texts(action), ["build all: phony a b c"])

    def test_variables(self):
        action = BuildAction(rule="cc",
                             outputs=["a.o"],
                             inputs=["a.c"],
                             variables={
                                 "cflags": ["-O2", "-g"],
                                 "empty": [],
                                 "unset": None,
                                 "one": ["x y"],
                             })
        self.assertEqual([v.name for v in action.variables], ["cflags", "one"])
        self.assertEqual(texts(action),
                         ["build a.o: cc a.c", "cflags = -O2 -g", "one = x y"])
        self.assertEqual(action.variables[1].value.kind, ValueKind.STR)

    def test_variable_pairs(self):
        action = BuildAction(rule="cc",
                             outputs=["a.o"],
                             inputs=["a.c"],
                             variables=[("b", "2"), ("a", ["1"])])
        self.assertEqual(texts(action)[1:], ["b = 2", "a = 1"])

    def test_pool_and_dyndep_are_verbatim(self):
        action = BuildAction(rule="cc",
                             outputs=["a.o"],
                             inputs=["a.c"],
                             pool="my pool",
                             dyndep="a:dd")
        self.assertEqual(
            texts(action),
            ["build a.o: cc a.c", "  pool = my pool", "  dyndep = a:dd"])


class TestDefault(unittest.TestCase):
    def test_empty(self):
        self.assertRaises(EmptyDefaultTargetsException, Default, [])

    def test_paths(self):
        self.assertEqual(texts(Default(["a", "b"])), ["default a b"])
        self.assertEqual(texts(Default("all")), ["default all"])


class TestAsList(unittest.TestCase):
    def test_cast(self):
        self.assertEqual(ninja_syntax.as_list(None), ())
        self.assertEqual(ninja_syntax.as_list("a"), ("a",))
        self.assertEqual(ninja_syntax.as_list(["a", "b"]), ("a", "b"))
        self.assertEqual(ninja_syntax.as_list(3), ("3",))
        self.assertRaises(TypeError, ninja_syntax.as_list, object())


if __name__ == "__main__":
    unittest.main()
