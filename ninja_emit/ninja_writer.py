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

from ninja_emit import line_wrapper
from ninja_emit import utils
from ninja_emit.ninja_syntax import (BuildAction, Comment, Default, Include,
                                     Line, Node, Pool, Rule, Subninja,
                                     Variable)


class Writer:
    """Writes ninja statements to a file-like object as they are added.

    Statements are validated when they are built, so a statement that
    raises leaves nothing behind in the output. The writer does not own
    the output: close() flushes it but leaves it open.
    """

    def __init__(self,
                 file,
                 width: int = utils.DEFAULT_WIDTH,
                 warnings: utils.Warnings = None):
        self.file = file
        self.width = width
        if self.width < 1:
            raise ValueError(f"width must be positive, got {self.width}")
        self.warnings = warnings
        self.lines_written = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def add_node(self, node: Node):
        """Render node and write it out."""
        lines = []
        for logical in node.stream():
            if logical.wrap:
                lines.extend(
                    line_wrapper.wrap(logical.text, self.width,
                                      logical.indent))
            else:
                lines.append(line_wrapper.TAB * logical.indent + logical.text)
        for line in lines:
            print(line, file=self.file)
            self.lines_written += 1
            if len(line) > self.width:
                self._warn_overflow(line)

    def newline(self):
        self.add_node(Line(value=""))

    def comment(self, text: str):
        self.add_node(Comment(text, width=self.width))

    def variable(self, key: str, value, indent: int = 0):
        self.add_node(Variable(name=key, value=value, indent=indent))

    def pool(self, name: str, depth: int):
        self.add_node(Pool(name=name, depth=depth))

    def rule(self, rule: Rule):
        self.add_node(rule)

    def build(self,
              outputs,
              rule: str,
              inputs,
              implicit=None,
              order_only=None,
              variables=None,
              implicit_outputs=None,
              pool: str = None,
              dyndep: str = None):
        """Write a build statement, and return outputs for chaining."""
        self.add_node(
            BuildAction(rule=rule,
                        outputs=outputs,
                        inputs=inputs,
                        implicits=implicit,
                        order_only=order_only,
                        variables=variables,
                        implicit_outputs=implicit_outputs,
                        pool=pool,
                        dyndep=dyndep))
        return outputs

    def phony(self, outputs, inputs):
        return self.build(outputs, "phony", inputs)

    def include(self, path: str):
        self.add_node(Include(path))

    def subninja(self, path: str):
        self.add_node(Subninja(path))

    def default(self, paths):
        self.add_node(Default(paths))

    def close(self):
        flush = getattr(self.file, "flush", None)
        if flush:
            flush()

    def _warn_overflow(self, line: str):
        if self.warnings is None:
            return
        self.warnings.overflow(getattr(self.file, "name", None),
                               line=self.lines_written,
                               columns=len(line),
                               width=self.width)
