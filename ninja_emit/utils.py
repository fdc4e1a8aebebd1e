#!/usr/bin/python3
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

from typing import NamedTuple

DEFAULT_WIDTH = 78


class Overflow(NamedTuple):
    """A physical line the writer could not fit within its width."""
    file: str
    line: int
    columns: int
    width: int

    def __str__(self):
        location = f"{self.file}:{self.line}" if self.file else str(self.line)
        return (f"{location}: line is {self.columns} columns wide, "
                f"more than {self.width}")


class Warnings(object):
    """Collects the overflowing lines of one or more writers.

    Each overflow is also written to stream, one per line, when a stream is
    given (sys.stderr, usually).
    """

    def __init__(self, stream=None):
        self._stream = stream
        self._all = []

    def overflow(self, file, line: int, columns: int, width: int):
        """Record a line of columns characters written past width."""
        record = Overflow(file=file, line=line, columns=columns, width=width)
        self._all.append(record)
        if self._stream:
            self._stream.write(f"{record}\n")

    def had_warning(self):
        """Return if there were any warnings reported."""
        return len(self._all)

    def get_warnings(self) -> list[Overflow]:
        return self._all
