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
"""Escape-aware wrapping of one logical ninja statement into physical lines.

A statement longer than the configured width is split at spaces and every
physical line but the last ends in the " $" continuation marker. A space
preceded by an odd number of "$" is an escaped (literal) space and is never
used as a break point.
"""

from collections.abc import Iterator

TAB = "  "
CONTINUATION = " $"


def dollar_run_before(s: str, i: int) -> int:
    """Returns the number of "$" characters right in front of s[i]."""
    count = 0
    j = i - 1
    while j >= 0 and s[j] == "$":
        count += 1
        j -= 1
    return count


def is_escaped_space(s: str, i: int) -> bool:
    return dollar_run_before(s, i) % 2 == 1


def _rfind_break(text: str, end: int) -> int:
    """The rightmost unescaped space in text[1:end], or -1."""
    space = max(end, 1)
    while True:
        space = text.rfind(" ", 1, space)
        if space < 0 or not is_escaped_space(text, space):
            return space


def _find_break(text: str, start: int) -> int:
    """The leftmost unescaped space in text[start:], other than text[0], or -1."""
    space = max(start, 1) - 1
    while True:
        space = text.find(" ", space + 1)
        if space < 0 or not is_escaped_space(text, space):
            return space


def wrap(text: str, width: int, indent: int = 0) -> Iterator[str]:
    """Yields the physical lines for text, without line terminators.

    Lines are kept within width when possible. A break never leaves a
    physical line without content, so a leading space is not a break point. When the remaining text has
    no unescaped space before the width limit, the next unescaped space is
    used instead; when there is none at all the remainder is yielded as a
    single over-width line.
    """
    leading_space = TAB * indent
    while len(leading_space) + len(text) > width:
        available = width - len(leading_space) - len(CONTINUATION)
        space = _rfind_break(text, available)
        if space < 0:
            space = _find_break(text, available)
        if space < 0:
            break

        yield leading_space + text[:space] + CONTINUATION
        text = text[space + 1:]

        # Subsequent lines are continuations, so indent them.
        leading_space = TAB * (indent + 2)

    yield leading_space + text
