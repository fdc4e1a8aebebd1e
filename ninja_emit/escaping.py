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

import re

from ninja_emit.errors import EmbeddedNewlineException

# "$$", or "$" followed by a (possibly empty) run of word characters.
_VARIABLE_RE = re.compile(r"\$(\$|\w*)")


def escape(string: str) -> str:
    """Escape a string so it can be embedded in a ninja file verbatim."""
    if "\n" in string:
        raise EmbeddedNewlineException("Ninja syntax does not allow newlines")
    # "$" is the only metacharacter.
    return string.replace("$", "$$")


def escape_path(word: str) -> str:
    """Escape a path for the outputs/inputs section of a build statement.

    Already escaped spaces are protected first, so that "$ " is not turned
    into "$$ " by the plain space replacement.
    """
    return word.replace("$ ", "$$ ").replace(" ", "$ ").replace(":", "$:")


def expand(string: str, variables: dict, local_vars: dict = None) -> str:
    """Expand a string containing $vars as ninja would.

    Only "$$" and "$name" are understood: there is no "${name}", no nested
    expansion, and no builtins like $in or $out. Unknown names expand to
    the empty string; local_vars shadow variables.
    """
    local_vars = local_vars or {}

    def _lookup(match):
        name = match.group(1)
        if name == "$":
            return "$"
        return local_vars.get(name, variables.get(name, ""))

    return _VARIABLE_RE.sub(_lookup, string)
