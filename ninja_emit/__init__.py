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
"""Write ninja build files from python."""

from ninja_emit.errors import (BuildActionException, EmbeddedNewlineException,
                               EmptyBuildOutputsOrInputsException,
                               EmptyDefaultTargetsException,
                               MissingRequiredFieldException,
                               NinjaSyntaxException, RuleException)
from ninja_emit.escaping import escape, escape_path, expand
from ninja_emit.line_wrapper import dollar_run_before, wrap
from ninja_emit.ninja_syntax import Rule, ValueKind, VariableValue
from ninja_emit.ninja_writer import Writer
from ninja_emit.utils import DEFAULT_WIDTH, Overflow, Warnings
