# Copyright (C) 2018 Tetsuya Miura <miute.dev@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.



class GrammarError(Exception):
    """Represents an error in the grammar data, never in user input."""

    UNKNOWN_ERR = 0
    INVALID_GRAMMAR_ERR = 1
    PROPERTY_NOT_FOUND_ERR = 2

    code = UNKNOWN_ERR

    @property
    def message(self):
        return self.args[0] if len(self.args) > 0 else ''


class InvalidGrammarError(GrammarError):
    """Raised when a grammar definition is malformed, e.g. a function
    option without a call syntax or a pattern with an unknown tag.
    """

    code = GrammarError.INVALID_GRAMMAR_ERR


class PropertyNotFoundError(GrammarError, KeyError):
    """Raised by strict registry lookups for an unregistered property."""

    code = GrammarError.PROPERTY_NOT_FOUND_ERR

    def __str__(self):
        return self.message
