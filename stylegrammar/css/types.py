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


import re
from abc import ABC, abstractmethod
from enum import Enum

from ..exception import InvalidGrammarError

_RE_ALTERNATIVE = re.compile(r'\|+')

_RE_PATTERN_TAG = re.compile(r'[a-zA-Z]+')


class GrammarType(Enum):
    """Represents the kind of a grammar node."""

    KEYWORD = 'keyword'
    NUMBER = 'number'
    UNIT = 'unit'
    COLOR = 'color'
    URL = 'url'
    VARIABLE = 'variable'
    EXPRESSION = 'expression'
    FUNCTION = 'function'
    PATTERN = 'pattern'


class PatternTag(object):
    LENGTH = 'length'
    NUMBER = 'number'
    COLOR = 'color'
    KEYWORD = 'keyword'
    URL = 'url'


pattern_tag_set = {
    PatternTag.LENGTH, PatternTag.NUMBER, PatternTag.COLOR,
    PatternTag.KEYWORD, PatternTag.URL,
}


class GrammarNode(ABC):
    """An abstract base class for a node of a property value grammar."""

    def __eq__(self, other):
        if not isinstance(other, GrammarNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join(repr(x) for x in self._key()[1:]))

    def _key(self):
        return self.type,

    @property
    def name(self):
        """str: The name of this node."""
        return self.type.value

    @property
    @abstractmethod
    def type(self):
        """GrammarType: The kind of this node."""
        raise NotImplementedError


class Keyword(GrammarNode):
    """Represents a literal keyword such as 'auto' or 'space-between'."""

    def __init__(self, name, value=None):
        if value is None:
            value = name
        self._name = name
        self._value = value

    def _key(self):
        return self.type, self._name, self._value

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return GrammarType.KEYWORD

    @property
    def value(self):
        """str: The literal a value must be equal to."""
        return self._value


class Number(GrammarNode):
    """Represents a plain decimal number without a unit."""

    @property
    def type(self):
        return GrammarType.NUMBER


class Unit(GrammarNode):
    """Represents a scalable length carrying a specific unit, e.g. 'px'."""

    def __init__(self, name):
        if not isinstance(name, str) or len(name) == 0:
            raise InvalidGrammarError(
                'Expected a unit name: ' + repr(name))
        self._name = name

    def _key(self):
        return self.type, self._name

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return GrammarType.UNIT


class Color(GrammarNode):
    @property
    def type(self):
        return GrammarType.COLOR


class Url(GrammarNode):
    @property
    def type(self):
        return GrammarType.URL


class Variable(GrammarNode):
    """Represents a custom property reference 'var(--name[, fallback])'.

    Arguments:
        names (iterable[str], optional): The declared custom property names
            the reference may use, e.g. ['--gap', '--color']. If not
            specified, any well-formed name is accepted.
    """

    def __init__(self, names=None):
        if names is not None:
            names = frozenset(
                x[4:-1] if x.startswith('var(') and x.endswith(')') else x
                for x in names)
        self._names = names

    def _key(self):
        names = (None if self._names is None
                 else tuple(sorted(self._names)))
        return self.type, names

    @property
    def name(self):
        return 'var'

    @property
    def names(self):
        """frozenset[str]: The declared custom property names, or None."""
        return self._names

    @property
    def type(self):
        return GrammarType.VARIABLE


class Expression(GrammarNode):
    """Represents a free-form math expression such as 'calc(...)'."""

    def __init__(self, name='calc'):
        if not isinstance(name, str) or len(name) == 0:
            raise InvalidGrammarError(
                'Expected an expression name: ' + repr(name))
        self._name = name

    def _key(self):
        return self.type, self._name

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return GrammarType.EXPRESSION


class Function(GrammarNode):
    """Represents a named function call whose arguments follow a grammar.

    Arguments:
        name (str): The function name, e.g. 'minmax'.
        arguments (iterable[GrammarNode]): The argument grammars.
        separator (str, optional): The argument separator.
        ordered (bool, optional): If True, a call must have as many
            arguments as `arguments` and each argument must match the
            grammar at the same position. Otherwise every argument must
            match any of `arguments`.
    """

    def __init__(self, name, arguments, separator=',', ordered=True):
        if not isinstance(name, str) or len(name) == 0:
            raise InvalidGrammarError(
                'Expected a function name: ' + repr(name))
        arguments = tuple(arguments)
        for argument in arguments:
            if not isinstance(argument, GrammarNode):
                raise InvalidGrammarError(
                    "function '{}': expected a grammar node, got {}".format(
                        name, repr(argument)))
        self._name = name
        self._arguments = arguments
        self._separator = separator
        self._ordered = ordered

    def _key(self):
        return (self.type, self._name, self._arguments, self._separator,
                self._ordered)

    @property
    def arguments(self):
        """tuple[GrammarNode]: The argument grammars."""
        return self._arguments

    @property
    def name(self):
        return self._name

    @property
    def ordered(self):
        return self._ordered

    @property
    def separator(self):
        return self._separator

    @property
    def type(self):
        return GrammarType.FUNCTION


class Pattern(GrammarNode):
    """Represents a composite value built from primitive tags.

    Arguments:
        syntax (str): The pattern syntax, e.g. 'length length length color'
            or 'number | [number / number]'. Alternatives are separated by
            '|'; each alternative is a sequence of the tags 'length',
            'number', 'color', 'keyword' and 'url'.
        options (iterable[GrammarNode], optional): The nested grammars the
            'length' and 'keyword' tags are checked against.
    """

    def __init__(self, syntax, options=()):
        self._syntax = syntax
        self._options = tuple(options)
        self._alternatives = Pattern.parse_syntax(syntax)

    def _key(self):
        return self.type, self._syntax, self._options

    @property
    def alternatives(self):
        """tuple[tuple[str]]: The parsed alternatives."""
        return self._alternatives

    @property
    def keywords(self):
        """set[str]: The keyword values of the options."""
        return {option.value for option in self._options
                if option.type == GrammarType.KEYWORD}

    @property
    def options(self):
        return self._options

    @property
    def syntax(self):
        return self._syntax

    @property
    def type(self):
        return GrammarType.PATTERN

    @staticmethod
    def parse_syntax(syntax):
        """Parses a pattern syntax into alternatives.

        Arguments:
            syntax (str): The pattern syntax.
        Returns:
            tuple[tuple[str]]: The alternatives.

        Examples:
            >>> Pattern.parse_syntax('number | [number / number]')
            (('number',), ('number', 'number'))
        """
        if not isinstance(syntax, str):
            raise InvalidGrammarError(
                'Expected a pattern syntax: ' + repr(syntax))
        alternatives = list()
        for alternative in _RE_ALTERNATIVE.split(syntax):
            tags = tuple(x.lower()
                         for x in _RE_PATTERN_TAG.findall(alternative))
            if len(tags) == 0:
                continue
            unknown = [x for x in tags if x not in pattern_tag_set]
            if len(unknown) > 0:
                raise InvalidGrammarError(
                    "pattern '{}': unknown tag(s) {}".format(
                        syntax, repr(unknown).strip('[]')))
            alternatives.append(tags)
        if len(alternatives) == 0:
            raise InvalidGrammarError(
                'Empty pattern syntax: ' + repr(syntax))
        return tuple(alternatives)
