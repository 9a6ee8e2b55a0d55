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
from logging import getLogger
from urllib.parse import urlsplit

import tinycss2
import tinycss2.color3

from .extract import extract_function, extract_number, extract_separator, \
    extract_value
from .multivalue import split_multi_value
from .props import css_grammar_registry
from .types import GrammarNode, GrammarType, PatternTag, Variable

_RE_NUMBER = re.compile(r'-?([0-9]+(\.[0-9]+)?|\.[0-9]+)')

_RE_SCALABLE_LENGTH = re.compile(r'-?[0-9]+(\.[0-9]+)?[a-zA-Z%]+')

_RE_LENGTH_KEYWORD = re.compile(r'[a-zA-Z]+(-[a-zA-Z]+)*')

_RE_FUNCTION_SHAPE = re.compile(r'[a-zA-Z-]+\(.*\)', re.DOTALL)

_RE_VARIABLE_NAME = re.compile(r'--[a-zA-Z][a-zA-Z0-9-]*')

_RE_URL = re.compile(
    r'https?://'
    r'((?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}'
    r'|(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)'
    r'|localhost)'
    r'(?::[0-9]{1,5})?'
    r"(?:/[\w~!$&'()*+,;=:@.%-]*)*"
    r"(?:\?[\w~!$&'()*+,;=:@./?%-]*)?"
    r"(?:#[\w~!$&'()*+,;=:@./?%-]*)?",
    re.IGNORECASE)

_RE_QUOTED = re.compile(r'^["\'`]|["\'`]$')

_NON_LENGTH_FUNCTIONS = {'rgb', 'rgba', 'hsl', 'hsla'}


def is_number_valid(value):
    """Returns True if `value` is a plain decimal number without a unit."""
    return (isinstance(value, str)
            and _RE_NUMBER.fullmatch(value) is not None)


def is_length_scalable(value):
    """Returns True if `value` is a number followed by a unit, e.g. '10px'
    or '-2.5%'.
    """
    return (isinstance(value, str)
            and _RE_SCALABLE_LENGTH.fullmatch(value) is not None)


def is_length_keyword(value):
    """Returns True if `value` looks like a keyword, e.g. 'max-content'."""
    return (isinstance(value, str)
            and _RE_LENGTH_KEYWORD.fullmatch(value) is not None)


def is_length_function(value):
    """Returns True if `value` looks like a function call producing a
    length. Color functions are excluded.
    """
    if not isinstance(value, str):
        return False
    name = extract_function(value)
    if len(name) == 0 or name.lower() in _NON_LENGTH_FUNCTIONS:
        return False
    return _RE_FUNCTION_SHAPE.fullmatch(value.strip()) is not None


def _parse_variable(value):
    if not isinstance(value, str) or value != value.strip():
        return None
    if extract_function(value) != 'var':
        return None
    token = tinycss2.parse_one_component_value(value)
    if token.type != 'function' or token.name != 'var':
        return None
    arguments = token.arguments
    if (len(arguments) == 0 or arguments[0].type != 'ident'
            or _RE_VARIABLE_NAME.fullmatch(arguments[0].value) is None):
        return None
    name = arguments[0].value
    if len(arguments) == 1:
        return name, None
    if arguments[1].type != 'literal' or arguments[1].value != ',':
        return None
    fallback = tinycss2.serialize(arguments[2:]).strip()
    if len(fallback) == 0:
        return None
    return name, fallback


def is_function_variable(value):
    """Returns True if `value` is a well-formed custom property reference.

    Arguments:
        value (str): The value, e.g. 'var(--gap)' or 'var(--size, 16px)'.
    Returns:
        bool: False for surrounding whitespace, a malformed name or an empty
            fallback such as 'var(--size, )'.
    """
    return _parse_variable(value) is not None


def get_variable_name(value):
    """Returns the custom property name of a 'var()' reference, or None."""
    variable = _parse_variable(value)
    return None if variable is None else variable[0]


def is_color_valid(value):
    """Returns True if `value` is a hex color, an 'rgb()'/'rgba()' color or
    a named color.

    Hex colors must have 3 or 6 digits.
    """
    if not isinstance(value, str) or value != value.strip():
        return False
    token = tinycss2.parse_one_component_value(value, skip_comments=True)
    if token.type == 'hash':
        if len(token.value) not in (3, 6):
            return False
    elif token.type == 'function':
        if token.lower_name not in ('rgb', 'rgba'):
            return False
    elif token.type != 'ident':
        return False
    return tinycss2.color3.parse_color(token) is not None


def is_url_valid(value):
    """Returns True if `value` is an absolute http(s) URL.

    Arguments:
        value (str): The URL, optionally wrapped in quotes, e.g.
            '"https://example.com/image.png"'.
    Returns:
        bool: False for relative URLs, 'data:' URIs, 'url(...)' wrappers,
            non-http(s) protocols or URLs containing whitespace.
    """
    if not isinstance(value, str):
        return False
    url = _RE_QUOTED.sub('', value.strip()).strip()
    if len(url) < 10 or '://' not in url:
        return False
    if url.startswith('data:') or url.startswith('url('):
        return False
    if _RE_URL.fullmatch(url) is None:
        return False
    try:
        urlsplit(url).port
    except ValueError:
        return False
    return True


class GrammarValidator(object):
    """Decides whether a style value matches a grammar.

    Validation never raises for user input: every mismatch yields False
    and emits a debug message through the logger. Problems in the grammar
    data itself are logged as warnings.

    Arguments:
        logger (logging.Logger, optional): The diagnostics logger.
    """

    def __init__(self, logger=None):
        if logger is None:
            logger = getLogger(
                '{}.{}'.format(__name__, self.__class__.__name__))
        self._logger = logger
        self._validators = {
            GrammarType.KEYWORD: self._validate_keyword,
            GrammarType.NUMBER: self._validate_number,
            GrammarType.UNIT: self._validate_unit,
            GrammarType.COLOR: self._validate_color,
            GrammarType.URL: self._validate_url,
            GrammarType.VARIABLE: self._validate_variable,
            GrammarType.EXPRESSION: self._validate_expression,
            GrammarType.FUNCTION: self._validate_function,
            GrammarType.PATTERN: self._validate_pattern,
        }
        self._tag_validators = {
            PatternTag.LENGTH: self._validate_length_tag,
            PatternTag.NUMBER: self._validate_number_tag,
            PatternTag.COLOR: self._validate_color_tag,
            PatternTag.KEYWORD: self._validate_keyword_tag,
            PatternTag.URL: self._validate_url_tag,
        }
        self._length_strategies = (
            ('scalable', self._match_scalable),
            ('number', self._match_number),
            ('keyword', self._match_keyword),
            ('function', self._match_function),
        )

    @property
    def logger(self):
        return self._logger

    def find_option(self, value, options):
        """Returns the first option `value` matches.

        Arguments:
            value (str): The style value.
            options (iterable[GrammarNode]): The candidate grammars.
        Returns:
            GrammarNode: The matching option, or None.
        """
        for option in options:
            if self.is_option_valid(value, option):
                return option
        return None

    def is_multi_value_valid(self, property_key, value, separator,
                             registry=None):
        """Returns True if every entry of a multi-value string is a valid
        value of the property.

        Arguments:
            property_key (str): The property name, e.g. 'font-family'.
            value (str): The multi-value string.
            separator (str): A single separator character.
            registry (GrammarRegistry, optional): The grammar registry.
        Returns:
            bool: False if there is no entry at all.
        """
        if not isinstance(separator, str) or len(separator) != 1:
            self._logger.warning(
                "property '{}': invalid separator {}".format(
                    property_key, repr(separator)))
            return False
        if not isinstance(value, str):
            return False
        values = split_multi_value(value, separator)
        if len(values) == 0:
            self._logger.debug(
                "property '{}': empty multi-value".format(property_key))
            return False
        return all(self.is_value_valid(property_key, x, registry)
                   for x in values)

    def is_option_valid(self, value, option):
        """Returns True if `value` matches a grammar node."""
        if not isinstance(option, GrammarNode):
            self._logger.warning(
                'expected a grammar node, got {}'.format(repr(option)))
            return False
        if not isinstance(value, str):
            self._logger.debug(
                '{}: expected a string, got {}'.format(
                    option.type.value, repr(value)))
            return False
        return self._validators[option.type](value, option)

    def is_value_valid(self, property_key, value, registry=None):
        """Returns True if `value` is a valid value of the property.

        Arguments:
            property_key (str): The property name, e.g. 'grid-template-rows'
                or 'gridTemplateRows'.
            value (str): The style value.
            registry (GrammarRegistry, optional): The grammar registry. If
                not specified, the default registry is used.
        Returns:
            bool: True if any option of the property matches `value`.
        """
        if registry is None:
            registry = css_grammar_registry
        options = registry.lookup(property_key)
        if options is None:
            self._logger.warning(
                "property '{}': not registered".format(property_key))
            return False
        for option in options:
            if self.is_option_valid(value, option):
                return True
        self._logger.debug(
            "property '{}': invalid value {}".format(
                property_key, repr(value)))
        return False

    def match_length(self, value, options=()):
        """Returns the name of the first length strategy `value` matches.

        The strategies are tried in the order 'scalable', 'number',
        'keyword' and 'function'.

        Arguments:
            value (str): The value, e.g. '10px' or 'min(0px,1fr)'.
            options (iterable[GrammarNode], optional): The nested grammars
                restricting the units, keywords and functions.
        Returns:
            str: The strategy name, or None.
        """
        if not isinstance(value, str):
            return None
        units, keywords, functions = _classify_options(options)
        for name, strategy in self._length_strategies:
            if strategy(value, units, keywords, functions):
                return name
        return None

    def _match_function(self, value, units, keywords, functions):
        if not is_length_function(value):
            return False
        name = extract_function(value)
        option = functions.get(name)
        if option is None:
            if name == 'var' and len(functions) == 0:
                option = Variable()
            else:
                self._logger.debug(
                    "length: function '{}' not allowed in {}".format(
                        name, repr(value)))
                return False
        return self.is_option_valid(value, option)

    def _match_keyword(self, value, units, keywords, functions):
        return is_length_keyword(value) and value in keywords

    def _match_number(self, value, units, keywords, functions):
        return is_number_valid(value)

    def _match_scalable(self, value, units, keywords, functions):
        if not is_length_scalable(value):
            return False
        if len(units) == 0:
            return True
        unit = value[len(extract_number(value)):]
        return unit.lower() in units

    def _validate_color(self, value, option):
        if is_color_valid(value):
            return True
        self._logger.debug('color: invalid value {}'.format(repr(value)))
        return False

    def _validate_color_tag(self, value, option):
        return is_color_valid(value)

    def _validate_expression(self, value, option):
        if value.startswith(option.name + '(') and value.endswith(')'):
            return True
        self._logger.debug("expression '{}': invalid value {}".format(
            option.name, repr(value)))
        return False

    def _validate_function(self, value, option):
        arguments = option.arguments
        if len(arguments) == 0:
            self._logger.warning(
                "function '{}': no arguments declared".format(option.name))
            return False
        name = extract_function(value)
        if name != option.name:
            self._logger.debug("function '{}': invalid value {}".format(
                option.name, repr(value)))
            return False
        inner = extract_value(value.strip())
        if inner is None:
            self._logger.debug(
                "function '{}': unbalanced value {}".format(
                    option.name, repr(value)))
            return False
        values = split_multi_value(inner, option.separator)
        if option.ordered:
            if len(values) != len(arguments):
                self._logger.debug(
                    "function '{}': expected {} argument(s), got {}".format(
                        option.name, len(arguments), len(values)))
                return False
            return all(self.is_option_valid(x, argument)
                       for x, argument in zip(values, arguments))
        if len(values) == 0:
            self._logger.debug(
                "function '{}': no arguments".format(option.name))
            return False
        return all(any(self.is_option_valid(x, argument)
                       for argument in arguments)
                   for x in values)

    def _validate_keyword(self, value, option):
        return value == option.value

    def _validate_keyword_tag(self, value, option):
        return value in option.keywords

    def _validate_length_tag(self, value, option):
        return self.match_length(value, option.options) is not None

    def _validate_number(self, value, option):
        return is_number_valid(value)

    def _validate_number_tag(self, value, option):
        return is_number_valid(value)

    def _validate_pattern(self, value, option):
        separator = extract_separator(value) or ' '
        values = split_multi_value(value, separator)
        for alternative in option.alternatives:
            if len(values) != len(alternative):
                continue
            if all(self._tag_validators[tag](x, option)
                   for x, tag in zip(values, alternative)):
                return True
        self._logger.debug("pattern '{}': invalid value {}".format(
            option.syntax, repr(value)))
        return False

    def _validate_unit(self, value, option):
        if not is_length_scalable(value):
            return False
        unit = value[len(extract_number(value)):]
        return unit.lower() == option.name.lower()

    def _validate_url(self, value, option):
        if is_url_valid(value):
            return True
        self._logger.debug('url: invalid value {}'.format(repr(value)))
        return False

    def _validate_url_tag(self, value, option):
        return is_url_valid(value)

    def _validate_variable(self, value, option):
        if not is_function_variable(value):
            self._logger.debug(
                'variable: invalid value {}'.format(repr(value)))
            return False
        if option.names is None:
            return True
        name = get_variable_name(value)
        if name in option.names:
            return True
        self._logger.debug(
            "variable: '{}' is not declared".format(name))
        return False


def _classify_options(options):
    units = set()
    keywords = set()
    functions = dict()
    for option in options or ():
        if not isinstance(option, GrammarNode):
            continue
        if option.type == GrammarType.UNIT:
            units.add(option.name.lower())
        elif option.type == GrammarType.KEYWORD:
            keywords.add(option.value)
        elif option.type in (GrammarType.FUNCTION,
                             GrammarType.EXPRESSION,
                             GrammarType.VARIABLE):
            functions.setdefault(option.name, option)
    return units, keywords, functions


_validator = GrammarValidator()


def find_option(value, options):
    return _validator.find_option(value, options)


def is_multi_value_valid(property_key, value, separator, registry=None):
    return _validator.is_multi_value_valid(property_key, value, separator,
                                           registry)


def is_option_valid(value, option):
    return _validator.is_option_valid(value, option)


def is_value_valid(property_key, value, registry=None):
    return _validator.is_value_valid(property_key, value, registry)


def match_length(value, options=()):
    return _validator.match_length(value, options)
