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

_RE_NUMBER = re.compile(r'[0-9]+(\.[0-9]+)?')

_RE_LENGTH = re.compile(r'[a-zA-Z%]+(?:-[a-zA-Z%]+)*')

_RE_FUNCTION_CALL = re.compile(r'(?P<name>[^\s(]+)\((?P<value>.*)\)',
                               re.DOTALL)

_RE_FUNCTION_NAME = re.compile(r'(?P<name>[a-zA-Z\-]+)\(')

_RE_UNIT = re.compile(r'[a-zA-Z%]+')

_QUOTES = ('"', "'")

separator_candidates = (' ', ',', '/', '|')
"""tuple[str]: The characters recognized as top-level separators of a
multi-value list, in no particular priority: the first one found wins.
"""


def scan(s, start='(', end=')'):
    """Scans a string character by character, tracking the nesting depth
    and quoted sections.

    A quoted section runs from a quote character to the next occurrence of
    the same character, or to the end of the string if it is never closed.
    Symbols inside a quoted section do not change the depth.

    Arguments:
        s (str): The string to scan.
        start (str, optional): The opening symbol.
        end (str, optional): The closing symbol.
    Returns:
        generator: Yields (index, char, depth, quoted) tuples. `depth` is
            the nesting depth after `char`.
    """
    depth = 0
    quote = None
    for index, char in enumerate(s or ''):
        if quote is not None:
            if char == quote:
                quote = None
            yield index, char, depth, True
            continue
        if char in _QUOTES:
            quote = char
            yield index, char, depth, True
            continue
        if char == start:
            depth += 1
        elif char == end:
            depth -= 1
        yield index, char, depth, False


def scan_top_level(s):
    """Yields (index, char, top_level) tuples. `top_level` is True if the
    character is neither nested inside parentheses nor quoted.
    """
    for index, char, depth, quoted in scan(s):
        yield index, char, not quoted and depth == 0


def is_balanced(s, start='(', end=')'):
    """Returns True if every closing symbol of `s` outside quotes matches a
    preceding opening one and none is left open.
    """
    depth = 0
    for _, _, depth, _ in scan(s, start, end):
        if depth < 0:
            return False
    return depth == 0


def extract_between(s, start='(', end=')'):
    """Extracts the content of the first balanced group of a string.

    Symbols inside quotes are ignored.

    Arguments:
        s (str): The string to process, e.g. 'fit-content(length)'.
        start (str, optional): The opening symbol.
        end (str, optional): The closing symbol.
    Returns:
        str: The content between the symbols, e.g. 'length'. Returns None
            if there is no such group or it is not closed.
    """
    begin = None
    for index, char, depth, quoted in scan(s, start, end):
        if quoted:
            continue
        if depth < 0:
            return None
        if begin is None:
            if char == start:
                begin = index
        elif depth == 0:
            return s[begin + 1:index]
    return None


def extract_number(s):
    """Extracts the leading decimal number of a string.

    The number must start at position 0. A single leading '-' is allowed;
    a leading '+' or '.' is not. Extraction stops at a second decimal
    point.

    Arguments:
        s (str): The string, e.g. '10px', '-10.5rem' or '50%'.
    Returns:
        str: The number, e.g. '10'. Returns an empty string if `s` does not
            start with a number.

    Examples:
        >>> extract_number('-0.0001px')
        '-0.0001'
        >>> extract_number('10.10.10px')
        '10.10'
        >>> extract_number('--10px')
        ''
    """
    if not s:
        return ''
    negative = s.startswith('-')
    matched = _RE_NUMBER.match(s[1:] if negative else s)
    if matched is None:
        return ''
    return '-' + matched.group() if negative else matched.group()


def extract_length(s):
    """Extracts the first unit or keyword of a string.

    Arguments:
        s (str): The string, e.g. '10px', 'max-content' or
            'fit-content(10px)'.
    Returns:
        str: The first run of letters, '%' and hyphenated segments. If `s`
            also contains a balanced parenthesis group, '()' is appended to
            mark a function-shaped value, e.g. 'fit-content()'. Returns an
            empty string if nothing is found.
    """
    if not s:
        return ''
    matched = _RE_LENGTH.search(s)
    if matched is None:
        return ''
    length = matched.group()
    if extract_between(s) is not None:
        return length + '()'
    return length


def extract_value(s):
    """Extracts the arguments of a function call when the whole string is a
    single call.

    Arguments:
        s (str): The string, e.g. 'minmax(min(0px,0px),0px)'.
    Returns:
        str: The inner content, e.g. 'min(0px,0px),0px'. Returns `s` itself
            if it is not a single function call, or None if its
            parentheses are unbalanced.
    """
    if not s:
        return ''
    if not is_balanced(s):
        return None
    matched = _RE_FUNCTION_CALL.fullmatch(s)
    if matched is None:
        return s
    value = matched.group('value')
    if not is_balanced(value):
        # e.g. 'a(b) c(d)': two calls, not one
        return s
    return value


def extract_function(s):
    """Extracts the function name when the whole (trimmed) string is a
    single function call.

    Arguments:
        s (str): The string, e.g. 'repeat(1,minmax(0px,0px))'.
    Returns:
        str: The function name, e.g. 'repeat'. Returns an empty string if
            the call is unbalanced or followed by anything else.
            Parentheses inside quoted arguments are ignored.
    """
    if not s:
        return ''
    s = s.strip()
    matched = _RE_FUNCTION_NAME.match(s)
    if matched is None:
        return ''
    name = matched.group('name')
    for index, _, depth, quoted in scan(s):
        if index > len(name) and depth == 0 and not quoted:
            return name if index == len(s) - 1 else ''
    return ''


def extract_separator(s):
    """Detects the top-level separator of a multi-value string.

    Arguments:
        s (str): The string, e.g. '1px 2px 3px' or 'rgb(0,0,0),red'.
    Returns:
        str: The first separator character found outside parentheses and
            quotes. Returns None for an empty or URL-like string, or if
            there is no such character.
    """
    if not s or len(s.strip()) == 0 or '://' in s:
        return None
    for _, char, top_level in scan_top_level(s):
        if top_level and char in separator_candidates:
            return char
    return None


def split_dimension(s):
    """Splits a dimension into its number and unit.

    Arguments:
        s (str): The dimension, e.g. '-2.5rem'.
    Returns:
        tuple[str, str]: The number and the unit, e.g. ('-2.5', 'rem').
            The unit is empty if the rest of `s` is not a plain unit.
    """
    number = extract_number(s)
    if len(number) == 0:
        return '', ''
    unit = s[len(number):]
    if _RE_UNIT.fullmatch(unit) is None:
        return number, ''
    return number, unit
