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


from .extract import extract_separator, scan_top_level

_OPERATORS = ('+', '-', '*', '/')


def _resolve_separator(s, separator):
    if separator:
        return separator
    return extract_separator(s) or ' '


def split_multi_value(s, separator):
    """Splits a multi-value string on a top-level separator.

    Separators nested inside parentheses or quotes are not split points.

    Arguments:
        s (str): The multi-value string, e.g. '1px solid rgba(0,0,0,.5)'.
        separator (str): A single separator character.
    Returns:
        list[str]: The trimmed, non-empty parts.
    """
    if not s:
        return []
    parts = list()
    start = 0
    for index, char, top_level in scan_top_level(s):
        if top_level and char == separator:
            parts.append(s[start:index])
            start = index + 1
    parts.append(s[start:])
    parts = [x.strip() for x in parts]
    return [x for x in parts if len(x) > 0]


def update_multi_value(s, value, index, separator=None):
    """Replaces one entry of a multi-value string.

    Arguments:
        s (str): The multi-value string.
        value (str): The new entry.
        index (int): The zero-based index of the entry. An index equal to
            the number of entries appends `value`.
        separator (str, optional): The separator. If not specified, the
            separator of `s` is detected, falling back to ' '.
    Returns:
        str: The new multi-value string, or `s` if `index` is out of range.
    """
    separator = _resolve_separator(s, separator)
    values = split_multi_value(s, separator)
    if index < 0 or index > len(values):
        return s
    if index == len(values):
        values.append(value)
    else:
        values[index] = value
    return separator.join(values)


def delete_multi_value(s, index, separator=None):
    """Deletes one entry of a multi-value string.

    Empty entries are always dropped, so '1px  3px' never keeps an empty
    slot.

    Arguments:
        s (str): The multi-value string.
        index (int): The zero-based index of the entry.
        separator (str, optional): The separator. If not specified, the
            separator of `s` is detected, falling back to ' '.
    Returns:
        str: The new multi-value string. Deleting the sole entry returns an
            empty string; an out-of-range `index` returns `s`.
    """
    separator = _resolve_separator(s, separator)
    values = split_multi_value(s, separator)
    if index < 0 or index >= len(values):
        return s
    values[index] = ''
    return separator.join(x for x in values if len(x) > 0)


def is_multi_value(s):
    """Returns True if `s` holds at least two top-level entries."""
    if not s or len(s.strip()) == 0:
        return False
    separator = extract_separator(s)
    if separator is None:
        return False
    return len(split_multi_value(s, separator)) >= 2


def split_expression(expression):
    """Splits a math expression into values and operators.

    Dangling leading and trailing operators are dropped. '+', '*' and '/'
    need no surrounding whitespace; '-' only acts as an operator when it
    stands alone, so '-5px' and 'var(--x)' remain values.

    Arguments:
        expression (str): The expression, e.g. '10px + 25px - 30%'.
    Returns:
        tuple[list[str], list[str]]: The values, e.g.
            ['10px', '25px', '30%'], and the operators, e.g. ['+', '-'].
    """
    if not expression or len(expression.strip()) == 0:
        return [], []
    normalized = ''
    for _, char, top_level in scan_top_level(expression):
        if top_level and char in ('+', '*', '/'):
            normalized += ' {} '.format(char)
        else:
            normalized += char

    values = list()
    operators = list()
    expect_value = True
    for token in split_multi_value(normalized, ' '):
        if token in _OPERATORS:
            if not expect_value:
                operators.append(token)
                expect_value = True
            continue
        values.append(token)
        expect_value = False

    while len(operators) > 0 and len(operators) >= len(values):
        operators.pop()
    return values, operators
