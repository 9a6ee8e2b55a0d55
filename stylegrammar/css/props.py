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
from collections.abc import Mapping
from logging import getLogger

from .extract import extract_between, extract_function, extract_length, \
    extract_separator
from .multivalue import split_multi_value
from .types import Color, Expression, Function, Keyword, Number, Pattern, \
    PatternTag, Unit, Url, Variable
from ..exception import InvalidGrammarError, PropertyNotFoundError

logger = getLogger(__name__)

_RE_UPPER_CASE = re.compile(r'[A-Z]')


def to_property_name(key):
    """Converts a camelCase property key into a kebab-case property name.

    Custom property names such as '--mainColor' are returned unchanged.

    Examples:
        >>> to_property_name('gridTemplateColumns')
        'grid-template-columns'
    """
    if key.startswith('--'):
        return key
    return _RE_UPPER_CASE.sub(lambda m: '-' + m.group().lower(), key).lower()


class GrammarRegistry(Mapping):
    """An immutable mapping of property names to their grammar options.

    Keys are kebab-case property names. Lookups also accept camelCase keys.

    Arguments:
        grammar_map (dict, optional): The property names and their options.
    """

    def __init__(self, grammar_map=None):
        self._grammar_map = dict()
        for key, options in (grammar_map or dict()).items():
            self._grammar_map[to_property_name(key)] = tuple(options)

    def __getitem__(self, key):
        if not isinstance(key, str):
            raise KeyError(key)
        return self._grammar_map[to_property_name(key)]

    def __iter__(self):
        return iter(self._grammar_map)

    def __len__(self):
        return len(self._grammar_map)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__,
                               repr(sorted(self._grammar_map)))

    def get_options(self, key):
        """Returns the grammar options of a property.

        Arguments:
            key (str): The property name.
        Returns:
            tuple[GrammarNode]: The options.
        Raises:
            PropertyNotFoundError: If the property is not registered.
        """
        options = self.lookup(key)
        if options is None:
            raise PropertyNotFoundError(
                "property '{}' is not registered".format(key))
        return options

    def lookup(self, key):
        """Returns the grammar options of a property, or None."""
        if not isinstance(key, str):
            return None
        return self._grammar_map.get(to_property_name(key))


def _create_argument(tag, options):
    if tag == PatternTag.NUMBER:
        return Number()
    elif tag == PatternTag.COLOR:
        return Color()
    elif tag == PatternTag.URL:
        return Url()
    elif tag in (PatternTag.LENGTH, PatternTag.KEYWORD):
        return Pattern(tag, options)
    raise InvalidGrammarError(
        "unknown function argument '{}'".format(tag))


def _create_function(syntax, name, value, options):
    function_name = extract_function(value) or name.replace('()', '')
    if len(function_name) == 0:
        raise InvalidGrammarError(
            "'{}': missing function name".format(syntax))
    arguments_syntax = extract_between(syntax)
    if arguments_syntax is None or len(arguments_syntax.strip()) == 0:
        raise InvalidGrammarError(
            "function '{}': missing arguments in '{}'".format(
                function_name, syntax))
    separator = extract_separator(arguments_syntax) or ','
    tags = split_multi_value(arguments_syntax, separator)
    arguments = [_create_argument(x, options) for x in tags]
    return Function(function_name, arguments, separator=separator)


def create_grammar_nodes(option):
    """Creates grammar nodes from a raw option definition.

    Arguments:
        option (dict): The option definition, e.g.
            {'name': 'px', 'value': 'px', 'syntax': 'length'}.
    Returns:
        list[GrammarNode]: The grammar nodes. A 'variant' option yields its
            nested options; a keyword option yields itself followed by its
            nested keywords.
    Raises:
        InvalidGrammarError: If the definition is malformed.
    """
    if not isinstance(option, Mapping):
        raise InvalidGrammarError(
            'Expected an option definition: ' + repr(option))
    syntax = option.get('syntax')
    if not isinstance(syntax, str) or len(syntax.strip()) == 0:
        raise InvalidGrammarError(
            'Missing option syntax: ' + repr(option))
    syntax = syntax.strip()
    name = option.get('name') or ''
    value = option.get('value') or ''
    options = create_grammar_options(option.get('options') or ())

    if syntax == 'keyword':
        keyword = value or name
        if len(keyword) == 0:
            raise InvalidGrammarError(
                'Missing keyword value: ' + repr(option))
        return [Keyword(name or keyword, keyword)] + [
            x for x in options if isinstance(x, Keyword)]
    elif syntax == 'length':
        unit = extract_length(value) or extract_length(name)
        if len(unit) == 0 or unit.endswith('()'):
            raise InvalidGrammarError(
                'Missing unit: ' + repr(option))
        return [Unit(unit)]
    elif syntax == 'number':
        return [Number()]
    elif syntax == 'color':
        return [Color()]
    elif syntax == 'url':
        return [Url()]
    elif syntax == 'variable':
        return [Variable(option.get('names'))]
    elif syntax == 'expression':
        expression_name = extract_function(value) or name.replace('()', '')
        return [Expression(expression_name or 'calc')]
    elif syntax == 'variant':
        if len(options) == 0:
            raise InvalidGrammarError(
                'Empty variant: ' + repr(option))
        return options
    elif syntax.startswith('function'):
        return [_create_function(syntax, name, value, options)]
    return [Pattern(syntax, options)]


def create_grammar_options(options):
    nodes = list()
    for option in options:
        nodes.extend(create_grammar_nodes(option))
    return nodes


def load_grammar_registry(raw_definitions):
    """Builds a grammar registry from plain data.

    Arguments:
        raw_definitions (list[dict]): The property definitions, e.g.
            [{'key': 'width', 'options': [...]}]. A dict of property names
            and option lists is also accepted.
    Returns:
        GrammarRegistry: The grammar registry.
    Raises:
        InvalidGrammarError: If a definition is malformed.
    """
    if isinstance(raw_definitions, Mapping):
        raw_definitions = [{'key': key, 'options': options}
                           for key, options in raw_definitions.items()]
    grammar_map = dict()
    for definition in raw_definitions:
        key = definition.get('key') if isinstance(definition,
                                                  Mapping) else None
        if not isinstance(key, str) or len(key) == 0:
            raise InvalidGrammarError(
                'Missing property key: ' + repr(definition))
        grammar_map[key] = create_grammar_options(
            definition.get('options') or ())
    registry = GrammarRegistry(grammar_map)
    logger.debug('loaded {} properties'.format(len(registry)))
    return registry


def _keyword(name):
    return {'name': name, 'value': name, 'syntax': 'keyword'}


def _keywords(*names):
    return [_keyword(x) for x in names]


def _unit(name):
    return {'name': name, 'value': name, 'syntax': 'length'}


_NUMBER = {'name': 'number', 'value': '0', 'syntax': 'number'}

_COLOR = {'name': 'color', 'value': '', 'syntax': 'color'}

_VARIABLE = {'name': 'var()', 'value': 'var(--placeholder)',
             'syntax': 'variable'}

_LENGTH = [_unit(x) for x in (
    'px', '%', 'em', 'rem', 'ch', 'vw', 'vh', 'vmin', 'vmax')] + [_VARIABLE]

_ANGLE = [_unit(x) for x in ('deg', 'rad', 'grad', 'turn')] + [_VARIABLE]

_MIN = {'name': 'min()', 'value': 'min(0px,0px)',
        'syntax': 'function(length,length)', 'options': _LENGTH}

_MAX = {'name': 'max()', 'value': 'max(0px,0px)',
        'syntax': 'function(length,length)', 'options': _LENGTH}

_CLAMP = {'name': 'clamp()', 'value': 'clamp(0px,0px,0px)',
          'syntax': 'function(length,length,length)',
          'options': _LENGTH + [_MIN, _MAX]}

_CALC = {'name': 'calc()', 'value': 'calc(0px)', 'syntax': 'expression'}

_LENGTH_MATH = _LENGTH + [_MIN, _MAX, _CLAMP, _CALC]

_LENGTH_MATH_AUTO = _LENGTH_MATH + _keywords('auto')

_LENGTH_MATH_CONTENT = _LENGTH_MATH_AUTO + _keywords(
    'min-content', 'max-content', 'fit-content')

_MINMAX = {'name': 'minmax()', 'value': 'minmax(0px,0px)',
           'syntax': 'function(length,length)',
           'options': [_unit('fr')] + _LENGTH_MATH_CONTENT}

_FIT_CONTENT = {'name': 'fit-content()', 'value': 'fit-content(0px)',
                'syntax': 'function(length)', 'options': _LENGTH_MATH}

_GRID_TRACK = [_unit('fr')] + _LENGTH_MATH_CONTENT + [_MINMAX, _FIT_CONTENT]

_REPEAT = {'name': 'repeat()', 'value': 'repeat(1,0px)',
           'syntax': 'function(number,length)', 'options': _GRID_TRACK}

_GRID_TEMPLATE = _GRID_TRACK + _keywords('none', 'subgrid', 'masonry') + [
    _REPEAT,
    {'name': 'tracks', 'value': '0px 0px', 'syntax': 'length length',
     'options': _GRID_TRACK + [_REPEAT]},
    {'name': 'tracks', 'value': '0px 0px 0px',
     'syntax': 'length length length',
     'options': _GRID_TRACK + [_REPEAT]},
]

_GRID_LINE = [_NUMBER, _VARIABLE] + _keywords('auto') + [
    {'name': 'span', 'value': 'span 1', 'syntax': 'keyword number',
     'options': _keywords('span')},
]

_SPACING = _LENGTH_MATH_AUTO + [
    {'name': 'sides', 'value': '0px 0px', 'syntax': 'length length',
     'options': _LENGTH_MATH_AUTO},
    {'name': 'sides', 'value': '0px 0px 0px 0px',
     'syntax': 'length length length length',
     'options': _LENGTH_MATH_AUTO},
]

_SHADOW = [
    _VARIABLE,
    {'name': 'shadow', 'value': '0px 0px 0px black',
     'syntax': 'length length length color', 'options': _LENGTH},
] + _keywords('none')

_BORDER_STYLE = _keywords(
    'none', 'hidden', 'dotted', 'dashed', 'solid', 'double', 'groove',
    'ridge', 'inset', 'outset')

_BORDER = _keywords('none') + [
    _VARIABLE,
    {'name': 'border', 'value': '1px solid black',
     'syntax': 'length keyword color',
     'options': _LENGTH + _BORDER_STYLE},
]

_TRANSFORM = _keywords('none') + [_VARIABLE] + [
    {'name': '{}()'.format(x), 'value': '{}(0px)'.format(x),
     'syntax': 'function(length)', 'options': _LENGTH_MATH}
    for x in ('translateX', 'translateY', 'translateZ')
] + [
    {'name': '{}()'.format(x), 'value': '{}(0deg)'.format(x),
     'syntax': 'function(length)', 'options': _ANGLE}
    for x in ('rotate', 'rotateX', 'rotateY', 'rotateZ')
] + [
    {'name': '{}()'.format(x), 'value': '{}(1)'.format(x),
     'syntax': 'function(number)'}
    for x in ('scale', 'scaleX', 'scaleY', 'scaleZ')
]

_BACKGROUND_POSITION = [
    _VARIABLE,
    {'name': 'position', 'value': 'center', 'syntax': 'variant',
     'options': [
         {'name': 'keyword', 'value': 'center', 'syntax': 'keyword',
          'options': _keywords('top', 'right', 'bottom', 'left')},
         {'name': 'keywords', 'value': 'left top',
          'syntax': 'keyword keyword',
          'options': _keywords('top', 'right', 'bottom', 'left', 'center')},
         {'name': 'lengths', 'value': '0px 0px', 'syntax': 'length length',
          'options': _LENGTH},
     ]},
]

_BACKGROUND_REPEAT = [
    _VARIABLE,
    {'name': 'repeat', 'value': 'repeat', 'syntax': 'variant',
     'options': _keywords('repeat-x', 'repeat-y') + [
         {'name': 'keyword', 'value': 'repeat', 'syntax': 'keyword',
          'options': _keywords('space', 'round', 'no-repeat')},
         {'name': 'keywords', 'value': 'repeat no-repeat',
          'syntax': 'keyword keyword',
          'options': _keywords('repeat', 'space', 'round', 'no-repeat')},
     ]},
]

_property_grammars = [
    # [css-display-3]
    {'key': 'display', 'options': _keywords(
        'block', 'inline', 'inline-block', 'flex', 'inline-flex', 'grid',
        'inline-grid', 'flow-root', 'contents', 'none')},

    # [css-flexbox-1]
    {'key': 'flex-direction', 'options': _keywords(
        'row', 'row-reverse', 'column', 'column-reverse')},
    {'key': 'flex-wrap', 'options': _keywords(
        'nowrap', 'wrap', 'wrap-reverse')},
    {'key': 'flex-grow', 'options': [_NUMBER, _VARIABLE]},
    {'key': 'flex-shrink', 'options': [_NUMBER, _VARIABLE]},
    {'key': 'flex-basis', 'options': _LENGTH_MATH_CONTENT},
    {'key': 'order', 'options': [_NUMBER, _VARIABLE]},

    # [css-align-3]
    {'key': 'justify-content', 'options': _keywords(
        'flex-start', 'flex-end', 'start', 'end', 'center', 'left', 'right',
        'space-between', 'space-around', 'space-evenly', 'stretch',
        'normal')},
    {'key': 'justify-items', 'options': _keywords(
        'start', 'end', 'center', 'stretch', 'baseline', 'normal')},
    {'key': 'justify-self', 'options': _keywords(
        'auto', 'start', 'end', 'center', 'stretch', 'baseline', 'normal')},
    {'key': 'align-content', 'options': _keywords(
        'flex-start', 'flex-end', 'start', 'end', 'center', 'space-between',
        'space-around', 'space-evenly', 'stretch', 'normal')},
    {'key': 'align-items', 'options': _keywords(
        'flex-start', 'flex-end', 'start', 'end', 'center', 'stretch',
        'baseline', 'normal')},
    {'key': 'align-self', 'options': _keywords(
        'auto', 'flex-start', 'flex-end', 'start', 'end', 'center',
        'stretch', 'baseline', 'normal')},
    {'key': 'row-gap', 'options': _LENGTH_MATH},
    {'key': 'column-gap', 'options': _LENGTH_MATH},
    {'key': 'gap', 'options': _LENGTH_MATH + [
        {'name': 'gaps', 'value': '0px 0px', 'syntax': 'length length',
         'options': _LENGTH_MATH}]},

    # [css-grid-2]
    {'key': 'grid-template-columns', 'options': _GRID_TEMPLATE},
    {'key': 'grid-template-rows', 'options': _GRID_TEMPLATE},
    {'key': 'grid-auto-columns', 'options': _GRID_TRACK},
    {'key': 'grid-auto-rows', 'options': _GRID_TRACK},
    {'key': 'grid-auto-flow', 'options': _keywords(
        'row', 'column', 'dense', 'row dense', 'column dense')},
    {'key': 'grid-column-start', 'options': _GRID_LINE},
    {'key': 'grid-column-end', 'options': _GRID_LINE},
    {'key': 'grid-row-start', 'options': _GRID_LINE},
    {'key': 'grid-row-end', 'options': _GRID_LINE},

    # [css-sizing-3]
    {'key': 'width', 'options': _LENGTH_MATH_CONTENT},
    {'key': 'height', 'options': _LENGTH_MATH_CONTENT},
    {'key': 'min-width', 'options': _LENGTH_MATH_CONTENT},
    {'key': 'min-height', 'options': _LENGTH_MATH_CONTENT},
    {'key': 'max-width', 'options': _LENGTH_MATH_CONTENT + _keywords('none')},
    {'key': 'max-height',
     'options': _LENGTH_MATH_CONTENT + _keywords('none')},
    {'key': 'aspect-ratio', 'options': _keywords('auto') + [
        _VARIABLE,
        {'name': 'ratio', 'value': '16/9',
         'syntax': 'number || number/number'},
    ]},

    # [css-position-3]
    {'key': 'position', 'options': _keywords(
        'static', 'relative', 'absolute', 'fixed', 'sticky')},
    {'key': 'top', 'options': _LENGTH_MATH_AUTO},
    {'key': 'right', 'options': _LENGTH_MATH_AUTO},
    {'key': 'bottom', 'options': _LENGTH_MATH_AUTO},
    {'key': 'left', 'options': _LENGTH_MATH_AUTO},
    {'key': 'z-index', 'options': [_NUMBER, _VARIABLE] + _keywords('auto')},
    {'key': 'float', 'options': _keywords(
        'none', 'left', 'right', 'inline-start', 'inline-end')},
    {'key': 'clear', 'options': _keywords(
        'none', 'left', 'right', 'both', 'inline-start', 'inline-end')},

    # [css-box-3]
    {'key': 'padding', 'options': _SPACING},
    {'key': 'padding-top', 'options': _LENGTH_MATH},
    {'key': 'padding-right', 'options': _LENGTH_MATH},
    {'key': 'padding-bottom', 'options': _LENGTH_MATH},
    {'key': 'padding-left', 'options': _LENGTH_MATH},
    {'key': 'margin', 'options': _SPACING},
    {'key': 'margin-top', 'options': _LENGTH_MATH_AUTO},
    {'key': 'margin-right', 'options': _LENGTH_MATH_AUTO},
    {'key': 'margin-bottom', 'options': _LENGTH_MATH_AUTO},
    {'key': 'margin-left', 'options': _LENGTH_MATH_AUTO},

    # [css-transforms-2]
    {'key': 'transform', 'options': _TRANSFORM},

    # [css-fonts-4]
    {'key': 'font-family', 'options': [_VARIABLE] + _keywords(
        'Arial', 'Helvetica', 'Times New Roman', 'Georgia', 'Courier New',
        'Verdana', 'serif', 'sans-serif', 'monospace', 'cursive',
        'system-ui')},
    {'key': 'font-size', 'options': _LENGTH_MATH + _keywords(
        'xx-small', 'x-small', 'small', 'medium', 'large', 'x-large',
        'xx-large', 'smaller', 'larger')},
    {'key': 'font-weight', 'options': [_VARIABLE] + _keywords(
        'normal', 'bold', 'bolder', 'lighter', '100', '200', '300', '400',
        '500', '600', '700', '800', '900')},
    {'key': 'font-style', 'options': _keywords('normal', 'italic', 'oblique')},
    {'key': 'line-height',
     'options': [_NUMBER] + _LENGTH_MATH + _keywords('normal')},
    {'key': 'letter-spacing', 'options': _LENGTH_MATH + _keywords('normal')},

    # [css-text-3]
    {'key': 'text-align', 'options': _keywords(
        'left', 'right', 'center', 'justify', 'start', 'end')},
    {'key': 'text-transform', 'options': _keywords(
        'none', 'capitalize', 'uppercase', 'lowercase')},
    {'key': 'text-decoration', 'options': _keywords(
        'none', 'underline', 'overline', 'line-through')},
    {'key': 'white-space', 'options': _keywords(
        'normal', 'nowrap', 'pre', 'pre-wrap', 'pre-line', 'break-spaces')},
    {'key': 'color', 'options': [_COLOR, _VARIABLE]},
    {'key': 'opacity', 'options': [_NUMBER, _VARIABLE, _unit('%')]},

    # [css-backgrounds-3]
    {'key': 'text-shadow', 'options': _SHADOW},
    {'key': 'box-shadow', 'options': _SHADOW},
    {'key': 'border', 'options': _BORDER},
    {'key': 'border-top', 'options': _BORDER},
    {'key': 'border-right', 'options': _BORDER},
    {'key': 'border-bottom', 'options': _BORDER},
    {'key': 'border-left', 'options': _BORDER},
    {'key': 'border-width', 'options': _LENGTH_MATH + _keywords(
        'thin', 'medium', 'thick')},
    {'key': 'border-style', 'options': _BORDER_STYLE},
    {'key': 'border-color', 'options': [_COLOR, _VARIABLE]},
    {'key': 'border-radius', 'options': _LENGTH_MATH},
    {'key': 'outline', 'options': _BORDER},
    {'key': 'outline-width', 'options': _LENGTH_MATH + _keywords(
        'thin', 'medium', 'thick')},
    {'key': 'outline-style', 'options': _BORDER_STYLE},
    {'key': 'outline-color', 'options': [_COLOR, _VARIABLE]},
    {'key': 'outline-offset', 'options': _LENGTH_MATH},
    {'key': 'background-color', 'options': [_COLOR, _VARIABLE]},
    {'key': 'background-image', 'options': _keywords('none') + [
        _VARIABLE,
        {'name': 'url()', 'value': "url('https://example.com/image.png')",
         'syntax': 'function(url)'},
    ]},
    {'key': 'background-size', 'options': _LENGTH_MATH_AUTO + _keywords(
        'cover', 'contain')},
    {'key': 'background-position', 'options': _BACKGROUND_POSITION},
    {'key': 'background-repeat', 'options': _BACKGROUND_REPEAT},
    {'key': 'background-attachment', 'options': _keywords(
        'scroll', 'fixed', 'local')},

    # [css-multicol-1]
    {'key': 'column-count', 'options': [_NUMBER, _VARIABLE] + _keywords(
        'auto')},
    {'key': 'column-width', 'options': _LENGTH_MATH_AUTO},
    {'key': 'column-rule-width', 'options': _LENGTH_MATH},
    {'key': 'column-rule-style', 'options': _BORDER_STYLE},
    {'key': 'column-rule-color', 'options': [_COLOR, _VARIABLE]},
    {'key': 'column-span', 'options': _keywords('none', 'all')},
    {'key': 'column-fill', 'options': _keywords('auto', 'balance')},

    # [css-break-3]
    {'key': 'break-before', 'options': _keywords(
        'auto', 'avoid', 'always', 'all', 'page', 'column', 'left', 'right')},
    {'key': 'break-after', 'options': _keywords(
        'auto', 'avoid', 'always', 'all', 'page', 'column', 'left', 'right')},
    {'key': 'break-inside', 'options': _keywords(
        'auto', 'avoid', 'avoid-page', 'avoid-column')},
    {'key': 'orphans', 'options': [_NUMBER, _VARIABLE]},
    {'key': 'widows', 'options': [_NUMBER, _VARIABLE]},
]

css_grammar_registry = load_grammar_registry(_property_grammars)
"""GrammarRegistry: The default grammar registry."""
