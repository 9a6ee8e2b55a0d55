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


from .extract import extract_between, extract_function, extract_length, \
    extract_number, extract_separator, extract_value, is_balanced, \
    split_dimension
from .multivalue import delete_multi_value, is_multi_value, \
    split_expression, split_multi_value, update_multi_value
from .props import GrammarRegistry, css_grammar_registry, \
    load_grammar_registry, to_property_name
from .types import Color, Expression, Function, GrammarNode, GrammarType, \
    Keyword, Number, Pattern, PatternTag, Unit, Url, Variable
from .validator import GrammarValidator, find_option, is_color_valid, \
    is_function_variable, is_length_function, is_length_keyword, \
    is_length_scalable, is_multi_value_valid, is_number_valid, \
    is_option_valid, is_url_valid, is_value_valid, match_length
