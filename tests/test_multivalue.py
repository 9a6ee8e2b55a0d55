import pytest

from stylegrammar.css.multivalue import delete_multi_value, is_multi_value, \
    split_expression, split_multi_value, update_multi_value


class TestSplitMultiValue:
    @pytest.mark.parametrize('value, separator, expected', [
        ('1px 2px 3px', ' ', ['1px', '2px', '3px']),
        ('1px solid rgba(0, 0, 0, .5)', ' ',
         ['1px', 'solid', 'rgba(0, 0, 0, .5)']),
        ('minmax(0px,1fr),repeat(2,min(0px,0px))', ',',
         ['minmax(0px,1fr)', 'repeat(2,min(0px,0px))']),
        (' a ,  b , c ', ',', ['a', 'b', 'c']),
        ('a,,b,', ',', ['a', 'b']),
        ('single', ' ', ['single']),
    ])
    def test_split(self, value, separator, expected):
        """Only top-level separators split; parts are trimmed and empty
        parts are dropped.
        """
        assert split_multi_value(value, separator) == expected

    def test_quotes(self):
        """Separators inside quotes are not split points."""
        assert split_multi_value('"Times New Roman", serif', ' ') == \
            ['"Times New Roman",', 'serif']
        assert split_multi_value("\"it's\",'a, b'", ',') == \
            ['"it\'s"', "'a, b'"]

    @pytest.mark.parametrize('value', ['', None])
    def test_empty(self, value):
        assert split_multi_value(value, ' ') == []

    @pytest.mark.parametrize('value, separator', [
        ('1px 2px min(0px, 1px)', ' '),
        ('a, b(c, d), e', ','),
        ('"x y" z', ' '),
        ('1px  3px', ' '),
    ])
    def test_idempotent(self, value, separator):
        """Joining the parts and splitting again yields the same parts."""
        parts = split_multi_value(value, separator)
        assert split_multi_value(separator.join(parts), separator) == parts


class TestUpdateMultiValue:
    def test_replace(self):
        assert update_multi_value('1px 2px 3px', '4px', 1, ' ') == \
            '1px 4px 3px'

    def test_replace_nested(self):
        assert update_multi_value(
            'rgba(255,0,0,1) 0px 0px', 'min(1px,2px)', 2, ' ') == \
            'rgba(255,0,0,1) 0px min(1px,2px)'

    def test_append(self):
        """An index equal to the number of entries appends."""
        assert update_multi_value('1px 2px', '3px', 2, ' ') == '1px 2px 3px'
        assert update_multi_value('', 'value', 0, '') == 'value'

    @pytest.mark.parametrize('index', [-1, 4, 5])
    def test_out_of_range(self, index):
        assert update_multi_value('a b c', 'x', index, ' ') == 'a b c'

    def test_detected_separator(self):
        """The separator of the value is used when none is given."""
        assert update_multi_value('a,b,c', 'x', 0) == 'x,b,c'
        assert update_multi_value('single', 'new', 0, '') == 'new'


class TestDeleteMultiValue:
    def test_delete(self):
        assert delete_multi_value('1px 2px 3px', 1, ' ') == '1px 3px'

    def test_delete_nested(self):
        assert delete_multi_value('rgba(255,0,0,1) 0px 0px', 1, ' ') == \
            'rgba(255,0,0,1) 0px'

    def test_delete_single(self):
        """Deleting the sole entry yields an empty string."""
        assert delete_multi_value('single', 0, ' ') == ''

    def test_collapse_empty_entries(self):
        """Empty entries are dropped, not preserved."""
        assert delete_multi_value('a,,b,c', 0, ',') == 'b,c'

    @pytest.mark.parametrize('index', [-1, 3, 10])
    def test_out_of_range(self, index):
        assert delete_multi_value('a b c', index, ' ') == 'a b c'

    def test_empty(self):
        assert delete_multi_value('', 0, ' ') == ''


class TestIsMultiValue:
    @pytest.mark.parametrize('value, expected', [
        ('1px 2px', True),
        ('a,b', True),
        ('min(0px, 1px)', False),
        ('10px', False),
        ('10px ', False),
        ('', False),
        (None, False),
    ])
    def test_multi_value(self, value, expected):
        assert is_multi_value(value) is expected


class TestSplitExpression:
    @pytest.mark.parametrize('value, expected', [
        ('10px + 25px - 30%', (['10px', '25px', '30%'], ['+', '-'])),
        ('100%/3', (['100%', '3'], ['/'])),
        ('2*var(--gap)', (['2', 'var(--gap)'], ['*'])),
        ('10px + -5px', (['10px', '-5px'], ['+'])),
        ('var(--a-b) - 1px', (['var(--a-b)', '1px'], ['-'])),
        ('min(1px+2px) + 3px', (['min(1px+2px)', '3px'], ['+'])),
    ])
    def test_split(self, value, expected):
        assert split_expression(value) == expected

    def test_dangling_operators(self):
        """Leading and trailing operators are dropped."""
        assert split_expression('* 10px + 5px -') == \
            (['10px', '5px'], ['+'])
        assert split_expression('10px +') == (['10px'], [])

    @pytest.mark.parametrize('value', ['', '   ', None])
    def test_empty(self, value):
        assert split_expression(value) == ([], [])
