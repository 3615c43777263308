"""Tests for targeting.parser module."""

import pytest

from targeting import Combatant
from targeting.parser import parse_spy_text, resolve_label

SINGLE_REPORT = """
Name: Alpha [123]
Level: 42

You managed to get the following results:
Strength: 10,000
Defense: 5,000
Speed: 7,500
Dexterity: 2,500
""".strip()

TWO_REPORTS = """
Name: Bravo [234]
Level: 55

You managed to get the following results:
Strength: 2000
Defense: 3000
Speed: 4000
Dexterity: 1000
============================
Name: Charlie [345]
Level: 60

You managed to get the following results:
Strength: 5000
Defense: 6000
Speed: 7000
Dexterity: 8000
""".strip()


class TestResolveLabel:
    """Tests for label resolution."""

    @pytest.mark.parametrize('label, expected', [
        ('Strength', 'strength'),
        ('DEFENSE', 'defense'),
        ('speed', 'speed'),
        ('Dexterity', 'dexterity'),
        ('Level', 'level'),
        ('Defence', 'defense'),
        ('Spd', 'speed'),
    ])
    def test_exact_labels(self, label, expected):
        assert resolve_label(label) == expected

    @pytest.mark.parametrize('label, expected', [
        ('Str', 'strength'),
        ('Dex', 'dexterity'),
        ('Def', 'defense'),
    ])
    def test_abbreviated_labels(self, label, expected):
        assert resolve_label(label) == expected

    @pytest.mark.parametrize('label', [
        'You managed to get the following results',
        'Faction',
        'Spy',
        'Strategy',
        'Speed bonus',
        'Strenght',
        '',
    ])
    def test_unknown_labels(self, label):
        assert resolve_label(label) is None


class TestParseSpyText:
    """Tests for spy report parsing."""

    def test_single_report(self):
        result = parse_spy_text(SINGLE_REPORT)
        assert result == [Combatant(
            name='Alpha', level='42', speed='7,500', strength='10,000',
            defense='5,000', dexterity='2,500',
        )]

    def test_multiple_reports(self):
        result = parse_spy_text(TWO_REPORTS)
        assert [c.name for c in result] == ['Bravo', 'Charlie']
        assert result[1].dexterity == '8000'

    def test_name_without_id(self):
        result = parse_spy_text('Name: Delta\nStrength: 1')
        assert result[0].name == 'Delta'

    def test_missing_fields_empty(self):
        result = parse_spy_text('Name: Echo [9]\nSpeed: 100')
        assert result[0].speed == '100'
        assert result[0].strength == ''
        assert result[0].level == ''

    def test_sentinel_values_kept_raw(self):
        result = parse_spy_text('Name: Foxtrot [7]\nDexterity: N/A')
        assert result[0].dexterity == 'N/A'

    def test_abbreviated_labels(self):
        result = parse_spy_text('Name: Golf [1]\nStr: 10\nDef: 20\nSpd: 30\nDex: 40')
        assert result[0] == Combatant(
            name='Golf', speed='30', strength='10', defense='20', dexterity='40',
        )

    def test_case_insensitive_name_marker(self):
        result = parse_spy_text('name: Hotel [1]\nstrength: 5')
        assert result[0].name == 'Hotel'
        assert result[0].strength == '5'

    def test_text_before_first_report_ignored(self):
        result = parse_spy_text('Some header text\n\n' + SINGLE_REPORT)
        assert len(result) == 1

    def test_empty_text(self):
        assert parse_spy_text('') == []
        assert parse_spy_text('no reports here') == []

    def test_exact_label_replaces_abbreviated_one(self):
        result = parse_spy_text('Name: India [2]\nDex: 5\nDexterity: 100')
        assert result[0].dexterity == '100'

    def test_exact_label_kept_over_later_abbreviation(self):
        result = parse_spy_text('Name: Juliett [3]\nStrength: 100\nStr: 5')
        assert result[0].strength == '100'

    def test_unrelated_labels_do_not_leak_into_stats(self):
        result = parse_spy_text(
            'Name: Kilo [4]\nSpy: 5\nSpeed: 100\nStrategy: 7\nSpeed bonus: 9\n'
            'Strength: 200\nDefense: 300\nDexterity: 400'
        )
        assert result[0] == Combatant(
            name='Kilo', speed='100', strength='200', defense='300', dexterity='400',
        )
