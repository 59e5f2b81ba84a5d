import logging

import numpy as np
import pytest

from transaction_serde.guess import (
    FIELD_PATTERNS,
    guess,
    is_significant_number,
    looks_like_amount,
    looks_like_date,
)
from transaction_serde.models import GuessResult


class TestNamePatterns:
    """Test suite for guesses from field names alone"""

    def test_exact_names_are_high_confidence(self):
        result = guess(['date', 'amount', 'payee'])
        assert len(result.guesses) == 3
        assert all(g.confidence == 'high' for g in result.guesses)

    def test_case_insensitive(self):
        result = guess(['DATE', 'Amount', 'PAYEE'])
        assert result.mapping == {'date': 'DATE', 'amount': 'Amount', 'payee': 'PAYEE'}

    @pytest.mark.parametrize('field_name,target,confidence', [
        ('Transaction Date', 'date', 'high'),
        ('Posting Date', 'date', 'high'),
        ('trans_date', 'date', 'high'),
        ('Settlement Date', 'date', 'medium'),
        ('Booked Date', 'date', 'medium'),
        ('Time', 'time', 'high'),
        ('Transaction Time', 'time', 'high'),
        ('Clock', 'time', 'medium'),
        ('Value', 'amount', 'high'),
        ('Debit', 'amount', 'medium'),
        ('Credit Amount', 'amount', 'medium'),
        ('Merchant', 'payee', 'high'),
        ('Merchant Name', 'payee', 'high'),
        ('Name', 'payee', 'medium'),
        ('Memo', 'description', 'high'),
        ('Reference', 'description', 'medium'),
        ('Category', 'category', 'high'),
        ('Type', 'category', 'medium'),
    ])
    def test_common_variations(self, field_name, target, confidence):
        """Test well-known column names for each transaction key"""
        result = guess([field_name])
        assert result.mapping == {target: field_name}
        assert result.guesses[0].confidence == confidence
        assert field_name in result.guesses[0].reason

    def test_metadata_never_guessed(self):
        assert 'metadata' not in [target for target, _ in FIELD_PATTERNS]
        assert guess(['metadata']).unmapped_fields == ['metadata']


class TestGuessResult:
    """Test suite for mapping structure"""

    def test_unmapped_fields(self):
        result = guess(['date', 'amount', 'random_field', 'unknown'])
        assert result.unmapped_fields == ['random_field', 'unknown']

    def test_nothing_unmapped(self):
        assert guess(['date', 'amount']).unmapped_fields == []

    def test_first_field_claims_target(self):
        """Test a target is only ever mapped once, first field wins"""
        result = guess(['date', 'transaction_date', 'posting_date'])
        date_guesses = [g for g in result.guesses if g.target_field == 'date']
        assert len(date_guesses) == 1
        assert date_guesses[0].source_field == 'date'
        assert result.unmapped_fields == ['transaction_date', 'posting_date']

    def test_one_amount_mapping(self):
        result = guess(['Amount', 'Value'])
        assert [g.source_field for g in result.guesses if g.target_field == 'amount'] == ['Amount']

    def test_typical_bank_headers(self):
        result = guess(['Transaction Date', 'Value', 'Merchant Name', 'Description', 'Category'])
        assert result.mapping == {
            'date': 'Transaction Date',
            'amount': 'Value',
            'payee': 'Merchant Name',
            'description': 'Description',
            'category': 'Category',
        }
        assert result.unmapped_fields == []

    def test_unrecognised_fields(self):
        assert guess(['foo', 'bar', 'baz']) == GuessResult(
            guesses=[], unmapped_fields=['foo', 'bar', 'baz'], mapping={}
        )

    def test_empty_fields(self):
        assert guess([]) == GuessResult()

    def test_special_characters_unmapped(self):
        result = guess(['Transaction Date (UTC)', 'Amount ($)'])
        assert result.unmapped_fields == ['Transaction Date (UTC)', 'Amount ($)']


class TestMinConfidence:
    """Test suite for confidence filtering"""

    def test_high_only(self):
        result = guess(['date', 'Debit'], {'min_confidence': 'high'})
        assert result.mapping == {'date': 'date'}
        assert result.unmapped_fields == ['Debit']

    def test_keyword_override(self):
        result = guess(['Debit'], min_confidence='high')
        assert result.mapping == {}

    def test_medium_by_default(self):
        assert guess(['Debit']).mapping == {'amount': 'Debit'}

    def test_boosted_guess_passes_high_filter(self):
        result = guess(['Total'], min_confidence='high', sample=[{'Total': '100.50'}])
        assert result.mapping == {'amount': 'Total'}

    @pytest.mark.parametrize('min_confidence', ['low', 'HIGH', ''])
    def test_unknown_level_uses_default(self, min_confidence, caplog):
        """Test an unknown level falls back to medium instead of raising"""
        with caplog.at_level(logging.WARNING):
            result = guess(['Debit'], min_confidence=min_confidence)
        assert result.mapping == {'amount': 'Debit'}
        assert 'Unknown min_confidence' in caplog.text


class TestValueBoosting:
    """Test suite for raising medium guesses with sample values"""

    def _single(self, field_name, values):
        result = guess([field_name], sample=[{field_name: v} for v in values])
        assert len(result.guesses) == 1
        return result.guesses[0]

    def test_dates_boost(self):
        field_guess = self._single('When', ['2024-01-15', '2024-01-16'])
        assert field_guess.target_field == 'date'
        assert field_guess.confidence == 'high'
        assert 'boosted' in field_guess.reason

    def test_mixed_date_layouts_do_not_boost(self):
        field_guess = self._single('When', ['2024-01-15', '16/01/2024'])
        assert field_guess.confidence == 'medium'

    def test_amounts_boost(self):
        assert self._single('Total', ['100.50', '-25.00']).confidence == 'high'

    def test_currency_amounts_boost(self):
        assert self._single('Total', ['$100.50', '-25.00', '1,200.00', '12 USD']).confidence == 'high'

    def test_numeric_values_boost(self):
        assert self._single('Total', [100.5, -25, np.float64(3.5)]).confidence == 'high'

    def test_times_boost(self):
        field_guess = self._single('clock', ['14:30:00', '09:15:00'])
        assert field_guess.target_field == 'time'
        assert field_guess.confidence == 'high'
        assert 'boosted' in field_guess.reason

    def test_empty_values_do_not_boost(self):
        field_guess = self._single('When', ['', ''])
        assert field_guess.target_field == 'date'
        assert field_guess.confidence == 'medium'

    def test_text_does_not_boost(self):
        assert self._single('When', ['hello', 'world']).confidence == 'medium'

    def test_embedded_digits_do_not_boost_amount(self):
        field_guess = self._single('Total', ['CAFE*TH3 BREWHOUSE', 'STARBUCKS*DRIVE THRU'])
        assert field_guess.target_field == 'amount'
        assert field_guess.confidence == 'medium'

    def test_embedded_digits_do_not_boost_date(self):
        assert self._single('When', ['CAFE*TH3 BREWHOUSE']).confidence == 'medium'

    def test_parenthesised_amounts_do_not_boost(self):
        """Test accounting-style negatives such as (45.00) are not boosted"""
        assert self._single('Debit', ['(45.00)', '(12.50)']).confidence == 'medium'

    def test_non_finite_numbers_do_not_boost(self):
        assert self._single('Total', [float('nan'), float('inf')]).confidence == 'medium'

    def test_high_confidence_not_reasoned_as_boosted(self):
        result = guess(['Date'], sample=[{'Date': '2024-01-15'}])
        assert result.guesses[0].confidence == 'high'
        assert 'boosted' not in result.guesses[0].reason


class TestValueShapes:
    """Test suite for the value shape helpers"""

    @pytest.mark.parametrize('text,expected', [
        ('$100', True),
        ('100', True),
        ('Ref 12345678', True),
        ('A1', True),
        ('CAFE*TH3 BREWHOUSE', False),
        ('ABC123DEF', False),
        ('Coffee Shop', False),
    ])
    def test_is_significant_number(self, text, expected):
        assert is_significant_number(text) is expected

    @pytest.mark.parametrize('value,expected', [
        ('-12.50', True),
        ('(45.00)', False),
        ('100 USD', True),
        ('£50.25', True),
        (42, True),
        (True, False),
        ('Ref 12345678', False),
        ('2024-01-15', False),
        ('', False),
    ])
    def test_looks_like_amount(self, value, expected):
        assert looks_like_amount(value) is expected

    @pytest.mark.parametrize('value,expected', [
        ('2024-01-15', True),
        ('2024/01/15', True),
        ('15/01/2024', True),
        ('20240115', True),
        ('15 January 2024', True),
        ('Jan 15 2024', True),
        ('15/01/24', False),
        ('hello', False),
        (20240115, False),
    ])
    def test_looks_like_date(self, value, expected):
        assert looks_like_date(value) is expected
