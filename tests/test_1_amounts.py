import pytest

from transaction_serde.amounts import (
    NumberStyle,
    find_number,
    format_amount,
    try_parse_number,
)


class TestTryParseNumber:
    """Test suite for extracting numbers from noisy strings"""

    @pytest.mark.parametrize('text,expected', [
        ('100', 100),
        ('0', 0),
        ('-50', -50),
        ('-100.25', -100.25),
        ('99.99', 99.99),
        ('.5', 0.5),
        ('100.50', 100.5),
        ('-25.00', -25),
        ('  100  ', 100),
    ])
    def test_plain_numbers(self, text, expected):
        """Test plain integers and decimals"""
        assert try_parse_number(text) == expected

    @pytest.mark.parametrize('text,expected', [
        ('$100', 100),
        ('£50.25', 50.25),
        ('€99', 99),
        ('100 USD', 100),
        ('50.25 EUR', 50.25),
    ])
    def test_currency_markers(self, text, expected):
        """Test currency symbols and codes around the number"""
        assert try_parse_number(text) == expected

    @pytest.mark.parametrize('text,expected', [
        ('1,234.56', 1),
        ('$1,200', 1),
        ('-12,345,678', -12),
        ('1e3', 1),
        ('2.5e-3', 2.5),
    ])
    def test_leading_literal_only(self, text, expected):
        """Test only the leading literal is read, without grouping or exponents"""
        assert try_parse_number(text) == expected

    def test_overflowing_digits(self):
        assert try_parse_number('9' * 400) is None

    @pytest.mark.parametrize('text', [
        '100', '-25.00', '.5', '100.50', '$100', '£50.25', '100 USD',
        ' 100 ', '1,234.56', 'CAFE*TH3 BREWHOUSE', '-0.75 EUR', '123456789.125',
    ])
    def test_rendered_value_reads_back(self, text):
        """Test a parsed value still parses to itself once rendered as text"""
        value = try_parse_number(text)
        assert value is not None
        assert try_parse_number(str(value)) == value

    @pytest.mark.parametrize('text', [
        'abc',
        'Coffee Shop',
        '2024-01-15',
        '2024.01.15',
        'Infinity',
        '-Infinity',
        '',
        '-',
        '.',
    ])
    def test_rejected_values(self, text):
        """Test text, dates and non-finite values are not numbers"""
        assert try_parse_number(text) is None

    def test_non_string_input(self):
        """Test non-string values are not parsed"""
        assert try_parse_number(None) is None
        assert try_parse_number(100) is None


class TestFindNumber:
    """Test suite for number location"""

    def test_offsets_use_literal_length(self):
        """Test the literal length is kept, not the value's string form"""
        match = find_number('$100.50')
        assert match.value == 100.5
        assert (match.start, match.end) == (1, 7)

    def test_embedded_digit(self):
        """Test a digit inside a word is still located"""
        match = find_number('CAFE*TH3 BREWHOUSE')
        assert match.value == 3
        assert (match.start, match.end) == (7, 8)


class TestNumberFormatting:
    """Test suite for number output"""

    @pytest.mark.parametrize('value,locale,expected', [
        (134.99, 'en-US', '134.99'),
        (-34.99, 'en-US', '-34.99'),
        (-100, 'en-US', '-100'),
        (-1234.5, 'en-US', '-1,234.5'),
        (1234567.891, 'en-GB', '1,234,567.891'),
        (1234.5, 'de-DE', '1.234,5'),
        (1234.5, 'fr-FR', '1 234,5'),
        (0.0004, 'en-US', '0'),
        (1234.5, ['de-DE', 'en-US'], '1.234,5'),
    ])
    def test_format_amount(self, value, locale, expected):
        """Test grouped amounts for human facing output"""
        assert format_amount(value, locale) == expected

    def test_unknown_locale_uses_us_style(self):
        """Test unknown locales fall back to US separators"""
        assert format_amount(1234.5, 'xx-XX') == '1,234.5'
        assert NumberStyle.US.value == (',', '.')
