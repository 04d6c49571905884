"""
Tests for localised strings and amount formatting.
"""

import pytest

from splitwiser.i18n import format_amount, format_template, localize, resolve_locale


class TestResolveLocale:
    """Tests for mapping language tags to shipped locales."""

    @pytest.mark.parametrize("tag, expected", [
        ("en-US", "en-US"),
        ("en-GB", "en-US"),
        ("pt-PT", "pt-BR"),
        ("PT_br", "pt-BR"),
        ("es", "es-ES"),
        ("es-MX", "es-ES"),
        ("fr-FR", "en-US"),
        ("", "en-US"),
    ])
    def test_resolution(self, tag, expected):
        assert resolve_locale(tag) == expected


class TestLocalize:
    """Tests for string lookup."""

    def test_lookup(self):
        assert localize("COSTS", locale="en-US") == "Costs"
        assert localize("COSTS", locale="pt-BR") == "Custos"
        assert localize("COSTS", locale="es-ES") == "Costos"

    def test_template_parameters(self):
        text = localize(
            "OWES_TEMPLATE",
            {"fromName": "Cris", "amount": "15,00", "toName": "Ana"},
            locale="pt-BR",
        )
        assert text == "Cris deve 15,00 para Ana"

    def test_falls_back_to_english(self):
        assert localize("FORMAT_GUIDE_EXCLUDE", locale="pt-BR") == localize(
            "FORMAT_GUIDE_EXCLUDE", locale="en-US"
        )

    def test_unknown_key_returns_key(self):
        assert localize("NO_SUCH_STRING", locale="es-ES") == "NO_SUCH_STRING"


class TestFormatTemplate:
    """Tests for placeholder substitution."""

    def test_unknown_placeholders_are_kept(self):
        assert format_template("{a} and {b}", {"a": 1}) == "1 and {b}"

    def test_no_params(self):
        assert format_template("{a}") == "{a}"


class TestFormatAmount:
    """Tests for amount rendering."""

    @pytest.mark.parametrize("cents, locale, expected", [
        (123456, "en-US", "1,234.56"),
        (123456, "pt-BR", "1.234,56"),
        (123456, "es-ES", "1234,56"),
        (1234567, "es-ES", "12.345,67"),
        (100000000, "en-US", "1,000,000.00"),
        (5, "en-US", "0.05"),
        (0, "pt-BR", "0,00"),
        (-150, "en-US", "-1.50"),
    ])
    def test_formatting(self, cents, locale, expected):
        assert format_amount(cents, locale) == expected
