"""
Localised strings and amount formatting.

Three locales are shipped: en-US, pt-BR and es-ES. Any other tag falls
back to English. Lookups never fail: a key missing from a locale falls
back to the English table and then to the key itself.
"""

import re
from typing import Any, Optional

from splitwiser.config import get_settings


DEFAULT_LOCALE = "en-US"


STRINGS: dict[str, dict[str, str]] = {
    "en-US": {
        "SETTLED_TEXT": "SETTLED",
        "EXPENSES": "Expenses",
        "COSTS": "Costs",
        "SETTLEMENTS": "Settlements",
        "OWES_TEMPLATE": "{fromName} owes {amount} to {toName}",
        "PAID_TEMPLATE": "{fromName} paid {amount} to {toName}",
        "PERSON_NOT_FOUND": "does not match any listed person",
        "AMBIGUOUS_PERSON_TEMPLATE": '"{personRef}" is ambiguous - could refer to: {matchingNames}',
        "PERSON_NOT_FOUND_TEMPLATE": '"{personRef}" {errorMessage}',
        "DUPLICATE_NAME_TEMPLATE": 'Name "{currentName}" is duplicated with "{existingName}"',
        "PERSON_WITH_PARTS_TEMPLATE": "{displayName} ({parts})",
        "EXPENSE_WITH_PARTICIPANTS_TEMPLATE": "{description} - {participants}",
        "SETTLEMENT_ERROR": "Error processing settlement. Try again.",
        "ALL_SETTLED": "All settled!",
        "NOTHING_TO_SETTLE": "Nothing to settle!",
        "SETTLED_BUTTON": "SETTLED",
        "CLEAR": "CLEAR",
        "PLACEHOLDER": "Add people and expenses...\n(see format guide below)",
        "FORMAT_GUIDE_TITLE": "Format Guide",
        "FORMAT_GUIDE_PERSON_NAMES": "**Person names**: start with a name on its own line. "
                                     "Expenses added below the name were paid by that person.",
        "FORMAT_GUIDE_GROUP_SIZE": "**Group size**: optional number after the name. "
                                   "Proportional share of the split.",
        "FORMAT_GUIDE_BASIC_EXPENSE": "**Basic expense**: amount (with or without cents) "
                                      "with optional description.",
        "FORMAT_GUIDE_PERCENTAGE_FEE": "**Percentage fee**: based on total expenses for that person.",
        "FORMAT_GUIDE_SPECIFIC_SPLIT": '**Specific split**: add comma separated names (or initials) '
                                       'after " - " to split the expense among them.',
        "FORMAT_GUIDE_EXCLUDE": "**Exclude from split**: add ! after the name to be owed "
                                "but not share the expense.",
        "FORMAT_GUIDE_SETTLEMENT": "**Settlement**: register payments between people, "
                                   "for example `50 > Ana`.",
        "EXAMPLE_FRIENDS_TRIP_TITLE": "Friends Trip",
        "EXAMPLE_FRIENDS_TRIP_TEXT": "David\n45 Gas\n18.11 Toll\n15 Snacks\n\nAna\n50.30 Dinner\n"
                                     "15 Coffee - Ana, Cris\n\nCris\n12 Parking\n60 Tickets",
        "EXAMPLE_BILL_SPLIT_TITLE": "Bill Split",
        "EXAMPLE_BILL_SPLIT_TEXT": "Bill!\n30 Appetizers\n12 Drink - D\n12 Drink - C\n16 Entree - D\n"
                                   "18 Entree - C\n32 Entree - A\n10% Service fee\n\nAna 2\nDavid\nCris",
    },
    "pt-BR": {
        "SETTLED_TEXT": "ACERTADO",
        "EXPENSES": "Gastos",
        "COSTS": "Custos",
        "SETTLEMENTS": "Acertos",
        "OWES_TEMPLATE": "{fromName} deve {amount} para {toName}",
        "PAID_TEMPLATE": "{fromName} pagou {amount} para {toName}",
        "PERSON_NOT_FOUND": "não corresponde a nenhuma pessoa listada",
        "AMBIGUOUS_PERSON_TEMPLATE": '"{personRef}" é ambíguo - pode se referir a: {matchingNames}',
        "PERSON_NOT_FOUND_TEMPLATE": '"{personRef}" {errorMessage}',
        "DUPLICATE_NAME_TEMPLATE": 'Nome "{currentName}" está duplicado com "{existingName}"',
        "PERSON_WITH_PARTS_TEMPLATE": "{displayName} ({parts})",
        "EXPENSE_WITH_PARTICIPANTS_TEMPLATE": "{description} - {participants}",
        "SETTLEMENT_ERROR": "Erro ao processar acerto. Tente novamente.",
        "ALL_SETTLED": "Tudo acertado!",
        "NOTHING_TO_SETTLE": "Nada para acertar!",
        "SETTLED_BUTTON": "ACERTADO",
        "CLEAR": "LIMPAR",
        "PLACEHOLDER": "Adicione pessoas e gastos...\n(veja o guia de formato abaixo)",
        "FORMAT_GUIDE_TITLE": "Guia de Formato",
        "EXAMPLE_FRIENDS_TRIP_TITLE": "Viagem de Amigos",
        "EXAMPLE_FRIENDS_TRIP_TEXT": "David\n45 Gasolina\n18,11 Pedágio\n15 Lanches\n\nAna\n50,30 Jantar\n"
                                     "15 Café - Ana, Cris\n\nCris\n12 Estacionamento\n60 Ingressos",
        "EXAMPLE_BILL_SPLIT_TITLE": "Divisão de Conta",
        "EXAMPLE_BILL_SPLIT_TEXT": "Restaurante!\n30 Aperitivos\n12 Bebida - D\n12 Bebida - C\n"
                                   "16 Prato - D\n18 Prato - C\n32 Prato - A\n10% Taxa de serviço\n\n"
                                   "Ana 2\nDavid\nCris",
    },
    "es-ES": {
        "SETTLED_TEXT": "LIQUIDADO",
        "EXPENSES": "Gastos",
        "COSTS": "Costos",
        "SETTLEMENTS": "Liquidaciones",
        "OWES_TEMPLATE": "{fromName} debe {amount} a {toName}",
        "PAID_TEMPLATE": "{fromName} pagó {amount} a {toName}",
        "PERSON_NOT_FOUND": "no corresponde a ninguna persona listada",
        "AMBIGUOUS_PERSON_TEMPLATE": '"{personRef}" es ambiguo - puede referirse a: {matchingNames}',
        "PERSON_NOT_FOUND_TEMPLATE": '"{personRef}" {errorMessage}',
        "DUPLICATE_NAME_TEMPLATE": 'Nombre "{currentName}" está duplicado con "{existingName}"',
        "PERSON_WITH_PARTS_TEMPLATE": "{displayName} ({parts})",
        "EXPENSE_WITH_PARTICIPANTS_TEMPLATE": "{description} - {participants}",
        "SETTLEMENT_ERROR": "Error al procesar la liquidación. Inténtelo de nuevo.",
        "ALL_SETTLED": "¡Todo liquidado!",
        "NOTHING_TO_SETTLE": "¡Nada que liquidar!",
        "SETTLED_BUTTON": "LIQUIDADO",
        "CLEAR": "LIMPIAR",
        "PLACEHOLDER": "Agregue personas y gastos...\n(vea la guía de formato abajo)",
        "FORMAT_GUIDE_TITLE": "Guía de Formato",
        "EXAMPLE_FRIENDS_TRIP_TITLE": "Viaje de Amigos",
        "EXAMPLE_FRIENDS_TRIP_TEXT": "David\n45 Gasolina\n18,11 Peaje\n15 Aperitivos\n\nAna\n50,30 Cena\n"
                                     "15 Café - Ana, Cris\n\nCris\n12 Estacionamiento\n60 Entradas",
        "EXAMPLE_BILL_SPLIT_TITLE": "División de Cuenta",
        "EXAMPLE_BILL_SPLIT_TEXT": "Restaurante!\n30 Entradas\n12 Bebida - D\n12 Bebida - C\n"
                                   "16 Plato - D\n18 Plato - C\n32 Plato - A\n10% Tarifa de servicio\n\n"
                                   "Ana 2\nDavid\nCris",
    },
}


# (thousands separator, decimal separator, minimum integer digits before grouping)
_NUMBER_FORMATS: dict[str, tuple[str, str, int]] = {
    "en-US": (",", ".", 4),
    "pt-BR": (".", ",", 4),
    "es-ES": (".", ",", 5),
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def resolve_locale(tag: Optional[str] = None) -> str:
    """
    Map a language tag to one of the shipped locales.

    None means "use the configured locale".
    """
    if tag is None:
        tag = get_settings().app.locale
    lang = tag.strip().lower()
    if lang.startswith("pt"):
        return "pt-BR"
    if lang.startswith("es"):
        return "es-ES"
    return DEFAULT_LOCALE


def format_template(template: str, params: Optional[dict[str, Any]] = None) -> str:
    """Substitute {name} placeholders; unknown placeholders are left as-is."""
    if not params:
        return template

    def replace(match: re.Match) -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return _PLACEHOLDER.sub(replace, template)


def localize(
    key: str,
    params: Optional[dict[str, Any]] = None,
    locale: Optional[str] = None,
) -> str:
    table = STRINGS[resolve_locale(locale)]
    template = table.get(key) or STRINGS[DEFAULT_LOCALE].get(key) or key
    return format_template(template, params)


def format_amount(cents: int, locale: Optional[str] = None) -> str:
    """
    Render integer cents with two decimals using the locale's separators.

    Zero is never printed with a minus sign.
    """
    thousands, decimal_point, min_grouping = _NUMBER_FORMATS[resolve_locale(locale)]

    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    digits = str(whole)

    if len(digits) >= min_grouping:
        groups = []
        while len(digits) > 3:
            groups.insert(0, digits[-3:])
            digits = digits[:-3]
        groups.insert(0, digits)
        digits = thousands.join(groups)

    return f"{sign}{digits}{decimal_point}{frac:02d}"
