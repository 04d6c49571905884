"""
Streamlit Frontend for Splitwiser

This is the page people use after a trip or a dinner: type who paid for
what, read who owes whom.

DESIGN PRINCIPLES:
1. The text is the only state; everything else is recomputed from it
2. Validation problems are shown next to the offending line
3. Nothing is calculated from a document with problems
4. Marking a payment as done edits the text, visibly

The UI enforces the plain-text principle:
- User sees the text they typed
- Settling a suggestion adds a normal "50 > Ana" line to it
- The summary can be copied as-is into a group chat
"""

import html

import streamlit as st

from splitwiser.config import validate_all_settings
from splitwiser.i18n import format_amount, localize
from splitwiser.models.ledger import SettlementSuggestion, ValidationIssue
from splitwiser.orchestrator import Evaluation, EvaluationFlow, create_app_components
from splitwiser.parsing import clean_for_settlement, format_with_parts
from splitwiser.reports import format_ledger_text


TEXT_KEY = "ledger_text"

LOCALES = {
    "en-US": "English",
    "pt-BR": "Português",
    "es-ES": "Español",
}


# Page configuration
st.set_page_config(
    page_title="Splitwiser",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .warning-box {
        padding: 12px 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 6px 0;
    }
    .success-box {
        padding: 12px 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 6px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_flow(locale: str) -> EvaluationFlow:
    """Get or create the evaluation flow for a locale (cached)."""
    return create_app_components(locale=locale)


def settle_callback(flow: EvaluationFlow, suggestion: SettlementSuggestion):
    """Add the payment line before the text area is drawn again."""
    st.session_state[TEXT_KEY] = flow.settle(st.session_state[TEXT_KEY], suggestion)


def tidy_callback(evaluation: Evaluation, locale: str):
    if evaluation.ledger is not None:
        st.session_state[TEXT_KEY] = format_ledger_text(evaluation.ledger, locale)


def load_example_callback(key: str, locale: str):
    st.session_state[TEXT_KEY] = localize(key, locale=locale)


def main():
    """Main application entry point."""
    if TEXT_KEY not in st.session_state:
        st.session_state[TEXT_KEY] = ""

    # Sidebar
    st.sidebar.title("🧮 Splitwiser")
    st.sidebar.markdown("---")

    locale = st.sidebar.selectbox(
        "Language",
        options=list(LOCALES),
        format_func=LOCALES.get,
    )

    page = st.sidebar.radio(
        "Navigate to:",
        ["🧾 Split", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    for key in ("EXAMPLE_FRIENDS_TRIP", "EXAMPLE_BILL_SPLIT"):
        st.sidebar.button(
            localize(f"{key}_TITLE", locale=locale),
            on_click=load_example_callback,
            args=(f"{key}_TEXT", locale),
        )

    if page == "🧾 Split":
        render_split_page(get_flow(locale), locale)
    else:
        render_settings_page()


def render_format_guide(locale: str):
    with st.expander(localize("FORMAT_GUIDE_TITLE", locale=locale)):
        for key in (
            "FORMAT_GUIDE_PERSON_NAMES",
            "FORMAT_GUIDE_GROUP_SIZE",
            "FORMAT_GUIDE_BASIC_EXPENSE",
            "FORMAT_GUIDE_PERCENTAGE_FEE",
            "FORMAT_GUIDE_SPECIFIC_SPLIT",
            "FORMAT_GUIDE_EXCLUDE",
            "FORMAT_GUIDE_SETTLEMENT",
        ):
            st.markdown(f"- {localize(key, locale=locale)}")


def issue_box(issue: ValidationIssue) -> str:
    """Warning box for one validation issue; both parts are typed by the user."""
    return f"""
    <div class="warning-box">
        <strong>{html.escape(issue.line)}</strong><br>{html.escape(issue.message)}
    </div>
    """


def render_split_page(flow: EvaluationFlow, locale: str):
    """Render the input text and everything computed from it."""
    st.title("🧾 Splitwiser")

    left, right = st.columns(2)

    with left:
        st.text_area(
            "Expenses",
            key=TEXT_KEY,
            height=420,
            placeholder=localize("PLACEHOLDER", locale=locale),
            label_visibility="collapsed",
        )
        render_format_guide(locale)

    evaluation = flow.evaluate(st.session_state[TEXT_KEY])

    with right:
        if not evaluation.is_valid:
            for issue in evaluation.issues:
                st.markdown(issue_box(issue), unsafe_allow_html=True)
            return

        ledger = evaluation.ledger
        if ledger is None or not ledger.participants:
            return

        render_costs(evaluation, locale)
        render_settlements(flow, evaluation, locale)

        st.markdown("---")
        st.button("✨ Tidy up text", on_click=tidy_callback, args=(evaluation, locale))
        st.code(evaluation.summary, language=None)


def render_costs(evaluation: Evaluation, locale: str):
    ledger = evaluation.ledger
    st.markdown(f"### {localize('COSTS', locale=locale)}")
    st.markdown(
        f'<div class="big-number">{format_amount(evaluation.total_cents, locale)}</div>',
        unsafe_allow_html=True,
    )

    for key, participant in ledger.participants.items():
        if participant.is_excluded:
            continue
        cents = int(evaluation.fair_shares[key] * 100)
        st.markdown(f"**{format_with_parts(participant, locale)}** = {format_amount(cents, locale)}")


def render_settlements(flow: EvaluationFlow, evaluation: Evaluation, locale: str):
    ledger = evaluation.ledger

    if evaluation.total_cents and not evaluation.suggestions:
        st.markdown(f"""
        <div class="success-box">
            <h4>✅ {localize('ALL_SETTLED', locale=locale)}</h4>
        </div>
        """, unsafe_allow_html=True)
        return

    st.markdown(f"### {localize('SETTLEMENTS', locale=locale)}")
    if not evaluation.total_cents:
        st.info(localize("NOTHING_TO_SETTLE", locale=locale))
        return

    for index, suggestion in enumerate(evaluation.suggestions):
        text_col, button_col = st.columns([3, 1])
        with text_col:
            st.markdown(localize("OWES_TEMPLATE", {
                "fromName": clean_for_settlement(ledger.display_name(suggestion.from_key)),
                "amount": format_amount(suggestion.amount_cents, locale),
                "toName": clean_for_settlement(ledger.display_name(suggestion.to_key)),
            }, locale))
        with button_col:
            st.button(
                localize("SETTLED_BUTTON", locale=locale),
                key=f"settle-{index}",
                on_click=settle_callback,
                args=(flow, suggestion),
            )


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Parser", "parser"),
        ("Settlement", "settlement"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - Loaded")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "Settings are read from environment variables or a `.env` file: "
        "`SPLITWISER_PARSER_RESET_PAYER_ON_BLANK_LINE`, "
        "`SPLITWISER_SETTLEMENT_BALANCE_TOLERANCE_CENTS` and `LOCALE`."
    )


if __name__ == "__main__":
    main()
