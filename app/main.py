"""
Streamlit Frontend for Bill Tracker

A single page: the add/edit form, the month selector, the bills due in
that month and the month's totals.

DESIGN PRINCIPLES:
1. The page never changes bills itself; every action is a Ledger call
2. After every action the page re-reads the month view and totals
3. Deleting always asks for confirmation first
4. Bad input keeps the form filled in so the user can fix it

The bill being edited lives in st.session_state and is passed to
Ledger.submit() explicitly.
"""

from datetime import date

import streamlit as st

from bill_tracker.errors import NotFoundError, ValidationError
from bill_tracker.ledger import Ledger, create_ledger
from bill_tracker.presentation import (
    current_month_key,
    format_currency,
    format_date,
    initials,
    month_options,
    parse_month_key,
    status_label,
)
from bill_tracker.services.storage import StorageWriteError
from bill_tracker.validation import BillValidator


# Page configuration
st.set_page_config(
    page_title="Minhas Contas",
    page_icon="💸",
    layout="centered",
)

# Custom CSS for the bill list
st.markdown("""
<style>
    .avatar {
        width: 40px;
        height: 40px;
        border-radius: 50%;
        background-color: #e3e8f0;
        color: #2c3e50;
        font-weight: bold;
        display: flex;
        align-items: center;
        justify-content: center;
    }
    .badge {
        padding: 2px 10px;
        border-radius: 10px;
        font-size: 0.8em;
        text-align: center;
    }
    .badge.paid {
        background-color: #d4edda;
        color: #155724;
    }
    .badge.pending {
        background-color: #fff3cd;
        color: #856404;
    }
    .amount.paid {
        text-decoration: line-through;
        color: #6c757d;
    }
</style>
""", unsafe_allow_html=True)

SUBMIT_ADD_LABEL = "Adicionar"
SUBMIT_EDIT_LABEL = "Salvar"
DELETE_PROMPT = "Excluir esta conta? Esta ação não pode ser desfeita."

validator = BillValidator()


@st.cache_resource
def get_ledger() -> Ledger:
    """Get or create the ledger (one per server process, shared by sessions)."""
    return create_ledger()


def init_session_state():
    """Initialize per-session UI state."""
    defaults = {
        "editing_id": None,
        "pending_delete_id": None,
        "flash": None,
        "form_error": None,
        "form_name": "",
        "form_value": "",
        "form_due_date": None,
        "month_key": current_month_key(),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def reset_form():
    st.session_state.form_name = ""
    st.session_state.form_value = ""
    st.session_state.form_due_date = None
    st.session_state.editing_id = None
    st.session_state.form_error = None


# =============================================================================
# CALLBACKS - run before the page is redrawn
# =============================================================================

def on_submit(ledger: Ledger):
    """Add or edit from the form."""
    editing_id = st.session_state.editing_id
    try:
        ledger.submit(
            name=st.session_state.form_name,
            value=st.session_state.form_value,
            due_date=st.session_state.form_due_date,
            editing_id=editing_id,
        )
    except ValidationError as e:
        # Keep the input so the user can correct it
        st.session_state.form_error = validator.get_user_friendly_summary(e)
        return
    except NotFoundError:
        st.session_state.flash = ("error", "Esta conta não existe mais.")
        reset_form()
        return
    except StorageWriteError as e:
        st.session_state.flash = ("error", f"Não foi possível salvar: {e}")
        return

    message = "Conta editada com sucesso!" if editing_id else "Conta adicionada!"
    st.session_state.flash = ("success", message)
    reset_form()


def on_start_edit(ledger: Ledger, bill_id: str):
    """Fill the form with a bill's current values."""
    try:
        record = ledger.get(bill_id)
    except NotFoundError:
        return
    st.session_state.editing_id = bill_id
    st.session_state.form_name = record.name
    st.session_state.form_value = str(record.value)
    st.session_state.form_due_date = record.due_on
    st.session_state.form_error = None


def on_toggle_paid(ledger: Ledger, bill_id: str):
    try:
        ledger.toggle_paid(bill_id)
    except NotFoundError:
        st.session_state.flash = ("error", "Esta conta não existe mais.")
    except StorageWriteError as e:
        st.session_state.flash = ("error", f"Não foi possível salvar: {e}")


def on_request_delete(bill_id: str):
    st.session_state.pending_delete_id = bill_id


def on_confirm_delete(ledger: Ledger):
    bill_id = st.session_state.pending_delete_id
    st.session_state.pending_delete_id = None
    if bill_id is None:
        return
    try:
        ledger.remove(bill_id)
    except StorageWriteError as e:
        st.session_state.flash = ("error", f"Não foi possível salvar: {e}")
        return
    if st.session_state.editing_id == bill_id:
        reset_form()
    st.session_state.flash = ("success", "Conta excluída")


def on_cancel_delete():
    st.session_state.pending_delete_id = None


# =============================================================================
# RENDERING
# =============================================================================

def render_form(ledger: Ledger):
    """Render the add/edit form."""
    editing = st.session_state.editing_id is not None

    with st.form("bill_form", clear_on_submit=False):
        st.text_input("Nome da conta", key="form_name")
        col1, col2 = st.columns(2)
        with col1:
            st.text_input("Valor (R$)", key="form_value", placeholder="0,00")
        with col2:
            st.date_input("Vencimento", key="form_due_date", format="DD/MM/YYYY")

        st.form_submit_button(
            SUBMIT_EDIT_LABEL if editing else SUBMIT_ADD_LABEL,
            type="primary",
            on_click=on_submit,
            args=(ledger,),
        )

    st.button("Limpar", on_click=reset_form)

    if st.session_state.form_error:
        st.warning(st.session_state.form_error)


def render_bill_row(ledger: Ledger, record):
    """Render one bill with its toggle/edit/delete buttons."""
    avatar_col, info_col, amount_col, badge_col, actions_col = st.columns(
        [1, 4, 2, 2, 3]
    )

    with avatar_col:
        st.markdown(
            f'<div class="avatar">{initials(record.name)}</div>',
            unsafe_allow_html=True,
        )
    with info_col:
        st.markdown(f"**{record.name}**")
        st.caption(format_date(record.due_date))
    with amount_col:
        paid_class = " paid" if record.paid else ""
        st.markdown(
            f'<div class="amount{paid_class}">{format_currency(record.value)}</div>',
            unsafe_allow_html=True,
        )
    with badge_col:
        badge_class = "paid" if record.paid else "pending"
        st.markdown(
            f'<div class="badge {badge_class}">{status_label(record.paid)}</div>',
            unsafe_allow_html=True,
        )
    with actions_col:
        toggle_col, edit_col, delete_col = st.columns(3)
        toggle_col.button(
            "↺" if record.paid else "✔",
            key=f"toggle_{record.id}",
            help="Marcar como pendente" if record.paid else "Marcar como pago",
            on_click=on_toggle_paid,
            args=(ledger, record.id),
        )
        edit_col.button(
            "✎",
            key=f"edit_{record.id}",
            help="Editar",
            on_click=on_start_edit,
            args=(ledger, record.id),
        )
        delete_col.button(
            "🗑",
            key=f"delete_{record.id}",
            help="Excluir",
            on_click=on_request_delete,
            args=(record.id,),
        )

    if st.session_state.pending_delete_id == record.id:
        st.warning(DELETE_PROMPT)
        confirm_col, cancel_col = st.columns(2)
        confirm_col.button(
            "Excluir",
            key=f"confirm_delete_{record.id}",
            type="primary",
            on_click=on_confirm_delete,
            args=(ledger,),
        )
        cancel_col.button(
            "Cancelar",
            key=f"cancel_delete_{record.id}",
            on_click=on_cancel_delete,
        )


def render_month(ledger: Ledger):
    """Render the month selector, the month's bills and its totals."""
    options = month_options(ledger.records(), today=date.today())
    if st.session_state.month_key not in options:
        options = sorted(set(options) | {st.session_state.month_key})

    st.selectbox("Mês", options=options, key="month_key")
    year, month = parse_month_key(st.session_state.month_key)

    view = ledger.filter_by_month(year, month)
    if view.is_empty():
        st.info("Nenhuma conta com vencimento neste mês.")
    else:
        for record in view:
            render_bill_row(ledger, record)

    totals = ledger.totals_for_month(year, month)
    st.markdown("---")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total do mês", format_currency(totals.total_all))
    col2.metric("Pago", format_currency(totals.total_paid))
    col3.metric("Pendente", format_currency(totals.total_pending))


def main():
    """Main application entry point."""
    ledger = get_ledger()
    init_session_state()

    st.title("💸 Minhas Contas")

    if ledger.unreadable_count:
        st.warning(
            f"{ledger.unreadable_count} conta(s) salva(s) não puderam ser lidas. "
            "Elas foram mantidas no arquivo sem alterações."
        )

    flash = st.session_state.flash
    if flash:
        level, message = flash
        if level == "success":
            st.success(message)
        else:
            st.error(message)
        st.session_state.flash = None

    render_form(ledger)
    st.markdown("---")
    render_month(ledger)


if __name__ == "__main__":
    main()
