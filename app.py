import logging

import pandas as pd
import streamlit as st

from amount_words import InvalidAmount, amount_to_words
from forms import blank_items_frame, items_from_dataframe, validate_invoice
from ledger import InvalidPayment, Sale, apply_payment
from tax_calc import (
    DEFAULT_GST_RATE,
    GST_RATE_OPTIONS,
    TaxRegime,
    compute_totals,
    regime_for_states,
    tax_lines,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# PAGE CONFIG
# ---------------------------------------------------
st.set_page_config(page_title="GST Invoice", layout="wide")

# ---------------------------------------------------
# BRANDING INFO (Edit as per your real details)
# ---------------------------------------------------
COMPANY_INFO = {
    "name": "Friends Group Company Pvt. Ltd.",
    "gstin": "27ABCDE1234F1Z5",
    "address": "Wiman Nagar, Pune, Maharashtra",
    "state": "Maharashtra",
    "contact": "+8207050123",
    "email": "info@mycompany.com",
}

REGIME_LABELS = {
    TaxRegime.NONE: "No GST",
    TaxRegime.INTRASTATE: "Same state (CGST + SGST)",
    TaxRegime.INTERSTATE: "Different state (IGST)",
}

WORDS_PLACEHOLDER = "Amount in words unavailable"

st.markdown("""
    <style>
        .section-title {
            font-size: 22px;
            color: #008000;
            font-weight: 700;
            border-bottom: 2px solid #008000;
            margin-bottom: 12px;
            padding-bottom: 4px;
        }
        .summary-box {
            background-color: #eaf1fb;
            padding: 12px 18px;
            border-radius: 8px;
            font-weight: 600;
            margin-top: 15px;
            border-left: 4px solid #0b5394;
        }
    </style>
""", unsafe_allow_html=True)

# ---------------------------------------------------
# COMPANY HEADER
# ---------------------------------------------------
st.title("🧾 GST Invoice")
st.caption(f"{COMPANY_INFO['name']} | GSTIN: {COMPANY_INFO['gstin']} | {COMPANY_INFO['address']}")

# ---------------------------------------------------
# PARTIES
# ---------------------------------------------------
st.markdown('<div class="section-title">Invoice Details</div>', unsafe_allow_html=True)
col1, col2, col3 = st.columns(3)
with col1:
    seller_name = st.text_input("Seller Name", value=COMPANY_INFO["name"])
    seller_state = st.text_input("Seller State", value=COMPANY_INFO["state"])
with col2:
    buyer_name = st.text_input("Buyer Name")
    buyer_state = st.text_input("Buyer State")
with col3:
    invoice_number = st.text_input("Invoice Number")
    invoice_date = st.date_input("Invoice Date")

# ---------------------------------------------------
# TAX SETTINGS
# ---------------------------------------------------
col1, col2 = st.columns(2)
with col1:
    gst_rate = st.selectbox(
        "GST Rate (%)", GST_RATE_OPTIONS, index=GST_RATE_OPTIONS.index(DEFAULT_GST_RATE)
    )
with col2:
    regimes = list(REGIME_LABELS)
    suggested = regime_for_states(seller_state, buyer_state)
    regime = st.radio(
        "GST Type",
        regimes,
        index=regimes.index(suggested),
        format_func=REGIME_LABELS.get,
        horizontal=True,
    )

# ---------------------------------------------------
# LINE ITEMS
# ---------------------------------------------------
st.markdown('<div class="section-title">Items</div>', unsafe_allow_html=True)
if "items_frame" not in st.session_state:
    st.session_state.items_frame = blank_items_frame()

edited = st.data_editor(
    st.session_state.items_frame,
    num_rows="dynamic",
    use_container_width=True,
    column_config={
        "description": st.column_config.TextColumn("Description"),
        "hsn": st.column_config.TextColumn("HSN"),
        "quantity": st.column_config.NumberColumn("Qty", min_value=0.0, default=1.0),
        "rate": st.column_config.NumberColumn("Rate", min_value=0.0, default=0.0, format="%.2f"),
        "exclude": st.column_config.CheckboxColumn("Exclude GST", default=False),
    },
    key="items_editor",
)
items = items_from_dataframe(edited)
totals = compute_totals(items, gst_rate, regime)

if items:
    st.dataframe(
        pd.DataFrame([
            {
                "Sr": i,
                "Description": it.description,
                "HSN": it.hsn_code,
                "Qty": float(it.quantity),
                "Rate": float(it.rate),
                "Amount": float(it.amount),
                "GST": "Excluded" if it.exclude_from_tax else f"{gst_rate}%",
            }
            for i, it in enumerate(items, start=1)
        ]),
        use_container_width=True,
        hide_index=True,
    )

# ---------------------------------------------------
# TOTALS
# ---------------------------------------------------
try:
    words = amount_to_words(totals.grand_total)
except InvalidAmount:
    logger.exception("Could not spell grand total %s", totals.grand_total)
    words = WORDS_PLACEHOLDER

tax_line = " | ".join(
    f"{label}: ₹{amount:,.2f}" for label, amount in tax_lines(totals, gst_rate, regime)
) or "GST: not applied"

st.markdown(f"""
<div class="summary-box">
    Subtotal: ₹{totals.subtotal:,.2f} | Taxable Value: ₹{totals.taxable_value:,.2f}<br>
    {tax_line}<br>
    <b>Grand Total: ₹{totals.grand_total:,.2f}</b><br>
    <i>{words}</i>
</div>
""", unsafe_allow_html=True)

if st.button("Check Invoice"):
    problems = validate_invoice(seller_name, buyer_name, invoice_number, items)
    if problems:
        for p in problems:
            st.warning(p)
    else:
        st.success(f"Invoice {invoice_number} dated {invoice_date} is ready to save.")
        with st.expander("Saved record"):
            st.json({
                "invoiceNumber": invoice_number,
                "buyerName": buyer_name,
                "gstRate": gst_rate,
                "gstType": regime.value,
                "items": [it.as_record() for it in items],
                "totals": totals.as_record(),
                "amountInWords": words,
            })

# ---------------------------------------------------
# PAYMENT PREVIEW
# ---------------------------------------------------
st.markdown('<div class="section-title">Payment</div>', unsafe_allow_html=True)
received = st.number_input("Amount Received", min_value=0.0, value=0.0, step=100.0)
sale = Sale.from_invoice(invoice_number, buyer_name, totals)
if received:
    try:
        sale = apply_payment(sale, received)
    except InvalidPayment as e:
        st.error(str(e))

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Invoice Total", f"₹{sale.total_amount:,.2f}")
with col2:
    st.metric("Pending", f"₹{sale.pending_amount:,.2f}")
with col3:
    st.metric("Status", sale.status.value.replace("_", " ").title())
