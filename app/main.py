import sys
import os
import dataclasses
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cart_decoder.decoder import decode
from cart_decoder.batch import decode_many, summarize

SAMPLE_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "input.json")


# ============ Кэширование данных ============
@st.cache_data
def get_sample() -> str:
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return f.read()


# ============ Инициализация ============
st.set_page_config(
    page_title="Cart Decoder",
    page_icon="🛒",
    layout="wide",
)

st.title("🛒 Декодер корзины")
st.caption("JSON → Shop: переименование ключей и приведение amount / zip")

with st.sidebar:
    st.header("📂 Режим")
    mode = st.radio(
        "Выберите режим:",
        ["🧾 Один документ", "📦 Пакет файлов"],
        label_visibility="collapsed",
    )


def show_error(error) -> None:
    st.error(f"❌ {error.kind}: {error}")
    st.json(dataclasses.asdict(error))


# ============ PAGE: ОДИН ДОКУМЕНТ ============
if mode == "🧾 Один документ":
    uploaded = st.file_uploader("📄 JSON-файл", type=["json"])
    text = st.text_area("…или вставьте документ", value=get_sample(), height=320)

    if st.button("▶️ Декодировать", type="primary"):
        source = uploaded.getvalue() if uploaded is not None else text.encode("utf-8")
        result = decode(source)

        if result.is_left:
            show_error(result.value)
        else:
            shop = result.value
            cart = shop.cart

            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("💰 Amount", f"{cart.cost.total_amount.amount:g}")
            with col2:
                st.metric("🚚 Delivery groups", len(cart.delivery_groups))
            with col3:
                st.metric("📧 Email", cart.buyer_identity.customer.email)

            if cart.delivery_groups:
                st.subheader("🚚 Адреса доставки")
                st.table(
                    [
                        dataclasses.asdict(group.delivery_address)
                        for group in cart.delivery_groups
                    ]
                )

            st.subheader("🌳 Дерево Shop")
            st.json(dataclasses.asdict(shop))


# ============ PAGE: ПАКЕТ ============
elif mode == "📦 Пакет файлов":
    files = st.file_uploader("📄 JSON-файлы", type=["json"], accept_multiple_files=True)

    if files and st.button("▶️ Декодировать все", type="primary"):
        results = decode_many([f.getvalue() for f in files])
        summary = summarize(results)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("📦 Всего", summary["total"])
        with col2:
            st.metric("✅ Успешно", summary["decoded"])
        with col3:
            st.metric("❌ Ошибки", summary["failed"])

        st.divider()

        for f, result in zip(files, results):
            if result.is_left:
                st.error(f"❌ {f.name}: {result.value.kind}: {result.value}")
            else:
                st.success(
                    f"✅ {f.name}: amount={result.value.cart.cost.total_amount.amount:g}, "
                    f"groups={len(result.value.cart.delivery_groups)}"
                )
