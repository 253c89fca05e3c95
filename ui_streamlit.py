import os
import time
import html
import requests
import streamlit as st

# === Settings ===
DEFAULT_API_URL = os.getenv("API_URL", "http://localhost:8000/api/ai/ask")
APP_TITLE = "⚙️ SIMVEX AI Assistant"
APP_DESC = "Pick a part, ask a question, get a short engineering explanation from the model."
WHOLE_MODEL = "전체 모델"
FAILURE_PREFIX = "AI request failed: "

st.set_page_config(page_title=APP_TITLE, page_icon="⚙️", layout="wide")
st.markdown(
    """
<style>
:root { --radius: 12px; }
.block-container { padding-top: 2rem; padding-bottom: 1rem; }
.answer { border: 1px solid #e5e7eb; border-radius: var(--radius); padding: 14px; }
.divider { border-top: 1px solid #e5e7eb; margin: 8px 0 16px 0; }
@media (prefers-color-scheme: dark) {
  .answer { border-color: #1f2937; }
  .divider { border-top-color: #1f2937; }
}
</style>
""",
    unsafe_allow_html=True,
)

# === Sidebar ===
with st.sidebar:
    st.markdown(f"### {APP_TITLE}")
    st.write(APP_DESC)
    api_url = st.text_input("API URL", value=DEFAULT_API_URL)
    part = st.text_input("Selected part", value=WHOLE_MODEL)
    st.markdown("---")
    st.markdown("- Start the backend: `uvicorn simvex.main:app --reload`")
    st.markdown("- OPENAI_API_KEY must be set for real answers.")
    st.markdown("---")
    clear_btn = st.button("Clear history")

# === State ===
if "history" not in st.session_state:
    # items: (part, question, answer_html, latency_sec, ok)
    st.session_state.history = []

if clear_btn:
    st.session_state.history.clear()

st.title(APP_TITLE)

col_inp, col_btn = st.columns([4, 1])
with col_inp:
    user_q = st.text_input("Your question:", placeholder="e.g. What is this gear for?")
with col_btn:
    ask_clicked = st.button("Ask", type="primary", use_container_width=True)

def call_api(question: str, current_part: str, url: str) -> dict:
    """POST /api/ai/ask. The backend answers 200 even on failure; the prefix tells them apart."""
    try:
        t0 = time.time()
        r = requests.post(url, json={"question": question, "currentPart": current_part}, timeout=90)
        latency = time.time() - t0
        if r.status_code == 200:
            answer = r.json().get("answer", "")
            return {"_ok": not answer.startswith(FAILURE_PREFIX), "_latency": latency, "answer": answer}
        return {"_ok": False, "_latency": latency, "answer": f"HTTP {r.status_code}: {r.text}"}
    except requests.RequestException as e:
        return {"_ok": False, "_latency": 0.0, "answer": str(e)}

def as_html_with_br(text: str) -> str:
    return html.escape(text).replace("\n", "<br/>")

if ask_clicked and user_q.strip():
    resp = call_api(user_q.strip(), part.strip() or WHOLE_MODEL, api_url)
    st.session_state.history.append((
        part.strip() or WHOLE_MODEL,
        user_q.strip(),
        as_html_with_br(resp["answer"]),
        resp["_latency"],
        resp["_ok"],
    ))

# === History (newest first) ===
for p, q, a_html, lat, ok in reversed(st.session_state.history):
    with st.container():
        st.markdown(f"**🔩 {html.escape(p)}** · {html.escape(q)}")
        if ok:
            st.markdown(f"""<div class="answer">{a_html}</div>""", unsafe_allow_html=True)
        else:
            st.error(html.unescape(a_html.replace("<br/>", "\n")))
        st.caption(f"⏱ {lat:.2f} s • API: {api_url}")
        st.markdown("<div class='divider'></div>", unsafe_allow_html=True)
