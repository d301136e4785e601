import os
from pathlib import Path

import streamlit as st

from providers import DEFAULT_WORDS_URL, FileWordListProvider, OnlineWordListProvider
from scores import THEMES, PreferenceStore
from wordchain import Dictionary, WordChainGame

DEFAULT_CHAIN_LENGTH = 2
CHAIN_LENGTHS = (1, 2, 3, 4)

DARK_CSS = """
<style>
.stApp { background-color: #111827; color: #f9fafb; }
.stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p { color: #f9fafb; }
</style>
"""

# ---------- App setup ----------
st.set_page_config(page_title="WordChain", page_icon="🔗", layout="centered")


@st.cache_resource(show_spinner="Loading words...")
def load_dictionary() -> Dictionary:
    # loaded once per process and shared by every browser session
    words_file = os.environ.get("WORDCHAIN_WORDS_FILE")
    if words_file:
        return FileWordListProvider(Path(words_file)).load()
    return OnlineWordListProvider(os.environ.get("WORDCHAIN_WORDS_URL", DEFAULT_WORDS_URL)).load()


prefs = PreferenceStore(Path(os.environ.get("WORDCHAIN_PREFS_FILE", "~/.wordchain.json")))

try:
    dictionary = load_dictionary()
except ValueError as e:
    st.error(str(e))
    st.stop()


def start_game(chain_length: int) -> bool:
    try:
        st.session_state.game.new_game(chain_length)
    except ValueError as e:
        st.session_state.feedback = ("error", str(e))
        return False
    st.session_state.feedback = None
    return True


if "game" not in st.session_state:
    st.session_state.game = WordChainGame(dictionary)
    st.session_state.feedback = None
    start_game(DEFAULT_CHAIN_LENGTH)

game: WordChainGame = st.session_state.game

if prefs.theme == "dark":
    st.markdown(DARK_CSS, unsafe_allow_html=True)

# ---------- Sidebar controls ----------
with st.sidebar:
    st.header("Settings")
    current_length = game.chain_length or DEFAULT_CHAIN_LENGTH
    chain_length = st.selectbox(
        "Chain length",
        CHAIN_LENGTHS,
        index=CHAIN_LENGTHS.index(current_length) if current_length in CHAIN_LENGTHS else 1,
        disabled=game.score > 0 and not game.is_over,
        help="Changing the chain length starts a new game.",
    )
    theme = st.selectbox("Theme", THEMES, index=THEMES.index(prefs.theme))
    if theme != prefs.theme:
        prefs.set_theme(theme)
        st.rerun()

if game.status == "idle":
    st.title("🔗 WordChain")
    _, message = st.session_state.feedback or ("error", "No game could be started with this word list.")
    st.warning(message)
    if st.button("Try again", type="primary"):
        start_game(int(chain_length))
        st.rerun()
    st.stop()

if chain_length != game.chain_length and start_game(int(chain_length)):
    st.rerun()

# ---------- Header ----------
st.title("🔗 WordChain")
n = game.chain_length
st.markdown(f"Enter a word that starts with the last **{n}** letter{'s' if n != 1 else ''}.")

cols = st.columns(3)
cols[0].metric("Current word", game.current_word)
cols[1].metric("Score", game.score)
cols[2].metric("High score", prefs.high_score(n))

st.divider()

# ---------- Word input ----------
with st.form("move", clear_on_submit=True):
    guess = st.text_input("Your word:", placeholder="Enter your word", disabled=game.is_over)
    submit = st.form_submit_button("Submit", type="primary", disabled=game.is_over)

if submit and not game.is_over:
    result = game.submit(guess)
    if not result.accepted:
        st.session_state.feedback = ("error", result.message)
    elif result.game_over:
        st.session_state.feedback = ("error", result.message)
        if prefs.record_score(result.snapshot.score, result.snapshot.chain_length):
            st.session_state.feedback = ("success", "🎉 New high score!")
            st.session_state.celebrate = True
    else:
        st.session_state.feedback = ("success", result.message)
    st.rerun()

# ---------- Feedback ----------
if st.session_state.pop("celebrate", False):
    st.balloons()
if st.session_state.feedback:
    kind, message = st.session_state.feedback
    if kind == "error":
        st.warning(message)
    else:
        st.success(message)

if game.is_over:
    st.error("Game Over!")

if st.button("New Game", use_container_width=True):
    start_game(game.chain_length or DEFAULT_CHAIN_LENGTH)
    st.rerun()

# ---------- History ----------
st.subheader("Chain")
history = game.history()
if len(history) <= 1:
    st.caption("No words played yet.")
st.write(" → ".join(f"`{w}`" for w in history))
