"""Echoes of Tomorrow (Streamlit)

Presentation sink.

Principles:
- UI only renders + triggers.
- All game rules live in core/ and engine/; this page reads published Frames.
- Streamlit has no frame callback, so while a turn resolves the page reruns
  itself every FRAME_DELAY_S and calls session.tick() with a monotonic clock.

Run: streamlit run app.py
"""

from __future__ import annotations

import time
from typing import Dict

import streamlit as st

from content.loader import load_card_pool
from core.state import METRICS, GameStatus
from engine.config import config_from_env
from engine.logging import dumps_run_export
from engine.session import Frame, GameSession

APP_TITLE = "Echoes of Tomorrow"
APP_SUBTITLE = "Balance ecology, cohesion, innovation and stability. Hold all four above 80 for five turns."
APP_VERSION = "1.0.0"

FRAME_DELAY_S = 1.0 / 30.0

st.set_page_config(page_title=APP_TITLE, page_icon="🌍", layout="wide")

CSS = """
<style>
.block-container {padding-top: 3.2rem; padding-bottom: 2rem;}
.card {
  border: 1px solid rgba(255,255,255,0.10);
  border-radius: 18px;
  padding: 16px 16px 12px 16px;
  background: rgba(255,255,255,0.02);
  min-height: 150px;
}
.small {font-size: 13px; opacity:.75;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)


# =========================
# Helpers
# =========================


def _now_ms() -> float:
    return time.monotonic() * 1000.0


def _effect_line(effects: Dict[str, float]) -> str:
    parts = [f"{k.capitalize()} {v:+g}" for k, v in effects.items() if abs(v) > 1e-9]
    return " · ".join(parts) if parts else "No direct effect"


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "session" not in ss:
        cfg = config_from_env()
        cards, status = load_card_pool(cfg.cards_path)
        ss.load_status = status
        ss.session = GameSession(cards, cfg)
        ss.terminal_seen = []
        ss.session.add_listener(lambda ev: ss.terminal_seen.append(ev))


def _on_select(index: int) -> None:
    st.session_state.session.select_card(index, now=_now_ms())


def _on_restart() -> None:
    st.session_state.session.restart()


# =========================
# Pages
# =========================


def render_metrics(frame: Frame) -> None:
    cols = st.columns(len(METRICS) + 1)
    cols[0].metric("Turn", frame.turn)
    for col, m in zip(cols[1:], METRICS):
        v = frame.metrics.get(m)
        col.progress(v / 100.0, text=f"{m.label}: {v:.0f}")
    st.caption(f"Harmony streak: {frame.streak}/{st.session_state.session.config.victory_streak}")


def render_offer(frame: Frame) -> None:
    if not frame.offer:
        st.warning("No cards left to offer.")
        return
    disabled = frame.resolving or frame.status is not GameStatus.PLAYING
    cols = st.columns(len(frame.offer))
    for i, (col, card) in enumerate(zip(cols, frame.offer)):
        with col:
            st.markdown("<div class='card'>", unsafe_allow_html=True)
            st.markdown(f"#### {card.title}")
            st.markdown(card.desc)
            st.markdown(f"<div class='small'>{_effect_line(card.to_dict()['effects'])} (±{card.variance:g})</div>", unsafe_allow_html=True)
            st.markdown("</div>", unsafe_allow_html=True)
            st.button(
                f"Choose {i + 1}",
                key=f"choose_{frame.turn}_{card.id}",
                on_click=_on_select,
                args=(i,),
                disabled=disabled,
                use_container_width=True,
            )


def page_run() -> None:
    ss = st.session_state
    session: GameSession = ss.session

    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    frame = session.tick(_now_ms())
    render_metrics(frame)

    if frame.message:
        st.info(frame.message)

    while ss.terminal_seen:
        ev = ss.terminal_seen.pop(0)
        if ev.status is GameStatus.VICTORY:
            st.balloons()
        else:
            st.snow()

    if frame.status is GameStatus.VICTORY:
        st.success("Victory! All civilization variables have reached harmony.")
    elif frame.status is GameStatus.COLLAPSE:
        st.error("Civilization collapsed. One or more variables fell below the critical threshold.")

    render_offer(frame)

    if frame.resolving:
        time.sleep(FRAME_DELAY_S)
        st.rerun()


def sidebar() -> None:
    ss = st.session_state
    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION}")
    st.sidebar.markdown("---")

    status = ss.load_status
    if status.ok:
        st.sidebar.success(f"{status.count} cards loaded")
    else:
        st.sidebar.warning(f"Built-in pool ({status.count} cards)")
        st.sidebar.caption(status.error)

    st.sidebar.button("Restart", on_click=_on_restart, use_container_width=True)

    session: GameSession = ss.session
    st.sidebar.download_button(
        "Download run log",
        data=dumps_run_export(session.export_run()).encode("utf-8"),
        file_name="echoes_run.json",
        mime="application/json",
        disabled=not session.turn_logs,
    )


# =========================
# Main
# =========================


def main() -> None:
    _ensure_state()
    sidebar()
    page_run()


if __name__ == "__main__":
    main()
