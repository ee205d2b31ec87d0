from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import streamlit as st

SRC_PATH = Path(__file__).resolve().parents[2]
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from crash_monitor.client.dashboard import DashboardController
from crash_monitor.client.sources import source_from_settings
from crash_monitor.config import ConfigurationError, configure_logging, load_settings
from crash_monitor.core.assessment_types import RiskAssessment
from crash_monitor.core.values import parse_value
from crash_monitor.domain.indicators import Indicator, default_catalogue
from crash_monitor.domain.levels import RISK_LEVEL_PROFILES, STATUS_DISPLAY
from crash_monitor.engine.classifier import ThresholdClassifier
from crash_monitor.ui.gauge import change_color, guide_rows, indicator_gauge, lit_segments


APP_TITLE = "시장 붕괴 신호 모니터"
APP_TAGLINE = "MARKET CRASH SIGNAL MONITOR"
DISCLAIMER = (
    "※ 이 도구는 투자 참고용이며 투자 권유가 아닙니다. "
    "신용잔고·외국인 순매도는 금투협·네이버 증권에서 직접 확인 후 입력하세요."
)


def _build_controller() -> tuple[DashboardController, Optional[str]]:
    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        source = source_from_settings(settings)
    except ConfigurationError as e:
        return DashboardController(source=_UnavailableSource(str(e)), delay_seconds=0.0), str(e)

    return DashboardController(source=source, delay_seconds=settings.fetch_delay_seconds), None


class _UnavailableSource:
    def __init__(self, reason: str):
        self.reason = reason

    def fetch(self, indicator_id: str):
        raise ConfigurationError(self.reason)


def _controller() -> DashboardController:
    if "controller" not in st.session_state:
        controller, problem = _build_controller()
        st.session_state.controller = controller
        st.session_state.config_problem = problem
    return st.session_state.controller


def _run_fetch(controller: DashboardController) -> None:
    with st.spinner("데이터 조회 중..."):
        controller.fetch_all()


def _bar_html(segments: list[tuple[float, str]], marker_pct: Optional[float], marker_color: str, height: int) -> str:
    parts = "".join(
        f'<div style="width:{w:.2f}%;background:{c};"></div>' for w, c in segments
    )
    marker = ""
    if marker_pct is not None:
        marker = (
            f'<div style="position:absolute;top:-3px;left:{marker_pct:.2f}%;transform:translateX(-50%);'
            f'width:12px;height:12px;border-radius:50%;background:{marker_color};"></div>'
        )
    return (
        f'<div style="position:relative;height:{height}px;margin-top:8px;">'
        f'<div style="display:flex;height:100%;border-radius:3px;overflow:hidden;">{parts}</div>'
        f"{marker}</div>"
    )


def _render_risk_meter(assessment: RiskAssessment) -> None:
    profile = RISK_LEVEL_PROFILES[assessment.level]

    col_a, col_b = st.columns([2, 1])
    with col_a:
        st.caption("MARKET RISK SCORE")
        st.markdown(
            f'<span style="font-size:56px;font-weight:700;color:{profile.color};">{assessment.score}</span>'
            f'<span style="color:#6b7280;"> / 100</span>',
            unsafe_allow_html=True,
        )
    with col_b:
        st.metric("Level", profile.label)
        st.caption(profile.short_action)

    colors = [p.color for p in RISK_LEVEL_PROFILES.values()]
    lit = lit_segments(assessment.score)
    segments = [(25.0, c if on else c + "22") for c, on in zip(colors, lit)]
    st.markdown(_bar_html(segments, min(assessment.score, 100), profile.color, 8), unsafe_allow_html=True)

    st.divider()
    st.caption("RECOMMENDED ACTION")
    st.markdown(f"**{assessment.recommendation.action}**")
    st.write(assessment.recommendation.guidance)


def _render_card(controller: DashboardController, indicator: Indicator, classifier: ThresholdClassifier) -> None:
    input_key = f"input_{indicator.indicator_id}"
    if not indicator.auto_fetch and input_key in st.session_state:
        # the badge is drawn above the input, so take this run's entry from widget state
        entered = st.session_state[input_key]
        controller.set_value(indicator.indicator_id, "" if entered is None else entered)
    raw = controller.state.values.get(indicator.indicator_id, "")
    status = classifier.classify(indicator, raw)
    display = STATUS_DISPLAY[status]

    with st.container(border=True):
        head, badge = st.columns([3, 1])
        head.markdown(f"**{indicator.label}**")
        head.caption(indicator.sublabel)
        badge.markdown(
            f'<span style="color:{display.color};font-weight:700;">{display.label}</span>',
            unsafe_allow_html=True,
        )

        if indicator.auto_fetch:
            v = parse_value(raw)
            shown = f"{v:,g}" if v is not None else "—"
            meta = controller.state.meta.get(indicator.indicator_id)
            line = f'<span style="font-size:28px;font-weight:700;color:{display.color};">{shown}</span> {indicator.unit}'
            if meta is not None and meta.change:
                line += f' <span style="color:{change_color(meta.change)};">{meta.change}</span>'
            st.markdown(line, unsafe_allow_html=True)
            if meta is not None and meta.as_of:
                st.caption(f"기준: {meta.as_of}")
        else:
            st.number_input(
                f"{indicator.label} ({indicator.unit})",
                value=None,
                placeholder="직접 입력",
                key=input_key,
                label_visibility="collapsed",
            )
            if indicator.source_url:
                st.markdown(f"[{indicator.source} 확인 →]({indicator.source_url})")

        gauge = indicator_gauge(indicator, controller.state.values.get(indicator.indicator_id))
        segments = [
            (gauge.safe_pct, "rgba(0,208,132,0.3)"),
            (gauge.warn_pct, "rgba(255,209,102,0.3)"),
            (gauge.danger_pct, "rgba(255,107,107,0.3)"),
        ]
        st.markdown(_bar_html(segments, gauge.marker_pct, display.color, 6), unsafe_allow_html=True)

        st.caption(f"주의 {indicator.warn:,g}{indicator.unit} · 위험 {indicator.danger:,g}{indicator.unit}")
        st.caption(indicator.description)


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="centered")
    controller = _controller()

    st.caption(APP_TAGLINE)
    st.title(APP_TITLE)

    if st.session_state.get("config_problem"):
        st.warning(f"자동 조회 비활성화: {st.session_state.config_problem}")

    first_run = controller.state.last_updated is None and not st.session_state.get("fetched_once")
    busy = st.session_state.get("fetching", False) or controller.is_busy()
    refresh = st.button("조회 중..." if busy else "↻ 새로고침", disabled=busy)
    if first_run or refresh:
        # redraw with the button disabled before the fetch starts
        st.session_state.fetched_once = True
        st.session_state.fetching = True
        st.rerun()
    if st.session_state.get("fetching"):
        try:
            _run_fetch(controller)
        finally:
            st.session_state.fetching = False
        st.rerun()

    if controller.state.last_updated is not None:
        st.caption(f"마지막 조회: {controller.state.last_updated.strftime('%H:%M:%S')}")
    if controller.state.error:
        st.error(f"⚠ {controller.state.error}")

    catalogue = default_catalogue()
    classifier = ThresholdClassifier()

    # filled after the cards so manual entries made this run are scored
    meter = st.container()

    with st.container():
        cols = st.columns(2)
        for n, indicator in enumerate(catalogue):
            with cols[n % 2]:
                _render_card(controller, indicator, classifier)

    with meter:
        _render_risk_meter(controller.assessment())

    st.divider()
    st.caption("SIGNAL INTERPRETATION GUIDE")
    st.dataframe(
        [{"Score": r["score"], "Level": r["label"], "Action": r["action"]} for r in guide_rows()],
        width="stretch",
        hide_index=True,
    )

    st.caption(DISCLAIMER)


if __name__ == "__main__":
    main()
