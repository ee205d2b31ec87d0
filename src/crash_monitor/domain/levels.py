from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class IndicatorStatus(str, Enum):
    SAFE = "safe"
    WARN = "warn"
    DANGER = "danger"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"
    CRISIS = "crisis"


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    color: str


@dataclass(frozen=True)
class RiskLevelProfile:
    level: RiskLevel
    min_score: int
    label: str
    color: str
    short_action: str
    recommended_action: str
    guidance: str
    guide_action: str


STATUS_DISPLAY: Dict[IndicatorStatus, StatusDisplay] = {
    IndicatorStatus.SAFE: StatusDisplay(label="정상", color="#00d084"),
    IndicatorStatus.WARN: StatusDisplay(label="주의", color="#ffd166"),
    IndicatorStatus.DANGER: StatusDisplay(label="위험", color="#ff6b6b"),
    IndicatorStatus.UNKNOWN: StatusDisplay(label="미입력", color="#555"),
}


# Ordered by ascending lower bound; each band runs up to the next one's min_score.
RISK_LEVEL_PROFILES: Dict[RiskLevel, RiskLevelProfile] = {
    RiskLevel.SAFE: RiskLevelProfile(
        level=RiskLevel.SAFE,
        min_score=0,
        label="안전",
        color="#00d084",
        short_action="안전 구간",
        recommended_action="정상 보유",
        guidance="현재 시장은 안정적입니다. 기존 포지션을 유지하고 추가 매수 검토 가능.",
        guide_action="보유 유지",
    ),
    RiskLevel.CAUTION: RiskLevelProfile(
        level=RiskLevel.CAUTION,
        min_score=25,
        label="주의",
        color="#ffd166",
        short_action="주의 필요",
        recommended_action="모니터링 강화",
        guidance="일부 경고 신호 감지. 신규 매수 자제, 포지션 30% 현금화 고려.",
        guide_action="30% 현금화 검토",
    ),
    RiskLevel.DANGER: RiskLevelProfile(
        level=RiskLevel.DANGER,
        min_score=50,
        label="위험",
        color="#ff8c42",
        short_action="매도 고려",
        recommended_action="30~50% 매도 권고",
        guidance="복수의 위험 신호 중첩. 수익 구간 물량부터 단계적 매도 실행.",
        guide_action="50% 매도 실행",
    ),
    RiskLevel.CRISIS: RiskLevelProfile(
        level=RiskLevel.CRISIS,
        min_score=75,
        label="위기",
        color="#ff4444",
        short_action="즉시 대응",
        recommended_action="즉시 대응 필요",
        guidance="다중 위기 신호 발생. 레버리지/신용 포지션 즉시 정리, 전체 포지션 축소.",
        guide_action="레버리지 즉시 청산",
    ),
}
