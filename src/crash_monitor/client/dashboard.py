from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from crash_monitor.core.assessment_engine import AssessmentEngine
from crash_monitor.core.assessment_types import RiskAssessment
from crash_monitor.domain.indicators import IndicatorCatalogue, default_catalogue
from crash_monitor.domain.schemas import IndicatorReading
from crash_monitor.client.sources import IndicatorSource

logger = logging.getLogger(__name__)

FETCH_DELAY_SECONDS = 2.0


class FetchPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    DONE = "done"
    ERRORED = "errored"


@dataclass
class DashboardState:
    values: Dict[str, str] = field(default_factory=dict)
    meta: Dict[str, IndicatorReading] = field(default_factory=dict)
    loading: Dict[str, bool] = field(default_factory=dict)
    error: Optional[str] = None
    failed: List[str] = field(default_factory=list)
    last_updated: Optional[datetime] = None
    phase: FetchPhase = FetchPhase.IDLE
    current: Optional[str] = None

    @classmethod
    def empty(cls, catalogue: IndicatorCatalogue) -> "DashboardState":
        return cls(
            values={i.indicator_id: "" for i in catalogue},
            loading={i.indicator_id: False for i in catalogue.auto_fetch()},
        )


def fetch_error_message(indicator_id: str) -> str:
    return f"{indicator_id} 조회 실패 — API 연결 확인 필요"


class DashboardController:
    """
    In-memory dashboard state plus the sequential auto-fetch run.

    Auto-fetch indicators are requested one at a time in catalogue order with
    a fixed pause between calls; a failure on one indicator is recorded and
    the run moves on to the next.
    """

    def __init__(
        self,
        source: IndicatorSource,
        catalogue: Optional[IndicatorCatalogue] = None,
        engine: Optional[AssessmentEngine] = None,
        delay_seconds: float = FETCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
        state: Optional[DashboardState] = None,
    ):
        self.source = source
        self.catalogue = catalogue or default_catalogue()
        self.engine = engine or AssessmentEngine()
        self.delay_seconds = float(delay_seconds)
        self._sleep = sleep
        self._clock = clock
        self.state = state or DashboardState.empty(self.catalogue)

    def is_busy(self) -> bool:
        return self.state.phase == FetchPhase.FETCHING or any(self.state.loading.values())

    def set_value(self, indicator_id: str, raw: Any) -> None:
        if indicator_id not in self.catalogue:
            raise KeyError(indicator_id)
        self.state.values[indicator_id] = "" if raw is None else str(raw)

    def fetch_one(self, indicator_id: str) -> bool:
        self.state.loading[indicator_id] = True
        self.state.current = indicator_id
        try:
            data = self.source.fetch(indicator_id)
            reading = IndicatorReading.model_validate(data)
        except Exception as e:
            logger.error(f"{indicator_id} fetch failed: {e}")
            self.state.error = fetch_error_message(indicator_id)
            self.state.failed.append(indicator_id)
            return False
        finally:
            self.state.loading[indicator_id] = False

        value = data.get("value") if isinstance(data, dict) else reading.value
        self.state.values[indicator_id] = str(value)
        self.state.meta[indicator_id] = reading
        return True

    def fetch_all(self) -> DashboardState:
        self.state.error = None
        self.state.failed = []
        self.state.phase = FetchPhase.FETCHING

        auto_ids = [i.indicator_id for i in self.catalogue.auto_fetch()]
        try:
            for n, indicator_id in enumerate(auto_ids):
                self.fetch_one(indicator_id)
                if n < len(auto_ids) - 1:
                    self._sleep(self.delay_seconds)
        finally:
            self.state.current = None
            self.state.last_updated = self._clock()
            self.state.phase = FetchPhase.ERRORED if self.state.failed else FetchPhase.DONE
        return self.state

    def assessment(self) -> RiskAssessment:
        return self.engine.run(self.catalogue, self.state.values)

    def score(self) -> int:
        return self.assessment().score
