from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

DEFAULT_CATALOGUE_PATH = Path(__file__).resolve().parent / "indicators.json"


@dataclass(frozen=True)
class Indicator:
    indicator_id: str
    label: str
    unit: str
    warn: float
    danger: float
    auto_fetch: bool
    source: str = ""
    sublabel: str = ""
    description: str = ""
    source_url: Optional[str] = None
    prompt: Optional[str] = None


@dataclass(frozen=True)
class IndicatorCatalogue:
    version: str
    indicators: Tuple[Indicator, ...]

    def __iter__(self) -> Iterator[Indicator]:
        return iter(self.indicators)

    def __len__(self) -> int:
        return len(self.indicators)

    def __contains__(self, indicator_id: object) -> bool:
        return any(i.indicator_id == indicator_id for i in self.indicators)

    def ids(self) -> List[str]:
        return [i.indicator_id for i in self.indicators]

    def get(self, indicator_id: str) -> Indicator:
        for indicator in self.indicators:
            if indicator.indicator_id == indicator_id:
                return indicator
        raise KeyError(indicator_id)

    def auto_fetch(self) -> List[Indicator]:
        return [i for i in self.indicators if i.auto_fetch]

    def manual(self) -> List[Indicator]:
        return [i for i in self.indicators if not i.auto_fetch]

    def prompts(self) -> Dict[str, str]:
        return {i.indicator_id: str(i.prompt) for i in self.indicators if i.auto_fetch}


def load_catalogue(path: Path = DEFAULT_CATALOGUE_PATH) -> IndicatorCatalogue:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return build_catalogue(raw)


def build_catalogue(raw: Dict[str, Any]) -> IndicatorCatalogue:
    _validate_catalogue(raw)
    indicators = tuple(
        Indicator(
            indicator_id=str(item["id"]),
            label=str(item["label"]),
            unit=str(item["unit"]),
            warn=float(item["warn"]),
            danger=float(item["danger"]),
            auto_fetch=bool(item.get("auto_fetch", False)),
            source=str(item.get("source", "")),
            sublabel=str(item.get("sublabel", "")),
            description=str(item.get("description", "")),
            source_url=str(item["source_url"]) if item.get("source_url") else None,
            prompt=str(item["prompt"]) if item.get("prompt") else None,
        )
        for item in raw["indicators"]
    )
    return IndicatorCatalogue(version=str(raw.get("catalogue_version", "v0")), indicators=indicators)


def _validate_catalogue(raw: Dict[str, Any]) -> None:
    if "indicators" not in raw:
        raise ValueError("Missing catalogue key: indicators")
    items = raw["indicators"]
    if not isinstance(items, list) or len(items) < 1:
        raise ValueError("Catalogue indicators invalid")

    seen = set()
    for item in items:
        for k in ["id", "label", "unit", "warn", "danger"]:
            if k not in item:
                raise ValueError(f"Missing indicator key: {k}")
        indicator_id = str(item["id"])
        if indicator_id in seen:
            raise ValueError(f"Duplicate indicator id: {indicator_id}")
        seen.add(indicator_id)
        if float(item["warn"]) >= float(item["danger"]):
            raise ValueError(f"Indicator {indicator_id}: warn threshold must be below danger threshold")
        if item.get("auto_fetch") and not item.get("prompt"):
            raise ValueError(f"Indicator {indicator_id}: auto-fetch indicators require a prompt")


_DEFAULT_CATALOGUE: Optional[IndicatorCatalogue] = None


def default_catalogue() -> IndicatorCatalogue:
    global _DEFAULT_CATALOGUE
    if _DEFAULT_CATALOGUE is None:
        _DEFAULT_CATALOGUE = load_catalogue()
    return _DEFAULT_CATALOGUE
