from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional

from crash_monitor.config import ConfigurationError, configure_logging, load_settings
from crash_monitor.core.assessment_engine import AssessmentEngine
from crash_monitor.domain.indicators import default_catalogue
from crash_monitor.fetch.errors import FetchError
from crash_monitor.fetch.service import IndicatorFetchService

USAGE = (
    "Usage:\n"
    "  crash-monitor score <values.json>\n"
    "  crash-monitor fetch <indicator_id>\n"
)


def _load_input(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _score(path: str) -> int:
    raw = _load_input(path)
    values = raw.get("values", raw) if isinstance(raw, dict) else {}
    if not isinstance(values, dict):
        sys.stderr.write("Input must be a JSON object of indicator values\n")
        return 2

    output = AssessmentEngine().run(default_catalogue(), values)

    sys.stdout.write(json.dumps(output.to_dict(), ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0


def _fetch(indicator_id: str) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        service = IndicatorFetchService.from_settings(settings)
        result = service.fetch(indicator_id)
    except (FetchError, ConfigurationError) as e:
        sys.stderr.write(json.dumps({"error": str(e)}, ensure_ascii=False))
        sys.stderr.write("\n")
        return 1

    sys.stdout.write(json.dumps(result, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        sys.stderr.write(USAGE)
        return 2

    command, target = args[0], args[1]
    if command == "score":
        return _score(target)
    if command == "fetch":
        return _fetch(target)

    sys.stderr.write(USAGE)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
