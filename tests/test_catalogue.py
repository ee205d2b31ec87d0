import json

import pytest

from crash_monitor.domain.indicators import build_catalogue, default_catalogue, load_catalogue


def test_default_catalogue_order_and_thresholds():
    catalogue = default_catalogue()

    assert catalogue.ids() == ["vix", "usdkrw", "hyspread", "credit", "foreign"]
    assert [i.indicator_id for i in catalogue.auto_fetch()] == ["vix", "usdkrw", "hyspread"]
    assert [i.indicator_id for i in catalogue.manual()] == ["credit", "foreign"]
    assert catalogue.get("usdkrw").warn == 1380
    assert catalogue.get("usdkrw").danger == 1420
    assert catalogue.get("credit").source_url == "https://freesis.kofia.or.kr/"


def test_every_auto_fetch_prompt_asks_for_json_only():
    for indicator_id, prompt in default_catalogue().prompts().items():
        assert "Reply ONLY with a JSON object" in prompt, indicator_id
        assert '"asOf"' in prompt


def test_warn_must_be_below_danger():
    with pytest.raises(ValueError):
        build_catalogue({"indicators": [{"id": "x", "label": "X", "unit": "", "warn": 5, "danger": 5}]})


def test_auto_fetch_requires_prompt():
    with pytest.raises(ValueError):
        build_catalogue(
            {"indicators": [{"id": "x", "label": "X", "unit": "", "warn": 1, "danger": 2, "auto_fetch": True}]}
        )


def test_duplicate_ids_rejected():
    item = {"id": "x", "label": "X", "unit": "", "warn": 1, "danger": 2}
    with pytest.raises(ValueError):
        build_catalogue({"indicators": [item, dict(item)]})


def test_load_catalogue_from_file(tmp_path):
    path = tmp_path / "catalogue.json"
    path.write_text(
        json.dumps(
            {
                "catalogue_version": "test",
                "indicators": [{"id": "x", "label": "X", "unit": "pt", "warn": 1, "danger": 2}],
            }
        ),
        encoding="utf-8",
    )

    catalogue = load_catalogue(path)

    assert catalogue.version == "test"
    assert "x" in catalogue
    assert len(catalogue) == 1
