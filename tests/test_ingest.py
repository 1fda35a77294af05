import datetime
import json

import pytest

from menuweek import config, ingest
from menuweek.errors import MenuStructureError, NotFoundError
from tests.conftest import single_day_page


def fake_fetch(pages):
    def fetch(url):
        page = pages[url]
        if isinstance(page, Exception):
            raise page
        return page

    return fetch


@pytest.fixture
def pages(canteens):
    zeta, alpha = canteens
    return {
        zeta.url: single_day_page("Speiseplan 04.11.2024", "Di, 05.11.", "Zeta-Suppe"),
        alpha.url: single_day_page("Speiseplan 04.11.2024", "Di, 05.11.", "Alpha-Suppe"),
    }


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_two_sources_share_one_day(tmp_path, canteens, pages):
    written = ingest.run(
        tmp_path, fetch=fake_fetch(pages), canteens=canteens, generated_at="2024-11-05T06:00:00.000Z"
    )

    by_week = tmp_path / "2024-W45.json"
    by_day = tmp_path / "by-day" / "2024-W45.json"
    assert sorted(written) == sorted([by_week, by_day])

    day_doc = read(by_day)
    assert list(day_doc["days"]) == ["2024-11-05"]
    assert list(day_doc["days"]["2024-11-05"]["canteens"]) == ["alpha", "zeta"]
    assert day_doc["generatedAt"] == "2024-11-05T06:00:00.000Z"

    week_doc = read(by_week)
    assert week_doc["week"] == {"isoYear": 2024, "isoWeek": 45, "from": "2024-11-05", "to": "2024-11-05"}
    assert list(week_doc["canteens"]) == ["alpha", "zeta"]
    assert by_week.read_text(encoding="utf-8").endswith("}\n")


def test_rerun_with_unchanged_pages_writes_nothing(tmp_path, canteens, pages):
    ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens, generated_at="first")
    before = {p: p.read_bytes() for p in tmp_path.rglob("*.json")}

    written = ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens, generated_at="second")

    assert written == []
    assert {p: p.read_bytes() for p in tmp_path.rglob("*.json")} == before


def test_changed_page_refreshes_timestamp(tmp_path, canteens, pages):
    ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens, generated_at="first")
    zeta, _ = canteens
    pages[zeta.url] = single_day_page("Speiseplan 04.11.2024", "Di, 05.11.", "Zeta-Eintopf")

    written = ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens, generated_at="second")

    assert len(written) == 2
    assert read(tmp_path / "2024-W45.json")["generatedAt"] == "second"
    assert read(tmp_path / "by-day" / "2024-W45.json")["generatedAt"] == "second"


def test_failing_source_writes_nothing(tmp_path, canteens, pages):
    _, alpha = canteens
    pages[alpha.url] = NotFoundError(alpha.url)

    with pytest.raises(NotFoundError):
        ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens)

    assert list(tmp_path.iterdir()) == []


def test_broken_page_structure_writes_nothing(tmp_path, canteens, pages):
    _, alpha = canteens
    pages[alpha.url] = "<html><body><div class=\"box-speiseplan\"><p>Umbau</p></div></body></html>"

    with pytest.raises(MenuStructureError):
        ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens)

    assert list(tmp_path.iterdir()) == []


def test_no_days_writes_nothing(tmp_path, canteens):
    empty = '<div class="box-speiseplan"><div class="block-space"><h2>Ferien</h2></div></div>'
    pages = {c.url: empty for c in canteens}
    assert ingest.run(tmp_path, fetch=fake_fetch(pages), canteens=canteens) == []
    assert list(tmp_path.iterdir()) == []


def test_main_exits_non_zero_on_failure(tmp_path, monkeypatch):
    def broken_fetch(url, timeout):
        raise NotFoundError(url)

    notified = []
    monkeypatch.setattr(ingest, "fetch_document", broken_fetch)
    monkeypatch.setattr(ingest, "notify_if_configured", lambda *args: notified.append(args))

    with pytest.raises(SystemExit) as excinfo:
        ingest.main(["--output-dir", str(tmp_path), "--notify-cmd", "true"])

    assert excinfo.value.code == 1
    assert notified and notified[0][0] == "true"
    assert list(tmp_path.iterdir()) == []


def test_main_uses_env_output_dir(tmp_path, monkeypatch, pages):
    html = next(iter(pages.values()))
    monkeypatch.setenv("MENSA_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setattr(ingest, "fetch_document", lambda url, timeout: html)

    ingest.main([])

    assert (tmp_path / "2024-W45.json").exists()
    assert list(read(tmp_path / "2024-W45.json")["canteens"]) == ["main", "q-west", "rote-beete"]


def test_utc_timestamp_format():
    now = datetime.datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=datetime.timezone.utc)
    assert ingest.utc_timestamp(now) == "2025-01-02T03:04:05.678Z"


def test_legacy_output_dir_variable(tmp_path, monkeypatch):
    monkeypatch.delenv("MENSA_OUTPUT_DIR", raising=False)
    monkeypatch.setenv("RUB_MENSA_OUTPUT_DIR", str(tmp_path / "legacy"))
    assert config.load_settings().output_dir == tmp_path / "legacy"

    monkeypatch.setenv("MENSA_OUTPUT_DIR", str(tmp_path / "current"))
    assert config.load_settings().output_dir == tmp_path / "current"
