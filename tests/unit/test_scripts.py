import json
from pathlib import Path

from alembic.config import Config
from sqlalchemy import Engine

from library_api.config import settings
from scripts import bootstrap_db, generate_openapi


def test_bootstrap_waits_for_database_then_upgrades(monkeypatch, db_engine: Engine):
    calls: list[tuple] = []

    def fake_wait(engine: Engine, **kwargs) -> None:
        calls.append(("wait", engine, kwargs))

    def fake_upgrade(cfg: Config, revision: str) -> None:
        calls.append(("upgrade", cfg, revision))

    monkeypatch.setattr(bootstrap_db, "wait_for_database", fake_wait)
    monkeypatch.setattr(bootstrap_db.command, "upgrade", fake_upgrade)

    bootstrap_db.bootstrap(db_engine=db_engine, revision="head")

    assert [call[0] for call in calls] == ["wait", "upgrade"]
    assert calls[0][1] is db_engine
    assert set(calls[0][2]) == {"attempts", "ping_timeout", "max_backoff"}
    cfg = calls[1][1]
    assert cfg.attributes["configure_logger"] is False
    assert cfg.get_main_option("script_location") == "migrations"
    assert calls[1][2] == "head"


def test_generate_openapi_writes_schema(tmp_path: Path):
    output_path = generate_openapi.main(output_dir=tmp_path / "build" / "docs")

    schema = json.loads(output_path.read_text(encoding="utf-8"))
    assert output_path.name == "openapi.json"
    assert output_path.parent == tmp_path / "build" / "docs"
    assert schema["info"]["title"] == settings.app_name
    assert "/v1/books" in schema["paths"]
    assert "/v1/books/{book_id}" in schema["paths"]
    assert "/healthz" in schema["paths"]
    create_body = schema["paths"]["/v1/books"]["post"]["requestBody"]
    assert "title" in create_body["content"]["application/json"]["schema"]["properties"]
