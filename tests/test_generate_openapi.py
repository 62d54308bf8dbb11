import json

from todo_service.generate_openapi import generate_openapi, main


def test_writes_schema_with_routes_and_tags(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    written = generate_openapi(str(out))
    assert written == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert schema["info"]["title"] == "Todo Service"
    assert {"/users", "/todos", "/todos/{todo_id}", "/todos/{todo_id}/done"} <= set(schema["paths"])
    assert {"health", "users", "todos"} <= {t["name"] for t in schema["tags"]}


def test_main_uses_default_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main([])
    assert (tmp_path / "interfaces" / "openapi.json").is_file()
