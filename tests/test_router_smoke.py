# File: /tests/test_router_smoke.py | Version: 1.0 | Path: /tests/test_router_smoke.py
def test_openapi_has_core_board_routes(client):
    # Ask FastAPI for its OpenAPI schema and verify key routes exist
    r = client.get("/openapi.json")
    assert r.status_code == 200, r.text
    paths = r.json().get("paths", {})

    expected = {
        "/boards": ["get", "post"],
        "/boards/{board_id}": ["get", "patch", "delete"],
        "/boards/{board_id}/properties": ["post"],
        "/boards/{board_id}/properties/{property_id}": ["delete"],
        "/boards/{board_id}/properties:reorder": ["post"],
        "/boards/{board_id}/properties/{property_id}/options": ["post"],
        "/views": ["get", "post"],
        "/views/{view_id}": ["get", "patch", "delete"],
        "/views/{view_id}/cards": ["get", "post"],
        "/views/{view_id}/cards:delete": ["post"],
        "/views/{view_id}/undo": ["post"],
        "/views/{view_id}/redo": ["post"],
        "/cards/{card_id}": ["get", "patch"],
        "/members": ["get", "post"],
        "/pages/{page_id}": ["delete"],
        "/healthz": ["get"],
        "/readyz": ["get"],
    }

    missing = []
    for p, methods in expected.items():
        if p not in paths:
            missing.append(f"{p} (missing path)")
            continue
        present = {m.lower() for m in paths[p].keys()}
        for m in methods:
            if m not in present:
                missing.append(f"{p} missing {m.upper()}")

    assert not missing, "Missing routes: " + ", ".join(missing)


def test_health_probes(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["db"] == "ok"
