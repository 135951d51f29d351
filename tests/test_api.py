from tablequery.api import parse_table_params


def test_parse_bracket_filters():
    data = parse_table_params(
        [
            ("search", "lamp"),
            ("filters[status]", "active"),
            ("filters[tag][]", "a"),
            ("filters[tag][]", "b"),
            ("filters[size]", "s"),
            ("filters[size]", "m"),
            ("selectedIds[]", "3"),
            ("selectedIds", "4,5"),
        ]
    )
    assert data == {
        "search": "lamp",
        "filters": {"status": "active", "tag": ["a", "b"], "size": ["s", "m"]},
        "selectedIds": ["3", "4", "5"],
    }


def test_parse_without_filters():
    assert parse_table_params([("page", "2")]) == {"page": "2"}


def test_list_endpoint_applies_request_params(client):
    resp = client.get(
        "/products",
        params={
            "filters[status]": "active",
            "search": "0",
            "sortKey": "name",
            "sortDir": "asc",
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == [
        "Product 01",
        "Product 03",
        "Product 05",
        "Product 07",
        "Product 09",
    ]
    assert body["total"] == 5
    assert body["filters"] == [{"key": "status", "status": "applied", "detail": None}]
    assert resp.headers["X-Request-ID"]


def test_list_endpoint_paginates(client):
    resp = client.get("/products", params={"page": 3, "per_page": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == [f"Product {i:02d}" for i in range(5, 0, -1)]
    assert body["total"] == 25
    assert body["last_page"] == 3


def test_unknown_and_invalid_filters_do_not_fail_request(client):
    resp = client.get(
        "/products",
        params={"filters[colour]": "red", "filters[status]": "bogus"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 25
    assert [f["status"] for f in body["filters"]] == ["skipped", "failed"]


def test_invalid_sort_direction_rejected(client):
    resp = client.get("/products", params={"sortKey": "name", "sortDir": "sideways"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["request_id"] == resp.headers["X-Request-ID"]


def test_invalid_page_size_rejected(client):
    resp = client.get("/products", params={"per_page": 0})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "validation_error"


def test_list_endpoint_accepts_repeated_filter_values(client):
    resp = client.get(
        "/products",
        params=[("filters[status][]", "active"), ("filters[status][]", "draft")],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 25
    assert body["filters"] == [{"key": "status", "status": "applied", "detail": None}]

    resp = client.get(
        "/products",
        params=[("filters[status]", "draft"), ("filters[status]", "archived"), ("search", "hammer")],
    )
    assert resp.status_code == 200
    assert resp.json()["items"] == ["Product 20", "Product 10"]


def test_list_endpoint_reports_malformed_filter_values(client):
    resp = client.get(
        "/products",
        params=[("filters[status][]", "active"), ("filters[status][]", "bogus")],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 25
    assert body["filters"][0]["status"] == "failed"
