from app.services.search_service import search_demo_products


def test_empty_query_is_rejected(client):
    response = client.get("/api/search", params={"q": ""})
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["details"]


def test_missing_and_blank_query_are_rejected(client):
    assert client.get("/api/search").status_code == 400
    assert client.get("/api/search", params={"q": "   "}).status_code == 400


def test_substring_in_one_item_returns_one_result(client):
    response = client.get("/api/search", params={"q": "eggs"})
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "demo"
    assert len(data["results"]) == 1
    assert data["results"][0]["title"] == "Large Eggs, 12 ct"
    assert data["results"][0]["retailer"] == "BudgetFoods"


def test_match_is_case_insensitive_and_trimmed(client):
    response = client.get("/api/search", params={"q": "  CHICKEN "})
    assert response.status_code == 200
    assert [r["id"] for r in response.json()["results"]] == [3]


def test_no_match_returns_empty_list(client):
    response = client.get("/api/search", params={"q": "caviar"})
    assert response.status_code == 200
    assert response.json() == {"results": [], "mode": "demo"}


def test_zip_must_be_five_characters(client):
    assert client.get("/api/search", params={"q": "milk", "zip": "123"}).status_code == 400
    response = client.get("/api/search", params={"q": "milk", "zip": " 94107 "})
    assert response.status_code == 200
    assert len(response.json()["results"]) == 1


def test_common_substring_matches_several_items():
    # "," appears in every demo title
    results = search_demo_products(",")
    assert len(results) == 3
