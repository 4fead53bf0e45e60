"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from quid_label.api.app import create_app

RECIPE = {
    "id": "recipe-7",
    "name": "Bratwurst grob",
    "articleNumber": "2040",
    "cookingLoss": 10,
    "lossType": "drying",
    "ingredients": [
        {
            "name": "Schweinebauch",
            "rawWeight": 60,
            "isMeat": True,
            "meatSpecies": "pork",
            "nutrition": {"fat": 20},
        },
        {"name": "Eis", "rawWeight": 10, "isWater": True, "quidRequired": True},
        {"name": "NPS", "labelName": "Nitritpökelsalz", "rawWeight": 2},
        {
            "name": "Senf",
            "rawWeight": 1,
            "allergens": ["mustard"],
            "processingAids": "Essig",
        },
    ],
}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_calculate_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/quid/calculate",
        json={
            "ingredients": RECIPE["ingredients"],
            "processLoss": 10,
            "lossType": "drying",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["labelText"] == "Schweinefleisch (91,3%), Nitritpökelsalz, SENF"
    assert abs(data["totalEndWeight"] - 65.7) < 1e-9
    assert data["ingredients"][0]["name"] == "Schweinefleisch"
    assert data["allergenDetails"] == [{"id": "mustard", "sources": ["Senf"]}]
    assert data["processingAidDetails"] == [{"name": "Essig", "sources": ["Senf"]}]


def test_calculate_uses_default_loss_type(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/quid/calculate",
        json={"ingredients": [{"name": "Salz", "rawWeight": 1}], "processLoss": 20},
    )

    assert response.status_code == 200
    assert abs(response.json()["totalEndWeight"] - 0.8) < 1e-9


def test_calculate_recognises_unflagged_water(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/quid/calculate",
        json={
            "ingredients": [
                {"name": "Salz", "rawWeight": 97, "isWater": False},
                {"name": "Eis", "rawWeight": 3, "isWater": False, "quidRequired": True},
            ],
            "lossType": "none",
        },
    )

    assert response.status_code == 200
    assert response.json()["labelText"] == "Salz"


def test_calculate_rejects_invalid_payloads(container) -> None:
    client = TestClient(create_app(container))

    negative = client.post(
        "/quid/calculate",
        json={"ingredients": [{"name": "Salz", "rawWeight": -1}]},
    )
    empty = client.post("/quid/calculate", json={"ingredients": []})
    bad_loss_type = client.post(
        "/quid/calculate",
        json={"ingredients": [{"name": "Salz", "rawWeight": 1}], "lossType": "frying"},
    )
    too_much_loss = client.post(
        "/quid/calculate",
        json={"ingredients": [{"name": "Salz", "rawWeight": 1}], "processLoss": 120},
    )

    assert negative.status_code == 422
    assert empty.status_code == 422
    assert bad_loss_type.status_code == 422
    assert too_much_loss.status_code == 422


def test_specification_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/quid/specification",
        json={"recipe": RECIPE, "productName": "Grobe Bratwurst"},
    )

    assert response.status_code == 200
    data = response.json()
    spec = data["specification"]
    assert spec["productName"] == "Grobe Bratwurst"
    assert spec["articleNumber"] == "2040"
    assert spec["ingredientsText"] == data["result"]["labelText"]
    assert spec["processingAids"][0] == {"name": "Essig", "sources": "Senf"}
    assert len(spec["allergens"]) == 14
    assert len(spec["nutrition"]) == 8


def test_compound_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/recipes/compound", json={"recipe": RECIPE, "rawWeight": 5}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Bratwurst grob"
    assert data["isRecipe"] is True
    assert data["rawWeight"] == 5
    assert data["processLoss"] == 10
    assert data["subIngredients"] == "Schweinefleisch (91,3%), Nitritpökelsalz, SENF"
    assert len(data["originalSubIngredients"]) == 4

    parent = client.post(
        "/quid/calculate",
        json={"ingredients": [data], "lossType": "none"},
    )
    assert parent.status_code == 200
    assert parent.json()["ingredients"][0]["name"] == "Schweinefleisch"
