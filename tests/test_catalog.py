import pytest

from dishcart.utils.slugs import slugify


@pytest.mark.parametrize(
    "name, slug",
    [
        ("Pizzeria Roma", "pizzeria-roma"),
        ("  Kod Žike ", "kod-zike"),
        ("ALL CAPS", "all-caps"),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_restaurant_slug_is_derived_on_create_and_update(client):
    r = client.post("/restaurants", json={"name": "Pizzeria Roma", "description": "Pizza"})
    assert r.status_code == 201
    restaurant = r.json()
    assert restaurant["slug"] == "pizzeria-roma"

    r = client.patch(f"/restaurants/{restaurant['id']}", json={"name": "Trattoria Roma"})
    assert r.json()["slug"] == "trattoria-roma"

    r = client.get("/restaurants/by-slug/trattoria-roma")
    assert r.status_code == 200
    assert r.json()["id"] == restaurant["id"]
    assert client.get("/restaurants/by-slug/pizzeria-roma").status_code == 404


def test_update_unknown_restaurant(client):
    assert client.patch("/restaurants/999", json={"name": "X"}).status_code == 404


def test_dishes(client):
    restaurant = client.post("/restaurants", json={"name": "Dva Jelena"}).json()

    r = client.post("/dishes", json={"name": "Sarma", "price": "650.00", "restaurant": restaurant["id"]})
    assert r.status_code == 201
    dish = r.json()
    assert dish["restaurant"] == restaurant["id"]
    assert client.get(f"/dishes/{dish['id']}").json()["name"] == "Sarma"

    r = client.post("/dishes", json={"name": "Ghost", "price": "1.00", "restaurant": 999})
    assert r.status_code == 422
