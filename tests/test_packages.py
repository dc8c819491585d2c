from tests.conftest import insert_contest


async def test_list_packages(client):
    response = await client.get("/packages")

    packages = response.json()["data"]["packages"]
    assert response.status_code == 200
    assert [(p["id"], p["price"], p["limit"]) for p in packages] == [
        ("starter", 0, 2),
        ("pro", 10, 10),
        ("ultimate", 25, 100),
    ]


async def test_buy_package_raises_quota(client, db, creator):
    await insert_contest(db, "creator@example.com")
    await insert_contest(db, "creator@example.com")

    blocked = await client.post("/contests", json={"title": "Third"}, headers=creator)
    bought = await client.post("/users/buy-package", json={"packageId": "pro"}, headers=creator)
    allowed = await client.post("/contests", json={"title": "Third"}, headers=creator)

    user = await db.users.find_one({"email": "creator@example.com"})
    assert blocked.status_code == 403
    assert bought.status_code == 200
    assert bought.json()["data"] == {"package": "pro", "contestLimit": 10}
    assert user["package"] == "pro"
    assert allowed.status_code == 201


async def test_buy_unknown_package(client, member):
    unknown = await client.post("/users/buy-package", json={"packageId": "gold"}, headers=member)
    missing = await client.post("/users/buy-package", json={}, headers=member)

    assert unknown.status_code == 400
    assert missing.status_code == 400


async def test_buy_package_requires_login(client):
    response = await client.post("/users/buy-package", json={"packageId": "pro"})

    assert response.status_code == 401
