"""End-to-end tests through the HTTP routes."""

import re

import pytest

SECRET = {"secret": "This is a super secret message"}


async def register(client, name="Bo", email="bo@x.com", password="hunter2"):
    return await client.post("/users", json={"name": name, "email": email, "password": password})


class TestGuestbookFlow:
    async def test_register_login_and_read_secret(self, client):
        response = await register(client)
        assert response.status_code == 201
        user = response.json()
        assert re.fullmatch(r"[0-9a-f]{128}", user["accessToken"])
        assert user["name"] == "Bo"
        assert user["messageIds"] == []
        assert "password" not in user
        assert "passwordHash" not in user

        response = await client.post("/sessions", json={"email": "bo@x.com", "password": "hunter2"})
        assert response.status_code == 200
        session = response.json()
        assert session == {"name": "Bo", "userId": user["id"], "accessToken": user["accessToken"]}

        response = await client.get("/secrets", headers={"Authorization": session["accessToken"]})
        assert response.status_code == 200
        assert response.json() == SECRET

        response = await client.get("/secrets")
        assert response.status_code == 403
        assert response.json() == {"message": "You need to login to access this page"}


class TestUsers:
    async def test_duplicate_email(self, client):
        await register(client)
        response = await register(client, name="Other")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Could not create user"
        assert "email" in body["errors"]

    async def test_short_password(self, client):
        response = await register(client, password="1234")
        assert response.status_code == 400
        assert "password" in response.json()["errors"]

    async def test_password_over_72_bytes(self, client):
        response = await register(client, password="p" * 80)
        assert response.status_code == 400
        assert "password" in response.json()["errors"]

    async def test_missing_field(self, client):
        response = await client.post("/users", json={"name": "Bo", "email": "bo@x.com"})
        assert response.status_code == 400
        assert "password" in response.json()["errors"]

    async def test_profile_is_the_authenticated_user(self, client):
        user = (await register(client)).json()
        await client.post(f"/users/{user['id']}", json={"message": "Hello guestbook"})

        response = await client.get("/users/anything", headers={"Authorization": user["accessToken"]})

        assert response.status_code == 201
        profile = response.json()
        assert profile["id"] == user["id"]
        assert len(profile["messageIds"]) == 1

    async def test_profile_requires_token(self, client):
        await register(client)
        response = await client.get("/users/whatever", headers={"Authorization": "nope"})
        assert response.status_code == 403


class TestSessions:
    @pytest.mark.parametrize(
        "credentials",
        [
            {"email": "bo@x.com", "password": "wrong-password"},
            {"email": "nobody@x.com", "password": "hunter2"},
            {"email": "bo@x.com", "password": "p" * 80},
        ],
    )
    async def test_login_failure_is_undistinguished(self, client, credentials):
        await register(client)
        response = await client.post("/sessions", json=credentials)
        assert response.status_code == 400
        assert response.json() == {"notFound": True}


class TestSecrets:
    async def test_bearer_prefix(self, client):
        token = (await register(client)).json()["accessToken"]
        response = await client.get("/secrets", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json() == SECRET

    async def test_wrong_token(self, client):
        await register(client)
        response = await client.get("/secrets", headers={"Authorization": "0" * 128})
        assert response.status_code == 403


class TestMessages:
    async def test_post_message(self, client):
        user = (await register(client)).json()

        response = await client.post(f"/users/{user['id']}", json={"message": "Hello guestbook"})

        assert response.status_code == 201
        message = response.json()
        assert message["message"] == "Hello guestbook"
        assert message["likes"] == 0
        assert message["authorId"] == user["id"]
        assert "createdAt" in message

    async def test_post_too_short(self, client):
        response = await client.post("/users/someone", json={"message": "Hey!"})
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Could not save post to the database"
        assert "message" in body["errors"]

    async def test_like(self, client):
        message = (await client.post("/users/someone", json={"message": "Hello guestbook"})).json()

        response = await client.post(f"/users/someone/{message['id']}/like")

        assert response.status_code == 201
        assert response.content == b""
        listed = (await client.get("/users/messages")).json()
        assert listed[0]["likes"] == 1

    async def test_like_unknown_post(self, client):
        response = await client.post("/users/someone/missing/like")
        assert response.status_code == 400
        assert response.json()["message"] == "Could not find the post"

    async def test_list_is_public_and_sorted(self, client):
        first = (await client.post("/users/a", json={"message": "first message"})).json()
        second = (await client.post("/users/a", json={"message": "second message"})).json()
        await client.post(f"/users/a/{first['id']}/like")

        by_likes = (await client.get("/users/messages", params={"sort": "likes"})).json()
        assert [m["id"] for m in by_likes] == [first["id"], second["id"]]

        response = await client.get("/users/messages", params={"sort": "dates"})
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [first["id"], second["id"]]

    async def test_list_is_capped(self, client):
        for i in range(22):
            await client.post("/users/a", json={"message": f"message {i:02d}"})

        response = await client.get("/users/messages", params={"sort": "bogus"})

        assert response.status_code == 200
        assert len(response.json()) == 20


class TestRoot:
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "Backend for guest book"

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}
