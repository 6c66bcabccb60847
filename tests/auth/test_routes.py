import uuid

import pytest
from fastapi import status

from practice_tracker.auth.util import token_issuer


# Test user registration
@pytest.mark.asyncio
async def test_register_success(client):
    # Test data
    user_data = {
        "username": "newuser",
        "email": "newuser@example.com",
        "password": "password123",
    }

    # Make request
    response = await client.post("/api/register", json=user_data)

    # Check response
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"message": "User registered successfully"}


@pytest.mark.asyncio
async def test_register_same_email_twice(client):
    user_data = {
        "username": "first",
        "email": "dup@example.com",
        "password": "password123",
    }
    first = await client.post("/api/register", json=user_data)

    second = await client.post(
        "/api/register", json={**user_data, "username": "second"}
    )

    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_400_BAD_REQUEST
    assert "already exists" in second.json()["message"]


@pytest.mark.asyncio
async def test_register_distinct_emails(client):
    for i in range(3):
        response = await client.post(
            "/api/register",
            json={
                "username": f"user{i}",
                "email": f"user{i}@example.com",
                "password": "password123",
            },
        )
        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["username", "email", "password"])
async def test_register_missing_field(client, missing):
    user_data = {
        "username": "newuser",
        "email": "newuser@example.com",
        "password": "password123",
    }
    del user_data[missing]

    response = await client.post("/api/register", json=user_data)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "message" in response.json()


# Test user login
@pytest.mark.asyncio
async def test_login_success(client, test_user):
    login_data = {"email": test_user.email, "password": "password123"}

    response = await client.post("/api/login", json=login_data)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Login successful"
    assert token_issuer.verify(data["token"]) == str(test_user.id)


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client, test_user):
    wrong_password = await client.post(
        "/api/login", json={"email": test_user.email, "password": "wrongpassword"}
    )
    unknown_email = await client.post(
        "/api/login", json={"email": "ghost@example.com", "password": "password123"}
    )

    assert wrong_password.status_code == status.HTTP_400_BAD_REQUEST
    assert unknown_email.status_code == status.HTTP_400_BAD_REQUEST
    assert wrong_password.json() == unknown_email.json()
    assert "token" not in wrong_password.json()


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    response = await client.post("/api/login", json={"email": "a@example.com"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


# Test token-gated profile
@pytest.mark.asyncio
async def test_profile_success(client, test_user):
    login = await client.post(
        "/api/login", json={"email": test_user.email, "password": "password123"}
    )
    token = login.json()["token"]

    response = await client.get("/api/profile", headers={"Authorization": token})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == str(test_user.id)
    assert data["username"] == test_user.username
    assert data["email"] == test_user.email
    assert "createdAt" in data
    assert not any("password" in key.lower() for key in data)


@pytest.mark.asyncio
async def test_profile_accepts_bearer_scheme(client, test_user):
    token = token_issuer.issue(test_user.id)

    response = await client.get(
        "/api/profile", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == test_user.username


@pytest.mark.asyncio
async def test_profile_without_token(client):
    response = await client.get("/api/profile")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_profile_with_invalid_token(client, test_user):
    header, payload, signature = token_issuer.issue(test_user.id).split(".")
    signature = ("A" if signature[0] != "A" else "B") + signature[1:]

    response = await client.get(
        "/api/profile", headers={"Authorization": f"{header}.{payload}.{signature}"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_profile_for_missing_user(client):
    token = token_issuer.issue(uuid.uuid4())

    response = await client.get("/api/profile", headers={"Authorization": token})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "User not found"
