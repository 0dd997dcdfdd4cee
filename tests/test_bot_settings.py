class TestBotSettingsEndpoints:
    def test_defaults_created_on_first_read(self, client, auth_headers, tenant):
        response = client.get("/bot/settings", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["tenantId"] == str(tenant.id)
        assert body["personality"] == "divertido"
        assert body["language"] == "pt"
        assert body["autoJokes"] is True
        assert body["autoTime"] is True
        assert body["autoGreeting"] is True

    def test_partial_update(self, client, auth_headers):
        response = client.post(
            "/bot/settings", json={"personality": "formal", "autoJokes": False}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["personality"] == "formal"
        assert body["autoJokes"] is False
        assert body["language"] == "pt"

        reread = client.get("/bot/settings", headers=auth_headers).json()
        assert reread == body

    def test_snake_case_input_accepted(self, client, auth_headers):
        body = client.post("/bot/settings", json={"auto_greeting": False}, headers=auth_headers).json()

        assert body["autoGreeting"] is False

    def test_requires_token(self, client):
        assert client.get("/bot/settings").status_code == 401
        assert client.post("/bot/settings", json={}).status_code == 401

    def test_invalid_flag_value(self, client, auth_headers):
        response = client.post("/bot/settings", json={"autoJokes": "sim"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Dados inválidos: autoJokes"}
        assert client.get("/bot/settings", headers=auth_headers).json()["autoJokes"] is True
