"""Integration tests for the FastAPI endpoints using TestClient.

The whole application (middleware, exception handlers, routes) runs over
a freshly seeded in-memory store; only the LLM provider is mocked.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.services.chat_assembler import EMPTY_REPLY, ERROR_REPLY
from src.utils.errors import LLMError


def _review_body(**overrides: Any) -> dict[str, Any]:
    body = {"userName": "Giulia", "rating": 5, "comment": "Esperienza fantastica, torneremo."}
    body.update(overrides)
    return body


def _place_body(**overrides: Any) -> dict[str, Any]:
    body = {
        "name": "Caffè Gambrinus",
        "description": "Caffè storico di Napoli.",
        "address": "Via Chiaia 1",
        "cityId": 5,
        "category": "Bar",
        "priceLevel": "$",
        "tags": ["Centro storico"],
    }
    body.update(overrides)
    return body


# ======================================================================
# Catalogue
# ======================================================================


class TestCatalogue:
    def test_categories(self, client: TestClient) -> None:
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == [
            "Ristoranti", "Bar", "Musei", "Palestre", "Piscine", "Hotel", "Altri",
        ]

    def test_tags(self, client: TestClient) -> None:
        tags = client.get("/api/tags").json()
        assert "Romantico" in tags
        assert len(tags) == 12


# ======================================================================
# Cities
# ======================================================================


class TestCities:
    def test_list(self, client: TestClient) -> None:
        cities = client.get("/api/cities").json()
        assert [c["id"] for c in cities] == [1, 2, 3, 4, 5]
        assert cities[0]["name"] == "Roma"
        assert "imageUrl" in cities[0]
        assert "isFeatured" in cities[0]

    def test_featured(self, client: TestClient) -> None:
        featured = client.get("/api/cities/featured").json()
        assert all(c["isFeatured"] for c in featured)

    def test_get(self, client: TestClient) -> None:
        response = client.get("/api/cities/3")
        assert response.status_code == 200
        assert response.json()["name"] == "Venezia"

    def test_get_missing(self, client: TestClient) -> None:
        response = client.get("/api/cities/999")
        assert response.status_code == 404
        assert response.json() == {"detail": "City not found"}

    def test_get_invalid_id(self, client: TestClient) -> None:
        response = client.get("/api/cities/abc")
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid city ID"}

    def test_create(self, client: TestClient) -> None:
        response = client.post(
            "/api/cities",
            json={
                "name": "Torino",
                "country": "Italia",
                "description": "Prima capitale d'Italia.",
                "imageUrl": "https://example.com/torino.jpg",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 6
        assert body["isFeatured"] is False
        assert client.get("/api/cities/6").json()["name"] == "Torino"

    def test_create_invalid(self, client: TestClient) -> None:
        response = client.post("/api/cities", json={"name": "Torino"})
        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Invalid city data"
        missing = {tuple(err["loc"]) for err in body["errors"]}
        assert ("country",) in missing

    @pytest.mark.parametrize("flag", ["yes", "true", 1])
    def test_create_rejects_non_boolean_featured(self, client: TestClient, flag: Any) -> None:
        response = client.post(
            "/api/cities",
            json={
                "name": "Torino",
                "country": "Italia",
                "description": "Prima capitale d'Italia.",
                "imageUrl": "https://example.com/torino.jpg",
                "isFeatured": flag,
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid city data"
        assert len(client.get("/api/cities").json()) == 5

    @pytest.mark.parametrize("raw_id", ["0_1", "+3", " 3", "٣", "-1", "1.0"])
    def test_get_rejects_non_digit_ids(self, client: TestClient, raw_id: str) -> None:
        response = client.get(f"/api/cities/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid city ID"}

    def test_create_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/cities",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request"


# ======================================================================
# Places
# ======================================================================


class TestPlaces:
    def test_list(self, client: TestClient) -> None:
        places = client.get("/api/places").json()
        assert [p["id"] for p in places] == [1, 2, 3]
        assert places[0]["rating"] == 48
        assert places[0]["reviewCount"] == 458

    def test_featured(self, client: TestClient) -> None:
        assert [p["id"] for p in client.get("/api/places/featured").json()] == [1, 2, 3]

    def test_get(self, client: TestClient) -> None:
        place = client.get("/api/places/2").json()
        assert place["category"] == "Musei"
        assert place["cityId"] == 4

    def test_get_missing_and_invalid(self, client: TestClient) -> None:
        assert client.get("/api/places/999").json() == {"detail": "Place not found"}
        response = client.get("/api/places/x1")
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid place ID"}

    def test_create(self, client: TestClient) -> None:
        response = client.post("/api/places", json=_place_body())
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 4
        assert (body["rating"], body["reviewCount"]) == (0, 0)

    def test_create_for_unknown_city_is_accepted(self, client: TestClient) -> None:
        response = client.post("/api/places", json=_place_body(cityId=999))
        assert response.status_code == 201

    @pytest.mark.parametrize(
        "overrides",
        [{"cityId": "5"}, {"rating": "40"}, {"reviewCount": "3"}, {"isFeatured": "no"}],
    )
    def test_create_rejects_string_typed_fields(
        self, client: TestClient, overrides: dict[str, Any]
    ) -> None:
        response = client.post("/api/places", json=_place_body(**overrides))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid place data"

    def test_get_rejects_underscored_id(self, client: TestClient) -> None:
        response = client.get("/api/places/0_1")
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid place ID"}

    def test_create_invalid_category(self, client: TestClient) -> None:
        response = client.post("/api/places", json=_place_body(category="Discoteche"))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid place data"


# ======================================================================
# City listings
# ======================================================================


class TestCityPlaces:
    @pytest.fixture
    def rome(self, client: TestClient) -> TestClient:
        """Add three more places in Rome so filters have something to cut."""
        client.post("/api/places", json=_place_body(
            name="Bar del Fico", cityId=1, category="Bar", rating=41, reviewCount=90,
            tags=["Economico", "Centro storico"],
        ))
        client.post("/api/places", json=_place_body(
            name="Roscioli", cityId=1, category="Ristoranti", rating=46, reviewCount=20,
            tags=["Cucina Italiana", "Romantico"],
        ))
        client.post("/api/places", json=_place_body(
            name="Piscina delle Rose", cityId=1, category="Piscine", rating=33, reviewCount=12,
        ))
        return client

    def test_store_order_without_params(self, rome: TestClient) -> None:
        places = rome.get("/api/cities/1/places").json()
        assert [p["name"] for p in places] == [
            "Ristorante La Pergola", "Bar del Fico", "Roscioli", "Piscina delle Rose",
        ]

    def test_sort_popular(self, rome: TestClient) -> None:
        places = rome.get("/api/cities/1/places", params={"sort": "popular"}).json()
        # 48*458, 41*90, 46*20, 33*12
        assert [p["id"] for p in places] == [1, 4, 5, 6]

    def test_sort_rating(self, rome: TestClient) -> None:
        places = rome.get("/api/cities/1/places", params={"sort": "rating"}).json()
        assert [p["id"] for p in places] == [1, 5, 4, 6]

    def test_sort_newest(self, rome: TestClient) -> None:
        places = rome.get("/api/cities/1/places", params={"sort": "newest"}).json()
        assert [p["id"] for p in places] == [6, 5, 4, 1]

    def test_category_filter_defaults_to_popular(self, rome: TestClient) -> None:
        places = rome.get(
            "/api/cities/1/places", params=[("category", "Ristoranti"), ("category", "Bar")]
        ).json()
        assert [p["id"] for p in places] == [1, 4, 5]

    def test_rating_filter(self, rome: TestClient) -> None:
        places = rome.get("/api/cities/1/places", params={"rating": "4.5plus"}).json()
        assert [p["id"] for p in places] == [1, 5]

    def test_tag_filter_matches_any(self, rome: TestClient) -> None:
        places = rome.get(
            "/api/cities/1/places", params=[("tag", "Romantico"), ("tag", "Economico")]
        ).json()
        assert [p["id"] for p in places] == [4, 5]

    def test_invalid_listing_param(self, client: TestClient) -> None:
        response = client.get("/api/cities/1/places", params={"sort": "cheapest"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request"

    def test_empty_city(self, client: TestClient) -> None:
        assert client.get("/api/cities/2/places").json() == []

    def test_missing_city(self, client: TestClient) -> None:
        assert client.get("/api/cities/999/places").status_code == 404


# ======================================================================
# Reviews
# ======================================================================


class TestReviews:
    def test_list(self, client: TestClient) -> None:
        reviews = client.get("/api/places/1/reviews").json()
        assert [r["userName"] for r in reviews] == ["Marco Rossi", "Laura Bianchi"]
        assert "createdAt" in reviews[0]

    def test_list_missing_place(self, client: TestClient) -> None:
        assert client.get("/api/places/999/reviews").status_code == 404

    def test_create_updates_place(self, client: TestClient) -> None:
        place_id = client.post("/api/places", json=_place_body()).json()["id"]

        response = client.post(f"/api/places/{place_id}/reviews", json=_review_body(rating=4))
        assert response.status_code == 201
        review = response.json()
        assert review["placeId"] == place_id
        assert review["rating"] == 4
        assert review["createdAt"]

        place = client.get(f"/api/places/{place_id}").json()
        assert (place["rating"], place["reviewCount"]) == (40, 1)

    def test_created_at_is_server_side(self, client: TestClient) -> None:
        body = _review_body(createdAt="1999-01-01T00:00:00Z")
        review = client.post("/api/places/2/reviews", json=body).json()
        assert not review["createdAt"].startswith("1999")

    def test_create_for_missing_place(self, client: TestClient) -> None:
        response = client.post("/api/places/999/reviews", json=_review_body())
        assert response.status_code == 404
        assert response.json() == {"detail": "Place not found"}
        assert len(client.get("/api/places/1/reviews").json()) == 2

    @pytest.mark.parametrize(
        "overrides",
        [
            {"userName": "Al"},
            {"rating": 0},
            {"rating": 6},
            {"rating": "5"},
            {"rating": 4.5},
            {"comment": "Breve"},
        ],
    )
    def test_create_invalid(self, client: TestClient, overrides: dict[str, Any]) -> None:
        response = client.post("/api/places/1/reviews", json=_review_body(**overrides))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid review data"
        place = client.get("/api/places/1").json()
        assert place["reviewCount"] == 458


# ======================================================================
# Chat
# ======================================================================


class TestChat:
    def test_reply(self, client: TestClient, mock_llm_provider) -> None:
        response = client.post("/api/places/1/chat", json={"message": "A che ora chiudete?"})

        assert response.status_code == 200
        assert response.json() == {"response": "Il ristorante è aperto fino alle 23:00."}
        messages = mock_llm_provider.chat.call_args.args[0]
        assert "Città: Roma" in messages[0]["content"]
        assert messages[-1] == {"role": "user", "content": "A che ora chiudete?"}

    def test_history_is_forwarded(self, client: TestClient, mock_llm_provider) -> None:
        client.post(
            "/api/places/2/chat",
            json={
                "message": "E il lunedì?",
                "history": [
                    {"role": "user", "content": "Siete aperti oggi?"},
                    {"role": "assistant", "content": "Sì, fino alle 18:30."},
                ],
            },
        )
        roles = [m["role"] for m in mock_llm_provider.chat.call_args.args[0]]
        assert roles == ["system", "user", "assistant", "user"]

    def test_provider_failure_returns_fallback(self, client: TestClient, mock_llm_provider) -> None:
        mock_llm_provider.chat.side_effect = LLMError("timed out", provider_name="openai")

        response = client.post("/api/places/1/chat", json={"message": "Ciao"})

        assert response.status_code == 200
        assert response.json() == {"response": ERROR_REPLY}

    def test_empty_reply_returns_fallback(self, client: TestClient, mock_llm_provider) -> None:
        mock_llm_provider.chat.return_value = ""
        response = client.post("/api/places/1/chat", json={"message": "Ciao"})
        assert response.json() == {"response": EMPTY_REPLY}

    def test_missing_place(self, client: TestClient, mock_llm_provider) -> None:
        response = client.post("/api/places/999/chat", json={"message": "Ciao"})
        assert response.status_code == 404
        mock_llm_provider.chat.assert_not_called()

    def test_empty_message(self, client: TestClient) -> None:
        response = client.post("/api/places/1/chat", json={"message": ""})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid chat request"

    def test_unexpected_failure_is_500(self, client: TestClient, app_components) -> None:
        class _Broken:
            provider_name = "broken"

            async def converse(self, *args: Any, **kwargs: Any) -> str:
                raise RuntimeError("assembler exploded")

        client.app.state.chat_assembler = _Broken()

        response = client.post("/api/places/1/chat", json={"message": "Ciao"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "assembler exploded",
            "detail": "Failed to process chat request",
        }


# ======================================================================
# Health
# ======================================================================


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == {"users": 0, "cities": 5, "places": 3, "reviews": 2}
        assert body["providers"]["llm"] == "mock-llm"
