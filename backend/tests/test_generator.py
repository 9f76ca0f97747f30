def _payload(**overrides):
    payload = {
        "sessions": [
            {"title": "Sparse Solvers", "theme": "Linear Algebra", "priority": 2, "series": "Sparse", "part": 1},
            {"title": "Sparse Solvers", "theme": "Linear Algebra", "priority": 2, "series": "Sparse", "part": 2},
            {"title": "Mesh Adaptivity", "theme": "PDE", "priority": 1},
            {"title": "Graph Partitioning", "theme": "Combinatorics"},
        ],
        "rooms": [{"name": "Main", "priority": 2}, {"name": "Side", "priority": 1}],
        "timeslot_count": 3,
        "settings": {
            "population_size": 12,
            "elite_count": 2,
            "mutation_rate": 0.05,
            "generations": 10,
            "random_seed": 3,
            "worker_count": 1,
        },
    }
    payload.update(overrides)
    return payload


def test_generate_schedule_returns_best_assignment(client):
    response = client.post("/api/schedules/generate", json=_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["status"] in {"converged", "max_generations_reached"}
    assert 0.0 < body["score"] <= 1.0
    assert set(body["penalties"]) == {"order", "oversubscribed", "theme", "priority"}

    placed = body["sessions"]
    assert sorted(item["session_id"] for item in placed) == [0, 1, 2, 3]
    assert {item["room"] for item in placed} <= {"Main", "Side"}
    assert all(0 <= item["timeslot"] < 3 for item in placed)


def test_generate_schedule_validates_capacity(client):
    response = client.post("/api/schedules/generate", json=_payload(timeslot_count=1))
    assert response.status_code == 422


def test_generate_schedule_validates_settings(client):
    payload = _payload()
    payload["settings"]["elite_count"] = 12
    response = client.post("/api/schedules/generate", json=payload)
    assert response.status_code == 422


def test_generate_schedule_rejects_unknown_precedence(client):
    response = client.post("/api/schedules/generate", json=_payload(precedence=[{"before": 0, "after": 9}]))
    assert response.status_code == 422
