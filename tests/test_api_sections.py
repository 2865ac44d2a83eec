"""Tests for the /sections API endpoint."""

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.api.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        app_name="Section Test Service",
        log_level="DEBUG",
        max_samples=1000,
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create a test client with the app."""
    app = create_app(test_settings)
    return TestClient(app)


GAP_BODY = {
    "t_ms": [0, 1, 2, 10, 11, 12],
    "labels": ["A", "A", "A", "A", "A", "A"],
}


class TestSectionsSuccess:
    """Tests for successful /sections requests."""

    def test_label_changes(self, client: TestClient, scenario_no_gap) -> None:
        """Test events and groups for a series without gaps."""
        t_ms, labels = scenario_no_gap

        response = client.post("/sections", json={"t_ms": t_ms, "labels": labels})

        assert response.status_code == 200
        data = response.json()
        assert data["fs"] == 1000.0
        assert [e["name"] for e in data["events"]] == [
            "Start_A", "End_A", "Start_B", "End_B", "Start_A", "End_A",
        ]
        assert [e["t_ms"] for e in data["events"]] == [0.0, 3.0, 3.0, 7.0, 7.0, 11.0]
        assert data["sections"] == [
            {"name": "A", "hits": [[0.0, 3.0], [7.0, 11.0]], "desc": 'Section demarked by "A".', "fs": 1000.0},
            {"name": "B", "hits": [[3.0, 7.0]], "desc": 'Section demarked by "B".', "fs": 1000.0},
        ]
        assert data["repair"] is None
        assert data["debug_trace"] is None

    def test_gap(self, client: TestClient) -> None:
        """Test that a gap splits the run."""
        response = client.post("/sections", json=GAP_BODY)

        assert response.status_code == 200
        assert response.json()["sections"][0]["hits"] == [[0.0, 3.0], [10.0, 13.0]]

    def test_gap_threshold_override(self, client: TestClient) -> None:
        """Test that gap_n_dt in the request is applied."""
        response = client.post("/sections", json={**GAP_BODY, "gap_n_dt": 10})

        assert response.status_code == 200
        assert response.json()["sections"][0]["hits"] == [[0.0, 13.0]]

    def test_supplied_fs(self, client: TestClient) -> None:
        """Test that a supplied fs sets the sample period."""
        response = client.post("/sections", json={**GAP_BODY, "fs": 125})

        assert response.status_code == 200
        data = response.json()
        assert data["fs"] == 125.0
        assert data["dt_ms"] == 8.0
        assert data["sections"][0]["hits"] == [[0.0, 20.0]]

    def test_null_and_numeric_labels(self, client: TestClient) -> None:
        """Test that null becomes the empty label and numbers are stringified."""
        response = client.post(
            "/sections",
            json={"t_ms": [0, 1, 2, 3], "labels": [None, None, 7, 7]},
        )

        assert response.status_code == 200
        names = [g["name"] for g in response.json()["sections"]]
        assert names == ["", "7"]

    def test_repair_timestamps(self, client: TestClient) -> None:
        """Test repair before extraction."""
        response = client.post(
            "/sections",
            json={
                "t_ms": [1001, 1000, 1002, 1002, None, 1010, 1012, 1011],
                "labels": ["A", "A", "A", "X", "Z", "A", "A", "A"],
                "repair_timestamps": True,
                "zero_time": True,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["repair"] == {
            "was_sorted": False,
            "had_dupes": True,
            "had_nans": True,
            "num_dropped": 2,
        }
        assert data["zero_time_ms"] == 1000.0
        assert data["sections"][0]["hits"] == [[0.0, 3.0], [10.0, 13.0]]

    def test_debug_trace(self, client: TestClient) -> None:
        """Test that debug returns the per-sample trace."""
        response = client.post("/sections", json={**GAP_BODY, "debug": True})

        assert response.status_code == 200
        trace = response.json()["debug_trace"]
        assert len(trace.split("\n")) == 6
        assert "<-GAP" in trace

    def test_empty(self, client: TestClient) -> None:
        """Test that empty input returns an empty result."""
        response = client.post("/sections", json={"t_ms": [], "labels": []})

        assert response.status_code == 200
        data = response.json()
        assert data["events"] == []
        assert data["sections"] == []
        assert data["fs"] is None


class TestSectionsSettings:
    """Tests for service-level defaults."""

    def test_default_gap_threshold(self) -> None:
        """Test that default_gap_n_dt applies when the request omits it."""
        client = TestClient(create_app(Settings(default_gap_n_dt=10.0)))

        response = client.post("/sections", json=GAP_BODY)

        assert response.status_code == 200
        assert response.json()["sections"][0]["hits"] == [[0.0, 13.0]]

    def test_skip_empty_labels(self) -> None:
        """Test that skip_empty_labels drops the empty group."""
        client = TestClient(create_app(Settings(skip_empty_labels=True)))

        response = client.post(
            "/sections",
            json={"t_ms": [0, 1, 2, 3], "labels": ["A", "A", "", ""]},
        )

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert [g["name"] for g in sections] == ["A"]
        assert sections[0]["hits"] == [[0.0, 2.0]]

    def test_description_template(self) -> None:
        """Test that the description template is applied."""
        client = TestClient(create_app(Settings(section_description_template="Stim {name}")))

        response = client.post("/sections", json=GAP_BODY)

        assert response.json()["sections"][0]["desc"] == "Stim A"


class TestSectionsErrors:
    """Tests for /sections error responses."""

    def test_unsorted_returns_422(self, client: TestClient) -> None:
        """Test that unsorted timestamps return 422 INVALID_TIMESTAMPS."""
        response = client.post(
            "/sections",
            json={"t_ms": [0, 2, 1], "labels": ["A", "A", "A"]},
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_TIMESTAMPS"
        assert error["details"]["reason"] == "NOT_STRICTLY_INCREASING"

    def test_negative_threshold_returns_422(self, client: TestClient) -> None:
        """Test that gap_n_dt < 0 returns 422 INVALID_CONFIG."""
        response = client.post("/sections", json={**GAP_BODY, "gap_n_dt": -1})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_CONFIG"
        assert error["details"]["parameter"] == "gap_n_dt"

    def test_invalid_fs_returns_422(self, client: TestClient) -> None:
        """Test that fs <= 0 returns 422 INVALID_CONFIG."""
        response = client.post("/sections", json={**GAP_BODY, "fs": 0})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_CONFIG"

    def test_length_mismatch_returns_422(self, client: TestClient) -> None:
        """Test that columns of different length return 422 INVALID_INPUT."""
        response = client.post(
            "/sections",
            json={"t_ms": [0, 1, 2], "labels": ["A", "A"]},
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["details"]["reason"] == "LENGTH_MISMATCH"

    def test_too_many_samples_returns_422(self, client: TestClient) -> None:
        """Test that inputs above max_samples return 422 INVALID_INPUT."""
        n = 1001
        response = client.post(
            "/sections",
            json={"t_ms": list(range(n)), "labels": ["A"] * n},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    def test_too_many_labels_returns_422(self, client: TestClient) -> None:
        """Test that an oversized labels array is rejected by the size limit."""
        response = client.post(
            "/sections",
            json={"t_ms": [0, 1], "labels": ["A"] * 1001},
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["details"] == {"num_samples": 1001, "max_samples": 1000}
