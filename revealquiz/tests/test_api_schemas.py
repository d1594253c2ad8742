"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- OpenAPI schema exposes every route
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_session_response_schema(self):
        from revealquiz.api.schemas import SessionResponse, SessionStatus, GuessRecordInfo

        response = SessionResponse(
            session_id="session-123",
            test_id="capitals",
            status=SessionStatus.PLAYING,
            score=700,
            reveal_percentage=37,
            visible_percentage=31,
            revealed_cells=[0, 3, 7, 9, 12],
            guess_history=[GuessRecordInfo(text="lyon", outcome="wrong")],
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "playing"
        assert data["guess_history"][0]["outcome"] == "wrong"
        assert data["question"] is None

    def test_guess_request_requires_text(self):
        from revealquiz.api.schemas import GuessRequest

        with pytest.raises(ValidationError):
            GuessRequest()

    def test_invalid_outcome_rejected(self):
        from revealquiz.api.schemas import GuessRecordInfo

        with pytest.raises(ValidationError):
            GuessRecordInfo(text="lyon", outcome="maybe")

    def test_error_response_schema(self):
        from revealquiz.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Game is over - only restart is allowed",
            error_code=ErrorCode.GAME_OVER,
        )
        data = error.model_dump(mode="json")
        assert data["error_code"] == "GAME_OVER"
        assert data["details"] is None

    def test_engine_error_codes_covered(self):
        """Every engine rejection code has an API counterpart."""
        from revealquiz.api.schemas import ErrorCode
        from revealquiz.engine_core.action import ErrorCode as EngineErrorCode

        api_codes = {c.value for c in ErrorCode}
        assert {c.value for c in EngineErrorCode} <= api_codes

    def test_create_request_defaults(self):
        from revealquiz.api.schemas import CreateSessionRequest

        request = CreateSessionRequest(quiz={"id": "q", "questions": [{"id": "a", "answers": ["x"]}]})
        assert request.seed is None
        assert request.quiz.questions[0].image_url == ""


class TestOpenAPI:
    """Tests for the generated OpenAPI document."""

    def test_routes_present(self):
        from revealquiz.api.app import create_app

        paths = create_app().openapi()["paths"]
        assert "/api/v1/sessions" in paths
        assert "/api/v1/sessions/{session_id}" in paths
        assert "post" in paths["/api/v1/sessions/{session_id}/guess"]
        assert "post" in paths["/api/v1/sessions/{session_id}/skip"]
        assert "post" in paths["/api/v1/sessions/{session_id}/restart"]
        assert "get" in paths["/api/v1/sessions/{session_id}/summary"]

    def test_error_schema_documented(self):
        from revealquiz.api.app import create_app

        schemas = create_app().openapi()["components"]["schemas"]
        assert "ErrorResponse" in schemas
        assert "SessionResponse" in schemas
