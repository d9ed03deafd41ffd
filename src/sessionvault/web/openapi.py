from typing import Any, TypeVar

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

T = TypeVar("T")

# Endpoints that can be called without an auth token
PUBLIC_ENDPOINTS = {
    ("POST", "/api/auth/login"),
    ("POST", "/api/session/"),
    ("POST", "/api/session/list"),
    ("GET", "/api/session/getSession"),
    ("GET", "/api/session/all"),
    ("GET", "/api/session/{session_id}"),
    ("PUT", "/api/session/{session_id}"),
    ("DELETE", "/api/session/{session_id}"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="SessionVault API",
            version="0.1.0",
            summary="Dashboard API for named key/value session records",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Bearer token authentication (preferred)",
            },
            "AuthTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "auth_token",
                "description": "Authentication token stored in cookie",
            },
        }

        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"AuthTokenCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ApiResponse[T](BaseModel):
    """Success envelope shared by all record endpoints."""

    status: int = Field(200, description="HTTP status code, repeated in the body")
    message: str = Field(..., description="Human-readable outcome")
    data: T


class ErrorResponse(BaseModel):
    """Standard error response format."""

    status: int = Field(..., description="HTTP status code, repeated in the body")
    message: str = Field(..., description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": 400, "message": "Name and value are required fields."},
                {"status": 404, "message": "Session not found."},
                {"status": 202, "message": "Session with this name already exists. Please choose a different name."},
            ]
        }
    }
