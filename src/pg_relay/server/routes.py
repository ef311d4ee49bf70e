"""Query submission route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from pg_relay.core.models import QueryRequest, ResultSet
from pg_relay.core.relay import QueryRelay

QUERY_PATH = "/query"

router = APIRouter()


def get_relay(request: Request) -> QueryRelay:
    return request.app.state.relay


async def read_query_request(request: Request) -> QueryRequest:
    """Decode the body as JSON whatever Content-Type the client sent.

    curl -d and browser forms label JSON bodies as form data or text.
    """
    raw = await request.body()
    try:
        return QueryRequest.model_validate_json(raw)
    except ValidationError as e:
        errors = [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
        raise RequestValidationError(errors, body=raw) from e


@router.post(
    QUERY_PATH,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": QueryRequest.model_json_schema()}
            },
        }
    },
)
def execute_query(
    body: Annotated[QueryRequest, Depends(read_query_request)],
    relay: Annotated[QueryRelay, Depends(get_relay)],
) -> ResultSet:
    """Run the submitted SQL as given and return the rows as JSON objects."""
    return relay.execute_query(body.sql).rows
