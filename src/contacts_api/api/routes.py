"""Contact endpoints.

Path, query and body are handed to ContactHandler unparsed (repeated
query keys are grouped into lists) so that it can report bad input with
its own 400 messages instead of FastAPI's 422s. The parameters declared
here exist for the OpenAPI document.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, Request, Response, status

from contacts_api.api.dependencies import HandlerDep
from contacts_api.dto import (
    ContactListResponse,
    ContactResponse,
    CreateContactInput,
    EmptyPageResponse,
    ErrorResponse,
    UpdateContactInput,
)
from contacts_api.validation import group_query_params

router = APIRouter(prefix="/contacts", tags=["Contacts"])

ContactIdPath = Annotated[
    str,
    Path(description="The ID of the contact.", examples=["1"]),
]


def _json_body(model: type) -> dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def _error(description: str, model: type = ErrorResponse) -> dict[str, Any]:
    return {"model": model, "description": description}


INTERNAL_ERROR = _error("Internal server error.")


@router.get(
    "/{id}",
    response_model=ContactResponse,
    summary="Retrieve a contact by ID",
    description="Retrieve a specific contact from the database using its ID.",
    responses={
        400: _error("Missing ID or unexpected path parameters."),
        404: _error("Contact not found."),
        500: INTERNAL_ERROR,
    },
)
async def get_contact(request: Request, handler: HandlerDep, id: ContactIdPath) -> ContactResponse:  # noqa: A002
    return await handler.get_contact(request.path_params)


@router.get(
    "",
    response_model=ContactListResponse,
    summary="Retrieve all contacts",
    description="Retrieve a paginated list of contacts from the database.",
    responses={
        400: _error("Unknown query parameters, or page/limit is not a positive integer."),
        404: _error("The requested page holds no contacts.", EmptyPageResponse),
        500: INTERNAL_ERROR,
    },
)
async def list_contacts(
    request: Request,
    handler: HandlerDep,
    page: Annotated[str | None, Query(description="The page number to retrieve.", examples=["1"])] = None,
    limit: Annotated[str | None, Query(description="The number of contacts per page.", examples=["10"])] = None,
) -> ContactListResponse:
    return await handler.list_contacts(group_query_params(request.query_params.multi_items()))


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new contact",
    description="Creates a new contact in the database.",
    responses={
        400: _error("Missing fields, unexpected fields or invalid name/phone."),
        500: INTERNAL_ERROR,
    },
    openapi_extra=_json_body(CreateContactInput),
)
async def create_contact(request: Request, handler: HandlerDep) -> ContactResponse:
    return await handler.create_contact(await request.body())


@router.patch(
    "/{id}",
    response_model=ContactResponse,
    summary="Update an existing contact",
    description="Updates the supplied fields of an existing contact.",
    responses={
        400: _error("Unexpected fields or invalid name/phone."),
        404: _error("Contact not found."),
        500: INTERNAL_ERROR,
    },
    openapi_extra=_json_body(UpdateContactInput),
)
async def update_contact(request: Request, handler: HandlerDep, id: ContactIdPath) -> ContactResponse:  # noqa: A002
    return await handler.update_contact(request.path_params, await request.body())


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a contact",
    description="Deletes a contact by ID.",
    responses={
        400: _error("Missing ID or unexpected path parameters."),
        404: _error("Contact not found."),
        500: INTERNAL_ERROR,
    },
)
async def delete_contact(request: Request, handler: HandlerDep, id: ContactIdPath) -> Response:  # noqa: A002
    await handler.delete_contact(request.path_params)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
