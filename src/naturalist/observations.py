"""
Observation endpoints.

One function per provider endpoint. Each builds its request, issues exactly
one call through the client's executor and decodes the response:

    GET    /observations.json             list (query filters)
    GET    /observations/{login}.json     list by username
    GET    /observations/{id}.json        full or summary view
    POST   /observations.json             create   -> 201
    PUT    /observations/{id}.json        update   -> 201
    DELETE /observations/{id}.json        delete   -> 201

The provider answers update and delete with 201 as well as create. That is
unusual but observed, so each operation passes its expected status
explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from http import HTTPStatus

from naturalist import codec
from naturalist.client import Client
from naturalist.errors import DecodeError, error_context
from naturalist.paging import decode_page_info
from naturalist.query import build_query
from naturalist.schemas import (
    AddObservationOpt,
    FullObservation,
    GetObservationsOpt,
    ObservationsPage,
    SimpleObservation,
    UpdateObservationOpt,
)

logger = logging.getLogger(__name__)

OBSERVATIONS_PATH = "/observations.json"
OBSERVATION_PATH = "/observations/{}.json"

# Success statuses per operation
LIST_STATUS = HTTPStatus.OK
GET_STATUS = HTTPStatus.OK
CREATE_STATUS = HTTPStatus.CREATED
UPDATE_STATUS = HTTPStatus.CREATED
DELETE_STATUS = HTTPStatus.CREATED


def _list_page(client: Client, url: str, operation: str) -> ObservationsPage:
    with error_context(operation, url):
        resp = client.executor.execute("GET", url, expected_status=LIST_STATUS)
        return ObservationsPage(
            observations=codec.decode_simple_observations(resp.content),
            paging=decode_page_info(resp.headers),
        )


# =============================================================================
# Reads
# =============================================================================


def get_observations(client: Client, opt: GetObservationsOpt | None = None) -> ObservationsPage:
    """GET /observations.json — search observations with optional filters."""
    url = client.build_url(OBSERVATIONS_PATH)
    params = build_query(opt)
    if params:
        url = f"{url}?{params}"
    return _list_page(client, url, "get_observations")


def get_observations_by_username(client: Client, username: str) -> ObservationsPage:
    """GET /observations/{username}.json — one user's observations."""
    url = client.build_url(OBSERVATION_PATH, username)
    return _list_page(client, url, "get_observations_by_username")


def get_observation(client: Client, observation_id: int) -> FullObservation:
    """GET /observations/{id}.json decoded as the full view."""
    url = client.build_url(OBSERVATION_PATH, observation_id)
    with error_context("get_observation", url):
        resp = client.executor.execute("GET", url, expected_status=GET_STATUS)
        return codec.decode_full_observation(resp.content)


def get_simple_observation(client: Client, observation_id: int) -> SimpleObservation:
    """GET /observations/{id}.json decoded as the summary view."""
    url = client.build_url(OBSERVATION_PATH, observation_id)
    with error_context("get_simple_observation", url):
        resp = client.executor.execute("GET", url, expected_status=GET_STATUS)
        return codec.decode_simple_observation(resp.content)


def iter_observations(
    client: Client,
    opt: GetObservationsOpt | None = None,
    *,
    max_pages: int = 5,
) -> Iterator[SimpleObservation]:
    """
    Yield observations across successive pages of ``get_observations``.

    Starts at ``opt.page`` (or 1) and stops on an empty page, on the last
    page the provider reports, or after ``max_pages`` requests.
    """
    page_opt = opt.model_copy() if opt is not None else GetObservationsOpt()
    page = page_opt.page or 1
    for _ in range(max_pages):
        page_opt.page = page
        result = get_observations(client, page_opt)
        if not result.observations:
            break
        yield from result.observations
        last_page = result.paging.last_page
        if last_page is not None and page >= last_page:
            break
        page += 1


# =============================================================================
# Writes
# =============================================================================


def add_observation(client: Client, opt: AddObservationOpt) -> SimpleObservation:
    """
    POST /observations.json — create an observation.

    The provider answers with a one-element array; an empty array is a
    ``DecodeError``.
    """
    url = client.build_url(OBSERVATIONS_PATH)
    with error_context("add_observation", url):
        body = codec.encode_options(opt)
        resp = client.executor.execute("POST", url, body=body, expected_status=CREATE_STATUS)
        created = codec.decode_simple_observations(resp.content)
        if not created:
            raise DecodeError("expected at least one result")
        logger.debug("Created observation %d", created[0].id)
        return created[0]


def update_observation(client: Client, opt: UpdateObservationOpt) -> None:
    """
    PUT /observations/{id}.json — send only the fields set on ``opt``.

    The response body is opaque; it is only checked to be valid JSON.
    """
    url = client.build_url(OBSERVATION_PATH, opt.id)
    with error_context("update_observation", url):
        body = codec.encode_options(opt)
        resp = client.executor.execute("PUT", url, body=body, expected_status=UPDATE_STATUS)
        codec.check_parses(resp.content)


def delete_observation(client: Client, observation_id: int) -> None:
    """DELETE /observations/{id}.json — the response body is not read."""
    url = client.build_url(OBSERVATION_PATH, observation_id)
    with error_context("delete_observation", url):
        client.executor.execute("DELETE", url, body=b"", expected_status=DELETE_STATUS)
