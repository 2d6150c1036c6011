"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest

FORM_MIMETYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


def _read_body(req: Request) -> dict:
    if req.is_json:
        data = req.get_json(silent=True)
        if data is None:
            raise BadRequest("Request JSON body is malformed.")
        if not isinstance(data, dict):
            raise BadRequest("Request JSON payload must be an object.")
        return data

    if req.mimetype in FORM_MIMETYPES:
        return req.form.to_dict()

    raise BadRequest("Request content type must be application/json.")


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the request body as a dict or raise a 400 error.

    JSON is the primary format; urlencoded and multipart form posts are
    accepted as flat string fields.
    """

    data = _read_body(req)

    if not data and not allow_empty:
        raise BadRequest("Request body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if data.get(key) in (None, "")]
        if missing:
            raise BadRequest(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data
