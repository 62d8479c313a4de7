"""JSON Schemas for API request bodies."""

import jsonschema

from ..errors import ValidationError

LOGIN_SCHEMA = {
    "type": "object",
    "required": ["email"],
    "properties": {
        "email": {"type": "string", "minLength": 1},
        "password": {"type": "string"},
    },
}

REGISTER_SCHEMA = {
    "type": "object",
    "required": ["name", "email", "role"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "email": {"type": "string", "minLength": 1},
        "password": {"type": "string"},
        "role": {"enum": ["student", "tutor", "admin"]},
    },
}

CREATE_ASSIGNMENT_SCHEMA = {
    "type": "object",
    "required": ["title", "subject", "description", "deadline", "budget"],
    "properties": {
        "title": {"type": "string", "minLength": 1, "maxLength": 200},
        "subject": {"type": "string"},
        "description": {"type": "string"},
        "deadline": {"type": "string", "minLength": 1},
        "budget": {"type": "number", "exclusiveMinimum": 0},
        "file_url": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

CREATE_BID_SCHEMA = {
    "type": "object",
    "required": ["amount", "proposal"],
    "properties": {
        "amount": {"type": "number", "exclusiveMinimum": 0},
        "proposal": {"type": "string"},
    },
    "additionalProperties": False,
}

ACCEPT_BID_SCHEMA = {
    "type": "object",
    "required": ["bid_id"],
    "properties": {
        "bid_id": {"type": "string", "minLength": 1},
    },
}

SUBMIT_WORK_SCHEMA = {
    "type": "object",
    "required": ["file_name"],
    "properties": {
        "file_name": {"type": "string", "minLength": 1},
    },
}


def validate_body(body, schema: dict) -> dict:
    """Validate a request body, raising the marketplace ValidationError."""
    if body is None:
        raise ValidationError("Request body must be a JSON object")
    try:
        jsonschema.validate(instance=body, schema=schema)
    except jsonschema.ValidationError as e:
        field = ".".join(str(p) for p in e.absolute_path) or None
        raise ValidationError(e.message, field=field) from e
    return body
