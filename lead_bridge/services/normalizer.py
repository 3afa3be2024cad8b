"""
Payload normalization.

The form platform posts the same submission in several shapes:
{contact, event}, {attributes}, {payload}, or with fields at the top level.
normalize() folds them into one attribute mapping plus the additional-info
mapping that holds survey answers and tracking parameters.
"""

from collections.abc import Mapping
from typing import Any

from lead_bridge.schemas.mail import NormalizedPayload
from lead_bridge.services.fields import as_mapping

PREQUAL_ANSWER_PREFIX = "answer_88258_"


def normalize(raw: Any) -> NormalizedPayload:
    """Flatten a raw webhook body. Never raises; bad shapes become empty dicts."""
    body = as_mapping(raw)

    contact = as_mapping(body.get("contact"))
    event = as_mapping(body.get("event"))
    attrs = _first_mapping(body.get("attributes"), body.get("payload"))

    profile = _first_mapping(
        contact.get("contact_profile"),
        event.get("contact_profile"),
        attrs.get("contact_profile"),
    )

    # Later sources win on key collisions
    attributes = {**contact, **event, **attrs, "contact_profile": profile}

    additional_info = _first_non_empty_mapping(
        contact.get("additional_info"),
        event.get("additional_info"),
        attrs.get("additional_info"),
        body.get("additional_info"),
    )

    return NormalizedPayload(
        attributes=attributes,
        additional_info=additional_info,
        is_prequal=is_prequal_answers(additional_info),
    )


def is_prequal_answers(additional_info: Mapping) -> bool:
    """True when any answer key belongs to the pre-underwriting survey."""
    return any(str(key).startswith(PREQUAL_ANSWER_PREFIX) for key in additional_info)


def _first_mapping(*candidates: Any) -> dict:
    for value in candidates:
        if isinstance(value, Mapping):
            return dict(value)
    return {}


def _first_non_empty_mapping(*candidates: Any) -> dict:
    for value in candidates:
        if isinstance(value, Mapping) and value:
            return dict(value)
    return {}
