"""Serviços de aplicação.

Unidades de orquestração sem IO direto; IO concreto fica em app/infra/.
"""

from app.services.auth_service import AuthService, SessionPersistence
from app.services.contact_intake import ContactIntake, build_contact
from app.services.contact_queries import find_contact, search_contacts, sort_contacts
from app.services.payload_parser import (
    PARSE_FAILURE_MESSAGE,
    ParseFailure,
    classify_payload,
    parse_payload,
)

__all__ = [
    "PARSE_FAILURE_MESSAGE",
    "AuthService",
    "ContactIntake",
    "ParseFailure",
    "SessionPersistence",
    "build_contact",
    "classify_payload",
    "find_contact",
    "parse_payload",
    "search_contacts",
    "sort_contacts",
]
