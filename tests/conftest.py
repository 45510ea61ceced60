"""Test configuration and fixtures."""

from typing import Any, Dict

import pytest

from attiomcp.connectors import DummyConnector


@pytest.fixture
def person_record() -> Dict[str, Any]:
    """A raw Attio person record."""
    return {
        "id": {"workspace_id": "ws_1", "object_id": "obj_people", "record_id": "rec_jane"},
        "object": "people",
        "values": {
            "name": [{"first_name": "Jane", "last_name": "Doe", "full_name": "Jane Doe"}],
            "email_addresses": [{"email_address": "jane@acme.com"}],
            "phone_numbers": [{"phone_number": "+15551234567"}],
            "company": [{"target_record_id": "rec_acme", "target_object": "companies"}],
            "job_title": [{"value": "VP Sales"}],
            "tags": [],
        },
    }


@pytest.fixture
def company_record() -> Dict[str, Any]:
    """A raw Attio company record."""
    return {
        "id": {"workspace_id": "ws_1", "object_id": "obj_companies", "record_id": "rec_acme"},
        "object": "companies",
        "values": {
            "name": [{"value": "Acme Corp"}],
            "domains": [{"domain": "acme.com"}],
            "categories": [{"option": {"title": "SaaS"}}],
        },
    }


@pytest.fixture
def deal_entries() -> list:
    """Raw pipeline entries across two stages plus one without a stage."""
    return [
        {
            "id": {"entry_id": "ent_1"},
            "parent_record_id": "rec_deal_1",
            "entry_values": {
                "stage": [{"status": {"title": "Qualified"}}],
                "value": [{"currency_value": 5000, "currency_code": "USD"}],
            },
        },
        {
            "id": {"entry_id": "ent_2"},
            "parent_record_id": "rec_deal_2",
            "entry_values": {
                "stage": [{"status": {"title": "Qualified"}}],
                "value": [{"currency_value": 0, "currency_code": "USD"}],
            },
        },
        {
            "id": {"entry_id": "ent_3"},
            "parent_record_id": "rec_deal_3",
            "entry_values": {
                "stage": [{"option": {"title": "Won"}}],
                "amount": [{"value": "12000.50"}],
            },
        },
        {
            "id": {"entry_id": "ent_4"},
            "entry_values": {},
        },
    ]


@pytest.fixture
def dummy_connector() -> DummyConnector:
    """Provide an empty DummyConnector."""
    return DummyConnector()
