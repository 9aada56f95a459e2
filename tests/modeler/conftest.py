import json

import pytest


def dep(element_type: str, direction: str, target: str) -> dict:
    return {"elementType": element_type, "type": direction, "id": target}


def restaurant_document() -> dict:
    return {
        "slices": [
            {
                "title": "slice: Place Order",
                "sliceType": "STATE_CHANGE",
                "screens": [{"id": "s1", "title": "Order Screen"}],
                "commands": [{"id": "c1", "title": "Place Order"}],
                "events": [
                    {"id": "e1", "title": "Order Placed", "dependencies": [dep("READMODEL", "OUTBOUND", "rm1")]}
                ],
                "specifications": [
                    {
                        "title": "Placing an order",
                        "comments": [{"description": "orders need an id"}],
                        "given": [],
                        "when": [
                            {
                                "title": "Place Order",
                                "type": "SPEC_COMMAND",
                                "fields": [{"name": "orderId", "example": "\"7\""}, {"name": "", "example": "x"}],
                            }
                        ],
                        "then": [{"title": "Order Placed", "type": "SPEC_EVENT", "fields": []}],
                    }
                ],
            },
            {
                "title": "slice: List of Orders to Prepare",
                "sliceType": "STATE_VIEW",
                "screens": [
                    {"id": "s2", "title": "Kitchen Screen", "dependencies": [dep("READMODEL", "INBOUND", "rm1")]}
                ],
                "readmodels": [
                    {
                        "id": "rm1",
                        "title": "Orders To Prepare",
                        "dependencies": [dep("EVENT", "INBOUND", "e1"), dep("EVENT", "OUTBOUND", "e2")],
                    }
                ],
            },
            {
                "title": "slice: Mark Order Prepared",
                "sliceType": "STATE_CHANGE",
                "commands": [{"id": "c2", "title": "Mark Order Prepared"}],
                "events": [{"id": "e2", "title": "Order Prepared"}],
            },
            {
                "title": "slice: Payment Received",
                "sliceType": "AUTOMATION",
                "commands": [{"id": "c3", "title": "Record Payment"}],
                "events": [
                    {"id": "e3", "title": "Payment Received", "context": "EXTERNAL"},
                    {"id": "e4", "title": "Payment Recorded"},
                ],
            },
        ]
    }


@pytest.fixture
def document() -> dict:
    return restaurant_document()


@pytest.fixture
def document_text(document) -> str:
    return json.dumps(document)
