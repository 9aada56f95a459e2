import json

from services.modeler.app.domain.interpreter import interpret_json
from services.modeler.app.domain.report import build_interpretation_payload
from services.modeler.app.domain.types import StepType


def _dep(element_type: str, direction: str, target: str) -> dict:
    return {"elementType": element_type, "type": direction, "id": target}


def _interpret(document: dict):
    return interpret_json(json.dumps(document))


def test_invalid_json_yields_single_warning():
    result = interpret_json("{not json")

    assert result.slices == []
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Invalid JSON: ")


def test_missing_slices_yields_single_warning():
    for text in ('{"title": "no slices"}', '{"slices": {"a": 1}}', "[]"):
        result = interpret_json(text)
        assert result.slices == []
        assert result.warnings == ["Missing 'slices' array in root object."]


def test_malformed_document_payload_is_well_formed():
    payload = build_interpretation_payload(interpret_json("oops"))

    assert payload["slices"] == []
    assert payload["summary"] == {}
    assert len(payload["warnings"]) == 1


def test_full_document_summary(document_text):
    result = interpret_json(document_text)

    summary = result.summary
    assert summary.total_slices == 4
    assert summary.total_commands == 3
    assert summary.total_events == 3
    assert summary.total_external_events == 1
    assert summary.total_screens == 2
    assert summary.total_read_models == 1
    assert summary.total_specifications == 1
    assert [s.index for s in summary.slice_details] == [1, 2, 3, 4]


def test_full_document_flows(document_text):
    result = interpret_json(document_text)
    place, listing, mark, payment, simulator = result.slices

    assert place.visual_flow == "Order Screen ➜ Place Order ➜ Order Placed"
    assert listing.visual_flow == (
        "Order Placed ➜ **TODO:** Orders To Prepare ➜ **⇠** Order Prepared ➜ Kitchen Screen"
    )
    assert mark.visual_flow == "Mark Order Prepared ➜ **Order Prepared (Completes To-Do List Item)**"
    assert payment.visual_flow == "**EXTERNAL:** Payment Received ➜ Record Payment ➜ Payment Recorded"

    completion = mark.flow[-1]
    assert completion.type is StepType.event
    assert completion.description == "Completion event - marks item as done"

    assert simulator.index == 5
    assert simulator.title == "SIMULATION OF EXTERNAL EVENTS"
    assert [e.title for e in simulator.external_events] == ["Payment Received"]
    assert simulator.events == []
    assert simulator.readmodels == []
    assert simulator.bdd_tests == []
    assert "Payment Received" in simulator.visual_flow


def test_two_event_projection_details_and_warnings(document_text):
    result = interpret_json(document_text)
    listing = result.slices[1]

    details = listing.readmodel_details
    assert details.todo_list is True
    assert details.inbound_events == "Order Placed"
    assert details.outbound_events == "Order Prepared"
    assert details.consumer == "Kitchen Screen"
    assert details.total_inbound_events == 1
    assert details.total_outbound_events == 1

    readmodel_step = next(step for step in listing.flow if step.type is StepType.readmodel)
    assert readmodel_step.title == "**TODO:** Orders To Prepare"
    assert readmodel_step.description == "State projection / **TODO list (Two-event pattern)**"

    assert result.warnings == [
        'ReadModel "Orders To Prepare" is a **To-Do List Projection** with 1 ADD event(s): [Order Placed] '
        "and 1 REMOVE/DONE event(s): [Order Prepared]",
        'Slice "slice: Payment Received" is an AUTOMATION slice triggered by 1 external event(s): [Payment Received]',
    ]


def test_state_view_without_readmodel():
    result = _interpret({"slices": [{"title": "Empty View", "sliceType": "STATE_VIEW", "screens": [{"id": "s"}]}]})

    view = result.slices[0]
    assert result.warnings == ['STATE_VIEW slice "Empty View" has no ReadModel defined.']
    assert all(step.type is not StepType.readmodel for step in view.flow)
    assert view.readmodel_details is None
    assert view.visual_flow == ""


def test_state_view_without_inbound_events_warns():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "Lonely",
                    "sliceType": "STATE_VIEW",
                    "readmodels": [{"id": "rm", "title": "Nothing Yet"}],
                }
            ]
        }
    )

    details = result.slices[0].readmodel_details
    assert details.inbound_events == "(none)"
    assert details.outbound_events == "(none)"
    assert details.todo_list is False
    assert result.warnings == ['STATE_VIEW slice "Lonely" ReadModel "Nothing Yet" has no inbound events.']
    assert result.slices[0].visual_flow == "Nothing Yet"


def test_reverse_outbound_link_counts_as_inbound():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "Register",
                    "sliceType": "STATE_CHANGE",
                    "events": [
                        {"id": "e1", "title": "User Registered", "dependencies": [_dep("READMODEL", "OUTBOUND", "rm")]}
                    ],
                },
                {"title": "Users", "sliceType": "STATE_VIEW", "readmodels": [{"id": "rm", "title": "User List"}]},
            ]
        }
    )

    details = result.slices[1].readmodel_details
    assert details.inbound_events == "User Registered"
    assert result.warnings == []
    assert result.slices[1].visual_flow == "User Registered ➜ User List"


def test_duplicate_event_ids_resolve_to_last_declaration():
    result = _interpret(
        {
            "slices": [
                {"title": "A", "sliceType": "STATE_CHANGE", "events": [{"id": "e1", "title": "Old Title"}]},
                {"title": "B", "sliceType": "STATE_CHANGE", "events": [{"id": "e1", "title": "New Title"}]},
                {
                    "title": "View",
                    "sliceType": "STATE_VIEW",
                    "readmodels": [{"id": "rm", "title": "Board", "dependencies": [_dep("EVENT", "INBOUND", "e1")]}],
                },
            ]
        }
    )

    assert result.slices[2].readmodel_details.inbound_events == "New Title"
    assert result.summary.total_events == 2


def test_unresolved_dependency_ids_are_dropped():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "View",
                    "sliceType": "STATE_VIEW",
                    "readmodels": [
                        {
                            "id": "rm",
                            "title": "Board",
                            "dependencies": [_dep("EVENT", "INBOUND", "ghost"), _dep("EVENT", "OUTBOUND", "ghost2")],
                        }
                    ],
                }
            ]
        }
    )

    details = result.slices[0].readmodel_details
    assert details.total_inbound_events == 0
    assert details.total_outbound_events == 0


def test_identical_event_titles_count_once():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "A",
                    "sliceType": "STATE_CHANGE",
                    "events": [{"id": "e1", "title": "Shipped"}, {"id": "x1", "title": "Alert", "context": "EXTERNAL"}],
                },
                {
                    "title": "B",
                    "sliceType": "STATE_CHANGE",
                    "events": [{"id": "e2", "title": "Shipped"}, {"id": "x2", "title": "Alert", "context": "EXTERNAL"}],
                },
                {"title": "C", "sliceType": "STATE_CHANGE", "events": [{"id": "e3", "title": "shipped"}]},
            ]
        }
    )

    assert result.summary.total_events == 2
    assert result.summary.total_external_events == 1


def test_external_events_produce_one_simulator_slice():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "A",
                    "sliceType": "STATE_CHANGE",
                    "events": [{"id": "x1", "title": "Alert Raised ", "context": "EXTERNAL"}],
                },
                {
                    "title": "B",
                    "sliceType": "STATE_CHANGE",
                    "events": [{"id": "x2", "title": "Alert Raised", "context": "EXTERNAL"}],
                },
            ]
        }
    )

    assert len(result.slices) == 3
    simulator = result.slices[-1]
    assert simulator.slice_type == "STATE_CHANGE (Automation)"
    assert [e.title for e in simulator.external_events] == ["Alert Raised"]
    assert result.summary.total_slices == 2
    assert len(result.summary.slice_details) == 2


def test_no_simulator_without_external_events():
    result = _interpret({"slices": [{"title": "A", "sliceType": "STATE_CHANGE", "events": [{"id": "e", "title": "E"}]}]})

    assert len(result.slices) == 1


def test_slice_type_matching_is_case_sensitive():
    result = _interpret(
        {
            "slices": [
                {"title": "Lower", "sliceType": "state_view", "commands": [{"id": "c", "title": "Do"}]},
                {"title": "Literal", "sliceType": "UNKNOWN"},
                {"title": "Untyped", "screens": [{"id": "s", "title": "Screen"}]},
            ]
        }
    )

    assert result.warnings == [
        'Slice "Lower" has unhandled sliceType: state_view',
        'Slice "Literal" has unhandled sliceType: UNKNOWN',
    ]
    assert result.slices[0].visual_flow == "Do"
    assert result.slices[1].flow == []
    assert result.slices[2].visual_flow == "Screen"


def test_default_composer_dedups_on_title_alone():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "Collide",
                    "sliceType": "STATE_CHANGE",
                    "screens": [{"id": "s", "title": "A"}],
                    "commands": [{"id": "c", "title": "B"}],
                    "events": [{"id": "e", "title": "B"}],
                }
            ]
        }
    )

    assert len(result.slices[0].flow) == 3
    assert result.slices[0].visual_flow == "A ➜ B"


def test_automation_treats_external_dependency_as_trigger():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "Webhook",
                    "sliceType": "AUTOMATION",
                    "commands": [{"id": "c", "title": "Sync Stock"}],
                    "events": [
                        {"id": "e2", "title": "Stock Synced"},
                        {"id": "e1", "title": "Stock Changed", "dependencies": [_dep("EXTERNAL", "INBOUND", "erp")]},
                    ],
                }
            ]
        }
    )

    assert result.slices[0].visual_flow == "**EXTERNAL:** Stock Changed ➜ Sync Stock ➜ Stock Synced"
    assert result.warnings == [
        'Slice "Webhook" is an AUTOMATION slice triggered by 1 external event(s): [Stock Changed]'
    ]


def test_non_object_slices_keep_their_position():
    result = _interpret({"slices": ["junk", {"title": "Real", "sliceType": "STATE_CHANGE"}]})

    assert [s.index for s in result.slices] == [1, 2]
    assert result.summary.total_slices == 2


def test_interpretation_is_repeatable(document_text):
    first = build_interpretation_payload(interpret_json(document_text))
    second = build_interpretation_payload(interpret_json(document_text))

    assert first == second


def test_deeply_nested_document_yields_single_warning():
    result = interpret_json('{"slices": ' + "[" * 200_000 + "]" * 200_000 + "}")

    assert result.slices == []
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Invalid JSON: ")


def test_non_standard_constants_are_invalid_json():
    for constant in ("NaN", "Infinity", "-Infinity"):
        result = interpret_json('{"slices": [], "x": %s}' % constant)
        assert result.slices == []
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Invalid JSON: ")


def test_consumer_screens_require_a_readmodel_link():
    result = _interpret(
        {
            "slices": [
                {
                    "title": "Board",
                    "sliceType": "STATE_VIEW",
                    "screens": [
                        {"id": "s1", "title": "Unrelated Screen"},
                        {"id": "s2", "title": "Other View Screen", "dependencies": [_dep("READMODEL", "OUTBOUND", "rm2")]},
                        {"id": "s3", "title": "Board Screen", "dependencies": [_dep("READMODEL", "OUTBOUND", "rm1")]},
                    ],
                    "readmodels": [{"id": "rm1", "title": "Board View"}],
                }
            ]
        }
    )

    view = result.slices[0]
    assert view.readmodel_details.consumer == "Board Screen"
    assert view.visual_flow == "Board View ➜ Board Screen"
    assert [s.title for s in view.screens] == ["Unrelated Screen", "Other View Screen", "Board Screen"]


def test_ids_match_by_json_text():
    result = _interpret(
        {
            "slices": [
                {"title": "Add", "sliceType": "STATE_CHANGE", "events": [{"id": 1, "title": "Added"}]},
                {"title": "Flag", "sliceType": "STATE_CHANGE", "events": [{"id": True, "title": "Flagged"}]},
                {
                    "title": "View",
                    "sliceType": "STATE_VIEW",
                    "readmodels": [{"id": "rm", "title": "Items", "dependencies": [_dep("EVENT", "INBOUND", "1")]}],
                },
            ]
        }
    )

    assert result.slices[2].readmodel_details.inbound_events == "Added"
