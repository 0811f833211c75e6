# tests/test_graph.py

from registration import reconciler
from registration.graph import RegistrationGraphFactory, run_submit
from registration.state import Accepted, FormPhase, Rejected


def _state_with(values):
    state = reconciler.initial_state()
    for field, value in values.items():
        state = reconciler.apply_edit(state, field, value)
    return state


def test_graph_has_submit_nodes():
    g = RegistrationGraphFactory().build()
    assert {"submit", "validate", "accept", "reject"} <= set(g.nodes)


def test_valid_submission_routes_to_accept(valid_values):
    graph = RegistrationGraphFactory().compile()

    state = run_submit(graph, _state_with(valid_values))

    assert isinstance(state.outcome, Accepted)
    assert state.phase is FormPhase.ACCEPTED
    assert state.success is True
    assert state.success_token == 1
    assert state.errors == {}
    assert set(state.values.values()) == {""}


def test_invalid_submission_routes_to_reject(valid_values):
    valid_values["telefone"] = "123"
    graph = RegistrationGraphFactory().compile()

    state = run_submit(graph, _state_with(valid_values))

    assert isinstance(state.outcome, Rejected)
    assert state.phase is FormPhase.REJECTED
    assert state.errors == {"telefone": "Telefone deve estar no formato (00) 00000-0000"}
    assert state.values == valid_values
    assert state.success is False


def test_new_submission_clears_success_flag(valid_values):
    graph = RegistrationGraphFactory().compile()
    accepted = run_submit(graph, _state_with(valid_values))
    assert accepted.success is True

    rejected = run_submit(graph, accepted)

    assert rejected.success is False
    assert rejected.phase is FormPhase.REJECTED
    assert len(rejected.errors) == 5
    assert rejected.success_token == 1
