from typing import Optional

from langgraph.graph import StateGraph, START, END

from registration import reconciler
from registration.state import FormState
from registration.validator import RegistrationValidator


class RegistrationGraphFactory:
    """
    Builds the submit path as a state graph:

        START -> submit -> validate -> accept | reject -> END

    ``submit`` enters the Submitting phase, ``validate`` runs the full pass,
    and the conditional edge routes on the outcome.
    """

    def __init__(self, validator: Optional[RegistrationValidator] = None):
        self.validator = validator or RegistrationValidator()

    def build(self) -> StateGraph:
        g = StateGraph(FormState)

        g.add_node("submit", reconciler.begin_submit)
        g.add_node("validate", self.validator.validate_node)
        g.add_node("accept", reconciler.make_accept_node(self.validator.schema))
        g.add_node("reject", reconciler.reject)

        g.add_edge(START, "submit")
        g.add_edge("submit", "validate")

        g.add_conditional_edges(
            "validate",
            self.validator.should_accept,
            {"accept": "accept", "reject": "reject"},
        )
        g.add_edge("accept", END)
        g.add_edge("reject", END)

        return g

    def compile(self):
        return self.build().compile()


def run_submit(graph, state: FormState) -> FormState:
    """
    Invoke a compiled submit graph on ``state`` and return the resulting
    FormState. The graph yields plain channel values, so they are re-validated
    into the model here.
    """
    result = graph.invoke(state.model_dump(exclude={"outcome"}))
    return FormState.model_validate(result)
