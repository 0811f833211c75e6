"""
Pure form-state transitions. Every function returns new maps or a new
FormState; nothing here mutates its arguments.

Edits only clear a field's stale error. They never re-validate, so no new
error can appear before the next submit.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from registration.errors import UnknownFieldError
from registration.schema import REGISTRATION_SCHEMA, RegistrationSchema
from registration.state import ErrorMap, FormPhase, FormState, FormValues

logger = logging.getLogger(__name__)


def initial_state(schema: Optional[RegistrationSchema] = None) -> FormState:
    schema = schema or REGISTRATION_SCHEMA
    return FormState(values=schema.empty_values())


def on_field_edit(
    values: FormValues, errors: ErrorMap, field: str, new_value: str
) -> Tuple[FormValues, ErrorMap]:
    if field not in values:
        raise UnknownFieldError(field)

    new_values = dict(values)
    new_values[field] = new_value

    new_errors = dict(errors)
    new_errors.pop(field, None)
    return new_values, new_errors


def on_submit_success(
    schema: Optional[RegistrationSchema] = None,
) -> Tuple[FormValues, ErrorMap, bool]:
    schema = schema or REGISTRATION_SCHEMA
    return schema.empty_values(), {}, True


def apply_edit(state: FormState, field: str, new_value: str) -> FormState:
    values, errors = on_field_edit(state.values, state.errors, field, new_value)

    phase = state.phase
    if phase in (FormPhase.REJECTED, FormPhase.ACCEPTED):
        phase = FormPhase.EDITING

    return state.model_copy(update={"values": values, "errors": errors, "phase": phase})


def apply_success_timeout(state: FormState, token: int) -> FormState:
    """
    Hide the success banner for the acceptance identified by ``token``.
    A timer from an earlier acceptance, or one firing after the banner was
    already cleared, leaves the state unchanged.
    """
    if not state.success or state.success_token != token:
        logger.debug("Ignoring stale success timer (token=%s)", token)
        return state

    phase = FormPhase.EDITING if state.phase == FormPhase.ACCEPTED else state.phase
    return state.model_copy(update={"success": False, "phase": phase})


# graph nodes


def begin_submit(state: FormState) -> Dict[str, Any]:
    # a fresh submission supersedes any banner still showing
    return {"phase": FormPhase.SUBMITTING, "success": False, "outcome": None}


def make_accept_node(schema: Optional[RegistrationSchema] = None):
    def accept(state: FormState) -> Dict[str, Any]:
        values, errors, success = on_submit_success(schema)
        return {
            "values": values,
            "errors": errors,
            "success": success,
            "phase": FormPhase.ACCEPTED,
            "success_token": state.success_token + 1,
        }

    return accept


def reject(state: FormState) -> Dict[str, Any]:
    return {"errors": dict(state.outcome.errors), "phase": FormPhase.REJECTED}
