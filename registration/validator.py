import logging
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import SecretStr

from registration.errors import FieldValidationFailure, MissingFieldError, UnknownFieldError
from registration.schema import REGISTRATION_SCHEMA, FieldSchema, RegistrationSchema, RuleKind
from registration.state import (
    Accepted,
    ErrorMap,
    FormState,
    RegistrationData,
    Rejected,
    SanitizedValues,
    SubmissionOutcome,
)

logger = logging.getLogger(__name__)


class RegistrationValidator:
    def __init__(self, schema: Optional[RegistrationSchema] = None):
        self.schema = schema or REGISTRATION_SCHEMA

    def ensure_declared_fields(self, values: Mapping[str, str]) -> None:
        declared = self.schema.field_names
        for field in values:
            if field not in declared:
                raise UnknownFieldError(field)
        for field in declared:
            if field not in values:
                raise MissingFieldError(field)

    @staticmethod
    def check_field(
        rule: FieldSchema, values: Mapping[str, str]
    ) -> Optional[FieldValidationFailure]:
        """
        Run one field's rule chain and return the first failure, or None.
        """
        value = values[rule.name]

        if value.strip() == "":
            if rule.required:
                return FieldValidationFailure(
                    field=rule.name, message=rule.message_for(RuleKind.REQUIRED)
                )
            # optional and absent: nothing else applies
            return None

        failed: Optional[RuleKind] = None
        if rule.min_length is not None and len(value) < rule.min_length:
            failed = RuleKind.MIN_LENGTH
        elif rule.max_length is not None and len(value) > rule.max_length:
            failed = RuleKind.MAX_LENGTH
        elif rule.pattern is not None and rule.pattern.fullmatch(value) is None:
            failed = RuleKind.PATTERN
        elif rule.equals_field is not None and value != values[rule.equals_field]:
            failed = RuleKind.EQUALS_FIELD

        if failed is None:
            return None
        return FieldValidationFailure(field=rule.name, message=rule.message_for(failed))

    def collect_failures(self, values: Mapping[str, str]) -> List[FieldValidationFailure]:
        self.ensure_declared_fields(values)

        failures: List[FieldValidationFailure] = []
        for rule in self.schema.rules:
            failure = self.check_field(rule, values)
            if failure is not None:
                logger.debug("Field %s rejected: %s", failure.field, failure.message)
                failures.append(failure)
        return failures

    def validate_all(self, values: Mapping[str, str]) -> SubmissionOutcome:
        errors: ErrorMap = {f.field: f.message for f in self.collect_failures(values)}

        if errors:
            return Rejected(errors=errors)
        return Accepted(data=self.sanitize(values))

    def sanitize(self, values: Mapping[str, str]) -> Union[RegistrationData, SanitizedValues]:
        """
        Build the accepted payload. Confirmation fields are dropped and the
        fields they confirm are wrapped as secrets. The registration field set
        maps onto RegistrationData; any other schema yields a plain map.
        """
        confirmed = {rule.equals_field for rule in self.schema.rules if rule.equals_field}
        payload: SanitizedValues = {}
        for rule in self.schema.rules:
            if rule.equals_field is not None:
                continue
            value = values[rule.name]
            payload[rule.name] = SecretStr(value) if rule.name in confirmed else value

        if set(payload) == set(RegistrationData.model_fields):
            return RegistrationData.model_validate(payload)
        return payload

    # graph nodes

    def validate_node(self, state: FormState) -> Dict[str, Any]:
        return {"outcome": self.validate_all(state.values)}

    @staticmethod
    def should_accept(state: FormState) -> Literal["accept", "reject"]:
        return "accept" if isinstance(state.outcome, Accepted) else "reject"
