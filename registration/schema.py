import re
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from registration.errors import SchemaDefinitionError, UnknownFieldError


class RuleKind(str, Enum):
    # Declaration order is evaluation order.
    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    EQUALS_FIELD = "equals_field"


class FieldSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    pattern: Optional[re.Pattern] = None
    equals_field: Optional[str] = None
    messages: Dict[RuleKind, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_rules_have_messages(self) -> "FieldSchema":
        for kind in self.configured_rules():
            if not self.messages.get(kind):
                raise SchemaDefinitionError(
                    f"Field {self.name!r} has a {kind.value} rule without a message"
                )

        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise SchemaDefinitionError(
                f"Field {self.name!r}: min_length {self.min_length} > max_length {self.max_length}"
            )

        if self.equals_field == self.name:
            raise SchemaDefinitionError(f"Field {self.name!r} cannot equal itself")

        return self

    def configured_rules(self) -> Tuple[RuleKind, ...]:
        rules = []
        if self.required:
            rules.append(RuleKind.REQUIRED)
        if self.min_length is not None:
            rules.append(RuleKind.MIN_LENGTH)
        if self.max_length is not None:
            rules.append(RuleKind.MAX_LENGTH)
        if self.pattern is not None:
            rules.append(RuleKind.PATTERN)
        if self.equals_field is not None:
            rules.append(RuleKind.EQUALS_FIELD)
        return tuple(rules)

    def message_for(self, kind: RuleKind) -> str:
        return self.messages[kind]


class RegistrationSchema(BaseModel):
    """
    Ordered, immutable set of field rules. Field order is the order in which
    the validator walks fields and the key order of fresh value maps.
    """

    model_config = ConfigDict(frozen=True)

    rules: Tuple[FieldSchema, ...]

    @model_validator(mode="after")
    def check_field_references(self) -> "RegistrationSchema":
        names = [f.name for f in self.rules]
        if len(names) != len(set(names)):
            raise SchemaDefinitionError(f"Duplicate field names in schema: {names}")

        for f in self.rules:
            if f.equals_field is not None and f.equals_field not in names:
                raise SchemaDefinitionError(
                    f"Field {f.name!r} references undeclared field {f.equals_field!r}"
                )
        return self

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.rules)

    def get(self, name: str) -> FieldSchema:
        for f in self.rules:
            if f.name == name:
                return f
        raise UnknownFieldError(name)

    def empty_values(self) -> Dict[str, str]:
        return {name: "" for name in self.field_names}


PHONE_PATTERN = re.compile(r"\([0-9]{2}\) [0-9]{5}-[0-9]{4}")

# lowercase, uppercase and digit, each anywhere in the string
PASSWORD_PATTERN = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9]).*", re.DOTALL)

# HTML living standard "valid e-mail address"
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

SUCCESS_MESSAGE = "Cadastro realizado com sucesso!"


REGISTRATION_SCHEMA = RegistrationSchema(
    rules=(
        FieldSchema(
            name="nome",
            required=True,
            min_length=2,
            max_length=50,
            messages={
                RuleKind.REQUIRED: "Nome é obrigatório",
                RuleKind.MIN_LENGTH: "Nome deve ter pelo menos 2 caracteres",
                RuleKind.MAX_LENGTH: "Nome deve ter no máximo 50 caracteres",
            },
        ),
        FieldSchema(
            name="email",
            required=True,
            pattern=EMAIL_PATTERN,
            messages={
                RuleKind.REQUIRED: "E-mail é obrigatório",
                RuleKind.PATTERN: "E-mail deve ser válido",
            },
        ),
        FieldSchema(
            name="telefone",
            required=True,
            pattern=PHONE_PATTERN,
            messages={
                RuleKind.REQUIRED: "Telefone é obrigatório",
                RuleKind.PATTERN: "Telefone deve estar no formato (00) 00000-0000",
            },
        ),
        FieldSchema(
            name="senha",
            required=True,
            min_length=6,
            pattern=PASSWORD_PATTERN,
            messages={
                RuleKind.REQUIRED: "Senha é obrigatória",
                RuleKind.MIN_LENGTH: "Senha deve ter pelo menos 6 caracteres",
                RuleKind.PATTERN: (
                    "Senha deve conter pelo menos uma letra maiúscula, "
                    "uma minúscula e um número"
                ),
            },
        ),
        FieldSchema(
            name="confirmarSenha",
            required=True,
            equals_field="senha",
            messages={
                RuleKind.REQUIRED: "Confirmação de senha é obrigatória",
                RuleKind.EQUALS_FIELD: "Senhas devem ser iguais",
            },
        ),
    )
)
