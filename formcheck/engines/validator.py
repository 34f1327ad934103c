"""Form Validation Engine

Runs field rules over one submitted form and keeps the resulting messages.

Contract shared by every rule method:
- failure records exactly one message (for the field it governs) and
  returns False
- success records nothing, tells the error store to forget the field's
  previous message, and returns True
- invalid input never raises; AppErrorException is reserved for
  collaborators that could not answer (record store, DNS)

Native failures are staged and written to the error store in bulk by
error_count(); set_error() writes through immediately.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping
import re

from formcheck.core.errors import AppError, Result, raise_error
from formcheck.core.logging import validator_logger
from formcheck.core.stores import ErrorStore, MemoryErrorStore, error_key
from formcheck.core.validation import messages
from formcheck.core.validation.email import DnsMxResolver, MxResolver, domain_of, has_valid_grammar
from formcheck.core.validation.values import (
    CoercionRule,
    Scalar,
    ValueMap,
    coerce_float,
    coerce_int,
    is_blank,
    is_empty,
)
from formcheck.models.records import FindCriteria, RecordStore, equals
from formcheck.models.registry import get_store

log = validator_logger()


@dataclass(frozen=True, slots=True)
class StringRuleOptions:
    """Constraints for valid_string, checked in declaration order.

    A size bound of 0 counts as unset.
    """
    regex: str | re.Pattern | None = None
    required: bool = False
    confirmation: str | None = None
    min_size: int | None = None
    max_size: int | None = None


class ValidationEngine:
    """Validates one form submission.

    Args:
        values: Submitted field values. Copied into a ValueMap owned by the engine.
        error_store: Sink for persisted messages. Defaults to a fresh MemoryErrorStore.
        mx_resolver: MX lookup for valid_email. Defaults to a DnsMxResolver, built on first use.
        stores: Model name -> RecordStore factory for is_available. Defaults to the registry.
        key_prefix: Override for the error store key namespace.
    """

    __slots__ = ("_values", "_errors", "_mx_resolver", "_stores", "error_store", "key_prefix")

    def __init__(
        self,
        values: Mapping[str, Scalar],
        *,
        error_store: ErrorStore | None = None,
        mx_resolver: MxResolver | None = None,
        stores: Callable[[str], RecordStore] | None = None,
        key_prefix: str | None = None,
    ):
        self._values = ValueMap(values)
        self._errors: dict[str, str] = {}
        self._mx_resolver = mx_resolver
        self._stores = stores or get_store
        self.error_store = error_store if error_store is not None else MemoryErrorStore()
        self.key_prefix = key_prefix

    @property
    def values(self) -> ValueMap:
        """Submitted values, with numeric fields replaced by their coerced form."""
        return self._values

    @property
    def errors(self) -> dict[str, str]:
        """Staged messages by field, without flushing them."""
        return dict(self._errors)

    @property
    def mx_resolver(self) -> MxResolver:
        if self._mx_resolver is None:
            self._mx_resolver = DnsMxResolver()
        return self._mx_resolver

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def required(self, key: str) -> bool:
        """The field holds a non-empty value."""
        if is_empty(self._values[key]):
            return self._fail(key, messages.REQUIRED, "required")
        return self._pass(key)

    def valid_email(self, key: str, required: bool = False, confirmation: str | None = None) -> bool:
        """Well-formed address whose domain accepts mail, optionally confirmed by a second field."""
        if required and not self.required(key):
            return False

        value = self._values[key]
        if not has_valid_grammar(value) or not self.mx_resolver.has_mx(domain_of(value)):
            return self._fail(key, messages.INVALID_VALUE, "email")

        if confirmation is not None:
            return self._confirm(key, confirmation, messages.EMAIL_MISMATCH)
        return self._pass_unconfirmed(key)

    def valid_string(self, key: str, options: StringRuleOptions | None = None, **kwargs: Any) -> bool:
        """Length bounds, pattern and confirmation for a text field.

        Either pass a StringRuleOptions or its fields as keyword arguments:

            engine.valid_string("username", required=True, min_size=3, max_size=30)
        """
        if options is None:
            options = StringRuleOptions(**kwargs)
        elif kwargs:
            raise TypeError("valid_string() takes options or keyword constraints, not both")

        if options.required and not self.required(key):
            return False

        length = len(self._values.text(key))
        if options.min_size and length < options.min_size:
            return self._fail(key, messages.too_short(options.min_size), "min_size")
        if options.max_size and length > options.max_size:
            return self._fail(key, messages.too_long(options.max_size), "max_size")

        value = self._values[key]
        if options.regex is not None and isinstance(value, str) and value != "":
            if re.fullmatch(options.regex, value) is None:
                return self._fail(key, messages.INVALID_VALUE, "regex")

        if options.confirmation is not None:
            return self._confirm(key, options.confirmation, messages.VALUES_MISMATCH)
        return self._pass_unconfirmed(key)

    def valid_int(self, key: str, required: bool = False) -> bool:
        """Non-zero integer; the stored value becomes an int."""
        return self._coerce(key, coerce_int, required)

    def valid_float(self, key: str, required: bool = False) -> bool:
        """Non-zero decimal; the stored value becomes a float."""
        return self._coerce(key, coerce_float, required)

    def is_available(self, model_name: str, field: str) -> bool:
        """The submitted value is not used by another record of `model_name`.

        A field named like "email_confirmation" is checked against the
        record attribute "email". The record identified by values["id"]
        (0 for a new record) may keep its current value.
        """
        store = self._stores(model_name)
        attribute = field.split("_", 1)[0]
        record_id = self._values["id"]
        if is_blank(record_id):
            record_id = 0
        submitted = self._values[field]

        criteria = FindCriteria(fields=(attribute,), conditions=(equals("id", record_id),))
        records = self._unwrap(store.find(criteria), model_name, "find")
        if records and getattr(records[0], attribute) == submitted:
            return self._pass(field)

        if not self._unwrap(store.is_available(attribute, submitted), model_name, "is_available"):
            return self._fail(field, messages.ALREADY_TAKEN, "unique")
        return self._pass(field)

    # ------------------------------------------------------------------
    # Error retrieval and injection
    # ------------------------------------------------------------------

    def error_count(self) -> int:
        """Write every staged message to the error store; number of failing fields."""
        for field, message in self._errors.items():
            self.error_store.set(self._key(field), messages.bulleted(message))
        if self._errors:
            log.info("errors_flushed", count=len(self._errors), fields=sorted(self._errors))
        return len(self._errors)

    def set_error(self, field: str, message: str) -> None:
        """Record a failure from a check the engine does not perform, writing it through."""
        self._errors[field] = message
        self.error_store.set(self._key(field), messages.bulleted(message))
        log.debug("error_injected", field=field)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _key(self, field: str) -> str:
        return error_key(field, self.key_prefix)

    def _fail(self, field: str, message: str, rule: str) -> bool:
        self._errors[field] = message
        log.debug("field_rejected", field=field, rule=rule)
        return False

    def _pass(self, field: str) -> bool:
        self.error_store.delete(self._key(field))
        return True

    def _pass_unconfirmed(self, key: str) -> bool:
        self._pass(key)
        # the confirmation slot is cleared even when no confirmation was named
        self.error_store.delete(self._key(""))
        return True

    def _confirm(self, key: str, confirmation: str, mismatch: str) -> bool:
        value, repeated = self._values[key], self._values[confirmation]
        if type(value) is not type(repeated) or value != repeated:
            return self._fail(confirmation, mismatch, "confirmation")
        return self._pass(confirmation)

    def _coerce(self, key: str, rule: CoercionRule, required: bool) -> bool:
        if required and not self.required(key):
            return False

        value = self._values[key]
        if is_blank(value):
            return self._pass(key)

        result = rule(key, value)
        if result.is_err():
            return self._fail(key, messages.INVALID_VALUE, rule.target_type.__name__)
        self._values[key] = result.unwrap()
        return self._pass(key)

    def _unwrap(self, result: Result[Any, AppError], model_name: str, operation: str) -> Any:
        if result.is_err():
            error = result.unwrap_err()
            log.error("record_store_failed", model=model_name, operation=operation,
                code=error.code.name, reason=error.message)
            raise_error(error)
        return result.unwrap()
