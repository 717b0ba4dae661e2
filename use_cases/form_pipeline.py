"""Generic stepper for forms, from a one-field dialog to the 4-step registration.

The schema maps each field to its validators. Steps partition the
fields into ordered groups. ``next()`` validates the active group only,
``submit()`` validates everything and runs the submission side effect
exactly once.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from use_cases.query_cache import MutationResult
from use_cases.validators import Validator

log = logging.getLogger(__name__)

SubmitStatus = Literal["SUBMITTED", "INVALID", "NOT_FINAL_STEP", "FAILED"]
# Checks that need more than one value, e.g. "transaction id when paying online".
CrossCheck = Callable[[Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class FormStep:
    title: str
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class StepValidation:
    ok: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SubmitOutcome:
    status: SubmitStatus
    errors: Dict[str, str] = field(default_factory=dict)
    result: Optional[MutationResult] = None

    @property
    def ok(self) -> bool:
        return self.status == "SUBMITTED"


class MultiStepForm:
    def __init__(
        self,
        schema: Mapping[str, Sequence[Validator]],
        steps: Optional[Sequence[FormStep]] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], MutationResult]] = None,
        cross_checks: Optional[Mapping[str, CrossCheck]] = None,
        initial: Optional[Mapping[str, Any]] = None,
    ):
        self.schema = {name: tuple(validators) for name, validators in schema.items()}
        self.steps: Tuple[FormStep, ...] = tuple(steps or (FormStep("", tuple(self.schema)),))
        if not self.steps:
            raise ValueError("A form needs at least one step")
        for step in self.steps:
            unknown = [name for name in step.fields if name not in self.schema]
            if unknown:
                raise ValueError(f"Step '{step.title}' names unknown fields: {unknown}")
        self.on_submit = on_submit
        self.cross_checks = dict(cross_checks or {})
        self._initial = dict(initial or {})
        self.values: Dict[str, Any] = dict(self._initial)
        self.errors: Dict[str, str] = {}
        self.current_step = 0

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps - 1

    @property
    def progress(self) -> float:
        return (self.current_step + 1) / self.total_steps * 100

    @property
    def step(self) -> FormStep:
        return self.steps[self.current_step]

    def set_value(self, name: str, value: Any) -> None:
        if name not in self.schema:
            raise KeyError(name)
        self.values[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set_value(name, value)

    def _validate_fields(self, names: Sequence[str]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for name in names:
            value = self.values.get(name)
            for validator in self.schema[name]:
                message = validator(value)
                if message:
                    errors[name] = message
                    break
            if name not in errors and name in self.cross_checks:
                message = self.cross_checks[name](self.values)
                if message:
                    errors[name] = message
        return errors

    def validate_step(self, index: int) -> StepValidation:
        if not 0 <= index < self.total_steps:
            raise IndexError(f"Step {index} is out of range 0..{self.total_steps - 1}")
        errors = self._validate_fields(self.steps[index].fields)
        return StepValidation(ok=not errors, errors=errors)

    def validate_all(self) -> StepValidation:
        names = [name for step in self.steps for name in step.fields]
        errors = self._validate_fields(names)
        return StepValidation(ok=not errors, errors=errors)

    def next(self) -> bool:
        """Advance one step if the active step validates. Returns whether it moved."""
        validation = self.validate_step(self.current_step)
        step_fields = set(self.step.fields)
        self.errors = {k: v for k, v in self.errors.items() if k not in step_fields}
        self.errors.update(validation.errors)
        if not validation.ok or self.is_last_step:
            return False
        self.current_step += 1
        return True

    def prev(self) -> bool:
        if self.current_step == 0:
            return False
        self.current_step -= 1
        return True

    def submit(self) -> SubmitOutcome:
        if not self.is_last_step:
            log.debug(f"Submit rejected on step {self.current_step + 1}/{self.total_steps}")
            return SubmitOutcome(status="NOT_FINAL_STEP")

        validation = self.validate_all()
        self.errors = dict(validation.errors)
        if not validation.ok:
            return SubmitOutcome(status="INVALID", errors=dict(validation.errors))

        if self.on_submit is None:
            raise RuntimeError("Form has no submission handler")
        result = self.on_submit(dict(self.values))
        if not result.ok:
            return SubmitOutcome(status="FAILED", result=result)

        self.reset()
        return SubmitOutcome(status="SUBMITTED", result=result)

    def reset(self) -> None:
        self.values = dict(self._initial)
        self.errors = {}
        self.current_step = 0
