"""Precondition violations and the pluggable fault hook."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
import logging
import os
from typing import Any, NoReturn

logger = logging.getLogger(__name__)


class ViolationKind(Enum):
  NULL_BUFFER = 'null_buffer'
  DIMENSION = 'dimension'
  ROW_RANGE = 'row_range'
  BUFFER_LAYOUT = 'buffer_layout'
  DTYPE = 'dtype'
  MAX_VALUE = 'max_value'
  SHIFT = 'shift'
  LUMA_COEFFICIENT = 'luma_coefficient'


@dataclass(frozen=True)
class Violation:
  """A failed precondition: what was checked, where, and the offending value."""

  kind: ViolationKind
  field: str
  value: Any
  expression: str
  operation: str

  def __str__(self) -> str:
    return (
      f'{self.operation}: precondition `{self.expression}` failed '
      f'({self.kind.value}, {self.field}={self.value!r})'
    )


class PreconditionViolation(ValueError):
  """Raised when a demosaic operation is called with inputs outside its contract."""

  def __init__(self, violation: Violation):
    super().__init__(str(violation))
    self.violation = violation


FaultHook = Callable[[Violation], None]


def raise_violation(violation: Violation) -> NoReturn:
  raise PreconditionViolation(violation)


def log_violation(violation: Violation) -> NoReturn:
  logger.error('%s', violation)
  raise PreconditionViolation(violation)


def abort_on_violation(violation: Violation) -> NoReturn:
  """Log and hard-stop the process, for deployments where unwinding is not acceptable."""
  logger.critical('%s', violation)
  logging.shutdown()
  os.abort()


_fault_hook: FaultHook = raise_violation


def get_fault_hook() -> FaultHook:
  return _fault_hook


def set_fault_hook(hook: FaultHook) -> FaultHook:
  """
  Install the hook invoked on every precondition violation.

  Args:
      hook: Callable receiving the Violation. It may log, halt or raise.
            If it returns, PreconditionViolation is raised anyway.

  Returns:
      The previously installed hook
  """
  global _fault_hook  # noqa: PLW0603
  previous = _fault_hook
  _fault_hook = hook
  return previous


@contextmanager
def fault_hook(hook: FaultHook) -> Iterator[FaultHook]:
  """Temporarily install a fault hook."""
  previous = set_fault_hook(hook)
  try:
    yield hook
  finally:
    set_fault_hook(previous)


def report(violation: Violation) -> NoReturn:
  """Deliver a violation to the fault hook. Never returns."""
  _fault_hook(violation)
  raise PreconditionViolation(violation)


__all__ = [
  'FaultHook',
  'PreconditionViolation',
  'Violation',
  'ViolationKind',
  'abort_on_violation',
  'fault_hook',
  'get_fault_hook',
  'log_violation',
  'raise_violation',
  'report',
  'set_fault_hook',
]
