#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Outcomes reported by provisioning steps"""

from typing import List, Optional

from enum import Enum

class StepOutcome(Enum):
  CHANGED = 'changed'
  UNCHANGED = 'unchanged'
  SKIPPED = 'skipped'

class StepResult:
  name: str
  outcome: StepOutcome
  detail: str

  def __init__(self, name: str, outcome: StepOutcome, detail: str=''):
    self.name = name
    self.outcome = outcome
    self.detail = detail

  def __repr__(self) -> str:
    return f"StepResult({self.name!r}, {self.outcome.value}, {self.detail!r})"

class ProvisionReport:
  """The ordered results of every step a provisioning run completed."""
  results: List[StepResult]

  def __init__(self):
    self.results = []

  def add(self, result: StepResult) -> StepResult:
    self.results.append(result)
    return result

  def get(self, name: str) -> Optional[StepResult]:
    for result in self.results:
      if result.name == name:
        return result
    return None

  @property
  def step_names(self) -> List[str]:
    return [ x.name for x in self.results ]

  def summary(self) -> str:
    return ', '.join(f"{x.name}={x.outcome.value}" for x in self.results)
