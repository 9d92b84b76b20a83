"""Readiness of live objects, derived from their status stanza.

Status conventions differ per kind, so evaluation is a registry of
per-kind functions with a generic ``Ready`` condition fallback. Callers
can register evaluators for their own kinds (CRDs in particular).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from helmtree.models.resources import LiveObject


class Readiness(StrEnum):
    """Three-state readiness shown next to a node."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ObjectStatus:
    readiness: Readiness
    reason: str = ""

    @property
    def tag(self) -> str:
        if self.readiness is Readiness.NOT_READY and self.reason:
            return f"[{self.readiness}: {self.reason}]"
        return f"[{self.readiness}]"


StatusEvaluator = Callable[[LiveObject], "ObjectStatus | None"]

_CONDITION_READINESS = {
    "true": Readiness.READY,
    "false": Readiness.NOT_READY,
}


def _find_condition(status: dict[str, Any], cond_type: str) -> dict[str, Any] | None:
    for cond in status.get("conditions") or []:
        if isinstance(cond, dict) and cond.get("type") == cond_type:
            return cond
    return None


def _from_condition(cond: dict[str, Any]) -> ObjectStatus:
    readiness = _CONDITION_READINESS.get(str(cond.get("status", "")).lower(), Readiness.UNKNOWN)
    return ObjectStatus(readiness, str(cond.get("reason") or ""))


def condition_evaluator(cond_type: str) -> StatusEvaluator:
    """Build an evaluator that reads one condition type."""

    def evaluate(obj: LiveObject) -> ObjectStatus | None:
        if not obj.status:
            return None
        cond = _find_condition(obj.status, cond_type)
        if cond is None:
            return None
        return _from_condition(cond)

    return evaluate


def replica_evaluator(ready_field: str, desired_field: str) -> StatusEvaluator:
    """Build an evaluator comparing a ready counter with a desired counter."""

    def evaluate(obj: LiveObject) -> ObjectStatus | None:
        if not obj.status:
            return None
        desired = obj.status.get(desired_field)
        if desired is None:
            return None
        ready = obj.status.get(ready_field) or 0
        if not isinstance(desired, int) or not isinstance(ready, int):
            return ObjectStatus(Readiness.UNKNOWN)
        if ready >= desired:
            return ObjectStatus(Readiness.READY)
        return ObjectStatus(Readiness.NOT_READY, f"{ready}/{desired} ready")

    return evaluate


def _job_status(obj: LiveObject) -> ObjectStatus | None:
    if not obj.status:
        return None
    failed = _find_condition(obj.status, "Failed")
    if failed is not None and str(failed.get("status")).lower() == "true":
        return ObjectStatus(Readiness.NOT_READY, str(failed.get("reason") or "Failed"))
    complete = _find_condition(obj.status, "Complete")
    if complete is not None and str(complete.get("status")).lower() == "true":
        return ObjectStatus(Readiness.READY)
    return ObjectStatus(Readiness.UNKNOWN)


def _volume_phase_status(obj: LiveObject) -> ObjectStatus | None:
    if not obj.status or "phase" not in obj.status:
        return None
    phase = str(obj.status["phase"])
    if phase == "Bound":
        return ObjectStatus(Readiness.READY)
    return ObjectStatus(Readiness.NOT_READY, phase)


_ready_condition = condition_evaluator("Ready")


class StatusRegistry:
    """Kind -> status evaluator, with a fallback for unregistered kinds."""

    def __init__(self, fallback: StatusEvaluator = _ready_condition) -> None:
        self._evaluators: dict[str, StatusEvaluator] = {}
        self._fallback = fallback

    def register(self, kind: str, evaluator: StatusEvaluator) -> None:
        self._evaluators[kind] = evaluator

    def evaluate(self, obj: LiveObject) -> ObjectStatus | None:
        evaluator = self._evaluators.get(obj.kind, self._fallback)
        return evaluator(obj)


def default_registry() -> StatusRegistry:
    """Registry with evaluators for the built-in workload and storage kinds."""
    registry = StatusRegistry()
    registry.register("Deployment", condition_evaluator("Available"))
    registry.register("ReplicaSet", replica_evaluator("readyReplicas", "replicas"))
    registry.register("StatefulSet", replica_evaluator("readyReplicas", "replicas"))
    registry.register("DaemonSet", replica_evaluator("numberReady", "desiredNumberScheduled"))
    registry.register("Job", _job_status)
    registry.register("PersistentVolumeClaim", _volume_phase_status)
    registry.register("PersistentVolume", _volume_phase_status)
    return registry
