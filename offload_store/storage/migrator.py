# ==============================================
# MigrationCoordinator
# ==============================================
#
# PURPOSE:
#   Runs Update for one logical document: read it, apply the caller's
#   mutation, and move the content between backends when the record's
#   size class changes.
#
# WHY THIS CLASS EXISTS:
#   An update can grow a record past the structured store's limit or
#   shrink it back under. Each of the four (old, new) placements needs
#   a different pair of backend calls. The plan for each case is built
#   by a pure handler so the migration logic can be checked without
#   any backend; the coordinator only executes plans.
#
# TRANSITIONS:
# ------------
#   STAYS_STRUCTURED   → structured patch with the caller's update params
#                        (full structured put when none were given)
#   STRUCTURED_TO_BLOB → blob put at Path + structured put (content
#                        cleared, pointer set)
#   BLOB_TO_STRUCTURED → blob delete at Path + structured put (inline
#                        content, no pointer)
#   STAYS_BLOB         → blob put at Path, structured item untouched
#
# CLASS: MigrationCoordinator
# ---------------------------
#   Constructor:
#   ------------
#   - __init__(router: PlacementRouter, on_inconsistency=None)
#       Shares gateways, evaluator and transformer with the router.
#
#   Methods:
#   --------
#   - update(path, mutate, **update_params) -> dict
#       Returns {"Attributes": mutate(old)}, i.e. what the caller produced,
#       not a re-read from the backends.
#
#   Steps of a two-step plan run concurrently. The first failure is
#   raised without waiting for the other step (which is not cancelled).
#   Nothing is compensated; a partially applied plan is reported as an
#   Inconsistency.
#
# ==============================================

import copy
import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ..analysis.decision import Transition
from ..errors import DocumentNotFoundError
from ..transform.record_transformer import RecordTransformer
from .inconsistency import Inconsistency, InconsistencyHandler, InconsistencyKind
from .placement_router import PlacementRouter

logger = logging.getLogger(__name__)

Mutation = Callable[[Dict[str, Any]], Dict[str, Any]]


# --- Plan steps ---

@dataclass(frozen=True)
class StructuredPatch:
    key: Dict[str, Any]
    params: Dict[str, Any]

    def apply(self, structured, blob) -> None:
        structured.update(self.key, **self.params)

    def describe(self) -> str:
        return "structured update"


@dataclass(frozen=True)
class StructuredPut:
    item: Dict[str, Any]

    def apply(self, structured, blob) -> None:
        structured.put(self.item)

    def describe(self) -> str:
        return "structured put"


@dataclass(frozen=True)
class BlobPut:
    key: str
    body: bytes = field(repr=False)

    def apply(self, structured, blob) -> None:
        blob.put(self.key, self.body)

    def describe(self) -> str:
        return f"blob put '{self.key}'"


@dataclass(frozen=True)
class BlobDelete:
    key: str

    def apply(self, structured, blob) -> None:
        blob.delete(self.key)

    def describe(self) -> str:
        return f"blob delete '{self.key}'"


@dataclass(frozen=True)
class MigrationPlan:
    transition: Transition
    steps: Tuple[Any, ...]


# --- Pure handlers, one per transition ---

def plan_stays_structured(transformer: RecordTransformer, path: str,
                          new_record: dict, update_params: dict) -> MigrationPlan:
    if update_params:
        step = StructuredPatch(transformer.key_for(path), dict(update_params))
    else:
        step = StructuredPut(transformer.to_structured(new_record, use_blob_store=False))
    return MigrationPlan(Transition.STAYS_STRUCTURED, (step,))


def plan_structured_to_blob(transformer: RecordTransformer, path: str,
                            new_record: dict, update_params: dict) -> MigrationPlan:
    return MigrationPlan(Transition.STRUCTURED_TO_BLOB, (
        BlobPut(path, transformer.blob_body(new_record)),
        StructuredPut(transformer.to_structured(new_record, use_blob_store=True)),
    ))


def plan_blob_to_structured(transformer: RecordTransformer, path: str,
                            new_record: dict, update_params: dict) -> MigrationPlan:
    return MigrationPlan(Transition.BLOB_TO_STRUCTURED, (
        BlobDelete(path),
        StructuredPut(transformer.to_inline(new_record)),
    ))


def plan_stays_blob(transformer: RecordTransformer, path: str,
                    new_record: dict, update_params: dict) -> MigrationPlan:
    return MigrationPlan(Transition.STAYS_BLOB, (
        BlobPut(path, transformer.blob_body(new_record)),
    ))


PLAN_HANDLERS = {
    Transition.STAYS_STRUCTURED: plan_stays_structured,
    Transition.STRUCTURED_TO_BLOB: plan_structured_to_blob,
    Transition.BLOB_TO_STRUCTURED: plan_blob_to_structured,
    Transition.STAYS_BLOB: plan_stays_blob,
}


def plan_transition(transition: Transition, transformer: RecordTransformer, path: str,
                    new_record: dict, update_params: Optional[dict] = None) -> MigrationPlan:
    """
    Build the backend calls for one transition. Pure; no I/O.

    Args:
        transition: Which of the four migrations applies
        transformer: Record transformer bound to the document config
        path: The record's path (blob key)
        new_record: The mutated logical record
        update_params: Caller's structured update parameters

    Returns:
        MigrationPlan listing the steps to execute
    """
    handler = PLAN_HANDLERS[transition]
    return handler(transformer, path, new_record, update_params or {})


class MigrationCoordinator:
    def __init__(self, router: PlacementRouter,
                 on_inconsistency: Optional[InconsistencyHandler] = None):
        self.router = router
        self.structured = router.structured
        self.blob = router.blob
        self.evaluator = router.evaluator
        self.transformer = router.transformer
        self.on_inconsistency = on_inconsistency or router.on_inconsistency

    def update(self, path: str, mutate: Mutation, **update_params: Any) -> Dict[str, Any]:
        """
        Mutate a stored record and migrate its content if its size class changed.

        Args:
            path: The record's path
            mutate: Function from the reassembled old record to the new record
            **update_params: Structured update arguments (UpdateExpression, ...),
                used when the record stays in the structured store

        Returns:
            {"Attributes": new_record}

        Raises:
            DocumentNotFoundError: No record stored at path
            DocumentTooLargeError: Mutated record over the configured maximum
            ValueError: mutate changed the record's path
        """
        current = self.router.get(path).get("Item")
        if current is None:
            raise DocumentNotFoundError(path)

        new_record = mutate(copy.deepcopy(current))
        if self.transformer.path_of(new_record) != path:
            raise ValueError(f"Update of '{path}' must not change the record path")

        new_decision = self.evaluator.evaluate(new_record)
        old_decision = self.evaluator.classify(current)
        # A record without a content field has nothing to offload
        transition = Transition.between(
            old_decision.use_blob_store and self.transformer.has_content(current),
            new_decision.use_blob_store and self.transformer.has_content(new_record),
        )

        plan = plan_transition(transition, self.transformer, path, new_record, update_params)
        logger.debug("Update of '%s': %s (%d -> %d bytes)",
                     path, transition.value, old_decision.size, new_decision.size)
        self._execute(path, plan)

        return {"Attributes": new_record}

    def _execute(self, path: str, plan: MigrationPlan) -> None:
        if len(plan.steps) == 1:
            plan.steps[0].apply(self.structured, self.blob)
            return

        executor = ThreadPoolExecutor(max_workers=len(plan.steps), thread_name_prefix="offload-migrate")
        try:
            futures = {
                executor.submit(step.apply, self.structured, self.blob): step
                for step in plan.steps
            }
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        finally:
            # Don't block on a step still in flight
            executor.shutdown(wait=False)

        failed = [f for f in done if f.exception() is not None]
        if not failed:
            return

        error = failed[0].exception()
        applied = [futures[f].describe() for f in done if f.exception() is None]
        in_flight = [futures[f].describe() for f in pending]
        if applied or in_flight:
            self.on_inconsistency(Inconsistency(
                kind=InconsistencyKind.PARTIAL_UPDATE,
                path=path,
                error=error,
                detail=f"{plan.transition.value}; applied: {applied}; in flight: {in_flight}",
            ))
        raise error
