"""Build fragments for many resources at once.

Nodes are independent, so they are built on a thread pool. A failing
resource is reported in `BatchResult.failures` and never aborts the batch.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Final

from tqdm import tqdm

from .context import BuildContext
from .descriptors import ResourceDescriptor
from .dimensions import complete_dimensions
from .exceptions import FragmentBuildError
from .logger import get_logger, get_resource_logger
from .nodes import Body, Rendering

logger = get_logger(__name__)

FRAGMENT_KINDS: Final = ("body", "rendering", "both")


@dataclass(frozen=True)
class FragmentFailure:
    index: int
    resource_id: Any
    node: str
    error: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "resource_id": self.resource_id,
            "node": self.node,
            "error": self.error,
            "message": self.message,
        }


@dataclass
class BatchResult:
    fragments: list[dict[str, Any]] = field(default_factory=list)
    failures: list[FragmentFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "fragments": self.fragments,
            "failures": [f.to_dict() for f in self.failures],
        }


def build_body(descriptor: ResourceDescriptor, context: BuildContext) -> dict[str, Any]:
    """Build and serialize the annotation body of one resource."""
    return Body(descriptor, context).to_dict()


def build_rendering(descriptor: ResourceDescriptor, context: BuildContext) -> dict[str, Any]:
    """Build and serialize the rendering of one resource."""
    return Rendering(descriptor, context).to_dict()


def _build_one(
    index: int,
    descriptor: ResourceDescriptor,
    context: BuildContext,
    kind: str,
    probe_dimensions: bool,
    probe_timeout: int,
) -> tuple[dict[str, Any], list[FragmentFailure]]:
    log = get_resource_logger(descriptor.resource_id)
    if probe_dimensions:
        descriptor = complete_dimensions(descriptor, timeout_s=probe_timeout)

    fragment: dict[str, Any] = {"resource_id": descriptor.resource_id}
    failures: list[FragmentFailure] = []
    builders = []
    if kind in ("body", "both"):
        builders.append(("body", build_body))
    if kind in ("rendering", "both"):
        builders.append(("rendering", build_rendering))

    for node_name, builder in builders:
        try:
            fragment[node_name] = builder(descriptor, context)
        except FragmentBuildError as exc:
            log.warning("Skipping %s: %s", node_name, exc)
            failures.append(
                FragmentFailure(
                    index=index,
                    resource_id=descriptor.resource_id,
                    node=node_name,
                    error=type(exc).__name__,
                    message=str(exc),
                )
            )
    return fragment, failures


def build_fragments(
    descriptors: Iterable[ResourceDescriptor],
    context: BuildContext,
    *,
    kind: str = "both",
    workers: int = 4,
    probe_dimensions: bool = False,
    probe_timeout: int = 12,
    show_progress: bool = False,
) -> BatchResult:
    """Build the requested nodes for every descriptor, keeping input order.

    A resource whose nodes all failed is left out of `fragments`.
    """
    if kind not in FRAGMENT_KINDS:
        raise ValueError(f"Unknown fragment kind '{kind}', expected one of {', '.join(FRAGMENT_KINDS)}")

    items = list(descriptors)
    outcomes: dict[int, tuple[dict[str, Any], list[FragmentFailure]]] = {}

    with ThreadPoolExecutor(max_workers=max(1, int(workers))) as executor:
        future_to_index = {
            executor.submit(_build_one, i, d, context, kind, probe_dimensions, probe_timeout): i
            for i, d in enumerate(items)
        }
        completed = as_completed(future_to_index)
        if show_progress:
            completed = tqdm(completed, total=len(items), desc="Building fragments", unit="resource")
        for future in completed:
            outcomes[future_to_index[future]] = future.result()

    result = BatchResult()
    for i in range(len(items)):
        fragment, failures = outcomes[i]
        result.failures.extend(failures)
        if len(fragment) > 1:
            result.fragments.append(fragment)

    logger.info(
        "Built fragments for %d/%d resources (%d node failures)",
        len(result.fragments),
        len(items),
        len(result.failures),
    )
    return result
