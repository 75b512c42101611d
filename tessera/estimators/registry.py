"""Estimator registry and constructor parameter schemas.

Hyper-parameter search needs the ordered constructor parameter names of an
estimator without building one. Every estimator therefore registers a schema
alongside its class::

    @register_estimator("mlp", params=("hidden", "ratio"), type=EstimatorType.CLASSIFIER)
    class MultilayerPerceptron:
        ...

or a caller can describe an arbitrary factory directly with
:class:`EstimatorSpec`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, MutableMapping, Sequence, Tuple

from ..core.errors import InvalidArgument
from ..core.types import DataType, Estimator, EstimatorType

REQUIRED_CAPABILITIES = ("type", "train", "predict")


@dataclass(frozen=True)
class EstimatorSpec:
    """Description of how to build an estimator and which arguments it takes."""

    name: str
    factory: Callable[..., Estimator]
    params: Tuple[str, ...]
    estimator_type: EstimatorType = EstimatorType.OTHER
    compatibility: FrozenSet[DataType] = field(
        default_factory=lambda: frozenset({DataType.CONTINUOUS})
    )

    def __post_init__(self) -> None:
        if isinstance(self.factory, type):
            missing = [
                name
                for name in REQUIRED_CAPABILITIES
                if not callable(getattr(self.factory, name, None))
            ]
            if missing:
                raise InvalidArgument(
                    f"Base class {self.factory.__name__} must be a learner,"
                    f" missing {', '.join(missing)}."
                )
        elif not callable(self.factory):
            raise InvalidArgument(f"Estimator factory for {self.name!r} must be callable.")
        if len(set(self.params)) != len(self.params):
            raise InvalidArgument(f"Duplicate parameter names for {self.name!r}: {self.params}.")
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "estimator_type", EstimatorType(self.estimator_type))
        object.__setattr__(
            self, "compatibility", frozenset(DataType(t) for t in self.compatibility)
        )

    def build(self, **kwargs: Any) -> Estimator:
        """Instantiate the estimator with keyword constructor arguments."""

        return self.factory(**kwargs)


_REGISTRY: MutableMapping[str, EstimatorSpec] = {}


def register_estimator(
    name: str | None = None,
    *,
    params: Sequence[str],
    type: EstimatorType = EstimatorType.OTHER,
    compatibility: Iterable[DataType] = (DataType.CONTINUOUS,),
) -> Callable[[Callable[..., Estimator]], Callable[..., Estimator]]:
    """Register an estimator class (or factory) together with its parameter names."""

    def _decorator(factory: Callable[..., Estimator]) -> Callable[..., Estimator]:
        key = str(name or getattr(factory, "__name__", repr(factory)))
        _REGISTRY[key] = EstimatorSpec(
            name=key,
            factory=factory,
            params=tuple(params),
            estimator_type=type,
            compatibility=frozenset(compatibility),
        )
        return factory

    return _decorator


def get_estimator(base: str | Callable[..., Estimator] | EstimatorSpec) -> EstimatorSpec:
    """Resolve a registry name, registered class or explicit spec."""

    if isinstance(base, EstimatorSpec):
        return base
    if isinstance(base, str):
        if base not in _REGISTRY:
            available = ", ".join(sorted(_REGISTRY))
            raise InvalidArgument(f"Unknown estimator {base!r}. Available estimators: {available}")
        return _REGISTRY[base]
    for spec in _REGISTRY.values():
        if spec.factory is base:
            return spec
    label = getattr(base, "__name__", repr(base))
    raise InvalidArgument(
        f"Base {label} must be a registered learner, register it with register_estimator()."
    )


def available_estimators() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = [
    "EstimatorSpec",
    "register_estimator",
    "get_estimator",
    "available_estimators",
]
