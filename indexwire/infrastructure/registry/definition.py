from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Reference:

    service_id: str

    def __str__(self) -> str:
        return f"@{self.service_id}"


@dataclass
class ServiceDefinition:
    """Recipe for building one service.

    A definition is either built by calling ``factory(**kwargs)`` or, when
    ``factory_service`` is set, by calling ``factory_method`` on that
    service's instance. Abstract definitions are prototypes: they cannot be
    built and only serve as the parent of :meth:`derive`.
    """

    factory: Optional[Callable[..., Any]] = None
    kwargs: Dict[str, Any] = field(default_factory=dict)
    factory_service: Optional[str] = None
    factory_method: Optional[str] = None
    method_calls: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)
    abstract: bool = False

    def __post_init__(self) -> None:
        if self.factory is None and self.factory_service is None:
            raise ValueError("A service definition needs a factory or a factory service")
        if self.factory_service is not None and not self.factory_method:
            raise ValueError("factory_method is required with factory_service")

    def derive(self, **overrides: Any) -> "ServiceDefinition":
        if not self.abstract:
            raise ValueError("Only abstract definitions can be derived")
        kwargs = dict(self.kwargs)
        kwargs.update(overrides)
        return replace(
            self,
            kwargs=kwargs,
            method_calls=list(self.method_calls),
            abstract=False,
        )

    def add_method_call(self, method: str, *args: Any) -> "ServiceDefinition":
        self.method_calls.append((method, args))
        return self
