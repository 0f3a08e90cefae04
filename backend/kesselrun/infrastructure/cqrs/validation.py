"""Business validation contracts for requests."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Generic, List, Tuple, Type, TypeVar

from kesselrun.shared_kernel.exceptions import ConfigurationError

TRequest = TypeVar("TRequest")


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str


class Validator(ABC, Generic[TRequest]):
    @abstractmethod
    async def validate(self, request: TRequest) -> List[ValidationFailure]:
        raise NotImplementedError


class ValidatorRegistry:
    def __init__(self) -> None:
        self._validators: Dict[Type, List[Validator]] = {}
        self._frozen = False

    def register(self, request_type: Type, validator: Validator) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"Cannot add validator for {request_type.__name__}: registry is frozen",
                code="REGISTRY_FROZEN",
            )
        if request_type not in self._validators:
            self._validators[request_type] = []
        self._validators[request_type].append(validator)

    def validators_for(self, request_type: Type) -> Tuple[Validator, ...]:
        return tuple(self._validators.get(request_type, ()))

    def freeze(self) -> None:
        self._frozen = True
